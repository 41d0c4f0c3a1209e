"""
logging_config.py
=================
Logging setup for the e-sign webhook backend.
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Send package logs to stderr at the given level."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
            stream=sys.stderr,
        )

    logging.getLogger("esign_webhook").setLevel(log_level)

"""
exceptions.py
=============
Error types raised across the e-sign webhook backend.

 - ValidationError    -> bad inbound payload (HTTP 400)
 - ConfigurationError -> missing/invalid operator settings (HTTP 500)
 - SubmissionError    -> one record failed at the signature provider
"""

from typing import Any, List, Optional


class SigningWebhookError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(SigningWebhookError):
    """The inbound webhook payload is missing required fields or is malformed."""

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(SigningWebhookError):
    """A required setting (e.g. the provider API key) is missing or invalid."""


class SubmissionError(SigningWebhookError):
    """The signature provider rejected or failed to process a single record."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text

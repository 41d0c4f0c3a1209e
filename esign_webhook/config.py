"""
config.py
=========
Runtime settings for the e-sign webhook backend.

Values come from environment variables (see Settings) and are passed
explicitly into the signature client and dispatcher, so tests can build a
Settings object directly instead of touching the environment.
"""

from typing import Dict, Literal, Optional

import pydantic
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from .exceptions import ConfigurationError

DEFAULT_BOLDSIGN_API_URL = "https://api.boldsign.com/v1/template/send"


class Settings(BaseSettings):
    """
    Explicit configuration for one application instance.

    Env vars::

        ESIGN_PROVIDER          boldsign | mock (default boldsign)
        BOLDSIGN_API_KEY        provider API key (required for boldsign)
        BOLDSIGN_API_URL        endpoint override
        BOLDSIGN_SANDBOX        send in sandbox mode (default true)
        BOLDSIGN_TIMEOUT        seconds per outbound request (default 30)
        BOLDSIGN_TEMPLATE_MAP   JSON object mapping document_type -> templateId
        DISPATCH_MAX_WORKERS    parallel submissions (default 1 = sequential)
        LOG_LEVEL               logging level (default INFO)
    """

    model_config = SettingsConfigDict(populate_by_name=True, env_ignore_empty=True)

    provider: Literal["boldsign", "mock"] = Field(default="boldsign", alias="ESIGN_PROVIDER")
    boldsign_api_key: Optional[str] = Field(default=None, alias="BOLDSIGN_API_KEY")
    boldsign_api_url: str = Field(default=DEFAULT_BOLDSIGN_API_URL, alias="BOLDSIGN_API_URL")
    boldsign_sandbox: bool = Field(default=True, alias="BOLDSIGN_SANDBOX")
    boldsign_timeout: float = Field(default=30.0, gt=0, alias="BOLDSIGN_TIMEOUT")
    template_map: Dict[str, str] = Field(default_factory=dict, alias="BOLDSIGN_TEMPLATE_MAP")
    dispatch_max_workers: int = Field(default=1, ge=1, alias="DISPATCH_MAX_WORKERS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def require_api_key(self) -> str:
        """Return the BoldSign API key or raise ConfigurationError."""
        if not self.boldsign_api_key:
            raise ConfigurationError("BoldSign API key not configured")
        return self.boldsign_api_key


def load_settings() -> Settings:
    """Build Settings from the process environment, raising ConfigurationError on bad values."""
    try:
        return Settings()
    except (pydantic.ValidationError, SettingsError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

"""
signers.py
==========
Signature client abstraction. The dispatcher talks to either:
 - MockSignatureClient (local demo / tests)
 - BoldSignClient (production, real API)
"""

from typing import Protocol

from .boldsign import BoldSignClient
from .config import Settings
from .exceptions import ConfigurationError
from .mock_signer import MockSignatureClient
from .schemas import DocumentRecord


class SignatureClient(Protocol):
    """Anything that can submit a DocumentRecord for signature."""

    def submit(self, record: DocumentRecord) -> str:
        """
        Submit one record and return the provider's request id.
        Raises SubmissionError when the provider call fails.
        """


def make_signature_client(settings: Settings) -> SignatureClient:
    """
    Factory for the configured provider.
    Example: make_signature_client(load_settings())
    """
    if settings.provider == "mock":
        return MockSignatureClient()
    if settings.provider == "boldsign":
        return BoldSignClient(settings)
    raise ConfigurationError(f"Unsupported e-sign provider: {settings.provider}")

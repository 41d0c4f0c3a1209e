"""
mock_signer.py
==============
A mock signature provider for local runs and tests (no API calls).
Returns deterministic request ids so responses are predictable.
"""

import hashlib
from typing import Iterable, List, Optional

from .exceptions import SubmissionError
from .schemas import DocumentRecord


class MockSignatureClient:
    """
    Stand-in for BoldSign.
    Used when ESIGN_PROVIDER=mock so the webhook can run offline.
    Document types listed in fail_documents are rejected, which lets
    demos and tests exercise per-record failures.
    """

    def __init__(self, fail_documents: Optional[Iterable[str]] = None):
        self.fail_documents = set(fail_documents or [])
        self.submitted: List[DocumentRecord] = []

    def submit(self, record: DocumentRecord) -> str:
        self.submitted.append(record)

        if record.document_type in self.fail_documents:
            raise SubmissionError(
                f"Mock provider rejected {record.document_type}",
                status_code=422,
            )

        digest = hashlib.sha1(
            f"{record.patient_email}|{record.document_type}|{record.due_date}".encode("utf-8")
        ).hexdigest()
        return f"mock-{digest[:12]}"

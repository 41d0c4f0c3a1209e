"""
schemas.py
==========
Pydantic models for the inbound webhook payload, the expanded
per-document records and the outgoing API response.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class Patient(BaseModel):
    """Patient contact details attached to a signing request."""
    name: Optional[str] = None
    email: Optional[str] = None


class SigningRequest(BaseModel):
    """One patient's submission: treatments plus a comma-separated document list."""
    patient: Optional[Patient] = None
    treatments: Optional[str] = None
    documents: Optional[str] = None
    language: Optional[str] = None
    deadline: Optional[str] = None


class WebhookPayload(BaseModel):
    """Request body posted to the webhook handler."""
    model_config = ConfigDict(populate_by_name=True)

    signing_requests: Optional[List[SigningRequest]] = Field(default=None, alias="signingRequests")


class DocumentRecord(BaseModel):
    """A single (patient, document) pair to be sent out for signature."""
    model_config = ConfigDict(frozen=True)

    document_type: str
    patient_name: str = ""
    patient_email: str = ""
    operation_name: str = ""
    due_date: str = ""
    language: str = ""


class DispatchResult(BaseModel):
    """Outcome of submitting one DocumentRecord to the signature provider."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    record: DocumentRecord
    request_id: Optional[str] = Field(default=None, alias="requestId")
    error: Optional[str] = None


class WebhookResponse(BaseModel):
    """Response body for a processed webhook."""
    success: bool = True
    processed: int
    results: List[DispatchResult]

    def to_json(self) -> dict:
        """Serialize with provider-style keys, omitting requestId/error when absent."""
        return self.model_dump(by_alias=True, exclude_none=True)

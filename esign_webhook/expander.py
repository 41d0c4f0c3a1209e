"""
expander.py
===========
Turns a webhook payload into a flat list of DocumentRecords:
 - validates that at least one signing request is present
 - splits each request's comma-separated document list
 - builds one record per (patient, document) pair

Pure functions only: no I/O, no provider calls.
"""

from typing import Any, List, Optional, Union

import pydantic

from .exceptions import ValidationError
from .schemas import DocumentRecord, SigningRequest, WebhookPayload

MISSING_SIGNING_REQUESTS = "signingRequests[] required"
INVALID_PAYLOAD = "Invalid signing request payload"


def split_documents(documents: Optional[str]) -> List[str]:
    """
    Split a comma-separated document list.
    Tokens are trimmed and empty tokens dropped, so "a,,b," -> ["a", "b"].
    """
    if not documents:
        return []
    return [doc.strip() for doc in documents.split(",") if doc.strip()]


def parse_payload(raw: Any) -> WebhookPayload:
    """
    Validate a decoded JSON body and return it as a WebhookPayload.
    Raises ValidationError when signingRequests is absent, null or empty,
    or when a field carries the wrong JSON type.
    """
    if not isinstance(raw, dict) or not raw.get("signingRequests"):
        raise ValidationError(MISSING_SIGNING_REQUESTS)

    try:
        payload = WebhookPayload.model_validate(raw)
    except pydantic.ValidationError as e:
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError(INVALID_PAYLOAD, details=details) from e

    if not payload.signing_requests:
        raise ValidationError(MISSING_SIGNING_REQUESTS)
    return payload


def expand_signing_request(request: SigningRequest) -> List[DocumentRecord]:
    """
    Build the records for one signing request.
    A missing patient or any missing field becomes an empty string.
    """
    patient = request.patient
    patient_data = {
        "patient_name": (patient.name if patient else None) or "",
        "patient_email": (patient.email if patient else None) or "",
        "operation_name": request.treatments or "",
        "due_date": request.deadline or "",
        "language": request.language or "",
    }
    return [
        DocumentRecord(document_type=document_type, **patient_data)
        for document_type in split_documents(request.documents)
    ]


def expand_records(payload: Union[WebhookPayload, dict, None]) -> List[DocumentRecord]:
    """
    Expand a whole payload into DocumentRecords, keeping the order of
    signing requests and, within each, the order of documents.
    """
    if not isinstance(payload, WebhookPayload):
        payload = parse_payload(payload)
    elif not payload.signing_requests:
        raise ValidationError(MISSING_SIGNING_REQUESTS)

    records: List[DocumentRecord] = []
    for request in payload.signing_requests:
        records.extend(expand_signing_request(request))
    return records

"""
boldsign.py
===========
BoldSign API client: sends one DocumentRecord as a template-based
signature request and returns the provider's request id.
"""

import logging
import requests
from typing import Any, Dict, Mapping, Optional

from .config import Settings
from .exceptions import SubmissionError
from .schemas import DocumentRecord

log = logging.getLogger(__name__)

# Reminder / expiry policy applied to every request
EXPIRY_DAYS = 60
REMINDER_DAYS = 7
REMINDER_COUNT = 3


# ---------------------------------------------------------------------------
# TEMPLATE LOOKUP
# ---------------------------------------------------------------------------

class TemplateLookup:
    """
    Maps document types to BoldSign template ids.
    Unmapped document types are used as the template id directly.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._mapping = dict(mapping or {})

    def resolve(self, document_type: str) -> str:
        return self._mapping.get(document_type, document_type)


# ---------------------------------------------------------------------------
# REQUEST BODY
# ---------------------------------------------------------------------------

def build_form_fields(record: DocumentRecord) -> list:
    """Form fields pre-filled on the patient's copy of the template."""
    fields = [
        {"fieldType": "TextBox", "fieldId": "TextBox11", "value": record.operation_name},
        {"fieldType": "TextBox", "fieldId": "TextBox12", "value": record.document_type},
        {"fieldType": "Dropdown", "fieldId": "Dropdown1", "value": "Noselift"},
        {"fieldType": "TextBox", "fieldId": "TextBox25", "value": "/"},
    ]
    for i in range(1, 7):
        fields.append({"fieldType": "CheckBox", "fieldId": f"CheckBox{i}", "isChecked": False})
    return fields


def build_send_payload(
    record: DocumentRecord,
    templates: TemplateLookup,
    sandbox: bool = True,
) -> Dict[str, Any]:
    """Build the JSON body for POST /v1/template/send."""
    return {
        "templateId": templates.resolve(record.document_type),
        "title": f"{record.document_type} for {record.patient_name}",
        "message": "",
        "expiryDays": EXPIRY_DAYS,
        "enableAutoReminder": True,
        "reminderDays": REMINDER_DAYS,
        "reminderCount": REMINDER_COUNT,
        "isSandbox": sandbox,
        "signers": [
            {
                "name": record.patient_name,
                "emailAddress": record.patient_email,
                "signerType": "Signer",
                "signerRole": "patient",
                "formFields": build_form_fields(record),
            }
        ],
        "cc": [],
        "brandId": None,
        "useTextTags": False,
        "hideDocumentId": False,
    }


# ---------------------------------------------------------------------------
# CLIENT
# ---------------------------------------------------------------------------

class BoldSignClient:
    """
    Submits DocumentRecords to BoldSign.
    Every failure is raised as SubmissionError so the dispatcher can
    record it against the individual document.
    """

    def __init__(self, settings: Settings, templates: Optional[TemplateLookup] = None):
        self.api_key = settings.require_api_key()
        self.api_url = settings.boldsign_api_url
        self.sandbox = settings.boldsign_sandbox
        self.timeout = settings.boldsign_timeout
        self.templates = templates or TemplateLookup(settings.template_map)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-API-KEY": self.api_key,
        }

    def submit(self, record: DocumentRecord) -> str:
        """Send one signature request and return the BoldSign request id."""
        payload = build_send_payload(record, self.templates, sandbox=self.sandbox)

        try:
            resp = requests.post(
                self.api_url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SubmissionError(f"BoldSign request failed: {e}") from e

        if not resp.ok:
            raise SubmissionError(
                f"BoldSign API error: {resp.status_code} - {resp.text}",
                status_code=resp.status_code,
                response_text=resp.text,
            )

        try:
            result = resp.json()
        except ValueError as e:
            raise SubmissionError(
                "BoldSign API returned a non-JSON response",
                status_code=resp.status_code,
                response_text=resp.text,
            ) from e

        request_id = None
        if isinstance(result, dict):
            request_id = result.get("requestId") or result.get("id")
        if not request_id:
            raise SubmissionError(
                "BoldSign response did not include a requestId",
                status_code=resp.status_code,
                response_text=resp.text,
            )

        log.debug("BoldSign accepted %s (template %s)", record.document_type, payload["templateId"])
        return str(request_id)

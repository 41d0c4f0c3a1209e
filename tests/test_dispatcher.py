"""
test_dispatcher.py
==================
Dispatcher tests using an in-memory fake provider:
 - one result per record, in input order
 - failures are recorded and do not stop the batch
 - full webhook workflow summary
"""

import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import threading
import time

import pytest

from esign_webhook.dispatcher import Dispatcher, process_signing_webhook
from esign_webhook.exceptions import SubmissionError, ValidationError
from esign_webhook.schemas import DocumentRecord


class FakeSigner:
    """Records every call; fails for the configured document types."""

    def __init__(self, failures=None, delay=0.0):
        self.failures = failures or {}
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def submit(self, record):
        with self._lock:
            self.calls.append(record.document_type)
        if self.delay:
            time.sleep(self.delay)
        if record.document_type in self.failures:
            raise self.failures[record.document_type]
        return f"req-{record.document_type}"


def make_records(*document_types):
    return [
        DocumentRecord(document_type=d, patient_name="John Doe", patient_email="john@x.com")
        for d in document_types
    ]


# --------------------------------------------------------------------------
# DISPATCH
# --------------------------------------------------------------------------

def test_all_records_succeed_in_order():
    signer = FakeSigner()
    records = make_records("consent-form", "pre-op-instructions", "post-op-care")

    results = Dispatcher(signer).dispatch(records)

    assert signer.calls == ["consent-form", "pre-op-instructions", "post-op-care"]
    assert [r.request_id for r in results] == ["req-consent-form", "req-pre-op-instructions", "req-post-op-care"]
    assert all(r.success for r in results)
    assert [r.record for r in results] == records


def test_failure_does_not_stop_batch():
    """
    ✅ The second record fails at the provider.
    Expected: the third record is still attempted; the failure carries the message.
    """
    signer = FakeSigner(failures={"b": SubmissionError("BoldSign API error: 401 - unauthorized", status_code=401)})

    results = Dispatcher(signer).dispatch(make_records("a", "b", "c"))

    assert signer.calls == ["a", "b", "c"]
    assert [r.success for r in results] == [True, False, True]
    assert results[1].error == "BoldSign API error: 401 - unauthorized"
    assert results[1].request_id is None
    assert results[1].record.document_type == "b"


def test_unexpected_client_error_is_captured():
    signer = FakeSigner(failures={"a": KeyError("requestId"), "b": RuntimeError()})

    results = Dispatcher(signer).dispatch(make_records("a", "b"))

    assert [r.success for r in results] == [False, False]
    assert results[0].error == "'requestId'"
    assert results[1].error == "RuntimeError"


def test_empty_batch():
    assert Dispatcher(FakeSigner()).dispatch([]) == []


def test_parallel_dispatch_keeps_input_order():
    signer = FakeSigner(delay=0.01, failures={"d3": SubmissionError("nope")})
    records = make_records(*[f"d{i}" for i in range(8)])

    results = Dispatcher(signer, max_workers=4).dispatch(records)

    assert [r.record.document_type for r in results] == [f"d{i}" for i in range(8)]
    assert sorted(signer.calls) == sorted(f"d{i}" for i in range(8))
    assert results[3].success is False
    assert sum(r.success for r in results) == 7


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        Dispatcher(FakeSigner(), max_workers=0)


# --------------------------------------------------------------------------
# WEBHOOK WORKFLOW
# --------------------------------------------------------------------------

def test_process_signing_webhook_summary():
    signer = FakeSigner(failures={"recovery-guide": SubmissionError("rejected")})
    raw = {
        "signingRequests": [
            {"patient": {"name": "John Doe", "email": "john@example.com"}, "documents": "consent-form,post-op-care"},
            {"patient": {"name": "Jane Smith", "email": "jane@example.com"}, "documents": "recovery-guide"},
        ]
    }

    response = process_signing_webhook(raw, Dispatcher(signer))

    assert response.success is True
    assert response.processed == 3
    body = response.to_json()
    assert body["results"][0] == {
        "success": True,
        "record": {
            "document_type": "consent-form",
            "patient_name": "John Doe",
            "patient_email": "john@example.com",
            "operation_name": "",
            "due_date": "",
            "language": "",
        },
        "requestId": "req-consent-form",
    }
    assert body["results"][2]["success"] is False
    assert body["results"][2]["error"] == "rejected"
    assert "requestId" not in body["results"][2]


def test_process_signing_webhook_validation_makes_no_calls():
    signer = FakeSigner()
    with pytest.raises(ValidationError):
        process_signing_webhook({"signingRequests": []}, Dispatcher(signer))
    assert signer.calls == []

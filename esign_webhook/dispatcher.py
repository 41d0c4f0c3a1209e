"""
dispatcher.py
=============
This module handles the webhook workflow:
 - Parses and expands the payload into DocumentRecords
 - Submits each record to the signature provider
 - Collects one DispatchResult per record, in input order
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Sequence

from .exceptions import SubmissionError
from .expander import expand_records, parse_payload
from .schemas import DispatchResult, DocumentRecord, WebhookResponse
from .signers import SignatureClient

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DISPATCHER
# ---------------------------------------------------------------------------

class Dispatcher:
    """
    Sends DocumentRecords to a signature client.
    A failing record never stops the rest of the batch.
    """

    def __init__(self, client: SignatureClient, max_workers: int = 1):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.client = client
        self.max_workers = max_workers

    def submit_one(self, record: DocumentRecord) -> DispatchResult:
        """Submit a single record and convert the outcome into a DispatchResult."""
        try:
            request_id = self.client.submit(record)
        except SubmissionError as e:
            log.warning("❌ %s for %s failed: %s", record.document_type, record.patient_name, e)
            return DispatchResult(success=False, record=record, error=str(e) or type(e).__name__)
        except Exception as e:
            log.exception("❌ Unexpected error submitting %s", record.document_type)
            return DispatchResult(success=False, record=record, error=str(e) or type(e).__name__)

        log.info("✅ %s for %s sent (request %s)", record.document_type, record.patient_name, request_id)
        return DispatchResult(success=True, record=record, request_id=request_id)

    def dispatch(self, records: Sequence[DocumentRecord]) -> List[DispatchResult]:
        """
        Submit every record and return results in the same order.
        With max_workers == 1 calls run strictly one after another.
        """
        if self.max_workers == 1 or len(records) <= 1:
            results = [self.submit_one(rec) for rec in records]
        else:
            # executor.map yields in submission order
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(self.submit_one, records))

        failed = sum(1 for r in results if not r.success)
        log.info("📊 Dispatched %d records (%d failed)", len(results), failed)
        return results


# ---------------------------------------------------------------------------
# WEBHOOK WORKFLOW
# ---------------------------------------------------------------------------

def process_signing_webhook(raw: Any, dispatcher: Dispatcher) -> WebhookResponse:
    """
    Run the full webhook flow.
    Steps:
      1. Validate the payload (ValidationError aborts here)
      2. Expand signing requests into DocumentRecords
      3. Submit each record
      4. Build the summary response
    """
    payload = parse_payload(raw)
    records = expand_records(payload)
    log.info(
        "📋 Expanded %d signing requests into %d document records",
        len(payload.signing_requests),
        len(records),
    )

    results = dispatcher.dispatch(records)
    return WebhookResponse(success=True, processed=len(records), results=results)

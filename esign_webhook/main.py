"""
main.py
========
This is the FastAPI entry point for the e-sign webhook backend.
It:
 - Configures logging on startup.
 - Answers CORS preflight requests.
 - Exposes the webhook endpoint that expands signing requests into
   per-document records and sends each one to the signature provider.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings, load_settings
from .dispatcher import Dispatcher, process_signing_webhook
from .error_handlers import register_error_handlers
from .exceptions import ConfigurationError, SigningWebhookError, ValidationError
from .logging_config import setup_logging
from .signers import make_signature_client

log = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/webhook-handler"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Called when FastAPI starts; sets up logging."""
    try:
        setup_logging(load_settings().log_level)
    except ConfigurationError as e:
        # requests will keep answering 500 until the settings are fixed
        setup_logging()
        log.error("Invalid configuration: %s", e)
    log.info("🚀 Starting e-sign webhook backend...")
    yield


app = FastAPI(title="E-Sign Webhook Backend", version="1.0", lifespan=lifespan)

# Webhooks can be posted from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# DEPENDENCIES
# ---------------------------------------------------------------------------

def get_settings() -> Settings:
    """Settings for the current request, read from the environment."""
    return load_settings()


def get_dispatcher(settings: Settings = Depends(get_settings)) -> Dispatcher:
    """
    Build the dispatcher for the configured provider.
    Raises ConfigurationError (HTTP 500) when the API key is missing.
    """
    client = make_signature_client(settings)
    return Dispatcher(client, max_workers=settings.dispatch_max_workers)


# ---------------------------------------------------------------------------
# API ENDPOINTS
# ---------------------------------------------------------------------------

@app.post(WEBHOOK_PATH)
async def webhook_handler(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    """
    Process a signing-request webhook.

    - Validates signingRequests[]
    - Expands each patient's documents into one record per document
    - Sends every record to the signature provider, one at a time
    - Returns per-record results
    """
    try:
        try:
            raw = await request.json()
        except ValueError:
            raise ValidationError("Invalid JSON payload")

        response = await run_in_threadpool(process_signing_webhook, raw, dispatcher)
    except SigningWebhookError:
        raise
    except Exception as e:
        log.exception("Webhook processing failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Processing failed", "details": str(e) or type(e).__name__},
            headers={"Access-Control-Allow-Origin": "*"},
        )

    return JSONResponse(content=response.to_json(), headers={"Access-Control-Allow-Origin": "*"})


@app.options(WEBHOOK_PATH)
def webhook_options():
    """Answer bare OPTIONS requests (browser preflights are handled by CORSMiddleware)."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@app.api_route(WEBHOOK_PATH, methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"])
def webhook_method_not_allowed():
    """Only POST is accepted on the webhook endpoint."""
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST, OPTIONS"},
    )


# ---------------------------------------------------------------------------
# ROOT ENDPOINT
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    """Basic health check endpoint."""
    return {"message": "E-sign webhook backend is running!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "esign_webhook.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )

"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import ConfigurationError, SigningWebhookError, ValidationError


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        content = {"error": exc.message}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(SigningWebhookError)
    async def handle_generic_error(request: Request, exc: SigningWebhookError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": "Processing failed", "details": str(exc)})

"""
API error handling for Hub Catalog
Maps catalog errors, HTTP errors and request validation failures to JSON
bodies with an `error` field
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import CatalogError
from ..schemas.catalog_schemas import describe_errors
from ..services.prometheus_metrics import get_metrics_instance

logger = logging.getLogger(__name__)

PLUGIN_REGISTRATION_PATH = "/api/plugins"

# Client-facing messages for malformed bodies, by route prefix
VALIDATION_MESSAGES = {
    PLUGIN_REGISTRATION_PATH: "All plugin fields are required.",
    "/api/issues": "All issue fields are required.",
    "/api/faqs": "FAQ question and answer required.",
}
DEFAULT_VALIDATION_MESSAGE = "Invalid request data provided"


def _record_rejected_registration(request: Request) -> None:
    """Bodies rejected before the registration service runs still count as attempts"""
    if request.method == "POST" and request.url.path.rstrip("/") == PLUGIN_REGISTRATION_PATH:
        get_metrics_instance().record_registration("validation_error")


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle ValidationError, PersistenceError and ResolutionInconsistency"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Undecodable bodies, unknown paths and wrong methods"""
    logger.info(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        _record_rejected_registration(request)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or ill-typed body fields are client errors (400, not 422)"""
    message = DEFAULT_VALIDATION_MESSAGE
    for prefix, prefix_message in VALIDATION_MESSAGES.items():
        if request.url.path.startswith(prefix):
            message = prefix_message
            break

    details = describe_errors(list(exc.errors()))
    logger.info(f"Rejected {request.method} {request.url.path}: {[d['field'] for d in details]}")
    _record_rejected_registration(request)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "details": details},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler; internal details stay in the log"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""HTTP mapping for the business-rule errors of the Reviews domain.

Protean's handlers cover ValidationError (400), ObjectNotFoundError (404)
and the remaining InvalidOperationErrors (422).
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from reviews.exceptions import (
    AuthorizationError,
    CooldownError,
    InfrastructureError,
    InsufficientBalanceError,
    RateLimitError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    AuthorizationError: 403,
    RateLimitError: 429,
    CooldownError: 429,
    InsufficientBalanceError: 409,
    InfrastructureError: 503,
}


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    message = exc.args[0] if exc.args else str(exc)
    return JSONResponse(status_code=status_code, content={"error": message})


async def _business_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = _STATUS_CODES[type(exc)]
    if status_code >= 500:
        logger.error("Request failed after retries", path=request.url.path, error=str(exc))
    return _error_response(status_code, exc)


def install_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class in _STATUS_CODES:
        app.add_exception_handler(exc_class, _business_error)

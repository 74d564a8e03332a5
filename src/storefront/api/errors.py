"""Map storefront exceptions onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import (
    EmptyCartError,
    ForbiddenError,
    GatewayError,
    InsufficientStockError,
    InvalidAmountError,
    InvalidStatusTransitionError,
    NotFoundError,
    OverRefundError,
    StorefrontError,
    UnauthorizedError,
)

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."

ERROR_STATUS_CODES: dict[type, int] = {
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    EmptyCartError: 400,
    InvalidAmountError: 400,
    InsufficientStockError: 400,
    OverRefundError: 400,
    InvalidStatusTransitionError: 400,
    GatewayError: 502,
}


def status_code_for(exc: StorefrontError) -> int:
    """Status of the closest mapped ancestor; unmapped errors are server errors."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, error_type=type(exc).__name__, error=str(exc))
        message = GENERIC_ERROR_MESSAGE if status_code == 500 else str(exc)
        return JSONResponse(status_code=status_code, content={"error": message})
    return JSONResponse(status_code=status_code, content={"error": str(exc), "error_type": type(exc).__name__})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

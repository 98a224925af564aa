"""HTTP rendering of ordering errors as ``{"error": {...}}`` bodies."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from ordering.errors import AuthRequired, Conflict, EmptyCart, NotFound, OrderingError, PermissionDenied

logger = structlog.get_logger(__name__)

STATUS_CODES = {
    AuthRequired: 401,
    PermissionDenied: 403,
    NotFound: 404,
    Conflict: 409,
    EmptyCart: 422,
}


async def ordering_error_handler(request: Request, exc: OrderingError):
    status_code = next((code for cls, code in STATUS_CODES.items() if isinstance(exc, cls)), 400)
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": {"code": "invalid_argument", "messages": exc.messages}},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": NotFound(str(exc)).to_dict()})


async def version_conflict_handler(request: Request, exc: ExpectedVersionError):
    logger.warning("Concurrent modification rejected", path=request.url.path, error=str(exc))
    conflict = Conflict("The record was changed by another request; please retry")
    return JSONResponse(status_code=409, content={"error": conflict.to_dict()})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "internal_error", "message": "Something went wrong"}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

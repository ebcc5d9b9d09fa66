# app/api/v1/error_handlers.py
"""
FastAPI exception handlers that turn domain errors into ApiError responses.

How to use:
    - Call register_exception_handlers(app) from the app factory (app/main.py).
    - The service raises app.exceptions.* (NotFoundError, DatabaseError, UnknownError).
    - Status codes come from exc.http_status(); the body from ApiError.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.envelope import ApiError
from app.exceptions.base import ServiceError

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    NotFoundError -> 404, DatabaseError -> 500 (or the configured constraint
    violation status), UnknownError -> 500.
    """
    body = ApiError.from_service_error(exc)

    if body.status >= 500:
        logger.error(
            "api.error",
            extra={"method": request.method, "path": request.url.path, "code": exc.error_code, "status": body.status},
        )
    else:
        logger.info(
            "api.error",
            extra={"method": request.method, "path": request.url.path, "code": exc.error_code, "status": body.status},
        )
    return JSONResponse(status_code=body.status, content=body.to_content())


def _field_name(loc: tuple | list) -> str | None:
    # ("body", "age") -> "age"; ("path", "user_id") -> "user_id"
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) or None


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    400 Bad Request for malformed bodies and path parameters.
    """
    errors = [{"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")} for err in exc.errors()]
    fields = sorted({name for err in exc.errors() if (name := _field_name(err.get("loc", ())))})

    logger.info(
        "api.validation_error",
        extra={"method": request.method, "path": request.url.path, "fields": fields},
    )
    body = ApiError(
        status=400,
        message="Validation error",
        code="validation",
        fields=fields or None,
        errors=errors,
    )
    return JSONResponse(status_code=400, content=body.to_content())


# Helper to register all handlers on an app (call this from your app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)

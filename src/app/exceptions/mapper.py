"""
Storage error -> domain error translation.

`map_storage_error` is total: every exception maps to exactly one of
NotFoundError, DatabaseError or UnknownError. `storage_error_boundary` applies
it around repository calls in the service layer.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    NoResultFound,
    TimeoutError as PoolTimeoutError,
)

from .base import DatabaseError, NotFoundError, ServiceError, UnknownError
from .integrity_classifier import classify_integrity_error, extract_columns

logger = logging.getLogger(__name__)


def _driver_message(exc: DBAPIError) -> str:
    # exc.orig is the driver's own error; str(exc) would add the SQL text
    orig = exc.orig
    text = str(orig).strip() if orig is not None else ""
    return text or type(exc).__name__


def map_storage_error(
    exc: Exception,
    *,
    resource: str = "User",
    lookup: str | None = None,
    constraint_violation_status: int = 500,
) -> ServiceError:
    """
    Translate a repository exception into a domain error.

    Args:
        exc: the exception raised by the repository
        resource: entity name used in messages
        lookup: what was looked up, e.g. "id: 5"; used in NotFound messages
        constraint_violation_status: HTTP status for client-caused constraint violations

    Returns:
        The domain error. It is returned, not raised, so callers can chain it with `from`.
    """
    if isinstance(exc, ServiceError):
        return exc

    if isinstance(exc, NoResultFound):
        message = f"{resource} not found with {lookup}" if lookup else f"{resource} not found"
        logger.info("mapper.not_found", extra={"resource": resource, "lookup": lookup})
        return NotFoundError(message)

    if isinstance(exc, DBAPIError):
        kind = classify_integrity_error(exc)
        columns = extract_columns(exc) if kind is not None else None
        message = f"Database error: {_driver_message(exc)}"

        if kind is not None:
            logger.info(
                "mapper.constraint_violation",
                extra={"resource": resource, "constraint": kind.value, "fields": columns},
            )
            return DatabaseError(
                message,
                fields=columns,
                constraint=kind.value,
                client_error=True,
                status_code=constraint_violation_status,
            )

        logger.error(
            "mapper.database_error",
            extra={"resource": resource, "error_type": type(exc.orig).__name__, "connection_invalidated": exc.connection_invalidated},
        )
        return DatabaseError(message)

    if isinstance(exc, (PoolTimeoutError, DisconnectionError)):
        # pool exhaustion / lost connection: recoverable, callers may retry
        logger.error("mapper.pool_error", extra={"resource": resource, "error_type": type(exc).__name__})
        return DatabaseError(f"Database error: {exc}")

    logger.error(
        "mapper.unknown_error",
        extra={"resource": resource, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return UnknownError(f"Unexpected error: {type(exc).__name__}: {exc}")


@asynccontextmanager
async def storage_error_boundary(
    *,
    resource: str = "User",
    lookup: str | None = None,
    constraint_violation_status: int = 500,
) -> AsyncIterator[None]:
    """
    Usage:
        async with storage_error_boundary(lookup=f"id: {user_id}"):
            user = await repository.get_by_id(user_id)

    Any Exception escaping the block is re-raised as a ServiceError. Cancellation
    (asyncio.CancelledError is a BaseException) passes through untouched.
    """
    try:
        yield
    except ServiceError:
        raise
    except Exception as exc:
        raise map_storage_error(
            exc,
            resource=resource,
            lookup=lookup,
            constraint_violation_status=constraint_violation_status,
        ) from exc

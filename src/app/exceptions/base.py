"""
Domain error taxonomy raised by the service layer.

The repository raises raw SQLAlchemy exceptions; the service translates every one
of them into exactly one of these kinds (see mapper.py). Nothing above the
service ever sees a storage exception.
"""

from typing import Iterable


class ServiceError(Exception):
    """
    Base exception for service errors.

    - message: human-readable message (never contains passwords or hashes)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - error_code: canonical short code used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "database": 500,
        "unknown": 500,
    }

    error_code: str = "unknown"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self._status_code = status_code

    def __str__(self) -> str:
        if self.fields:
            return f"{self.message} (fields: {', '.join(self.fields)}; code: {self.error_code})"
        return f"{self.message} (code: {self.error_code})"

    def to_payload(self) -> dict:
        """
        JSON-serializable error detail used by the API error envelope:
            {"message": "...", "code": "not_found", "fields": [...]}
        """
        payload = {"message": self.message, "code": self.error_code}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self._status_code is not None:
            return self._status_code
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


class NotFoundError(ServiceError):
    """No row for the given identity or key."""

    error_code = "not_found"

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class DatabaseError(ServiceError):
    """
    Constraint violation, connectivity failure, pool timeout or any other error
    reported by the store. The message keeps the driver text for diagnostics and
    is not a stable contract for callers.

    `constraint` carries the classifier's verdict ("unique", "not_null", ...)
    when the failure is an integrity violation; `client_error` marks it as
    caused by the request rather than by the server.
    """

    error_code = "database"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, client_error: bool = False,
                 status_code: int | None = None):
        super().__init__(message, fields=fields, status_code=status_code)
        self.constraint = constraint
        self.client_error = client_error


class UnknownError(ServiceError):
    """Anything the mapper could not categorize."""

    error_code = "unknown"


__all__ = [
    "ServiceError",
    "NotFoundError",
    "DatabaseError",
    "UnknownError",
]

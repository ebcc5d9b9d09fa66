"""
Uniform response envelope.

Success:  {"status": 200, "data": <payload>}
Error:    {"status": <http status>, "message": "...", "code": "not_found", "fields": [...] | null}

Validation failures additionally carry `errors`: one {"loc": [...], "msg": "..."}
entry per failing field.
"""
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from app.exceptions.base import ServiceError

T = TypeVar("T")


class ApiSuccess(BaseModel, Generic[T]):
    status: int = 200
    data: T


class ApiError(BaseModel):
    status: int
    message: str
    code: str | None = None
    fields: list[str] | None = None
    errors: list[dict[str, Any]] | None = None

    @classmethod
    def from_service_error(cls, exc: ServiceError) -> "ApiError":
        return cls(
            status=exc.http_status(),
            message=exc.message,
            code=exc.error_code,
            fields=exc.fields,
        )

    def to_content(self) -> dict[str, Any]:
        """JSON body; `errors` is only emitted for validation failures."""
        return self.model_dump(exclude={"errors"} if self.errors is None else None)


__all__ = ["ApiSuccess", "ApiError"]

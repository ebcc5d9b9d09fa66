"""
Logging filters.

- RequestIdFilter guarantees every LogRecord has a `request_id` attribute, read
  from a `contextvars.ContextVar` so the value follows the request across awaits.
  Formatters referencing `%(request_id)s` therefore never KeyError; records
  emitted outside a request get the sentinel "-".
- RedactFilter masks record attributes whose name looks sensitive (passwords,
  tokens, ...), so a stray `extra={"password": ...}` never reaches a handler.

Both filters return True: they annotate records, they never drop them.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id in the current context and return the token for reset_request_id().
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Stamp `record.request_id` with, in order of preference:
      * a value passed explicitly via `extra={"request_id": ...}`
      * the contextvar value set by RequestIDMiddleware
      * "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "password_hash",
        "hashed_password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True

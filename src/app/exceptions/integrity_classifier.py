"""
Classify driver-level integrity failures.

Postgres drivers expose a SQLSTATE (`pgcode` on psycopg, `sqlstate` on asyncpg);
other backends (SQLite in tests) only give a message, so we fall back to keyword
matching. The result tags a DatabaseError; it is never raised on its own.
"""
import logging
import re
from enum import Enum

from sqlalchemy.exc import DBAPIError, IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_KIND_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ConstraintKind.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ConstraintKind.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ConstraintKind.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION.value: ConstraintKind.CHECK,
}

# Integrity violations are SQLSTATE class 23
_INTEGRITY_CLASS = "23"

_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def _sqlstate(orig) -> str | None:
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_message(msg: str) -> ConstraintKind:
    normalized = msg.lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: DBAPIError) -> ConstraintKind | None:
    """
    Return the ConstraintKind of an integrity failure, or None when `exc` is not
    an integrity failure at all (connection loss, syntax error, ...).
    """
    orig = exc.orig
    code = _sqlstate(orig)

    if code:
        if not code.startswith(_INTEGRITY_CLASS):
            return None
        kind = PGCODE_KIND_MAP.get(code, ConstraintKind.UNKNOWN)
        if kind is ConstraintKind.UNKNOWN:
            logger.warning("Unknown Postgres integrity error code encountered", extra={"pgcode": code})
        return kind

    if not isinstance(exc, IntegrityError):
        return None
    return _classify_from_message(str(orig))


def extract_columns(exc: DBAPIError) -> list[str] | None:
    """
    Best-effort extraction of the column names involved (Postgres and SQLite messages).
    """
    msg = str(exc.orig) if exc.orig is not None else ""

    # Postgres: null value in column "name" ...
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    # Postgres: DETAIL:  Key (email)=(a@b.com) already exists.
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    # SQLite: UNIQUE constraint failed: users.email / NOT NULL constraint failed: users.name
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None

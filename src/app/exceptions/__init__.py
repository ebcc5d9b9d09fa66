# app/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (NotFoundError, DatabaseError, UnknownError)
# │   ├── integrity_classifier.py    # Classify driver-level constraint failures
# │   └── mapper.py                  # Storage error -> domain error, single translation boundary

from .base import ServiceError, NotFoundError, DatabaseError, UnknownError
from .mapper import map_storage_error, storage_error_boundary

__all__ = [
    "ServiceError",
    "NotFoundError",
    "DatabaseError",
    "UnknownError",
    "map_storage_error",
    "storage_error_boundary",
]

"""
Centralized access to the database models.

    from app.models import User
"""

from .user import User

__all__ = ["User"]

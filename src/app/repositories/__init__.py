"""
Repository layer.

Usage:
    from app.repositories import UserRepository
"""

from .base_repository import AbstractUserRepository
from .update_builder import UserUpdateBuilder
from .user_repository import UserRepository

__all__ = [
    "AbstractUserRepository",
    "UserUpdateBuilder",
    "UserRepository",
]

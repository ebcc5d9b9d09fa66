from .user_service import AbstractUserService, UserService

__all__ = ["AbstractUserService", "UserService"]

from .user import UserCreate, UserUpdate, UserRead

__all__ = ["UserCreate", "UserUpdate", "UserRead"]

"""
Repository capability interface.

`AbstractUserRepository` lists the operations the service layer may rely on.
The SQLAlchemy implementation (user_repository.UserRepository) and the test
double used in service tests both implement it and share no state.

Implementations raise raw storage exceptions; in particular a lookup that
matches no row raises `sqlalchemy.exc.NoResultFound`. Translating them is the
service's job.
"""
from abc import ABC, abstractmethod

from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


class AbstractUserRepository(ABC):

    @abstractmethod
    async def create(self, data: UserCreate) -> User:
        """Hash the password, insert a row and return it with its generated id."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User:
        """Return the row with this id; NoResultFound when absent."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        """Return the row with this email; NoResultFound when absent."""

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Return every row, in store-default order."""

    @abstractmethod
    async def update(self, user_id: int, data: UserUpdate) -> User:
        """Apply the present fields and return the updated row; NoResultFound when absent."""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete the row; NoResultFound when absent (including a concurrent delete)."""

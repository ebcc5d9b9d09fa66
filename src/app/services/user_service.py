"""
User service: business operations over an AbstractUserRepository.

The service is the single translation boundary between storage and the outer
layers. It turns every entity into a `UserRead` and every repository exception
into a domain error (NotFoundError, DatabaseError, UnknownError).
"""
import logging
from abc import ABC, abstractmethod

from app.exceptions import storage_error_boundary
from app.repositories.base_repository import AbstractUserRepository
from app.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


class AbstractUserService(ABC):

    @abstractmethod
    async def create(self, data: UserCreate) -> UserRead: ...

    @abstractmethod
    async def get(self, user_id: int) -> UserRead: ...

    @abstractmethod
    async def get_all(self) -> list[UserRead]: ...

    @abstractmethod
    async def update(self, user_id: int, data: UserUpdate) -> UserRead: ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool: ...


class UserService(AbstractUserService):
    """
    Args:
        repository: any AbstractUserRepository implementation
        constraint_violation_status: HTTP status reported for client-caused
            constraint violations (Settings.CONSTRAINT_VIOLATION_STATUS)
    """

    def __init__(self, repository: AbstractUserRepository, *, constraint_violation_status: int = 500):
        self._repository = repository
        self._constraint_violation_status = constraint_violation_status

    def _boundary(self, lookup: str | None = None):
        return storage_error_boundary(
            resource="User",
            lookup=lookup,
            constraint_violation_status=self._constraint_violation_status,
        )

    async def create(self, data: UserCreate) -> UserRead:
        async with self._boundary():
            user = await self._repository.create(data)
        logger.info("service.create.success", extra={"id": user.id})
        return UserRead.from_entity(user)

    async def get(self, user_id: int) -> UserRead:
        async with self._boundary(lookup=f"id: {user_id}"):
            user = await self._repository.get_by_id(user_id)
        return UserRead.from_entity(user)

    async def get_by_email(self, email: str) -> UserRead:
        """Lookup by email. Not exposed over HTTP."""
        async with self._boundary(lookup=f"email: {email}"):
            user = await self._repository.get_by_email(email)
        return UserRead.from_entity(user)

    async def get_all(self) -> list[UserRead]:
        async with self._boundary():
            users = await self._repository.get_all()
        return [UserRead.from_entity(u) for u in users]

    async def update(self, user_id: int, data: UserUpdate) -> UserRead:
        # a missing row surfaces as NoResultFound from the repository -> NotFoundError
        async with self._boundary(lookup=f"id: {user_id}"):
            user = await self._repository.update(user_id, data)
        logger.info("service.update.success", extra={"id": user_id})
        return UserRead.from_entity(user)

    async def delete(self, user_id: int) -> bool:
        async with self._boundary(lookup=f"id: {user_id}"):
            deleted = await self._repository.delete(user_id)
        logger.info("service.delete.success", extra={"id": user_id})
        return deleted

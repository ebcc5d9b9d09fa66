"""
SQLAlchemy implementation of the user repository.

The repository holds the application's session factory (a non-owning handle on
the engine's connection pool) and opens one short-lived session per operation.
`async with` guarantees the connection goes back to the pool on success, on
error and when the calling task is cancelled. Write operations run inside
`session_factory.begin()`, i.e. one transaction committed on exit.

It is the only component that reads or writes the `password` column.
"""

import logging
import time
from functools import partial

from sqlalchemy import delete, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.security import hash_password
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

from .base_repository import AbstractUserRepository
from .update_builder import UserUpdateBuilder

logger = logging.getLogger(__name__)


class UserRepository(AbstractUserRepository):
    """
    Repository for User rows.

    Args:
        session_factory: async_sessionmaker bound to the application engine
        password_hash_rounds: bcrypt work factor applied on create and update
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], *, password_hash_rounds: int = 4):
        self._session_factory = session_factory
        self._hash = partial(hash_password, rounds=password_hash_rounds)

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, data: UserCreate) -> User:
        start = time.perf_counter()
        entity = data.to_entity(self._hash(data.password))

        async with self._session_factory.begin() as session:
            session.add(entity)
            # flush sends the INSERT so the generated id is populated
            await session.flush()

        logger.info(
            "repo.create.success",
            extra={
                "model": "User",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, user_id: int) -> User:
        async with self._session_factory() as session:
            result = await session.execute(select(User).where(User.id == user_id))
            # scalar_one() raises NoResultFound for zero rows; id is the primary key so never more than one
            user = result.scalar_one()

        logger.debug("repo.get_by_id.success", extra={"model": "User", "id": user_id})
        return user

    async def get_by_email(self, email: str) -> User:
        # email is unique by convention only; take the oldest row if that convention was broken
        query = select(User).where(User.email == email).order_by(User.id).limit(1)
        async with self._session_factory() as session:
            result = await session.execute(query)
            user = result.scalar_one()

        logger.debug("repo.get_by_email.success", extra={"model": "User", "id": user.id})
        return user

    async def get_all(self) -> list[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(User))
            users = list(result.scalars().all())

        logger.debug("repo.get_all.success", extra={"model": "User", "count": len(users)})
        return users

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, user_id: int, data: UserUpdate) -> User:
        """
        Update only the fields present in `data`.

        With no field present nothing is written and the current row is returned
        unchanged (NoResultFound if the id does not exist).
        """
        builder = UserUpdateBuilder.from_dto(data, self._hash)

        if builder.is_empty:
            logger.info("repo.update.noop", extra={"model": "User", "id": user_id})
            return await self.get_by_id(user_id)

        start = time.perf_counter()
        stmt = builder.build(user_id)

        async with self._session_factory.begin() as session:
            result = await session.execute(stmt)
            # RETURNING yields no row when the id does not exist -> NoResultFound
            row = result.one()

        logger.info(
            "repo.update.success",
            extra={
                "model": "User",
                "id": user_id,
                # field names only, never values
                "updated_fields": builder.fields,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return User(**row._mapping)

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, user_id: int) -> bool:
        """
        Delete by id after confirming the row exists.

        The existence check and the DELETE are separate statements. If another
        request removes the row in between, the DELETE affects zero rows and this
        is reported as NoResultFound, same as deleting an id that never existed.
        """
        user = await self.get_by_id(user_id)

        async with self._session_factory.begin() as session:
            result = await session.execute(delete(User).where(User.id == user.id))
            deleted = result.rowcount

        if deleted == 0:
            logger.warning("repo.delete.concurrent_delete", extra={"model": "User", "id": user_id})
            raise NoResultFound(f"User with id {user_id} was deleted concurrently")

        logger.info("repo.delete.success", extra={"model": "User", "id": user_id})
        return True

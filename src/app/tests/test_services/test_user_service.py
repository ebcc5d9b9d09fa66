import asyncio

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import DatabaseError, NotFoundError, UnknownError
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.user_service import UserService

from ..test_fixtures.service_fixtures import FailingUserRepository, FakeUserRepository


def sample_create(**overrides) -> UserCreate:
    data = {"name": "Test User", "age": 25, "email": "test@example.com", "password": "password123"}
    data.update(overrides)
    return UserCreate(**data)


@pytest.mark.asyncio
class TestUserServiceCreateAndRead:

    async def test_create_returns_output_view(self, user_service: UserService):
        user = await user_service.create(sample_create())

        assert isinstance(user, UserRead)
        assert user.model_dump() == {"id": 1, "name": "Test User", "age": 25, "email": "test@example.com"}

    async def test_output_view_never_carries_password(self, user_service: UserService):
        user = await user_service.create(sample_create())

        assert "password" not in user.model_dump()
        assert "password" not in user.model_dump_json()

    async def test_get_returns_created_user(self, user_service: UserService):
        created = await user_service.create(sample_create())

        assert await user_service.get(created.id) == created

    async def test_get_missing_raises_not_found(self, user_service: UserService):
        with pytest.raises(NotFoundError) as exc_info:
            await user_service.get(999)

        assert exc_info.value.message == "User not found with id: 999"
        assert exc_info.value.http_status() == 404

    async def test_get_by_email(self, user_service: UserService):
        created = await user_service.create(sample_create(email="find.me@example.com"))

        assert (await user_service.get_by_email("find.me@example.com")).id == created.id

    async def test_get_by_email_missing_raises_not_found(self, user_service: UserService):
        with pytest.raises(NotFoundError) as exc_info:
            await user_service.get_by_email("nobody@example.com")

        assert exc_info.value.message == "User not found with email: nobody@example.com"

    async def test_get_all(self, user_service: UserService):
        await user_service.create(sample_create(email="one@example.com"))
        await user_service.create(sample_create(email="two@example.com"))

        users = await user_service.get_all()

        assert [u.email for u in users] == ["one@example.com", "two@example.com"]
        assert all(isinstance(u, UserRead) for u in users)


@pytest.mark.asyncio
class TestUserServiceUpdateAndDelete:

    async def test_update_age_keeps_name(self, user_service: UserService):
        created = await user_service.create(sample_create(name="Anna"))

        updated = await user_service.update(created.id, UserUpdate(age=30))

        assert updated.name == "Anna"
        assert updated.age == 30

    async def test_update_missing_raises_not_found(self, user_service: UserService):
        with pytest.raises(NotFoundError):
            await user_service.update(999, UserUpdate(age=30))

    async def test_empty_update_returns_current(self, user_service: UserService):
        created = await user_service.create(sample_create())

        assert await user_service.update(created.id, UserUpdate()) == created

    async def test_delete_then_get_raises_not_found(self, user_service: UserService):
        created = await user_service.create(sample_create())

        assert await user_service.delete(created.id) is True
        with pytest.raises(NotFoundError):
            await user_service.get(created.id)

    async def test_delete_twice_raises_not_found(self, user_service: UserService, fake_repository: FakeUserRepository):
        created = await user_service.create(sample_create())
        await user_service.delete(created.id)

        with pytest.raises(NotFoundError):
            await user_service.delete(created.id)
        assert fake_repository.rows == {}


class DriverError(Exception):
    pass


@pytest.mark.asyncio
class TestUserServiceErrorMapping:
    """
    Every repository exception reaches the caller as exactly one domain error.
    """

    async def test_driver_error_becomes_database_error(self):
        service = UserService(FailingUserRepository(OperationalError("SELECT", None, DriverError("server closed"))))

        with pytest.raises(DatabaseError) as exc_info:
            await service.get_all()

        assert exc_info.value.message == "Database error: server closed"
        assert exc_info.value.http_status() == 500

    async def test_constraint_violation_uses_configured_status(self):
        error = IntegrityError("INSERT", None, DriverError("UNIQUE constraint failed: users.email"))
        service = UserService(FailingUserRepository(error), constraint_violation_status=409)

        with pytest.raises(DatabaseError) as exc_info:
            await service.create(sample_create())

        assert exc_info.value.http_status() == 409
        assert exc_info.value.fields == ["email"]

    async def test_unexpected_error_becomes_unknown(self):
        service = UserService(FailingUserRepository(ValueError("bad value")))

        with pytest.raises(UnknownError) as exc_info:
            await service.delete(1)

        assert exc_info.value.message == "Unexpected error: ValueError: bad value"

    async def test_cancellation_propagates_unmapped(self):
        service = UserService(FailingUserRepository(asyncio.CancelledError()))

        with pytest.raises(asyncio.CancelledError):
            await service.get(1)


@pytest.mark.asyncio
class TestUserServiceLongPasswords:
    """
    bcrypt only accepts 72 bytes; longer valid passwords still create and update users.

    Fixtures:
      - user_repository: the SQLAlchemy repository on the test database
    """

    async def test_create_with_100_char_password(self, user_repository):
        service = UserService(user_repository)

        user = await service.create(sample_create(password="x" * 100))

        assert user.model_dump() == {"id": user.id, "name": "Test User", "age": 25, "email": "test@example.com"}

    async def test_update_with_80_byte_password(self, user_repository):
        service = UserService(user_repository)
        created = await service.create(sample_create())

        updated = await service.update(created.id, UserUpdate(password="é" * 40))

        assert updated == created

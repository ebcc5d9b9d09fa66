"""
User DTOs: write intents (UserCreate, UserUpdate) and the read projection (UserRead).
"""
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import User

Name = Annotated[str, Field(min_length=4)]
Age = Annotated[int, Field(ge=10, le=100)]
# repr=False keeps plaintext passwords out of reprs, tracebacks and logs
Password = Annotated[str, Field(min_length=4, repr=False)]


class UserCreate(BaseModel):
    """Payload for creating a user. The password is plaintext until the repository hashes it."""

    name: Name
    age: Age
    email: EmailStr
    password: Password

    def to_entity(self, password_hash: str) -> User:
        """Build the row to insert; the plaintext password is not carried over."""
        return User(name=self.name, age=self.age, email=self.email, password=password_hash)


class UserUpdate(BaseModel):
    """
    Partial update. Absent (or null) fields are left unchanged; an empty body is
    valid and results in no write at all.
    """

    name: Name | None = None
    age: Age | None = None
    password: Password | None = None

    def is_empty(self) -> bool:
        return self.name is None and self.age is None and self.password is None


class UserRead(BaseModel):
    """
    Outbound projection of a stored user. There is no password field and extra
    input is forbidden, so the hash can neither be copied in nor serialized out.
    """

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: int
    name: str
    age: int
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls.model_validate(user)

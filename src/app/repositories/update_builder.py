"""
Partial UPDATE statement builder for the users table.

Collects (column, value) pairs for the fields present in an update and renders
a single statement:

    UPDATE users SET name=:name, age=:age, password=:password
    WHERE users.id = :id_1
    RETURNING users.id, users.name, users.age, users.email, users.password

- SET order is always name, age, password, whatever order fields are added in.
- Values are bound parameters; nothing is interpolated into the SQL text.
- The WHERE clause always targets exactly one id and RETURNING hands back the
  mutated row, so the caller needs no second round trip.
"""
from typing import Any, Callable

from sqlalchemy import update
from sqlalchemy.sql import Update

from app.models.user import User
from app.schemas.user import UserUpdate

UPDATABLE_FIELDS = ("name", "age", "password")

users_table = User.__table__


class UserUpdateBuilder:

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    @classmethod
    def from_dto(cls, data: UserUpdate, hash_password: Callable[[str], str]) -> "UserUpdateBuilder":
        """
        Take the non-null fields of `data`. A present password is hashed here,
        so the plaintext never reaches the statement.
        """
        builder = cls()
        if data.name is not None:
            builder.set("name", data.name)
        if data.age is not None:
            builder.set("age", data.age)
        if data.password is not None:
            builder.set("password", hash_password(data.password))
        return builder

    def set(self, field: str, value: Any) -> "UserUpdateBuilder":
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"'{field}' is not an updatable user field")
        self._values[field] = value
        return self

    @property
    def is_empty(self) -> bool:
        return not self._values

    @property
    def fields(self) -> list[str]:
        """Fields that will appear in the SET clause, in rendering order."""
        return [f for f in UPDATABLE_FIELDS if f in self._values]

    def build(self, user_id: int) -> Update:
        """
        Render the statement for `user_id`.

        Raises:
            ValueError: if no field was set (an empty SET clause is not valid SQL).
        """
        if self.is_empty:
            raise ValueError("cannot build an UPDATE without any field to set")

        pairs = [(users_table.c[field], self._values[field]) for field in self.fields]
        return (
            update(users_table)
            .where(users_table.c.id == user_id)
            .ordered_values(*pairs)
            .returning(*users_table.c)
        )

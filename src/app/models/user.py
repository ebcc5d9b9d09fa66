from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.database.base import Base


class User(Base):
    """
    SQLAlchemy model for a stored user row.

    `password` holds the bcrypt hash, never the plaintext. Only the repository
    layer reads or writes it; outbound DTOs are projections that omit it.
    """
    __tablename__ = "users"

    # Generated by the store (SERIAL on Postgres, INTEGER PRIMARY KEY on SQLite)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    age: Mapped[int] = mapped_column(Integer, nullable=False)

    # Unique by convention only; the table carries no unique constraint
    email: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    password: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        # password deliberately left out
        return f"<User(id={self.id!r}, name={self.name!r}, email={self.email!r})>"

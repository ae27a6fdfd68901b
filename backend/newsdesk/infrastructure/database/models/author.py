"""SQLAlchemy ORM model for the read-only author projection."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from newsdesk.infrastructure.database.base import Base


class AuthorModel(Base):
    """ORM model — maps to the 'authors' table.

    Only the columns articles are joined against; author accounts are
    managed by the auth service.
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<AuthorModel(id={self.id}, email='{self.email}')>"

"""User model for authentication and account ownership."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hsa.models.base import TimestampedModel


class User(TimestampedModel):
    """A registered account holder. Immutable after registration."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    account: Mapped["HSAAccount"] = relationship(
        "HSAAccount", back_populates="user", uselist=False, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

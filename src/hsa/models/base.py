"""Base model with common fields for all database models."""
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from hsa.core.money import to_money


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cents(TypeDecorator):
    """Decimal money stored as an integer number of cents.

    Keeps SQL-side arithmetic and comparisons (``balance - :amount``,
    ``balance >= :amount``) exact on every backend, including SQLite where
    NUMERIC columns hold floats.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(to_money(value).scaleb(2))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(int(value)).scaleb(-2)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class BaseModel(Base):
    """Abstract base model with a UUID primary key."""

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)


class TimestampedModel(BaseModel):
    """Abstract base model for rows that record their creation time."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

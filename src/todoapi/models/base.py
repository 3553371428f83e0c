"""Declarative base and shared column helpers."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Current server time in UTC."""
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None) -> datetime:
    """A new ``updated_at`` strictly later than ``previous``.

    Naive values (SQLite drops the offset) are read as UTC.
    """
    now = utcnow()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    return max(now, previous + timedelta(microseconds=1))


class Base(DeclarativeBase):
    """Base class for all ORM models."""

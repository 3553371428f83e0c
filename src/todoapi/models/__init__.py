"""SQLAlchemy models for the todo service."""

from todoapi.models.base import Base, next_timestamp, utcnow
from todoapi.models.category import Category, DEFAULT_CATEGORY_COLOR
from todoapi.models.todo import Todo

__all__ = [
    "Base",
    "next_timestamp",
    "utcnow",
    "Category",
    "DEFAULT_CATEGORY_COLOR",
    "Todo",
]

"""Repository interfaces, change records and error classification."""

import enum
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from todoapi.errors import ConstraintError, DatabaseError
from todoapi.models import Category, Todo

logger = logging.getLogger(__name__)


class _Unset(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET
"""Marks a field that an update must leave untouched."""


@dataclass
class NewCategory:
    name: str
    description: str | None = None
    color: str | None = None


@dataclass
class CategoryChanges:
    name: str | _Unset = UNSET
    description: str | None | _Unset = UNSET
    color: str | _Unset = UNSET


@dataclass
class NewTodo:
    title: str
    description: str | None = None
    completed: bool = False
    category_id: uuid.UUID | None = None


@dataclass
class TodoChanges:
    title: str | _Unset = UNSET
    description: str | None | _Unset = UNSET
    completed: bool | _Unset = UNSET
    category_id: uuid.UUID | None | _Unset = UNSET


class CategoryRepository(Protocol):
    """Persistence operations on categories."""

    async def get_all(self) -> list[Category]:
        """All categories, oldest first."""
        ...

    async def get_by_id(self, category_id: uuid.UUID) -> Category:
        """One category; raises NotFoundError when absent."""
        ...

    async def exists(self, category_id: uuid.UUID) -> bool:
        ...

    async def create(self, data: NewCategory) -> Category:
        ...

    async def update(self, category_id: uuid.UUID, changes: CategoryChanges) -> Category:
        """Apply changes and refresh updated_at; raises NotFoundError when absent."""
        ...

    async def delete(self, category_id: uuid.UUID) -> None:
        """Remove a category; its todos keep existing with no category."""
        ...


class TodoRepository(Protocol):
    """Persistence operations on todos."""

    async def get_all(self) -> list[Todo]:
        """All todos, oldest first."""
        ...

    async def get_by_id(self, todo_id: uuid.UUID) -> Todo:
        ...

    async def exists(self, todo_id: uuid.UUID) -> bool:
        ...

    async def create(self, data: NewTodo) -> Todo:
        ...

    async def update(self, todo_id: uuid.UUID, changes: TodoChanges) -> Todo:
        ...

    async def delete(self, todo_id: uuid.UUID) -> None:
        ...


def apply_changes(entity: object, changes: object) -> None:
    """Copy every field of a change record that is not UNSET onto entity."""
    for name, value in vars(changes).items():
        if value is not UNSET:
            setattr(entity, name, value)


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Classify SQLAlchemy failures raised inside the block.

    Constraint violations become ConstraintError; everything else the
    driver raises becomes DatabaseError.
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Constraint violation during %s: %s", operation, exc.orig)
        raise ConstraintError() from exc
    except SQLAlchemyError as exc:
        logger.exception("Database failure during %s", operation)
        raise DatabaseError() from exc

"""SQLAlchemy-backed repositories."""

import uuid
from typing import Generic, TypeVar

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.errors import NotFoundError, RepositoryError
from todoapi.models import DEFAULT_CATEGORY_COLOR, Category, Todo, next_timestamp, utcnow
from todoapi.repositories.base import (
    CategoryChanges,
    NewCategory,
    NewTodo,
    TodoChanges,
    apply_changes,
    translate_errors,
)

ModelT = TypeVar("ModelT", Category, Todo)


class SQLRepository(Generic[ModelT]):
    """CRUD shared by every entity keyed by a UUID ``id``."""

    model: type[ModelT]
    entity_name: str

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def _table(self) -> str:
        return self.model.__tablename__

    async def get_all(self) -> list[ModelT]:
        """Get all rows, oldest first."""
        query = (
            select(self.model)
            .order_by(self.model.created_at, self.model.id)
            .execution_options(populate_existing=True)
        )
        with translate_errors(f"list {self._table}"):
            result = await self.db.execute(query)
            return list(result.scalars())

    async def get_by_id(self, entity_id: uuid.UUID) -> ModelT:
        """Get a single row by ID."""
        # populate_existing: FK actions may have changed rows behind the identity map
        query = (
            select(self.model)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        with translate_errors(f"get {self._table}"):
            result = await self.db.execute(query)
            entity = result.scalar_one_or_none()
        if entity is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return entity

    async def exists(self, entity_id: uuid.UUID) -> bool:
        """Check whether a row exists without loading it."""
        with translate_errors(f"probe {self._table}"):
            result = await self.db.execute(
                select(exists().where(self.model.id == entity_id))
            )
            return bool(result.scalar())

    async def update(self, entity_id: uuid.UUID, changes: CategoryChanges | TodoChanges) -> ModelT:
        """Apply a partial update and refresh updated_at."""
        entity = await self.get_by_id(entity_id)
        apply_changes(entity, changes)
        entity.updated_at = next_timestamp(entity.updated_at)
        await self._commit(f"update {self._table}")
        return entity

    async def delete(self, entity_id: uuid.UUID) -> None:
        """Delete a row; dependent rows are handled by the FK actions."""
        with translate_errors(f"delete {self._table}"):
            result = await self.db.execute(
                delete(self.model).where(self.model.id == entity_id)
            )
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(f"{self.entity_name} not found")
        await self._commit(f"delete {self._table}")

    async def _insert(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self._commit(f"create {self._table}")
        return entity

    async def _commit(self, operation: str) -> None:
        try:
            with translate_errors(operation):
                await self.db.commit()
        except RepositoryError:
            await self.db.rollback()
            raise


class SQLCategoryRepository(SQLRepository[Category]):
    """Category persistence on an async SQLAlchemy session."""

    model = Category
    entity_name = "Category"

    async def create(self, data: NewCategory) -> Category:
        """Create a new category."""
        now = utcnow()
        category = Category(
            name=data.name,
            description=data.description or None,
            color=data.color or DEFAULT_CATEGORY_COLOR,
            created_at=now,
            updated_at=now,
        )
        return await self._insert(category)


class SQLTodoRepository(SQLRepository[Todo]):
    """Todo persistence on an async SQLAlchemy session."""

    model = Todo
    entity_name = "Todo"

    async def create(self, data: NewTodo) -> Todo:
        """Create a new todo."""
        now = utcnow()
        todo = Todo(
            title=data.title,
            description=data.description or None,
            completed=data.completed,
            category_id=data.category_id,
            created_at=now,
            updated_at=now,
        )
        return await self._insert(todo)

"""Request-scoped dependencies for the API routes."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todoapi.database import get_db
from todoapi.repositories import (
    CategoryRepository,
    SQLCategoryRepository,
    SQLTodoRepository,
    TodoRepository,
)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    """Category repository bound to the request's session."""
    return SQLCategoryRepository(db)


def get_todo_repository(db: AsyncSession = Depends(get_db)) -> TodoRepository:
    """Todo repository bound to the request's session."""
    return SQLTodoRepository(db)

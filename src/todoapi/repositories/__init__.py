"""Persistence layer: repository interfaces and implementations."""

from todoapi.repositories.base import (
    UNSET,
    CategoryChanges,
    CategoryRepository,
    NewCategory,
    NewTodo,
    TodoChanges,
    TodoRepository,
)
from todoapi.repositories.sql import SQLCategoryRepository, SQLTodoRepository

__all__ = [
    "UNSET",
    "CategoryChanges",
    "CategoryRepository",
    "NewCategory",
    "NewTodo",
    "TodoChanges",
    "TodoRepository",
    "SQLCategoryRepository",
    "SQLTodoRepository",
]

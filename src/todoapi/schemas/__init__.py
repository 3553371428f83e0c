"""Pydantic schemas for the todo API."""

from todoapi.schemas.category import CategoryInput, CategoryResponse
from todoapi.schemas.todo import TodoInput, TodoResponse

__all__ = [
    "CategoryInput",
    "CategoryResponse",
    "TodoInput",
    "TodoResponse",
]

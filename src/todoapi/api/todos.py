"""Todo API endpoints."""

import uuid
from collections.abc import Awaitable

from fastapi import APIRouter, Depends, status

from todoapi.api.dependencies import get_category_repository, get_todo_repository
from todoapi.errors import (
    CATEGORY_NOT_FOUND_MESSAGE,
    ApiError,
    ConstraintError,
    ErrorCode,
    NotFoundError,
)
from todoapi.models import Todo
from todoapi.repositories import CategoryRepository, TodoRepository
from todoapi.schemas.todo import TodoInput, TodoResponse
from todoapi.validators import ensure_category_exists

router = APIRouter(prefix="/todos", tags=["todos"])

TODO_NOT_FOUND = "Todo not found"


async def _check_category(data: TodoInput, categories: CategoryRepository) -> None:
    if data.category_uuid is not None:
        await ensure_category_exists(categories, data.category_uuid)


async def _save(write: Awaitable[Todo], data: TodoInput) -> Todo:
    """Await a todo write, reporting a lost category reference as a client error.

    The category can be deleted between the existence check and the write;
    the foreign key then rejects the row.
    """
    try:
        return await write
    except ConstraintError as exc:
        if data.category_uuid is None:
            raise
        raise ApiError(ErrorCode.CATEGORY_NOT_FOUND, CATEGORY_NOT_FOUND_MESSAGE) from exc


@router.get("", response_model=list[TodoResponse], response_model_exclude_none=True)
async def list_todos(
    todos: TodoRepository = Depends(get_todo_repository),
):
    """List all todos, oldest first."""
    return [TodoResponse.model_validate(t) for t in await todos.get_all()]


@router.post(
    "",
    response_model=TodoResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_todo(
    data: TodoInput,
    todos: TodoRepository = Depends(get_todo_repository),
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Create a new todo."""
    await _check_category(data, categories)
    todo = await _save(todos.create(data.to_new()), data)
    return TodoResponse.model_validate(todo)


@router.get("/{todo_id}", response_model=TodoResponse, response_model_exclude_none=True)
async def get_todo(
    todo_id: uuid.UUID,
    todos: TodoRepository = Depends(get_todo_repository),
):
    """Get a single todo by ID."""
    todo = await todos.get_by_id(todo_id)
    return TodoResponse.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoResponse, response_model_exclude_none=True)
async def update_todo(
    todo_id: uuid.UUID,
    data: TodoInput,
    todos: TodoRepository = Depends(get_todo_repository),
    categories: CategoryRepository = Depends(get_category_repository),
):
    """Update a todo.

    ``title`` is always replaced. ``description`` and ``categoryId`` are
    cleared by an empty string or null and left alone when absent;
    ``completed`` is left alone when absent.
    """
    await _check_category(data, categories)
    if not await todos.exists(todo_id):
        raise NotFoundError(TODO_NOT_FOUND)
    todo = await _save(todos.update(todo_id, data.to_changes()), data)
    return TodoResponse.model_validate(todo)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: uuid.UUID,
    todos: TodoRepository = Depends(get_todo_repository),
):
    """Delete a todo."""
    if not await todos.exists(todo_id):
        raise NotFoundError(TODO_NOT_FOUND)
    await todos.delete(todo_id)

"""Todo schemas."""

import uuid
from datetime import datetime

from pydantic import Field, StrictBool, field_validator

from todoapi import validators
from todoapi.repositories.base import NewTodo, TodoChanges
from todoapi.schemas.base import BaseSchema, as_utc, empty_as_none


class TodoInput(BaseSchema):
    """Body of POST and PUT /todos."""

    title: str | None = Field(None, validate_default=True)
    description: str | None = None
    completed: StrictBool | None = None
    category_id: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str:
        return validators.check_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str | None) -> str | None:
        return validators.check_todo_description(value)

    @field_validator("category_id")
    @classmethod
    def check_category_id(cls, value: str | None) -> str | None:
        return validators.check_category_reference(value)

    @property
    def category_uuid(self) -> uuid.UUID | None:
        """Referenced category, or None for no category / clear."""
        return uuid.UUID(self.category_id) if self.category_id else None

    def to_new(self) -> NewTodo:
        return NewTodo(
            title=self.title,
            description=self.description or None,
            completed=bool(self.completed),
            category_id=self.category_uuid,
        )

    def to_changes(self) -> TodoChanges:
        """Translate the body into an update.

        ``description`` and ``categoryId`` are tri-state: absent leaves the
        stored value, empty or null clears it, anything else sets it.
        """
        fields_set = self.model_fields_set
        changes = TodoChanges(title=self.title)
        if "description" in fields_set:
            changes.description = self.description or None
        if self.completed is not None:
            changes.completed = self.completed
        if "category_id" in fields_set:
            changes.category_id = self.category_uuid
        return changes


class TodoResponse(BaseSchema):
    """Schema for todo responses."""

    id: uuid.UUID
    title: str
    description: str | None = None
    completed: bool
    category_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("description")
    @classmethod
    def omit_empty_description(cls, value: str | None) -> str | None:
        return empty_as_none(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

"""Category schemas."""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from todoapi import validators
from todoapi.repositories.base import UNSET, CategoryChanges, NewCategory
from todoapi.schemas.base import BaseSchema, as_utc, empty_as_none


class CategoryInput(BaseSchema):
    """Body of POST and PUT /categories.

    PUT replaces the mutable fields, so ``name`` is required for both.
    """

    name: str | None = Field(None, validate_default=True)
    description: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str:
        return validators.check_name(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str | None) -> str | None:
        return validators.check_category_description(value)

    @field_validator("color")
    @classmethod
    def check_color(cls, value: str | None) -> str | None:
        return validators.check_color(value)

    def to_new(self) -> NewCategory:
        return NewCategory(
            name=self.name,
            description=self.description or None,
            color=self.color,
        )

    def to_changes(self) -> CategoryChanges:
        """Translate the body into an update.

        A supplied empty or null description clears it; an absent one is
        left alone. An absent or null color keeps the stored color.
        """
        changes = CategoryChanges(name=self.name)
        if "description" in self.model_fields_set:
            changes.description = self.description or None
        changes.color = self.color if self.color is not None else UNSET
        return changes


class CategoryResponse(BaseSchema):
    """Schema for category responses."""

    id: uuid.UUID
    name: str
    description: str | None = None
    color: str
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

"""Input rules applied before anything touches the database.

Field-level checks raise ``PydanticCustomError`` with the API error code as
the error type, so they surface through request validation with their own
code and message. The category reference check needs the database and runs
in the request handlers.
"""

import re
import uuid

from pydantic_core import PydanticCustomError

from todoapi.errors import CATEGORY_NOT_FOUND_MESSAGE, INVALID_UUID_MESSAGE, ApiError, ErrorCode
from todoapi.models.category import COLOR_PATTERN, DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from todoapi.repositories.base import CategoryRepository

HEX_COLOR = re.compile(COLOR_PATTERN)


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError(ErrorCode.VALIDATION_ERROR.value, message)


def _reject_nul(label: str, value: str | None) -> None:
    # PostgreSQL text columns cannot hold NUL
    if value is not None and "\x00" in value:
        raise _invalid(f"{label} must not contain null characters")


def check_name(value: str | None) -> str:
    if not value:
        raise _invalid("Name is required")
    if len(value) > NAME_MAX_LENGTH:
        raise _invalid(f"Name must be {NAME_MAX_LENGTH} characters or less")
    _reject_nul("Name", value)
    return value


def check_category_description(value: str | None) -> str | None:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        raise _invalid(f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less")
    _reject_nul("Description", value)
    return value


def check_color(value: str | None) -> str | None:
    """Absent color means default on create and unchanged on update."""
    if value is not None and not HEX_COLOR.fullmatch(value):
        raise _invalid("Color must be in #RRGGBB format")
    return value


def check_title(value: str | None) -> str:
    if not value:
        raise _invalid("Title is required")
    _reject_nul("Title", value)
    return value


def check_todo_description(value: str | None) -> str | None:
    _reject_nul("Description", value)
    return value


def check_category_reference(value: str | None) -> str | None:
    """Normalize a body ``categoryId``.

    ``None`` and ``""`` pass through unchanged (no category / clear it);
    anything else must be a UUID and comes back in canonical form.
    """
    if not value:
        return value
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise PydanticCustomError(ErrorCode.INVALID_UUID.value, INVALID_UUID_MESSAGE) from None


async def ensure_category_exists(categories: CategoryRepository, category_id: uuid.UUID) -> None:
    """Reject a body that references a category which does not exist."""
    if not await categories.exists(category_id):
        raise ApiError(ErrorCode.CATEGORY_NOT_FOUND, CATEGORY_NOT_FOUND_MESSAGE)

"""Category model for grouping todos."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from todoapi.models.base import Base, utcnow

DEFAULT_CATEGORY_COLOR = "#6c757d"
COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255

_HEX_DIGIT_GLOB = "[0-9A-Fa-f]"


class Category(Base):
    """Labeled grouping with a display color."""

    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("length(name) >= 1", name="ck_categories_name_not_empty"),
        CheckConstraint(
            f"color ~ '{COLOR_PATTERN}'",
            name="ck_categories_color_hex",
        ).ddl_if(dialect="postgresql"),
        # SQLite has no regex operator; GLOB matches the whole value
        CheckConstraint(
            f"color GLOB '#{_HEX_DIGIT_GLOB * 6}'",
            name="ck_categories_color_hex_glob",
        ).ddl_if(dialect="sqlite"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(String(DESCRIPTION_MAX_LENGTH))
    color: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        default=DEFAULT_CATEGORY_COLOR,
        server_default=DEFAULT_CATEGORY_COLOR,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Dependent todos are detached by the FK's ON DELETE SET NULL
    todos: Mapped[list["Todo"]] = relationship(  # noqa: F821
        back_populates="category",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(name={self.name!r}, color={self.color!r})>"

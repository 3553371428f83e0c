"""Todo model - the core entity of the service."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Text, Uuid, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from todoapi.models.base import Base, utcnow


class Todo(Base):
    """A task with an optional description and category."""

    __tablename__ = "todos"
    __table_args__ = (
        CheckConstraint("length(title) >= 1", name="ck_todos_title_not_empty"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Foreign keys
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        index=True,
    )

    # Timestamps
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

    # Relationships
    category: Mapped["Category | None"] = relationship(  # noqa: F821
        back_populates="todos",
    )

    def __repr__(self) -> str:
        status = "done" if self.completed else "pending"
        return f"<Todo(title={self.title!r}, status={status})>"

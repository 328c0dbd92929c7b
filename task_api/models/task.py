"""Domain models for the task tracker."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    """Generate a new opaque task identifier."""
    return str(uuid4())


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list:
        """Return the status values in declaration order."""
        return [status.value for status in cls]


class Task(BaseModel):
    """Task domain model.

    Timestamps are exposed on the wire as ``createdAt``/``updatedAt``.
    """

    id: str = Field(default_factory=new_task_id, description="Unique task identifier")
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt", description="Task creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt", description="Task last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True
        validate_default = True

    def touched(self, **changes) -> "Task":
        """Return a copy with ``changes`` applied and ``updated_at`` refreshed.

        ``updated_at`` never moves backwards, so it stays at or after
        ``created_at`` even if the wall clock steps back.
        """
        now = max(utc_now(), self.updated_at)
        return self.model_copy(update={**changes, "updated_at": now})

"""Pydantic models for workflow tasks."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, computed_field, field_validator

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskType(str, Enum):
    """Whether a task carries a schedule time."""

    IMMEDIATE = "immediate"
    SCHEDULED = "scheduled"


class Task(BaseModel):
    """A workflow task as held by the store.

    ``task_type`` is derived from ``scheduled_for`` and cannot be set on its own.
    """

    id: int | None = None
    title: str
    description: str | None = None
    created_at: UtcDatetime
    scheduled_for: UtcDatetime | None = None
    is_completed: bool = False
    completed_at: UtcDatetime | None = None
    status: TaskStatus = TaskStatus.PENDING

    @computed_field
    @property
    def task_type(self) -> TaskType:
        if self.scheduled_for is None:
            return TaskType.IMMEDIATE
        return TaskType.SCHEDULED


class TaskCreate(BaseModel):
    """Request model for creating a task."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    scheduled_for: UtcDatetime | None = None


class TaskUpdate(BaseModel):
    """Request model for a partial task update.

    Only fields present in ``model_fields_set`` are applied, so an omitted
    field and one sent as ``null`` mean different things.
    """

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus | None = None
    scheduled_for: UtcDatetime | None = None

    @field_validator("title", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TaskResponse(BaseModel):
    """Response model for a task."""

    id: int
    title: str
    description: str | None
    created_at: datetime
    scheduled_for: datetime | None
    is_completed: bool
    completed_at: datetime | None
    task_type: TaskType
    status: TaskStatus

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())

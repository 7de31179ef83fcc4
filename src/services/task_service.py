"""Task operations: field merging and completion rules over a TaskStore."""

import logging
from datetime import UTC, datetime

from ..db import TaskStore
from ..errors import TaskNotFoundError
from ..models import Task, TaskCreate, TaskStatus, TaskType, TaskUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def _set_status(task: Task, status: TaskStatus) -> None:
    """Apply a status, keeping the completion fields in step with it.

    Completing always refreshes ``completed_at``, even for a task that was
    already completed.
    """
    task.status = status
    if status is TaskStatus.COMPLETED:
        task.is_completed = True
        task.completed_at = _now()
    else:
        task.is_completed = False
        task.completed_at = None


def list_tasks(store: TaskStore) -> list[Task]:
    """All tasks, most recently created first."""
    return store.list_all()


def get_task(store: TaskStore, task_id: int) -> Task:
    """One task by ID; raises TaskNotFoundError if absent."""
    task = store.get_by_id(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def list_immediate_tasks(store: TaskStore) -> list[Task]:
    """Tasks without a schedule time, newest first."""
    return store.list_by_type(TaskType.IMMEDIATE)


def list_scheduled_tasks(store: TaskStore) -> list[Task]:
    """Scheduled tasks, soonest first."""
    return store.list_by_type(TaskType.SCHEDULED)


def create_task(store: TaskStore, data: TaskCreate) -> Task:
    """Create a pending task. It is scheduled iff ``scheduled_for`` is given."""
    task = store.insert(
        Task(
            title=data.title,
            description=data.description,
            created_at=_now(),
            scheduled_for=data.scheduled_for,
            status=TaskStatus.PENDING,
        )
    )
    logger.info("task_created", extra={"task_id": task.id, "task_type": task.task_type.value})
    return task


def update_task(store: TaskStore, task_id: int, data: TaskUpdate) -> Task:
    """Apply a partial update.

    Only fields that were sent are applied. Sending ``scheduled_for`` as null
    turns a scheduled task back into an immediate one; sending ``description``
    as null clears it.
    """
    task = get_task(store, task_id).model_copy()
    sent = data.model_fields_set

    if "title" in sent:
        task.title = data.title
    if "description" in sent:
        task.description = data.description
    if "status" in sent:
        _set_status(task, data.status)
    if "scheduled_for" in sent:
        task.scheduled_for = data.scheduled_for

    updated = store.update(task)
    if updated is None:
        raise TaskNotFoundError(task_id)
    logger.info("task_updated", extra={"task_id": task_id, "fields": sorted(sent)})
    return updated


def complete_task(store: TaskStore, task_id: int) -> Task:
    """Mark a task completed, whatever its current status."""
    task = get_task(store, task_id).model_copy()
    _set_status(task, TaskStatus.COMPLETED)

    updated = store.update(task)
    if updated is None:
        raise TaskNotFoundError(task_id)
    logger.info("task_completed", extra={"task_id": task_id})
    return updated


def delete_task(store: TaskStore, task_id: int) -> None:
    """Hard-delete a task; raises TaskNotFoundError if absent."""
    if not store.delete(task_id):
        raise TaskNotFoundError(task_id)
    logger.info("task_deleted", extra={"task_id": task_id})

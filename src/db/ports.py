"""Storage interface the service layer depends on."""

from typing import Protocol

from ..models import Task, TaskType


class TaskStore(Protocol):
    """Persistence for workflow tasks keyed by integer ID."""

    def init_db(self) -> None: ...

    def insert(self, task: Task) -> Task: ...

    def get_by_id(self, task_id: int) -> Task | None: ...

    def list_all(self) -> list[Task]: ...

    def list_by_type(self, task_type: TaskType) -> list[Task]: ...

    def update(self, task: Task) -> Task | None: ...

    def delete(self, task_id: int) -> bool: ...

    def count(self) -> int: ...

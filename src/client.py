"""Typed HTTP client for the task API."""

import httpx

from .config import get_settings
from .models import TaskCreate, TaskResponse, TaskUpdate

DEFAULT_TIMEOUT_SECONDS = 10.0


class TaskApiError(RuntimeError):
    """A non-2xx response. Carries only the name of the failed operation."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Failed to {operation}")
        self.operation = operation


class TaskApiClient:
    """One method per task endpoint, against a fixed base URL.

    Pass ``http_client`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``); its base URL is then taken as-is.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = (base_url or get_settings().client_base_url).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        response = self._http.request(method, f"{self.base_url}{path}", **kwargs)
        if not response.is_success:
            raise TaskApiError(operation)
        return response

    def _task_list(self, operation: str, path: str) -> list[TaskResponse]:
        response = self._request(operation, "GET", path)
        return [TaskResponse.model_validate(item) for item in response.json()]

    def get_all_tasks(self) -> list[TaskResponse]:
        return self._task_list("fetch tasks", "/tasks")

    def get_immediate_tasks(self) -> list[TaskResponse]:
        return self._task_list("fetch immediate tasks", "/tasks/immediate")

    def get_scheduled_tasks(self) -> list[TaskResponse]:
        return self._task_list("fetch scheduled tasks", "/tasks/scheduled")

    def get_task(self, task_id: int) -> TaskResponse:
        response = self._request("fetch task", "GET", f"/tasks/{task_id}")
        return TaskResponse.model_validate(response.json())

    def create_task(self, task: TaskCreate) -> TaskResponse:
        response = self._request(
            "create task",
            "POST",
            "/tasks",
            json=task.model_dump(mode="json", exclude_none=True),
        )
        return TaskResponse.model_validate(response.json())

    def update_task(self, task_id: int, task: TaskUpdate) -> TaskResponse:
        """Send only the fields set on ``task``; explicit nulls are kept."""
        response = self._request(
            "update task",
            "PUT",
            f"/tasks/{task_id}",
            json=task.model_dump(mode="json", exclude_unset=True),
        )
        return TaskResponse.model_validate(response.json())

    def complete_task(self, task_id: int) -> TaskResponse:
        response = self._request("complete task", "PUT", f"/tasks/{task_id}/complete")
        return TaskResponse.model_validate(response.json())

    def delete_task(self, task_id: int) -> None:
        self._request("delete task", "DELETE", f"/tasks/{task_id}")

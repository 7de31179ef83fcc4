"""Task API router."""

from fastapi import APIRouter, Depends, Request, Response, status

from ..db import TaskStore
from ..models import TaskCreate, TaskResponse, TaskUpdate
from ..services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_store(request: Request) -> TaskStore:
    """Resolve the store the application was built with."""
    return request.app.state.task_store


# =============================================================================
# Collection Endpoints - Must be defined BEFORE /{task_id} routes
# =============================================================================


@router.get("", response_model=list[TaskResponse])
def list_tasks(store: TaskStore = Depends(get_store)):
    """Get all tasks, most recently created first."""
    return [TaskResponse.from_task(task) for task in task_service.list_tasks(store)]


@router.get("/immediate", response_model=list[TaskResponse])
def list_immediate_tasks(store: TaskStore = Depends(get_store)):
    """Get tasks with no schedule time, most recently created first."""
    return [TaskResponse.from_task(task) for task in task_service.list_immediate_tasks(store)]


@router.get("/scheduled", response_model=list[TaskResponse])
def list_scheduled_tasks(store: TaskStore = Depends(get_store)):
    """Get scheduled tasks, soonest first."""
    return [TaskResponse.from_task(task) for task in task_service.list_scheduled_tasks(store)]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    task_data: TaskCreate,
    request: Request,
    response: Response,
    store: TaskStore = Depends(get_store),
):
    """Create a new task."""
    task = task_service.create_task(store, task_data)
    response.headers["Location"] = str(request.url_for("get_task", task_id=task.id))
    return TaskResponse.from_task(task)


# =============================================================================
# Item Endpoints
# =============================================================================


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, store: TaskStore = Depends(get_store)):
    """Get a task by ID."""
    return TaskResponse.from_task(task_service.get_task(store, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task_endpoint(task_id: int, task_data: TaskUpdate, store: TaskStore = Depends(get_store)):
    """Update the fields that were sent; leave the rest unchanged."""
    return TaskResponse.from_task(task_service.update_task(store, task_id, task_data))


@router.put("/{task_id}/complete", response_model=TaskResponse)
def complete_task_endpoint(task_id: int, store: TaskStore = Depends(get_store)):
    """Mark a task as completed."""
    return TaskResponse.from_task(task_service.complete_task(store, task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_endpoint(task_id: int, store: TaskStore = Depends(get_store)):
    """Delete a task."""
    task_service.delete_task(store, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

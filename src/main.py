"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .db import SqliteTaskStore, TaskStore
from .errors import StorageError, TaskNotFoundError
from .logging_setup import setup_logging
from .routers import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    app.state.task_store.init_db()
    yield


async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> Response:
    """Missing tasks are a 404 with no body."""
    logger.info("task_not_found", extra={"task_id": exc.task_id, "path": request.url.path})
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with one entry per field."""
    errors = []
    for error in exc.errors():
        if error["type"] == "json_invalid":
            # loc holds the parse position, not a field
            field = "body"
        else:
            field = ".".join(str(part) for part in error["loc"][1:]) or error["loc"][0]
        errors.append({"field": field, "message": error["msg"]})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Database failures are reported generically as a 500."""
    logger.error("storage_failure", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure"},
    )


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application around an explicitly constructed task store."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Workflow Tasks",
        description="Create, schedule and complete workflow tasks",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = store if store is not None else SqliteTaskStore(settings.database_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(tasks.router, prefix=settings.api_prefix)

    @app.get("/health")
    def health():
        """Liveness check."""
        return {"status": "ok"}

    # Mounted last so API routes take precedence over the client build.
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()

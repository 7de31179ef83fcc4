"""SQLite database operations for tasks."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

from ..errors import StorageError
from ..models import Task, TaskType, as_utc

logger = logging.getLogger(__name__)

_COLUMNS = (
    "title",
    "description",
    "created_at",
    "scheduled_for",
    "is_completed",
    "completed_at",
    "task_type",
    "status",
)

# Largest value an SQLite INTEGER column can hold.
MAX_ROW_ID = 2**63 - 1

_ORDER_BY = {
    TaskType.IMMEDIATE: "created_at DESC, id DESC",
    TaskType.SCHEDULED: "scheduled_for ASC, id ASC",
}


def _in_range(task_id: int) -> bool:
    """IDs outside the INTEGER range cannot exist in the table."""
    return 1 <= task_id <= MAX_ROW_ID


def _to_db(value: datetime | None) -> str | None:
    """Fixed-width UTC ISO string, so text order matches time order."""
    if value is None:
        return None
    return as_utc(value).isoformat(timespec="microseconds")


def _from_db(value: str | None) -> datetime | None:
    """Parse a stored timestamp back into aware UTC."""
    if value is None:
        return None
    return as_utc(datetime.fromisoformat(value))


def _row_to_task(row: sqlite3.Row) -> Task:
    """Build a Task from a tasks row."""
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        created_at=_from_db(row["created_at"]),
        scheduled_for=_from_db(row["scheduled_for"]),
        is_completed=bool(row["is_completed"]),
        completed_at=_from_db(row["completed_at"]),
        status=row["status"],
    )


def _task_params(task: Task) -> tuple:
    """Column values for INSERT and UPDATE, in _COLUMNS order."""
    return (
        task.title,
        task.description,
        _to_db(task.created_at),
        _to_db(task.scheduled_for),
        int(task.is_completed),
        _to_db(task.completed_at),
        task.task_type.value,
        task.status.value,
    )


class SqliteTaskStore:
    """Task store backed by a single SQLite table.

    Each method opens its own connection, commits on success and rolls back
    on failure. Any ``sqlite3.Error`` is re-raised as ``StorageError``.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection with WAL mode enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextmanager
    def get_db(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        try:
            conn = self.get_connection()
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database {self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialize the database schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.get_db() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL CHECK (length(title) <= 200),
                    description TEXT CHECK (length(description) <= 1000),
                    created_at TEXT NOT NULL,
                    scheduled_for TEXT,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    completed_at TEXT,
                    task_type TEXT NOT NULL DEFAULT 'immediate',
                    status TEXT NOT NULL DEFAULT 'pending'
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_type_created_at
                ON tasks(task_type, created_at)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_type_scheduled_for
                ON tasks(task_type, scheduled_for)
            """)
        logger.info("task_store_ready", extra={"db_path": str(self.db_path), "total": self.count()})

    def insert(self, task: Task) -> Task:
        """Insert a new task and return it with its assigned ID."""
        with self.get_db() as conn:
            cursor = conn.execute(
                f"INSERT INTO tasks ({', '.join(_COLUMNS)}) VALUES ({', '.join('?' for _ in _COLUMNS)})",
                _task_params(task),
            )
            task_id = cursor.lastrowid
        return task.model_copy(update={"id": task_id})

    def get_by_id(self, task_id: int) -> Task | None:
        """Get a task by ID."""
        if not _in_range(task_id):
            return None
        with self.get_db() as conn:
            cursor = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = cursor.fetchone()
            return _row_to_task(row) if row else None

    def list_all(self) -> list[Task]:
        """Get all tasks, most recently created first."""
        with self.get_db() as conn:
            cursor = conn.execute("SELECT * FROM tasks ORDER BY created_at DESC, id DESC")
            return [_row_to_task(row) for row in cursor.fetchall()]

    def list_by_type(self, task_type: TaskType) -> list[Task]:
        """Get tasks of one type.

        Immediate tasks come newest first; scheduled tasks soonest first.
        """
        with self.get_db() as conn:
            cursor = conn.execute(
                f"SELECT * FROM tasks WHERE task_type = ? ORDER BY {_ORDER_BY[task_type]}",
                (task_type.value,),
            )
            return [_row_to_task(row) for row in cursor.fetchall()]

    def update(self, task: Task) -> Task | None:
        """Write every mutable column of ``task``. Returns None if the row is gone."""
        if not _in_range(task.id):
            return None
        assignments = ", ".join(f"{column} = ?" for column in _COLUMNS)
        with self.get_db() as conn:
            cursor = conn.execute(
                f"UPDATE tasks SET {assignments} WHERE id = ?",
                (*_task_params(task), task.id),
            )
            if cursor.rowcount == 0:
                return None
        return task

    def delete(self, task_id: int) -> bool:
        """Delete a task by ID."""
        if not _in_range(task_id):
            return False
        with self.get_db() as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            return cursor.rowcount > 0

    def count(self) -> int:
        """Number of stored tasks."""
        with self.get_db() as conn:
            return conn.execute("SELECT COUNT(*) FROM tasks").fetchone()[0]

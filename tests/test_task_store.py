"""Tests for the SQLite task store."""

import sqlite3
from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.db import SqliteTaskStore
from src.errors import StorageError
from src.models import Task, TaskStatus, TaskType

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def make_task(title: str, created_offset: int = 0, scheduled_offset: int | None = None) -> Task:
    scheduled_for = None
    if scheduled_offset is not None:
        scheduled_for = BASE_TIME + timedelta(days=scheduled_offset)
    return Task(
        title=title,
        created_at=BASE_TIME + timedelta(minutes=created_offset),
        scheduled_for=scheduled_for,
    )


def test_insert_assigns_increasing_ids(sqlite_store: SqliteTaskStore) -> None:
    first = sqlite_store.insert(make_task("first"))
    second = sqlite_store.insert(make_task("second"))

    assert first.id is not None
    assert second.id > first.id


def test_get_by_id_round_trips_all_fields(sqlite_store: SqliteTaskStore) -> None:
    scheduled = datetime(2026, 4, 2, 15, 30, 0, 123456, tzinfo=UTC)
    inserted = sqlite_store.insert(
        Task(
            title="Water plants",
            description="Balcony only",
            created_at=BASE_TIME,
            scheduled_for=scheduled,
        )
    )

    task = sqlite_store.get_by_id(inserted.id)

    assert task == inserted
    assert task.scheduled_for == scheduled
    assert task.task_type is TaskType.SCHEDULED
    assert task.status is TaskStatus.PENDING
    assert task.is_completed is False


def test_get_by_id_missing_returns_none(sqlite_store: SqliteTaskStore) -> None:
    assert sqlite_store.get_by_id(999) is None


def test_list_all_orders_newest_first(sqlite_store: SqliteTaskStore) -> None:
    sqlite_store.insert(make_task("oldest", created_offset=0))
    sqlite_store.insert(make_task("newest", created_offset=10))
    sqlite_store.insert(make_task("middle", created_offset=5))

    titles = [task.title for task in sqlite_store.list_all()]

    assert titles == ["newest", "middle", "oldest"]


def test_list_by_type_filters_and_orders(sqlite_store: SqliteTaskStore) -> None:
    sqlite_store.insert(make_task("now-old", created_offset=0))
    sqlite_store.insert(make_task("later", created_offset=1, scheduled_offset=7))
    sqlite_store.insert(make_task("now-new", created_offset=2))
    sqlite_store.insert(make_task("sooner", created_offset=3, scheduled_offset=2))

    immediate = sqlite_store.list_by_type(TaskType.IMMEDIATE)
    scheduled = sqlite_store.list_by_type(TaskType.SCHEDULED)

    assert [t.title for t in immediate] == ["now-new", "now-old"]
    assert [t.title for t in scheduled] == ["sooner", "later"]


def test_scheduled_order_uses_utc_instant(sqlite_store: SqliteTaskStore) -> None:
    plus_two = timezone(timedelta(hours=2))
    noon_utc = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
    eleven_utc = datetime(2026, 5, 1, 13, 0, tzinfo=plus_two)
    sqlite_store.insert(Task(title="noon", created_at=BASE_TIME, scheduled_for=noon_utc))
    sqlite_store.insert(Task(title="eleven", created_at=BASE_TIME, scheduled_for=eleven_utc))

    assert [t.title for t in sqlite_store.list_by_type(TaskType.SCHEDULED)] == ["eleven", "noon"]


def test_update_writes_fields_and_task_type(sqlite_store: SqliteTaskStore) -> None:
    task = sqlite_store.insert(make_task("plain"))
    task.scheduled_for = BASE_TIME + timedelta(days=1)
    task.status = TaskStatus.IN_PROGRESS

    sqlite_store.update(task)

    stored = sqlite_store.get_by_id(task.id)
    assert stored.status is TaskStatus.IN_PROGRESS
    assert stored.task_type is TaskType.SCHEDULED
    assert [t.id for t in sqlite_store.list_by_type(TaskType.SCHEDULED)] == [task.id]
    assert sqlite_store.list_by_type(TaskType.IMMEDIATE) == []


def test_update_missing_returns_none(sqlite_store: SqliteTaskStore) -> None:
    ghost = make_task("ghost").model_copy(update={"id": 42})

    assert sqlite_store.update(ghost) is None


def test_delete(sqlite_store: SqliteTaskStore) -> None:
    task = sqlite_store.insert(make_task("doomed"))

    assert sqlite_store.delete(task.id) is True
    assert sqlite_store.get_by_id(task.id) is None
    assert sqlite_store.delete(task.id) is False


def test_ids_are_not_reused_after_delete(sqlite_store: SqliteTaskStore) -> None:
    first = sqlite_store.insert(make_task("one"))
    sqlite_store.delete(first.id)

    second = sqlite_store.insert(make_task("two"))

    assert second.id > first.id


def test_count(sqlite_store: SqliteTaskStore) -> None:
    assert sqlite_store.count() == 0
    sqlite_store.insert(make_task("one"))
    assert sqlite_store.count() == 1


def test_sqlite_errors_surface_as_storage_error(tmp_path) -> None:
    store = SqliteTaskStore(tmp_path / "uninitialized.db")

    with pytest.raises(StorageError) as exc_info:
        store.list_all()

    assert isinstance(exc_info.value.__cause__, sqlite3.Error)


def test_ids_outside_integer_range_are_missing(sqlite_store: SqliteTaskStore) -> None:
    ghost = make_task("ghost").model_copy(update={"id": 2**63})

    assert sqlite_store.get_by_id(2**63) is None
    assert sqlite_store.get_by_id(-1) is None
    assert sqlite_store.update(ghost) is None
    assert sqlite_store.delete(2**63) is False

"""Shared fixtures: a temporary SQLite store and an app wired to it."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.config import Settings
from src.db import SqliteTaskStore
from src.main import create_app

from .fakes import InMemoryTaskStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_path=tmp_path / "tasks.db",
        static_dir=tmp_path / "static",
    )


@pytest.fixture
def sqlite_store(settings: Settings) -> SqliteTaskStore:
    store = SqliteTaskStore(settings.database_path)
    store.init_db()
    return store


@pytest.fixture
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def app(settings: Settings, sqlite_store: SqliteTaskStore) -> FastAPI:
    return create_app(settings=settings, store=sqlite_store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client

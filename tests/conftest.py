"""Shared test fixtures.

Provides a ``test_client`` for FastAPI, mock Supabase clients for the
health router, and ``fake_supabase``: an in-memory stand-in for the
PostgREST fluent builder so CRUD flows can run end to end.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")


# ---------------------------------------------------------------------------
# In-memory PostgREST fake
# ---------------------------------------------------------------------------

class _Result:
    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """Supports the subset of the builder chain used by ``AlunosService``."""

    def __init__(self, store: "FakeSupabase", table: str) -> None:
        self._store = store
        self._table = table
        self._op = "select"
        self._payload: dict[str, Any] | None = None
        self._filters: list[tuple[str, Any]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, *_columns: str) -> "FakeQuery":
        return self

    def insert(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "update", payload
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(str(row.get(col)) == str(val) for col, val in self._filters)

    def _check_id_filter(self) -> None:
        for column, value in self._filters:
            if column == "id":
                try:
                    UUID(str(value))
                except ValueError:
                    raise APIError({
                        "message": f'invalid input syntax for type uuid: "{value}"',
                        "code": "22P02",
                        "details": None,
                        "hint": None,
                    })

    def _check_unique_email(self, email: str, exclude_id: str | None = None) -> None:
        for row in self._store.rows(self._table):
            if row["email"] == email and row["id"] != exclude_id:
                raise APIError({
                    "message": 'duplicate key value violates unique constraint "alunos_email_key"',
                    "code": "23505",
                    "details": f"Key (email)=({email}) already exists.",
                    "hint": None,
                })

    def execute(self) -> _Result:
        self._store.calls.append((self._table, self._op))
        self._check_id_filter()
        rows = self._store.rows(self._table)

        if self._op == "insert":
            assert self._payload is not None
            self._check_unique_email(self._payload["email"])
            now = self._store.tick()
            row = {
                **self._payload,
                "id": str(uuid4()),
                "created_at": now.isoformat(),
                "updated_at": now.isoformat(),
            }
            rows.append(row)
            return _Result([dict(row)])

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            assert self._payload is not None
            updated = []
            for row in matched:
                if "email" in self._payload:
                    self._check_unique_email(self._payload["email"], row["id"])
                row.update(self._payload)
                row["updated_at"] = self._store.tick().isoformat()
                updated.append(dict(row))
            return _Result(updated)

        if self._op == "delete":
            for row in matched:
                rows.remove(row)
            return _Result([dict(row) for row in matched])

        if self._order is not None:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return _Result([dict(row) for row in matched])


class FakeSupabase:
    """Minimal Supabase client holding tables as lists of dicts."""

    def __init__(self) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.calls: list[tuple[str, str]] = []

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self._tables.setdefault(table, [])

    def tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_supabase() -> Generator[FakeSupabase, None, None]:
    """Patch the alunos router's client factory with an in-memory store."""
    store = FakeSupabase()
    with patch("app.routers.alunos.create_supabase", return_value=store):
        yield store


@pytest.fixture()
def mock_create_supabase() -> Generator[MagicMock, None, None]:
    """Patch the alunos router's client factory with a bare mock."""
    with patch("app.routers.alunos.create_supabase") as factory:
        yield factory


@pytest.fixture()
def mock_supabase_module() -> Generator[MagicMock, None, None]:
    """Patch the Supabase client used by the health router."""
    mock_client = MagicMock()
    # Mock the select -> limit -> execute chain
    mock_table = MagicMock()
    mock_select = MagicMock()
    mock_limit = MagicMock()

    mock_client.table.return_value = mock_table
    mock_table.select.return_value = mock_select
    mock_select.limit.return_value = mock_limit
    mock_limit.execute.return_value = MagicMock()  # non-None result

    with patch("app.routers.health.create_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def mock_supabase_disconnected() -> Generator[MagicMock, None, None]:
    """Patch the health router's factory to simulate a disconnected database."""
    with patch(
        "app.routers.health.create_supabase",
        side_effect=Exception("Connection refused"),
    ):
        yield MagicMock()


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from app.main import app

    with TestClient(app) as client:
        yield client

"""
Tests for TaskRepo query building and row mapping.

The connection is a mock: these check what SQL and parameters reach
asyncpg. Behaviour against Postgres is in test_task_repo_db.py.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from backend.repos.task_repo import EDITABLE_FIELDS, TaskRepo, _row_to_task_with_material, _search_pattern

NOW = datetime(2025, 3, 14, 9, 30, tzinfo=UTC)


def _row(**overrides) -> dict:
    row = {
        "id": uuid4(),
        "user_id": uuid4(),
        "topic": "Tea",
        "keywords": "tea",
        "total_word_count": 4000,
        "status": "completed",
        "cover_prompt_id": None,
        "ref_material_id": None,
        "current_chapter": None,
        "total_chapters": None,
        "created_at": NOW,
        "updated_at": NOW,
        "article_title": "The Tea Roads",
        "article_subtitle": None,
        "article_word_count": 3900,
        "cover_url": None,
        "ref_style_name": None,
        "ref_source_title": None,
        "ref_source_url": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.fixture
def repo(conn):
    """TaskRepo whose user_conn yields the mock connection."""

    @asynccontextmanager
    async def fake_user_conn(user_id):
        yield conn

    with patch("backend.repos.task_repo.user_conn", fake_user_conn):
        yield TaskRepo()


class TestHelpers:
    @pytest.mark.parametrize(
        ("search", "expected"),
        [("tea", "%tea%"), ("100%", "%100\\%%"), ("a_b", "%a\\_b%"), ("c:\\x", "%c:\\\\x%")],
    )
    def test_search_pattern_escapes(self, search, expected):
        assert _search_pattern(search) == expected

    def test_row_without_material(self):
        task = _row_to_task_with_material(_row())

        assert task.article_title == "The Tea Roads"
        assert task.ref_material is None

    def test_row_with_material(self):
        task = _row_to_task_with_material(
            _row(ref_material_id=uuid4(), ref_style_name="Essay", ref_source_url="https://x.test")
        )

        assert task.ref_material is not None
        assert task.ref_material.style_name == "Essay"
        assert task.ref_material.source_url == "https://x.test"


class TestListForUser:
    async def test_first_page(self, repo, conn):
        user_id = uuid4()
        conn.fetchval.return_value = 1
        conn.fetch.return_value = [_row()]

        page = await repo.list_for_user(user_id)

        assert page.total == 1
        assert len(page.tasks) == 1
        sql, *params = conn.fetch.await_args.args
        assert "ORDER BY t.created_at DESC" in sql
        assert params == [user_id, 20, 0]

    async def test_search_and_offset(self, repo, conn):
        user_id = uuid4()
        conn.fetchval.return_value = 0
        conn.fetch.return_value = []

        page = await repo.list_for_user(user_id, page=3, page_size=10, search="tea")

        count_sql, *count_params = conn.fetchval.await_args.args
        assert "ILIKE $2" in count_sql
        assert count_params == [user_id, "%tea%"]
        sql, *params = conn.fetch.await_args.args
        assert "LIMIT $3 OFFSET $4" in sql
        assert params == [user_id, "%tea%", 10, 20]
        assert page.tasks == []
        assert page.page == 3


class TestWrites:
    async def test_update_status(self, repo, conn):
        user_id, task_id = uuid4(), uuid4()
        conn.fetchrow.return_value = _row(id=task_id, status="cancelled")

        task = await repo.update_status(user_id, task_id, "cancelled")

        assert task.status == "cancelled"
        sql, *params = conn.fetchrow.await_args.args
        assert "WHERE id = $1 AND user_id = $2" in sql
        assert params[:3] == [task_id, user_id, "cancelled"]

    async def test_update_status_missing(self, repo, conn):
        conn.fetchrow.return_value = None

        assert await repo.update_status(uuid4(), uuid4(), "cancelled") is None

    @pytest.mark.parametrize("field", sorted(EDITABLE_FIELDS))
    async def test_update_field(self, repo, conn, field):
        conn.fetchrow.return_value = _row()

        await repo.update_field(uuid4(), uuid4(), field, "value")

        assert f"SET {field} = $3" in conn.fetchrow.await_args.args[0]

    async def test_update_field_rejects_other_columns(self, repo, conn):
        with pytest.raises(ValueError):
            await repo.update_field(uuid4(), uuid4(), "status", "completed")

        conn.fetchrow.assert_not_awaited()

    @pytest.mark.parametrize(("result", "expected"), [("UPDATE 1", True), ("UPDATE 0", False)])
    async def test_soft_delete(self, repo, conn, result, expected):
        conn.execute.return_value = result

        assert await repo.soft_delete(uuid4(), uuid4()) is expected

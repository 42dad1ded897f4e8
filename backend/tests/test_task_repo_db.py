"""
Tests for TaskRepo against PostgreSQL.

These tests require a running PostgreSQL at DATABASE_URL with the schema
applied. Run `alembic upgrade head` before running them; they are skipped
otherwise.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from backend.db import user_conn
from backend.repos.task_repo import TaskRepo

pytestmark = pytest.mark.asyncio(loop_scope="session")

BASE_TIME = datetime(2025, 3, 1, 8, 0, tzinfo=UTC)


@pytest.fixture
def repo():
    return TaskRepo()


async def insert_task(user_id: UUID, topic: str, **columns) -> UUID:
    """Insert a task row directly and return its id."""
    values = {"topic": topic, "keywords": None, "status": "pending", "created_at": BASE_TIME, **columns}
    names = ", ".join(["user_id", *values])
    placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 2))
    async with user_conn(user_id) as conn:
        return await conn.fetchval(
            f"INSERT INTO tasks ({names}) VALUES ({placeholders}) RETURNING id",  # noqa: S608
            user_id,
            *values.values(),
        )


# ============================================================================
# Listing
# ============================================================================


class TestListForUser:
    async def test_newest_first_with_paging(self, repo, test_user_id):
        ids = [
            await insert_task(test_user_id, f"Topic {i}", created_at=BASE_TIME + timedelta(hours=i))
            for i in range(5)
        ]

        first = await repo.list_for_user(test_user_id, page=1, page_size=2)
        last = await repo.list_for_user(test_user_id, page=3, page_size=2)

        assert first.total == 5
        assert [t.id for t in first.tasks] == [ids[4], ids[3]]
        assert last.total == 5
        assert [t.id for t in last.tasks] == [ids[0]]

    async def test_page_past_the_end(self, repo, test_user_id):
        await insert_task(test_user_id, "Only")

        page = await repo.list_for_user(test_user_id, page=4, page_size=10)

        assert page.total == 1
        assert page.tasks == []

    async def test_search_matches_topic_or_keywords(self, repo, test_user_id):
        tea = await insert_task(test_user_id, "Tea roads")
        silk = await insert_task(test_user_id, "Silk", keywords="caravan, TEA")
        await insert_task(test_user_id, "Salt")

        page = await repo.list_for_user(test_user_id, search="tea")

        assert page.total == 2
        assert {t.id for t in page.tasks} == {tea, silk}

    async def test_search_wildcards_are_literal(self, repo, test_user_id):
        percent = await insert_task(test_user_id, "Growth of 100% juice")
        await insert_task(test_user_id, "Growth of 1000 juices")
        underscore = await insert_task(test_user_id, "snake_case names")
        await insert_task(test_user_id, "snakeXcase names")

        by_percent = await repo.list_for_user(test_user_id, search="100%")
        by_underscore = await repo.list_for_user(test_user_id, search="e_c")

        assert [t.id for t in by_percent.tasks] == [percent]
        assert by_percent.total == 1
        assert [t.id for t in by_underscore.tasks] == [underscore]
        assert by_underscore.total == 1

    async def test_joins_article_and_material(self, repo, test_user_id):
        async with user_conn(test_user_id) as conn:
            material_id = await conn.fetchval(
                """
                INSERT INTO reference_materials (user_id, style_name, source_title, source_url)
                VALUES ($1, 'Essay', 'The Leaf', 'https://leaf.test/a') RETURNING id
                """,
                test_user_id,
            )
        task_id = await insert_task(test_user_id, "Tea", status="completed", ref_material_id=material_id)
        async with user_conn(test_user_id) as conn:
            await conn.execute(
                """
                INSERT INTO articles (task_id, title, subtitle, word_count, cover_url)
                VALUES ($1, 'The Tea Roads', 'A history', 3900, 'https://cdn.test/c.png')
                """,
                task_id,
            )

        (task,) = (await repo.list_for_user(test_user_id)).tasks

        assert task.article_title == "The Tea Roads"
        assert task.article_subtitle == "A history"
        assert task.article_word_count == 3900
        assert task.cover_url == "https://cdn.test/c.png"
        assert task.ref_material is not None
        assert task.ref_material.source_title == "The Leaf"
        assert task.ref_material.source_url == "https://leaf.test/a"

    async def test_deleted_article_is_not_joined(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea", status="completed")
        async with user_conn(test_user_id) as conn:
            await conn.execute(
                "INSERT INTO articles (task_id, title, deleted_at) VALUES ($1, 'Old draft', now())",
                task_id,
            )

        (task,) = (await repo.list_for_user(test_user_id)).tasks

        assert task.article_title is None
        assert task.ref_material is None


# ============================================================================
# Writes
# ============================================================================


class TestWrites:
    async def test_get(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea", keywords="leaf")

        task = await repo.get(test_user_id, task_id)

        assert task is not None
        assert task.topic == "Tea"
        assert task.keywords == "leaf"
        assert await repo.get(test_user_id, uuid4()) is None

    async def test_update_status(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea", status="processing")

        task = await repo.update_status(test_user_id, task_id, "cancelled")

        assert task.status == "cancelled"
        assert task.updated_at > BASE_TIME
        assert (await repo.get(test_user_id, task_id)).status == "cancelled"

    async def test_update_field(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea")

        await repo.update_field(test_user_id, task_id, "topic", "Green tea")
        task = await repo.update_field(test_user_id, task_id, "keywords", None)

        assert task.topic == "Green tea"
        assert task.keywords is None

    async def test_soft_delete(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea")

        assert await repo.soft_delete(test_user_id, task_id) is True
        assert await repo.soft_delete(test_user_id, task_id) is False
        assert await repo.get(test_user_id, task_id) is None
        assert (await repo.list_for_user(test_user_id)).total == 0

    async def test_deleted_task_cannot_be_updated(self, repo, test_user_id):
        task_id = await insert_task(test_user_id, "Tea")
        await repo.soft_delete(test_user_id, task_id)

        assert await repo.update_status(test_user_id, task_id, "processing") is None
        assert await repo.update_field(test_user_id, task_id, "topic", "Back") is None


# ============================================================================
# Isolation between users
# ============================================================================


class TestUserIsolation:
    async def test_other_user_cannot_list(self, repo, test_user_id, second_user_id):
        await insert_task(test_user_id, "Private tea")

        page = await repo.list_for_user(second_user_id)
        searched = await repo.list_for_user(second_user_id, search="tea")

        assert page.total == 0
        assert page.tasks == []
        assert searched.total == 0

    async def test_other_user_cannot_get(self, repo, test_user_id, second_user_id):
        task_id = await insert_task(test_user_id, "Private tea")

        assert await repo.get(second_user_id, task_id) is None

    async def test_other_user_cannot_update(self, repo, test_user_id, second_user_id):
        task_id = await insert_task(test_user_id, "Private tea", status="processing")

        assert await repo.update_status(second_user_id, task_id, "cancelled") is None
        assert await repo.update_field(second_user_id, task_id, "topic", "Hijacked") is None

        task = await repo.get(test_user_id, task_id)
        assert task.status == "processing"
        assert task.topic == "Private tea"

    async def test_other_user_cannot_delete(self, repo, test_user_id, second_user_id):
        task_id = await insert_task(test_user_id, "Private tea")

        assert await repo.soft_delete(second_user_id, task_id) is False
        assert await repo.get(test_user_id, task_id) is not None

    async def test_rls_hides_other_users_rows(self, test_user_id, second_user_id):
        """Row-level security alone, without the repo's user_id filters."""
        await insert_task(test_user_id, "Private tea")

        async with user_conn(second_user_id) as conn:
            if await conn.fetchval("SELECT rolsuper OR rolbypassrls FROM pg_roles WHERE rolname = current_user"):
                pytest.skip("Current role bypasses row-level security")
            visible = await conn.fetchval("SELECT count(*) FROM tasks")
            updated = await conn.execute("UPDATE tasks SET status = 'cancelled'")

        assert visible == 0
        assert updated == "UPDATE 0"

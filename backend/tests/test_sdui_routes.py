"""Tests for GET /api/internal/sdui/tasks."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from backend.main import app
from backend.models.task import TaskPage
from backend.routes.sdui import clamp_page, clamp_page_size, get_sdui_builder


@pytest.fixture
def builder():
    """Records the builder call and returns a fixed tree."""
    fake = MagicMock(
        return_value={
            "nodes": {"type": "column", "children": []},
            "meta": {"processingCount": 2, "hasActiveTasks": True},
        }
    )
    app.dependency_overrides[get_sdui_builder] = lambda: fake
    return fake


# ============================================================================
# Paging
# ============================================================================


class TestClamp:
    @pytest.mark.parametrize(("page", "expected"), [(-3, 1), (0, 1), (1, 1), (7, 7)])
    def test_page(self, page, expected):
        assert clamp_page(page) == expected

    @pytest.mark.parametrize(("size", "expected"), [(0, 1), (-5, 1), (20, 20), (50, 50), (500, 50)])
    def test_page_size(self, size, expected):
        assert clamp_page_size(size) == expected


# ============================================================================
# Route
# ============================================================================


class TestTasksSdui:
    async def test_defaults(self, async_client, auth_cookies, user_id, task_repo, builder):
        res = await async_client.get("/api/internal/sdui/tasks", cookies=auth_cookies)

        assert res.status_code == 200
        task_repo.list_for_user.assert_awaited_once_with(user_id, page=1, page_size=20, search=None)
        _, kwargs = builder.call_args
        assert kwargs == {"search": "", "compact": False, "viewing_task_id": None, "locale": "zh-CN"}

    async def test_response_shape(self, async_client, auth_cookies, builder):
        res = await async_client.get("/api/internal/sdui/tasks", cookies=auth_cookies)

        assert res.json() == {
            "nodes": {"type": "column", "children": []},
            "meta": {"processingCount": 2, "hasActiveTasks": True},
        }

    async def test_paging_is_clamped(self, async_client, auth_cookies, user_id, task_repo, builder):
        await async_client.get(
            "/api/internal/sdui/tasks",
            params={"page": "0", "pageSize": "1000"},
            cookies=auth_cookies,
        )

        task_repo.list_for_user.assert_awaited_once_with(user_id, page=1, page_size=50, search=None)

    async def test_search_and_flags(self, async_client, auth_cookies, user_id, task_repo, builder):
        await async_client.get(
            "/api/internal/sdui/tasks",
            params={"search": " tea ", "compact": "true", "locale": "en", "viewingTaskId": "abc"},
            cookies=auth_cookies,
        )

        task_repo.list_for_user.assert_awaited_once_with(user_id, page=1, page_size=20, search="tea")
        _, kwargs = builder.call_args
        assert kwargs["compact"] is True
        assert kwargs["locale"] == "en"
        assert kwargs["viewing_task_id"] == "abc"

    @pytest.mark.parametrize("value", ["1", "yes", "TRUE", ""])
    async def test_compact_only_for_literal_true(self, async_client, auth_cookies, builder, value):
        await async_client.get("/api/internal/sdui/tasks", params={"compact": value}, cookies=auth_cookies)

        assert builder.call_args.kwargs["compact"] is False

    @pytest.mark.parametrize("value", ["fr", "EN", "zh-TW"])
    async def test_unknown_locale_falls_back(self, async_client, auth_cookies, builder, value):
        await async_client.get("/api/internal/sdui/tasks", params={"locale": value}, cookies=auth_cookies)

        assert builder.call_args.kwargs["locale"] == "zh-CN"

    async def test_real_builder(self, async_client, auth_cookies, task_repo, task_factory):
        tasks = [task_factory(status="processing"), task_factory(status="completed")]
        task_repo.list_for_user.return_value = TaskPage(tasks=tasks, total=2)

        res = await async_client.get("/api/internal/sdui/tasks", cookies=auth_cookies)

        data = res.json()
        assert res.status_code == 200
        assert data["meta"] == {"processingCount": 1, "hasActiveTasks": True}
        assert [card["id"] for card in data["nodes"]["children"]] == [f"task-{t.id}" for t in tasks]

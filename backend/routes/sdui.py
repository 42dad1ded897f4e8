"""SDUI routes — server-built A2UI trees for the dashboard."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backend.auth import get_current_user_id
from backend.config import settings
from backend.models.sdui import SduiTasksResponse
from backend.repos.task_repo import TaskRepo, get_task_repo
from backend.sdui.tasks_builder import build_tasks_sdui

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/internal/sdui", tags=["sdui"])


def get_sdui_builder() -> Callable[..., dict[str, Any]]:
    """FastAPI dependency for the tasks tree builder."""
    return build_tasks_sdui


def clamp_page(page: int) -> int:
    return max(1, page)


def clamp_page_size(page_size: int) -> int:
    return min(settings.SDUI_MAX_PAGE_SIZE, max(1, page_size))


@router.get("/tasks", response_model=SduiTasksResponse)
async def get_tasks_sdui(
    user_id: UUID = Depends(get_current_user_id),
    repo: TaskRepo = Depends(get_task_repo),
    build: Callable[..., dict[str, Any]] = Depends(get_sdui_builder),
    page: int = Query(1),
    page_size: int = Query(settings.SDUI_DEFAULT_PAGE_SIZE, alias="pageSize"),
    search: str = Query(""),
    compact: str | None = Query(None),
    locale: str | None = Query(None),
    viewing_task_id: str | None = Query(None, alias="viewingTaskId"),
) -> SduiTasksResponse:
    """
    Task list as an A2UI tree.

    Out-of-range paging is clamped rather than rejected: page below 1 becomes
    1, pageSize is held to 1..SDUI_MAX_PAGE_SIZE. Only compact=true switches
    compact cards on; only locale=en switches to English.
    """
    result = await repo.list_for_user(
        user_id,
        page=clamp_page(page),
        page_size=clamp_page_size(page_size),
        search=search.strip() or None,
    )
    data = build(
        result.tasks,
        search=search,
        compact=compact == "true",
        viewing_task_id=viewing_task_id,
        locale="en" if locale == "en" else "zh-CN",
    )
    logger.debug("SDUI tasks for %s: %d of %d", user_id, len(result.tasks), result.total)
    return SduiTasksResponse.model_validate(data)

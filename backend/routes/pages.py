"""Server-rendered pages — GET /tasks renders the task list tree as HTML."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from backend.auth import get_current_user_id
from backend.config import settings
from backend.i18n import create_translator, normalize_locale
from backend.repos.task_repo import TaskRepo, get_task_repo
from backend.routes.sdui import clamp_page, clamp_page_size
from backend.sdui.tasks_builder import build_tasks_sdui
from engine.a2ui.renderer import render_document
from engine.a2ui.types import RenderOptions

router = APIRouter(tags=["pages"])


def tasks_page_tree(nodes: dict, title: str) -> dict:
    """Wrap a task list tree in the dashboard page chrome."""
    return {
        "type": "page",
        "title": title,
        "maxWidth": "lg",
        "children": [
            {
                "type": "nav",
                "brand": "Content Desk",
                "children": [{"type": "nav-link", "text": title, "href": "/tasks", "active": True}],
            },
            nodes,
        ],
    }


@router.get("/tasks", response_class=HTMLResponse)
async def tasks_page(
    user_id: UUID = Depends(get_current_user_id),
    repo: TaskRepo = Depends(get_task_repo),
    page: int = Query(1),
    page_size: int = Query(settings.SDUI_DEFAULT_PAGE_SIZE, alias="pageSize"),
    search: str = Query(""),
    locale: str | None = Query(None),
    viewing_task_id: str | None = Query(None, alias="viewingTaskId"),
) -> HTMLResponse:
    """
    The task list as a full HTML page.

    Same tree as the SDUI endpoint; actions from the page go to
    POST /api/a2ui/actions.
    """
    lang = normalize_locale(locale)
    t = create_translator(lang)
    result = await repo.list_for_user(
        user_id,
        page=clamp_page(page),
        page_size=clamp_page_size(page_size),
        search=search.strip() or None,
    )
    data = build_tasks_sdui(result.tasks, search=search, viewing_task_id=viewing_task_id, locale=lang)

    html = render_document(
        tasks_page_tree(data["nodes"], t("tasks.title")),
        RenderOptions(title=f"{t('tasks.title')} · Content Desk", lang=lang),
    )
    return HTMLResponse(content=html, headers={"X-Content-Type-Options": "nosniff"})

"""
A2UI action routes.

Rendered pages post every emitted action here as {"action", "args"}. The
action name picks a handler from `actions`; args arrive exactly as the
node carried them (change events put the new value first).
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth import get_current_user_id
from backend.config import settings
from backend.models.sdui import ActionRequest, ActionResponse
from backend.models.task import Task
from backend.repos.task_repo import TaskRepo, get_task_repo
from backend.services.workflow import WorkflowClient, get_workflow_client
from engine.a2ui.actions import ActionRouter, UnknownActionError
from engine.a2ui.registry import get_default_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/a2ui", tags=["a2ui"])

actions = ActionRouter()


class TaskNotFoundError(LookupError):
    """The task does not exist for this user (or was deleted)."""


def _task_id(value: Any) -> UUID:
    """Parse a task id arg. Raises ValueError for anything that isn't a UUID."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid task id: {value!r}")
    return UUID(value)


def _found(task: Task | None) -> Task:
    if task is None:
        raise TaskNotFoundError
    return task


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _restart(task_id: Any, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient) -> str:
    task = _found(await repo.update_status(user_id, _task_id(task_id), "processing"))
    triggered = await workflow.trigger_task(task)
    return "Workflow triggered" if triggered else "Workflow not triggered"


@actions.route("retry")
async def retry(task_id: Any, *, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient) -> ActionResponse:
    detail = await _restart(task_id, user_id, repo, workflow)
    return ActionResponse(ok=True, action="retry", detail=detail)


@actions.route("regenerate")
async def regenerate(
    task_id: Any,
    *_prefill: Any,
    user_id: UUID,
    repo: TaskRepo,
    workflow: WorkflowClient,
) -> ActionResponse:
    # Trailing args (topic, keywords, cover/ref ids) prefill the client form; the task row is authoritative.
    detail = await _restart(task_id, user_id, repo, workflow)
    return ActionResponse(ok=True, action="regenerate", detail=detail)


@actions.route("stop")
async def stop(task_id: Any, *, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient) -> ActionResponse:
    _found(await repo.update_status(user_id, _task_id(task_id), "cancelled"))
    return ActionResponse(ok=True, action="stop")


@actions.route("delete")
async def delete(task_id: Any, *, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient) -> ActionResponse:
    if not await repo.soft_delete(user_id, _task_id(task_id)):
        raise TaskNotFoundError
    return ActionResponse(ok=True, action="delete")


async def _update_field(field: str, value: Any, task_id: Any, user_id: UUID, repo: TaskRepo) -> None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    _found(await repo.update_field(user_id, _task_id(task_id), field, value))


@actions.route("updateTopic")
async def update_topic(
    value: Any, task_id: Any, *, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient
) -> ActionResponse:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Topic cannot be empty")
    await _update_field("topic", value.strip(), task_id, user_id, repo)
    return ActionResponse(ok=True, action="updateTopic")


@actions.route("updateKeywords")
async def update_keywords(
    value: Any, task_id: Any, *, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient
) -> ActionResponse:
    await _update_field("keywords", value, task_id, user_id, repo)
    return ActionResponse(ok=True, action="updateKeywords")


@actions.route("viewArticle")
async def view_article(
    task_id: Any, *_rest: Any, user_id: UUID, repo: TaskRepo, workflow: WorkflowClient
) -> ActionResponse:
    task = _found(await repo.get(user_id, _task_id(task_id)))
    return ActionResponse(
        ok=True, action="viewArticle", redirect=settings.ARTICLE_VIEW_URL.format(task_id=task.id)
    )


@actions.route("clearSearch")
async def clear_search(**_context: Any) -> ActionResponse:
    return ActionResponse(ok=True, action="clearSearch", redirect="/tasks")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/actions", response_model=ActionResponse)
async def post_action(
    req: ActionRequest,
    user_id: UUID = Depends(get_current_user_id),
    repo: TaskRepo = Depends(get_task_repo),
    workflow: WorkflowClient = Depends(get_workflow_client),
) -> ActionResponse:
    """
    Run one action emitted by a rendered page.

    400 for unknown actions or bad args, 404 when the task is gone.
    """
    try:
        return await actions(req.action, req.args, user_id=user_id, repo=repo, workflow=workflow)
    except UnknownActionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown action: {e.action}") from e
    except (TypeError, ValueError) as e:
        logger.info("Rejected action %s args=%r: %s", req.action, req.args, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid arguments for {req.action}"
        ) from e
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found.") from e


@router.get("/catalog")
async def get_catalog() -> dict[str, Any]:
    """The component catalog the renderer is serving."""
    catalog = get_default_registry().catalog
    if catalog is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Catalog not loaded.")
    return catalog.to_dict()

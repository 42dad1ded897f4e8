"""Request and response models for the SDUI and action endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SduiTasksMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    processing_count: int = 0
    has_active_tasks: bool = False


class SduiTasksResponse(BaseModel):
    """What GET /api/internal/sdui/tasks returns: an A2UI tree plus page meta."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nodes: dict[str, Any]
    meta: SduiTasksMeta


class ActionRequest(BaseModel):
    """What the page script posts to POST /api/a2ui/actions."""

    model_config = {"extra": "forbid"}

    action: str = Field(min_length=1, max_length=100)
    args: list[Any] = Field(default_factory=list)


class ActionResponse(BaseModel):
    """What the action endpoint returns."""

    ok: bool
    action: str
    detail: str | None = None
    # Where the page should navigate instead of reloading.
    redirect: str | None = None


class UploadResponse(BaseModel):
    """What the image upload endpoint returns."""

    key: str
    url: str

"""Task models for the article-writing pipeline."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

TaskStatus = Literal["pending", "processing", "completed", "failed", "cancelled"]

ACTIVE_STATUSES: frozenset[str] = frozenset({"pending", "processing"})


class RefMaterial(BaseModel):
    """Reference article a task imitates (style source)."""

    style_name: str | None = None
    source_title: str | None = None
    source_url: str | None = None


class Task(BaseModel):
    """Core task model. Represents a row in the tasks table."""

    id: UUID
    user_id: UUID | None = None
    topic: str
    keywords: str | None = None
    total_word_count: int = 4000
    status: TaskStatus = "pending"
    cover_prompt_id: UUID | None = None
    ref_material_id: UUID | None = None
    # Written by the workflow while it loops over chapters.
    current_chapter: int | None = None
    total_chapters: int | None = None
    created_at: datetime
    updated_at: datetime


class TaskWithMaterial(Task):
    """Task joined with its article output and reference material, as listed on the tasks page."""

    article_title: str | None = None
    article_subtitle: str | None = None
    article_word_count: int | None = None
    cover_url: str | None = None
    ref_material: RefMaterial | None = None


class TaskPage(BaseModel):
    """One page of a user's tasks."""

    tasks: list[TaskWithMaterial] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

"""Repository for task operations."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

import asyncpg

from backend.db import user_conn
from backend.models.task import RefMaterial, Task, TaskPage, TaskStatus, TaskWithMaterial

# Columns editable through update_field. Anything else is rejected before
# it reaches SQL.
EDITABLE_FIELDS: frozenset[str] = frozenset({"topic", "keywords"})

_LIST_SELECT = """
    SELECT t.*,
           a.title AS article_title,
           a.subtitle AS article_subtitle,
           a.word_count AS article_word_count,
           a.cover_url AS cover_url,
           r.style_name AS ref_style_name,
           r.source_title AS ref_source_title,
           r.source_url AS ref_source_url
    FROM tasks t
    LEFT JOIN articles a ON a.task_id = t.id AND a.deleted_at IS NULL
    LEFT JOIN reference_materials r ON r.id = t.ref_material_id
"""


def _row_to_task(row: asyncpg.Record) -> Task:
    """Convert a database row to a Task model."""
    return Task(
        id=row["id"],
        user_id=row["user_id"],
        topic=row["topic"],
        keywords=row["keywords"],
        total_word_count=row["total_word_count"],
        status=row["status"],
        cover_prompt_id=row["cover_prompt_id"],
        ref_material_id=row["ref_material_id"],
        current_chapter=row["current_chapter"],
        total_chapters=row["total_chapters"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_task_with_material(row: asyncpg.Record) -> TaskWithMaterial:
    """Convert a joined list row to a TaskWithMaterial model."""
    ref_material = None
    if row["ref_material_id"] is not None:
        ref_material = RefMaterial(
            style_name=row["ref_style_name"],
            source_title=row["ref_source_title"],
            source_url=row["ref_source_url"],
        )
    return TaskWithMaterial(
        **_row_to_task(row).model_dump(),
        article_title=row["article_title"],
        article_subtitle=row["article_subtitle"],
        article_word_count=row["article_word_count"],
        cover_url=row["cover_url"],
        ref_material=ref_material,
    )


def _search_pattern(search: str) -> str:
    """ILIKE pattern matching `search` literally."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TaskRepo:
    """All task-related database operations. Every query filters on user_id and RLS enforces the same."""

    async def list_for_user(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
    ) -> TaskPage:
        """
        List a user's tasks, newest first, with article and reference material joined in.

        Args:
            user_id: User UUID
            page: 1-based page number
            page_size: Tasks per page
            search: Optional substring matched against topic and keywords

        Returns:
            TaskPage with the tasks and the total match count
        """
        conditions = ["t.deleted_at IS NULL", "t.user_id = $1"]
        params: list[object] = [user_id]
        if search:
            params.append(_search_pattern(search))
            conditions.append(f"(t.topic ILIKE ${len(params)} OR t.keywords ILIKE ${len(params)})")
        where = " AND ".join(conditions)

        async with user_conn(user_id) as conn:
            # S608: where only contains fixed fragments; values are bound parameters.
            total = await conn.fetchval(f"SELECT count(*) FROM tasks t WHERE {where}", *params)  # noqa: S608
            rows = await conn.fetch(
                f"{_LIST_SELECT} WHERE {where} ORDER BY t.created_at DESC LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}",  # noqa: S608
                *params,
                page_size,
                (page - 1) * page_size,
            )
        return TaskPage(
            tasks=[_row_to_task_with_material(row) for row in rows],
            total=total or 0,
            page=page,
            page_size=page_size,
        )

    async def get(self, user_id: UUID, task_id: UUID) -> Task | None:
        """Get a task by ID. Soft-deleted tasks are not returned."""
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tasks WHERE id = $1 AND user_id = $2 AND deleted_at IS NULL",
                task_id,
                user_id,
            )
            return _row_to_task(row) if row else None

    async def update_status(self, user_id: UUID, task_id: UUID, status: TaskStatus) -> Task | None:
        """
        Set a task's status.

        Returns:
            Updated Task, or None if the task does not exist for this user
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                UPDATE tasks SET status = $3, updated_at = $4
                WHERE id = $1 AND user_id = $2 AND deleted_at IS NULL
                RETURNING *
                """,
                task_id,
                user_id,
                status,
                datetime.now(UTC),
            )
            return _row_to_task(row) if row else None

    async def update_field(self, user_id: UUID, task_id: UUID, field: str, value: str | None) -> Task | None:
        """
        Update one editable text column (topic or keywords).

        Raises:
            ValueError: If field is not editable
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field!r} is not editable")

        async with user_conn(user_id) as conn:
            # S608: field is checked against EDITABLE_FIELDS above.
            row = await conn.fetchrow(
                f"""
                UPDATE tasks SET {field} = $3, updated_at = $4
                WHERE id = $1 AND user_id = $2 AND deleted_at IS NULL
                RETURNING *
                """,  # noqa: S608
                task_id,
                user_id,
                value,
                datetime.now(UTC),
            )
            return _row_to_task(row) if row else None

    async def soft_delete(self, user_id: UUID, task_id: UUID) -> bool:
        """
        Mark a task deleted. It disappears from listings but the row is kept.

        Returns:
            True if a task was deleted, False if not found
        """
        now = datetime.now(UTC)
        async with user_conn(user_id) as conn:
            result = await conn.execute(
                "UPDATE tasks SET deleted_at = $3, updated_at = $3 WHERE id = $1 AND user_id = $2 AND deleted_at IS NULL",
                task_id,
                user_id,
                now,
            )
            return result == "UPDATE 1"


task_repo = TaskRepo()


def get_task_repo() -> TaskRepo:
    """FastAPI dependency for the shared TaskRepo."""
    return task_repo

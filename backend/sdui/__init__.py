"""Server-built A2UI trees for dashboard pages."""

from backend.sdui.tasks_builder import build_task_card, build_tasks_sdui

__all__ = ["build_task_card", "build_tasks_sdui"]

"""
Pydantic models for Content Desk.

All data shapes defined here. No imports from db, repos, or routes.
"""

from backend.models.sdui import ActionRequest, ActionResponse, SduiTasksMeta, SduiTasksResponse, UploadResponse
from backend.models.task import ACTIVE_STATUSES, RefMaterial, Task, TaskPage, TaskStatus, TaskWithMaterial

__all__ = [
    # Task models
    "ACTIVE_STATUSES",
    "RefMaterial",
    "Task",
    "TaskPage",
    "TaskStatus",
    "TaskWithMaterial",
    # API models
    "ActionRequest",
    "ActionResponse",
    "SduiTasksMeta",
    "SduiTasksResponse",
    "UploadResponse",
]

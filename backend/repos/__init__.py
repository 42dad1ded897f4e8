"""
Repository layer for Content Desk.

All SQL lives here and ONLY here. No database access outside this module.
"""

from backend.repos.task_repo import TaskRepo

__all__ = [
    "TaskRepo",
]

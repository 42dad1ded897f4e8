"""HTTP client for the n8n article-generation workflow."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from backend import config
from backend.models.task import Task

logger = logging.getLogger(__name__)


def task_payload(task: Task) -> dict[str, Any]:
    """
    Webhook body for a task. The workflow reads both the English keys and
    the Chinese ones (主题 = topic, 关键字 = keywords).
    """
    keywords = task.keywords or ""
    return {
        "taskId": str(task.id),
        "topic": task.topic,
        "keywords": keywords,
        "totalWordCount": task.total_word_count,
        "coverPromptId": str(task.cover_prompt_id) if task.cover_prompt_id else "",
        "refMaterialId": str(task.ref_material_id) if task.ref_material_id else "",
        "主题": task.topic,
        "关键字": keywords,
    }


class WorkflowClient:
    """Posts JSON payloads to the workflow webhook.

    Failures never raise: an unconfigured URL, a non-2xx response or a
    transport error are logged and reported as False.
    """

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = webhook_url if webhook_url is not None else config.settings.N8N_WEBHOOK_URL
        self._timeout = timeout if timeout is not None else config.settings.WEBHOOK_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._url)

    async def post(self, payload: dict[str, Any]) -> bool:
        """
        Send one payload.

        Returns:
            True if the webhook accepted it, False otherwise
        """
        if not self._url:
            logger.warning("N8N_WEBHOOK_URL not configured; skipping workflow trigger")
            return False

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=payload)
        except httpx.HTTPError:
            logger.exception("Workflow webhook request failed")
            return False

        if response.is_error:
            logger.error("Workflow webhook failed: %s %s", response.status_code, response.reason_phrase)
            return False

        logger.info("Workflow triggered for task %s", payload.get("taskId"))
        return True

    async def trigger_task(self, task: Task) -> bool:
        """Start (or restart) generation for a task."""
        return await self.post(task_payload(task))


workflow_client = WorkflowClient()


def get_workflow_client() -> WorkflowClient:
    """FastAPI dependency for the shared WorkflowClient."""
    return workflow_client

"""
Server-side message catalogue for SDUI builders.

create_translator(locale) returns t(key, **vars). Lookup falls back from
the requested locale to English, then to the key itself. `{name}`
placeholders are filled from vars; unknown placeholders are left as-is.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Literal

Locale = Literal["en", "zh-CN"]

DEFAULT_LOCALE: Locale = "zh-CN"

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "article.viewArticle": "View article",
        "common.delete": "Delete",
        "status.pending": "Pending",
        "status.processing": "Processing",
        "status.completed": "Completed",
        "status.failed": "Failed",
        "status.cancelled": "Cancelled",
        "task.retry": "Retry",
        "task.stop": "Stop",
        "taskForm.keywords": "Keywords",
        "taskForm.regenerateTitle": "Regenerate",
        "taskForm.topic": "Topic",
        "tasks.clearSearch": "Clear search",
        "tasks.created": "Created",
        "tasks.noKeywords": "No keywords",
        "tasks.noSearchResults": "No tasks match your search",
        "tasks.noTasks": "No tasks yet",
        "tasks.polishing": "Polishing…",
        "tasks.refMaterial": "Reference material",
        "tasks.source": "Source: {title}",
        "tasks.style": "Style: {name}",
        "tasks.targetWords": "Target {count} words",
        "tasks.title": "Tasks",
        "tasks.tryDifferentKeywords": "Try different keywords",
        "tasks.unknownWordCount": "Unknown word count",
        "tasks.untitledTask": "Untitled task",
        "tasks.words": "{count} words",
        "tasks.writingProgress": "Writing chapter {current} of {total}",
    },
    "zh-CN": {
        "article.viewArticle": "查看文章",
        "common.delete": "删除",
        "status.pending": "等待中",
        "status.processing": "处理中",
        "status.completed": "已完成",
        "status.failed": "失败",
        "status.cancelled": "已取消",
        "task.retry": "重试",
        "task.stop": "停止",
        "taskForm.keywords": "关键词",
        "taskForm.regenerateTitle": "重新生成",
        "taskForm.topic": "主题",
        "tasks.clearSearch": "清除搜索",
        "tasks.created": "创建时间",
        "tasks.noKeywords": "暂无关键词",
        "tasks.noSearchResults": "没有匹配的任务",
        "tasks.noTasks": "暂无任务",
        "tasks.polishing": "润色中…",
        "tasks.refMaterial": "参考素材",
        "tasks.source": "原文: {title}",
        "tasks.style": "风格: {name}",
        "tasks.targetWords": "目标 {count} 字",
        "tasks.title": "任务",
        "tasks.tryDifferentKeywords": "试试其他关键词",
        "tasks.unknownWordCount": "字数未知",
        "tasks.untitledTask": "未命名任务",
        "tasks.words": "{count} 字",
        "tasks.writingProgress": "正在写第 {current}/{total} 章",
    },
}

Translator = Callable[..., str]


def normalize_locale(value: str | None) -> Locale:
    """Only "en" selects English; anything else gets the default locale."""
    return "en" if value == "en" else DEFAULT_LOCALE


def format_message(template: str, **vars: object) -> str:
    if not vars:
        return template

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(vars[name]) if name in vars else match.group(0)

    return _PLACEHOLDER_RE.sub(substitute, template)


def create_translator(locale: str) -> Translator:
    messages = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    fallback = MESSAGES["en"]

    def t(key: str, **vars: object) -> str:
        template = messages.get(key) or fallback.get(key) or key
        return format_message(template, **vars)

    return t

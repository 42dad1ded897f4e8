"""
Tasks page SDUI builder.

Turns a page of TaskWithMaterial rows into an A2UI tree. Actions carried
by the nodes (and the args each receives):

  viewArticle     [task_id, topic]                               completed
  regenerate      [task_id, topic, keywords, cover_prompt_id,
                   ref_material_id]                              completed
  retry           [task_id]                                      failed, cancelled
  stop            [task_id]                                      pending, processing
  delete          [task_id]                                      always
  updateTopic     [value, task_id]                               editable-text change
  updateKeywords  [value, task_id]                               editable-text change
  clearSearch     []                                             empty search result
"""

from __future__ import annotations

from typing import Any

from backend.i18n import Translator, create_translator, normalize_locale
from backend.models.task import ACTIVE_STATUSES, TaskWithMaterial
from engine.a2ui.builders import build_standard_card
from engine.a2ui.schema import normalize_href

Node = dict[str, Any]

_CLAMP_2 = {
    "overflow": "hidden",
    "display": "-webkit-box",
    "WebkitLineClamp": 2,
    "WebkitBoxOrient": "vertical",
}


def _caption(text: str, color: str = "muted", **extra: Any) -> Node:
    return {"type": "text", "text": text, "variant": "caption", "color": color, **extra}


def _button(text: str, variant: str, action: str, args: list[Any]) -> Node:
    return {
        "type": "button",
        "text": text,
        "variant": variant,
        "size": "sm",
        "onClick": {"action": action, "args": args, "stopPropagation": True},
    }


def _opt_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def format_word_count(t: Translator, article_word_count: int | None, total_word_count: int | None) -> str:
    if article_word_count and article_word_count > 0:
        return t("tasks.words", count=f"{article_word_count:,}")
    if total_word_count and total_word_count > 0:
        return t("tasks.targetWords", count=f"{total_word_count:,}")
    return t("tasks.unknownWordCount")


# ---------------------------------------------------------------------------
# Card parts
# ---------------------------------------------------------------------------


def _actions(task: TaskWithMaterial, t: Translator) -> list[Node]:
    task_id = str(task.id)
    nodes: list[Node] = []

    if task.status == "completed":
        nodes.append(_button(t("article.viewArticle"), "primary", "viewArticle", [task_id, task.topic]))
        nodes.append(
            _button(
                t("taskForm.regenerateTitle"),
                "secondary",
                "regenerate",
                [task_id, task.topic, task.keywords, _opt_str(task.cover_prompt_id), _opt_str(task.ref_material_id)],
            )
        )
    if task.status in ("failed", "cancelled"):
        nodes.append(_button(t("task.retry"), "secondary", "retry", [task_id]))
    if task.status in ACTIVE_STATUSES:
        nodes.append(_button(t("task.stop"), "secondary", "stop", [task_id]))

    nodes.append(_button(t("common.delete"), "destructive", "delete", [task_id]))
    return nodes


def _progress(task: TaskWithMaterial, t: Translator) -> Node | None:
    """Chapter progress for a processing task, or None when the workflow has not reported any."""
    if task.status != "processing" or task.current_chapter is None or not task.total_chapters:
        return None

    percent = min(round(task.current_chapter / task.total_chapters * 100), 100)
    if task.current_chapter >= task.total_chapters:
        label = t("tasks.polishing")
    else:
        label = t("tasks.writingProgress", current=task.current_chapter, total=task.total_chapters)

    return {
        "type": "column",
        "gap": "0.25rem",
        "children": [
            {"type": "progress", "status": "processing", "value": percent},
            {
                "type": "row",
                "align": "center",
                "gap": "0.5rem",
                "children": [
                    _caption(label, color="primary"),
                    {"type": "container", "className": "a2ui-pulse a2ui-dot"},
                ],
            },
        ],
    }


def _header(task: TaskWithMaterial, t: Translator) -> list[Node]:
    nodes: list[Node] = [
        {
            "type": "text",
            "text": task.article_title or task.topic or t("tasks.untitledTask"),
            "variant": "h4",
            "style": _CLAMP_2,
        }
    ]
    if task.article_subtitle:
        nodes.append({"type": "text", "text": task.article_subtitle, "color": "muted", "style": _CLAMP_2})
    nodes.append(
        {
            "type": "row",
            "align": "center",
            "gap": "0.5rem",
            "children": [
                {"type": "badge", "text": t(f"status.{task.status}"), "color": task.status},
                _caption("·"),
                _caption(format_word_count(t, task.article_word_count, task.total_word_count)),
            ],
        }
    )
    progress = _progress(task, t)
    if progress is not None:
        nodes.append(progress)
    return nodes


def _body(task: TaskWithMaterial, t: Translator) -> list[Node]:
    task_id = str(task.id)
    editable = task.status in ("pending", "failed", "cancelled")
    return [
        {
            "type": "row",
            "align": "start",
            "gap": "0.5rem",
            "children": [
                _caption(f"{t('taskForm.topic')}:", style={"flexShrink": 0}),
                {
                    "type": "editable-text",
                    "value": task.topic or "",
                    "placeholder": t("tasks.untitledTask"),
                    "variant": "caption",
                    "editable": editable,
                    "onChange": {"action": "updateTopic", "args": [task_id]},
                    "style": {"flex": 1},
                },
            ],
        },
        {
            "type": "row",
            "align": "start",
            "gap": "0.5rem",
            "children": [
                _caption(f"{t('taskForm.keywords')}:", style={"flexShrink": 0}),
                {
                    "type": "editable-text",
                    "value": task.keywords or "",
                    "placeholder": t("tasks.noKeywords"),
                    "variant": "caption",
                    "multiline": True,
                    "editable": editable,
                    "onChange": {"action": "updateKeywords", "args": [task_id]},
                    "style": {"flex": 1, "textOverflow": "ellipsis", **_CLAMP_2},
                },
            ],
        },
    ]


def _footer(task: TaskWithMaterial, t: Translator) -> list[Node]:
    details: list[Node] = []
    ref = task.ref_material
    if ref is not None:
        source = {
            "type": "text",
            "text": t("tasks.source", title=ref.source_title or "-"),
            "variant": "caption",
            "color": "muted",
        }
        href = normalize_href(ref.source_url)
        if href:
            source = {
                "type": "link",
                "text": t("tasks.source", title=ref.source_title or ref.source_url),
                "href": href,
                "external": True,
                "style": {"fontSize": "12px"},
            }
        details.append(
            {
                "type": "column",
                "gap": "0.35rem",
                "children": [_caption(t("tasks.style", name=ref.style_name or t("tasks.refMaterial")), color="primary"), source],
            }
        )
    details.append(_caption(f"{t('tasks.created')}: {task.created_at:%Y-%m-%d %H:%M}"))

    return [
        {
            "type": "row",
            "justify": "between",
            "align": "center",
            "wrap": True,
            "gap": "0.5rem",
            "children": [
                {"type": "column", "gap": "0.35rem", "children": details},
                {"type": "row", "gap": "0.5rem", "wrap": True, "children": _actions(task, t)},
            ],
        }
    ]


def _cover(task: TaskWithMaterial, t: Translator) -> Node:
    if task.cover_url:
        return {
            "type": "image",
            "src": task.cover_url,
            "alt": task.topic,
            "width": "100%",
            "height": "10rem",
            "style": {"objectFit": "cover"},
        }
    return {
        "type": "container",
        "style": {
            "width": "100%",
            "height": "10rem",
            "display": "flex",
            "alignItems": "center",
            "justifyContent": "center",
            "background": "#edf2f7",
        },
        "children": [{"type": "text", "text": t("tasks.title"), "color": "muted"}],
    }


def build_task_card(task: TaskWithMaterial, t: Translator, *, compact: bool = False, highlight: bool = False) -> Node:
    card_style: dict[str, Any] = {
        "height": "100%",
        "display": "flex",
        "flexDirection": "column",
        "overflow": "hidden",
        "padding": 0,
    }
    if highlight:
        card_style.update({"boxShadow": "0 0 0 2px var(--a2ui-primary)", "backgroundColor": "#f7fafc"})

    return build_standard_card(
        id=f"task-{task.id}",
        hoverable=True,
        cover=_cover(task, t),
        header=_header(task, t),
        body=[] if compact else _body(task, t),
        footer=_footer(task, t),
        card_style=card_style,
    )


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------


def _empty(search: str, t: Translator) -> Node:
    has_search = bool(search.strip())
    children: list[Node] = [
        {"type": "text", "text": t("tasks.noSearchResults") if has_search else t("tasks.noTasks"), "color": "muted"}
    ]
    if has_search:
        children.append(_caption(t("tasks.tryDifferentKeywords")))
        children.append(
            {
                "type": "button",
                "text": t("tasks.clearSearch"),
                "variant": "secondary",
                "size": "sm",
                "onClick": {"action": "clearSearch"},
            }
        )
    return {
        "type": "card",
        "hoverable": False,
        "style": {"padding": "2rem", "textAlign": "center"},
        "children": [
            {"type": "column", "gap": "0.75rem", "style": {"alignItems": "center"}, "children": children}
        ],
    }


def build_tasks_sdui(
    tasks: list[TaskWithMaterial],
    search: str = "",
    compact: bool = False,
    viewing_task_id: str | None = None,
    locale: str = "zh-CN",
) -> dict[str, Any]:
    """
    Build the tasks list tree.

    Returns:
        {"nodes": <A2UI tree>, "meta": {"processingCount", "hasActiveTasks"}}
    """
    t = create_translator(normalize_locale(locale))

    if not tasks:
        nodes = _empty(search, t)
    else:
        nodes = {
            "type": "column",
            "gap": "1rem",
            "children": [
                build_task_card(task, t, compact=compact, highlight=str(task.id) == viewing_task_id)
                for task in tasks
            ],
        }

    processing_count = sum(1 for task in tasks if task.status in ACTIVE_STATUSES)
    return {
        "nodes": nodes,
        "meta": {"processingCount": processing_count, "hasActiveTasks": processing_count > 0},
    }

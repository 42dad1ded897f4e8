"""
A2UI — Node builders

Small helpers producing wire-format node dicts (camelCase keys, None
values omitted) for layouts that several pages share.
"""

from __future__ import annotations

from typing import Any

DEFAULT_CONTENT_GAP = "0.75rem"
DEFAULT_CONTENT_PADDING = "1.25rem"


def _compact(node: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in node.items() if v is not None}


def build_standard_card(
    *,
    id: str | None = None,
    hoverable: bool | None = None,
    on_click: dict[str, Any] | None = None,
    cover: dict[str, Any] | None = None,
    header: list[dict[str, Any]] | None = None,
    body: list[dict[str, Any]] | None = None,
    footer: list[dict[str, Any]] | None = None,
    content_gap: str | None = None,
    content_padding: str | None = None,
    content_style: dict[str, Any] | None = None,
    card_style: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Card with an optional cover followed by a content column:
    header, body, then a flexible spacer and the footer, so footers of
    cards in the same row line up at the bottom.
    """
    content: list[dict[str, Any]] = []
    content.extend(header or [])
    content.extend(body or [])
    if footer:
        content.append({"type": "spacer", "flex": True})
        content.extend(footer)

    column = {
        "type": "column",
        "gap": content_gap or DEFAULT_CONTENT_GAP,
        "style": {"padding": content_padding or DEFAULT_CONTENT_PADDING, "flex": 1, **(content_style or {})},
        "children": content,
    }

    children: list[dict[str, Any]] = []
    if cover:
        children.append(cover)
    children.append(column)

    return _compact(
        {
            "type": "card",
            "id": id,
            "hoverable": hoverable,
            "onClick": on_click,
            "style": card_style,
            "children": children,
        }
    )


def create_empty_state(message: str) -> dict[str, Any]:
    return {
        "type": "card",
        "hoverable": False,
        "style": {"padding": "2rem", "textAlign": "center"},
        "children": [{"type": "text", "text": message, "color": "muted"}],
    }


def create_loading_state(message: str) -> dict[str, Any]:
    return {
        "type": "row",
        "justify": "center",
        "children": [{"type": "text", "text": message, "color": "muted"}],
    }

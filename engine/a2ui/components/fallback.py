"""Visible placeholders for nodes the renderer cannot draw."""

from __future__ import annotations

from engine.a2ui.schema import BaseNode
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element


def render_unknown(node: BaseNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    """Fallback for tags with no registered component."""
    return Element(
        "div",
        {"class": "a2ui-unknown", "role": "alert", "data-a2ui-type": node.type},
        [f'Unknown component: "{node.type}"'],
    )


def render_error(node_type: str, message: str) -> Element:
    """Placeholder for a component whose render function failed."""
    return Element(
        "div",
        {"class": "a2ui-render-error", "role": "alert", "data-a2ui-type": node_type},
        [f'Failed to render "{node_type}": {message}'],
    )

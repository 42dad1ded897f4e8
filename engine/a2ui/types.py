"""
A2UI — Shared Types

Contracts shared by schema, registry, renderer and components.

An A2UI tree is plain JSON: every node is an object with a string `type`
tag. Interactive nodes carry Actions ({action, args?, stopPropagation?})
which the renderer never interprets; it only hands them to the page-level
`on_action(action, args)` callback.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from engine.a2ui.view import Element

# ---------------------------------------------------------------------------
# Callback signatures
# ---------------------------------------------------------------------------

# (action, args) -> None. Interpreted by the host page, never by the renderer.
ActionHandler = Callable[[str, "list[Any] | None"], None]

# Renders a child node or list of child nodes.
RenderChildren = Callable[[Any], "list[Element]"]

# (node, on_action, render_children) -> Element
RenderFn = Callable[[Any, ActionHandler, RenderChildren], "Element"]


def noop_action(action: str, args: list[Any] | None = None) -> None:
    """Default action handler. Drops the action."""
    return None


# ---------------------------------------------------------------------------
# Node categories
# ---------------------------------------------------------------------------

CATEGORIES: tuple[str, ...] = (
    "layout",
    "content",
    "interactive",
    "form",
    "feedback",
    "ext",
)

PROPERTY_TYPES: set[str] = {"string", "number", "boolean", "array", "object", "action"}

SOURCES: set[str] = {"standard", "custom", "override"}

# Tag used by the fallback when a node carries no usable `type`.
MISSING_TYPE = "?"


# ---------------------------------------------------------------------------
# Render options
# ---------------------------------------------------------------------------


@dataclass
class RenderOptions:
    """Options controlling what render_document includes in the page."""

    title: str = "Content Desk"
    lang: str = "en"
    action_url: str = "/api/a2ui/actions"
    include_state: bool = True
    include_script: bool = True
    footer: str | None = None

"""Shared building blocks for component render functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from engine.a2ui.schema import Action, BaseNode
from engine.a2ui.types import ActionHandler
from engine.a2ui.view import Element, Event


def cx(*classes: str | None) -> str:
    """Join class names, skipping empty ones."""
    return " ".join(c for c in classes if c)


def base_attrs(node: BaseNode, *classes: str | None, style: dict[str, Any] | None = None) -> dict[str, Any]:
    """class/style/id attributes every component starts from. node.style wins over defaults."""
    attrs: dict[str, Any] = {"class": cx(*classes, node.class_name)}
    merged = {**(style or {}), **node.style}
    if merged:
        attrs["style"] = merged
    if node.id:
        attrs["data-a2ui-id"] = node.id
    return attrs


def bind_action(
    element: Element,
    event_type: str,
    action: Action,
    on_action: ActionHandler,
    *,
    leading: list[Any] | None = None,
    with_value: bool = False,
    prevent_default: bool = False,
    when: Callable[[Event], bool] | None = None,
) -> Element:
    """
    Wire an Action to an element event.

    In-process, the handler calls on_action(action, args) where args is
    [event value?, *leading, *action.args]. For the browser the same action
    is serialised into data-a2ui-<event> attributes read by the page script.
    """
    lead = list(leading or [])

    def handler(event: Event) -> None:
        if when is not None and not when(event):
            return
        if action.stop_propagation:
            event.stop_propagation()
        if prevent_default:
            event.prevent_default()
        prefix = [event.value, *lead] if with_value else lead
        if prefix:
            args: list[Any] | None = [*prefix, *(action.args or [])]
        else:
            args = action.args
        on_action(action.action, args)

    element.on(event_type, handler)
    element.attrs[f"data-a2ui-{event_type}"] = {"action": action.action, "args": [*lead, *(action.args or [])]}
    if with_value:
        element.attrs["data-a2ui-with-value"] = "true"
    if action.stop_propagation:
        element.attrs["data-a2ui-stop"] = "true"
    return element


def container(tag: str, node: BaseNode, children: list[Element], *classes: str, style: dict[str, Any] | None = None) -> Element:
    return Element(tag, base_attrs(node, *classes, style=style), children=list(children))


def format_number(value: float) -> str:
    """16.0 → "16", 12.5 → "12.5"."""
    return str(int(value)) if float(value).is_integer() else str(value)

"""
Interactive components: button, input, textarea, editable-text, select,
checkbox, tabs, collapsible, nav-link.

Change-style events prepend the new value to the action's args, so a host
handler for {action: "updateTopic", args: [task_id]} receives
("updateTopic", [new_value, task_id]).
"""

from __future__ import annotations

from engine.a2ui.components._helpers import base_attrs, bind_action
from engine.a2ui.schema import (
    ButtonNode,
    CheckboxNode,
    CollapsibleNode,
    EditableTextNode,
    InputNode,
    NavLinkNode,
    SelectNode,
    TabsNode,
    TextareaNode,
)
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element, Event

# ---------------------------------------------------------------------------
# Buttons & fields
# ---------------------------------------------------------------------------


def render_button(node: ButtonNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-button", f"a2ui-button--{node.variant}", f"a2ui-button--{node.size}")
    attrs["type"] = "button"
    attrs["disabled"] = node.disabled
    el = Element("button", attrs, [node.text])
    # Disabled buttons never fire, matching browser behaviour.
    if node.on_click and not node.disabled:
        bind_action(el, "click", node.on_click, on_action)
    return el


def render_input(node: InputNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-input")
    attrs.update({"type": node.input_type, "value": node.value, "placeholder": node.placeholder, "name": node.name})
    el = Element("input", attrs)
    if node.on_change:
        bind_action(el, "change", node.on_change, on_action, with_value=True)
    return el


def render_textarea(node: TextareaNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-input", "a2ui-textarea")
    attrs.update({"rows": node.rows, "placeholder": node.placeholder, "name": node.name})
    el = Element("textarea", attrs, [node.value])
    if node.on_change:
        bind_action(el, "change", node.on_change, on_action, with_value=True)
    return el


def render_editable_text(node: EditableTextNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    classes = ("a2ui-editable", f"a2ui-text--{node.variant}")
    if not node.editable:
        text = node.value or node.placeholder or ""
        muted = "a2ui-color--muted" if not node.value else None
        return Element("span", base_attrs(node, *classes, muted), [text])

    attrs = base_attrs(node, *classes, "a2ui-editable--active")
    attrs["placeholder"] = node.placeholder
    attrs["data-a2ui-original"] = node.value
    if node.multiline:
        el = Element("textarea", {**attrs, "rows": 2}, [node.value])
    else:
        el = Element("input", {**attrs, "type": "text", "value": node.value})

    if node.on_change:
        original = node.value

        def changed(event: Event) -> bool:
            return event.value != original

        bind_action(el, "change", node.on_change, on_action, with_value=True, when=changed)
    return el


def render_select(node: SelectNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    options = [
        Element("option", {"value": opt.value, "selected": opt.value == node.value}, [opt.label])
        for opt in node.options
    ]
    attrs = base_attrs(node, "a2ui-input", "a2ui-select")
    attrs["name"] = node.name
    el = Element("select", attrs, options)
    if node.on_change:
        bind_action(el, "change", node.on_change, on_action, with_value=True)
    return el


def render_checkbox(node: CheckboxNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-checkbox")
    attrs.update({"type": "checkbox", "checked": node.checked})
    box = Element("input", attrs)
    if node.on_change:
        bind_action(box, "change", node.on_change, on_action, leading=[not node.checked, node.task_id])
    if node.label:
        return Element("label", {"class": "a2ui-checkbox-label"}, [box, Element("span", {}, [node.label])])
    return box


def render_nav_link(node: NavLinkNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    classes = ("a2ui-nav-link", "a2ui-nav-link--active" if node.active else None)
    if node.href and not node.on_click:
        attrs = base_attrs(node, *classes)
        attrs["href"] = node.href
        if node.active:
            attrs["aria-current"] = "page"
        return Element("a", attrs, [node.text])

    attrs = base_attrs(node, *classes)
    attrs["type"] = "button"
    el = Element("button", attrs, [node.text])
    if node.on_click:
        bind_action(el, "click", node.on_click, on_action, prevent_default=True)
    return el


# ---------------------------------------------------------------------------
# Disclosure
# ---------------------------------------------------------------------------


def render_tabs(node: TabsNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    active = node.default_tab if node.default_tab < len(node.tabs) else 0
    buttons: list[Element] = []
    panels: list[Element] = []

    for index, tab in enumerate(node.tabs):
        selected = index == active
        buttons.append(
            Element(
                "button",
                {
                    "type": "button",
                    "role": "tab",
                    "class": "a2ui-tab a2ui-tab--active" if selected else "a2ui-tab",
                    "aria-selected": "true" if selected else "false",
                    "data-a2ui-tab": index,
                },
                [tab.label],
            )
        )
        content = render_children(tab.content) if tab.content is not None else []
        panels.append(
            Element(
                "div",
                {"role": "tabpanel", "class": "a2ui-tab-panel", "data-a2ui-panel": index, "hidden": not selected},
                content,
            )
        )

    def select_tab(index: int):
        def handler(event: Event) -> None:
            for i, (button, panel) in enumerate(zip(buttons, panels, strict=True)):
                button.attrs["aria-selected"] = "true" if i == index else "false"
                button.attrs["class"] = "a2ui-tab a2ui-tab--active" if i == index else "a2ui-tab"
                panel.attrs["hidden"] = i != index

        return handler

    for index, button in enumerate(buttons):
        button.on("click", select_tab(index))

    tablist = Element("div", {"role": "tablist", "class": "a2ui-tab-list"}, buttons)
    return Element("div", base_attrs(node, "a2ui-tabs"), [tablist, *panels])


def render_collapsible(node: CollapsibleNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-collapsible")
    attrs["open"] = node.default_open
    summary = Element("summary", {"class": "a2ui-collapsible-title"}, [node.title])
    body = Element("div", {"class": "a2ui-collapsible-body"}, render_children(node.children))
    return Element("details", attrs, [summary, body])

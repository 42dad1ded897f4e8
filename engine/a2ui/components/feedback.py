"""Feedback components: badge, progress, modal, alert."""

from __future__ import annotations

from engine.a2ui.components._helpers import base_attrs, bind_action, format_number
from engine.a2ui.schema import AlertNode, BadgeNode, ModalNode, ProgressNode
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element, Event, fragment

# Bar width and animation per status when no explicit value is given.
PROGRESS_STYLES: dict[str, tuple[str, bool]] = {
    "pending": ("10%", True),
    "processing": ("60%", True),
    "completed": ("100%", False),
    "failed": ("100%", False),
    "cancelled": ("50%", False),
}


def render_badge(node: BadgeNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    children: list[Element | str] = []
    if node.color == "processing":
        children.append(Element("span", {"class": "a2ui-spinner", "aria-hidden": "true"}))
    children.append(node.text)
    return Element("span", base_attrs(node, "a2ui-badge", f"a2ui-badge--{node.color}"), children)


def render_progress(node: ProgressNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    width, animate = PROGRESS_STYLES[node.status]
    if node.value is not None:
        width = f"{format_number(node.value)}%"
    bar = Element(
        "div",
        {
            "class": f"a2ui-progress-bar a2ui-progress-bar--{node.status}" + (" a2ui-pulse" if animate else ""),
            "style": {"width": width},
        },
    )
    attrs = base_attrs(node, "a2ui-progress")
    attrs["role"] = "progressbar"
    if node.value is not None:
        attrs["aria-valuenow"] = format_number(node.value)
        attrs["aria-valuemin"] = "0"
        attrs["aria-valuemax"] = "100"
    return Element("div", attrs, [bar])


def render_modal(node: ModalNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    if not node.open:
        return fragment()

    header: list[Element] = []
    if node.title:
        close = Element("button", {"type": "button", "class": "a2ui-modal-close", "aria-label": "Close"}, ["×"])
        if node.on_close:
            bind_action(close, "click", node.on_close, on_action)
        header.append(
            Element("div", {"class": "a2ui-modal-header"}, [Element("h2", {"class": "a2ui-modal-title"}, [node.title]), close])
        )

    dialog_attrs = base_attrs(node, "a2ui-modal")
    dialog_attrs.update({"role": "dialog", "aria-modal": "true"})
    dialog = Element(
        "div",
        dialog_attrs,
        [*header, Element("div", {"class": "a2ui-modal-body"}, render_children(node.children))],
    )
    backdrop = Element("div", {"class": "a2ui-modal-backdrop"}, [dialog])

    if node.on_close:
        on_close = node.on_close

        def backdrop_click(event: Event) -> None:
            # Only clicks on the backdrop itself close; clicks inside the dialog bubble here too.
            if event.target is backdrop:
                on_action(on_close.action, on_close.args)

        backdrop.on("click", backdrop_click)
        backdrop.attrs["data-a2ui-backdrop"] = {"action": on_close.action, "args": list(on_close.args or [])}
    return backdrop


def render_alert(node: AlertNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    attrs = base_attrs(node, "a2ui-alert", f"a2ui-alert--{node.variant}")
    attrs["role"] = "alert" if node.variant in ("warning", "error") else "status"
    return Element("div", attrs, [node.message])

"""Layout components: column, row, container, card, page, nav, spacer."""

from __future__ import annotations

from typing import Any

from engine.a2ui.components._helpers import base_attrs, bind_action, container
from engine.a2ui.schema import BoxNode, CardNode, ColumnNode, NavNode, PageNode, RowNode, SpacerNode
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element

DEFAULT_GAP = "0.5rem"

ALIGN_MAP = {
    "start": "flex-start",
    "center": "center",
    "end": "flex-end",
    "stretch": "stretch",
}

JUSTIFY_MAP = {
    "start": "flex-start",
    "center": "center",
    "end": "flex-end",
    "between": "space-between",
    "around": "space-around",
}


def render_column(node: ColumnNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    style = {"display": "flex", "flexDirection": "column", "gap": node.gap or DEFAULT_GAP}
    return container("div", node, render_children(node.children), "a2ui-column", style=style)


def render_row(node: RowNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    style: dict[str, Any] = {"display": "flex", "flexDirection": "row", "gap": node.gap or DEFAULT_GAP}
    if node.align:
        style["alignItems"] = ALIGN_MAP[node.align]
    if node.justify:
        style["justifyContent"] = JUSTIFY_MAP[node.justify]
    if node.wrap:
        style["flexWrap"] = "wrap"
    classes = ["a2ui-row"]
    if node.responsive:
        classes.append("a2ui-row--responsive")
    return container("div", node, render_children(node.children), *classes, style=style)


def render_container(node: BoxNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    return container("div", node, render_children(node.children), "a2ui-container")


def render_card(node: CardNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    el = container(
        "div",
        node,
        render_children(node.children),
        "a2ui-card",
        "a2ui-card--hoverable" if node.hoverable else "",
        "a2ui-clickable" if node.on_click else "",
    )
    if node.on_click:
        bind_action(el, "click", node.on_click, on_action)
    return el


def render_page(node: PageNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    body: list[Element] = []
    if node.title:
        body.append(Element("h1", {"class": "a2ui-page-title"}, [node.title]))
    body.extend(render_children(node.children))

    if node.centered:
        inner = Element("div", {"class": "a2ui-page-centered"}, body)
    else:
        inner = Element("div", {"class": f"a2ui-page-content a2ui-max-{node.max_width}"}, body)
    return Element("div", base_attrs(node, "a2ui-page"), [inner])


def render_nav(node: NavNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    bar: list[Element] = []
    if node.brand:
        bar.append(Element("span", {"class": "a2ui-nav-brand"}, [node.brand]))
    bar.append(Element("div", {"class": "a2ui-nav-links"}, render_children(node.children)))
    return Element("nav", base_attrs(node, "a2ui-nav"), [Element("div", {"class": "a2ui-nav-bar"}, bar)])


def render_spacer(node: SpacerNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    style: dict[str, Any] = {}
    if node.flex:
        style["flex"] = 1
    if node.size:
        style.update({"width": node.size, "height": node.size, "flex": "none"})
    return Element("div", base_attrs(node, "a2ui-spacer", style=style))

"""Content components: text, image, icon, divider, link, markdown."""

from __future__ import annotations

from typing import Any

import markdown

from engine.a2ui.components._helpers import base_attrs, bind_action, format_number
from engine.a2ui.schema import DividerNode, IconNode, ImageNode, LinkNode, MarkdownNode, TextNode
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element, Raw

HEADING_VARIANTS = {"h1", "h2", "h3", "h4"}

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc"]


def render_text(node: TextNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    tag = node.variant if node.variant in HEADING_VARIANTS else "span"
    attrs = base_attrs(
        node,
        "a2ui-text",
        f"a2ui-text--{node.variant}",
        f"a2ui-color--{node.color}",
        f"a2ui-weight--{node.weight}" if node.weight else None,
    )
    return Element(tag, attrs, [node.text])


def render_image(node: ImageNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    style: dict[str, Any] = {}
    if node.width:
        style["width"] = node.width
    if node.height:
        style["height"] = node.height
    attrs = base_attrs(node, "a2ui-image", style=style)
    attrs.update({"src": node.src, "alt": node.alt, "loading": "lazy"})
    return Element("img", attrs)


def render_icon(node: IconNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    style: dict[str, Any] = {"fontSize": f"{format_number(node.size or 16)}px"}
    if node.color:
        style["color"] = node.color
    attrs = base_attrs(node, "a2ui-icon", style=style)
    attrs["aria-hidden"] = "true"
    return Element("span", attrs, [node.name])


def render_divider(node: DividerNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    if node.orientation == "vertical":
        attrs = base_attrs(node, "a2ui-divider", "a2ui-divider--vertical")
        attrs["role"] = "separator"
        attrs["aria-orientation"] = "vertical"
        return Element("div", attrs)
    return Element("hr", base_attrs(node, "a2ui-divider"))


def render_link(node: LinkNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    classes = ("a2ui-link", f"a2ui-link--{node.variant}")
    if node.href and not node.on_click:
        attrs = base_attrs(node, *classes)
        attrs["href"] = node.href
        if node.external:
            attrs["target"] = "_blank"
            attrs["rel"] = "noopener noreferrer"
        return Element("a", attrs, [node.text])

    attrs = base_attrs(node, *classes)
    attrs["type"] = "button"
    el = Element("button", attrs, [node.text])
    if node.on_click:
        bind_action(el, "click", node.on_click, on_action, prevent_default=True)
    return el


def render_markdown(node: MarkdownNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    html = markdown.markdown(node.content, extensions=MARKDOWN_EXTENSIONS, output_format="html")
    return Element("article", base_attrs(node, "a2ui-markdown", "a2ui-prose"), [Raw(html)])

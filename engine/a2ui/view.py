"""
A2UI — View tree

The renderer's output. An Element is a small DOM-like node: a tag, an
attribute map, children (Elements, text, or trusted Raw HTML) and event
handlers. It serialises to HTML for the browser and can also dispatch
events in-process, bubbling from the target up to the root the same way
a browser does. That is what lets the host (and the tests) activate a
button and observe exactly which actions fire.

An Element with an empty tag is a fragment: it renders only its children.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from html import escape as _html_escape
from typing import Any

VOID_TAGS: set[str] = {"img", "input", "hr", "br", "meta", "link"}
BOOLEAN_ATTRS: set[str] = {"disabled", "checked", "open", "hidden", "required", "selected", "readonly"}

# CSS properties that take plain numbers (no px suffix).
UNITLESS_PROPERTIES: set[str] = {
    "flex",
    "flexGrow",
    "flexShrink",
    "opacity",
    "zIndex",
    "fontWeight",
    "lineHeight",
    "order",
    "WebkitLineClamp",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class Raw(str):
    """Trusted, pre-rendered HTML. Emitted without escaping."""


Handler = Callable[["Event"], None]


@dataclass
class Event:
    """A dispatched UI event. Handlers may stop propagation or prevent the default."""

    type: str
    target: Element
    value: Any = None
    current_target: Element | None = None
    propagation_stopped: bool = False
    default_prevented: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(eq=False)
class Element:
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[Element | str] = field(default_factory=list)
    handlers: dict[str, Handler] = field(default_factory=dict)
    parent: Element | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            if isinstance(child, Element):
                child.parent = self

    # -- tree building --------------------------------------------------

    def append(self, child: Element | str) -> Element:
        if isinstance(child, Element):
            child.parent = self
        self.children.append(child)
        return self

    def extend(self, children: list[Element | str]) -> Element:
        for child in children:
            self.append(child)
        return self

    def on(self, event_type: str, handler: Handler) -> Element:
        self.handlers[event_type] = handler
        return self

    @property
    def is_fragment(self) -> bool:
        return self.tag == ""

    # -- events ---------------------------------------------------------

    def dispatch(self, event_type: str, value: Any = None) -> Event:
        """
        Dispatch an event with this element as target.

        Handlers run from the target up through its ancestors until one
        calls event.stop_propagation(). Exceptions raised by handlers
        propagate to the caller.
        """
        event = Event(type=event_type, target=self, value=value)
        node: Element | None = self
        while node is not None:
            handler = node.handlers.get(event_type)
            if handler is not None:
                event.current_target = node
                handler(event)
                if event.propagation_stopped:
                    break
            node = node.parent
        event.current_target = None
        return event

    def click(self) -> Event:
        return self.dispatch("click")

    def change(self, value: Any) -> Event:
        return self.dispatch("change", value)

    def submit(self) -> Event:
        return self.dispatch("submit")

    # -- queries --------------------------------------------------------

    def iter(self) -> Iterator[Element]:
        """Depth-first, document-order walk over this element and its descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return [el for el in self.iter() if predicate(el)]

    def find(self, predicate: Callable[[Element], bool]) -> Element | None:
        return next((el for el in self.iter() if predicate(el)), None)

    def find_by_id(self, node_id: str) -> Element | None:
        return self.find(lambda el: el.attrs.get("data-a2ui-id") == node_id)

    def find_by_tag(self, tag: str) -> list[Element]:
        return self.find_all(lambda el: el.tag == tag)

    def has_class(self, name: str) -> bool:
        return name in str(self.attrs.get("class", "")).split()

    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text_content())
            elif not isinstance(child, Raw):
                parts.append(child)
        return "".join(parts)

    # -- serialisation --------------------------------------------------

    def to_html(self) -> str:
        inner = "".join(_child_html(c) for c in self.children)
        if self.is_fragment:
            return inner
        open_tag = f"<{self.tag}{_render_attrs(self.attrs)}>"
        if self.tag in VOID_TAGS:
            return open_tag
        return f"{open_tag}{inner}</{self.tag}>"


def fragment(children: list[Element | str] | None = None) -> Element:
    return Element("", children=list(children or []))


# ---------------------------------------------------------------------------
# HTML helpers
# ---------------------------------------------------------------------------


def escape(text: Any) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


def _child_html(child: Element | str) -> str:
    if isinstance(child, Element):
        return child.to_html()
    if isinstance(child, Raw):
        return str(child)
    return escape(child)


def _render_attrs(attrs: dict[str, Any]) -> str:
    parts: list[str] = []
    for name in sorted(attrs):
        value = attrs[name]
        if value is None or value is False:
            continue
        if name in BOOLEAN_ATTRS:
            if value:
                parts.append(f" {name}")
            continue
        if name == "style" and isinstance(value, dict):
            value = style_to_css(value)
            if not value:
                continue
        elif isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False, sort_keys=True)
        elif value is True:
            value = "true"
        parts.append(f' {name}="{escape(value)}"')
    return "".join(parts)


def css_property(name: str) -> str:
    """camelCase (React style) → kebab-case CSS property name."""
    if "-" in name:
        return name
    kebab = _CAMEL_RE.sub("-", name).lower()
    if name.startswith("Webkit") or name.startswith("Moz") or name.startswith("ms"):
        kebab = "-" + kebab
    return kebab


def style_to_css(style: dict[str, Any]) -> str:
    """Serialise a style map. Values that are not strings or numbers are skipped."""
    decls: list[str] = []
    for name, value in style.items():
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (int, float)):
            if name in UNITLESS_PROPERTIES or value == 0:
                text = str(value)
            else:
                text = f"{value}px"
        elif isinstance(value, str):
            text = value
        else:
            continue
        decls.append(f"{css_property(name)}: {text}")
    return "; ".join(decls)

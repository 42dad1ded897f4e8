"""
A2UI — Node Schema

One pydantic model per node tag, keyed in NODE_MODELS. Python attributes
are snake_case; the wire format is camelCase (onClick, inputType, ...).

Validation is lenient by contract: a malformed field is dropped and its
default applied, so one bad value never takes down the node or its
siblings. Children stay raw JSON and are parsed one by one as the renderer
reaches them, which is what lets an unknown child degrade on its own.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_LENGTH_RE = re.compile(
    r"^(-?\d+(\.\d+)?(px|rem|em|%|vh|vw|ch|pt)|auto|(min|max|fit)-content|(calc|var|clamp|min|max)\(.+\))$"
)


def normalize_length(value: Any) -> str | None:
    """Numbers become px; CSS length strings pass through; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return "0" if value == 0 else f"{value}px"
    if not isinstance(value, str):
        return None
    text = value.strip()
    if _NUMBER_RE.match(text):
        return "0" if float(text) == 0 else f"{text}px"
    if _LENGTH_RE.match(text):
        return text
    return None


def _stringify(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]")
SAFE_URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "mailto"})


def normalize_href(value: Any) -> str | None:
    """Relative URLs and http/https/mailto pass through; any other scheme is None."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    # Browsers ignore tabs, newlines and control characters inside a scheme.
    match = _SCHEME_RE.match(_IGNORED_URL_CHARS_RE.sub("", text))
    if match is None:
        return text
    return text if match.group(1).lower() in SAFE_URL_SCHEMES else None


def _only_objects(value: Any) -> Any:
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return value


Length = Annotated[str | None, BeforeValidator(normalize_length)]
Href = Annotated[str | None, BeforeValidator(normalize_href)]
Text = Annotated[str, BeforeValidator(_stringify)]


# ---------------------------------------------------------------------------
# Lenient base
# ---------------------------------------------------------------------------


class LenientModel(BaseModel):
    """Drops fields that fail validation and retries with their defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="wrap")
    @classmethod
    def _drop_malformed_fields(cls, data: Any, handler: Any) -> Any:
        try:
            return handler(data)
        except ValidationError as exc:
            if not isinstance(data, dict):
                raise
            bad = {err["loc"][0] for err in exc.errors() if err.get("loc")}
            drop: set[str] = {k for k in bad if isinstance(k, str)}
            for name, info in cls.model_fields.items():
                if name in bad or info.alias in bad:
                    drop.add(name)
                    if info.alias:
                        drop.add(info.alias)
            cleaned = {k: v for k, v in data.items() if k not in drop}
            if len(cleaned) == len(data):
                raise
            logger.debug(
                "a2ui: %s dropped malformed fields %s",
                data.get("type", cls.__name__),
                sorted(k for k in drop if k in data),
            )
            return handler(cleaned)


class Action(LenientModel):
    """{action, args?, stopPropagation?} — opaque to the renderer."""

    action: str
    args: list[Any] | None = None
    stop_propagation: bool = False


class BaseNode(LenientModel):
    """Fields shared by every node. Unknown extra fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    type: str
    id: str | None = None
    style: dict[str, Any] = Field(default_factory=dict)
    class_name: str | None = None

    summary: ClassVar[str] = "Custom component"
    category: ClassVar[str] = "custom"
    supports_children: ClassVar[bool] = False
    required_props: ClassVar[tuple[str, ...]] = ()


class ContainerNode(BaseNode):
    children: list[Any] = Field(default_factory=list)

    supports_children: ClassVar[bool] = True

    @field_validator("children", mode="before")
    @classmethod
    def _wrap_single_child(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [value]
        return value


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class ColumnNode(ContainerNode):
    gap: Length = None

    summary: ClassVar[str] = "Vertical flex container"
    category: ClassVar[str] = "layout"


class RowNode(ContainerNode):
    gap: Length = None
    align: Literal["start", "center", "end", "stretch"] | None = None
    justify: Literal["start", "center", "end", "between", "around"] | None = None
    responsive: bool = False
    wrap: bool = False

    summary: ClassVar[str] = "Horizontal flex container"
    category: ClassVar[str] = "layout"


class BoxNode(ContainerNode):
    summary: ClassVar[str] = "Generic container"
    category: ClassVar[str] = "layout"


class CardNode(ContainerNode):
    hoverable: bool = True
    on_click: Action | None = None

    summary: ClassVar[str] = "Card container with optional click action"
    category: ClassVar[str] = "layout"


class PageNode(ContainerNode):
    title: str | None = None
    max_width: Literal["sm", "md", "lg", "xl", "2xl", "full"] = "xl"
    centered: bool = False

    summary: ClassVar[str] = "Page container with optional header"
    category: ClassVar[str] = "layout"


class NavNode(ContainerNode):
    brand: str | None = None

    summary: ClassVar[str] = "Navigation bar"
    category: ClassVar[str] = "layout"


class SpacerNode(BaseNode):
    size: Length = None
    flex: bool = True

    summary: ClassVar[str] = "Flexible spacer"
    category: ClassVar[str] = "layout"


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class TextNode(BaseNode):
    text: Text = ""
    variant: Literal["h1", "h2", "h3", "h4", "body", "caption", "label"] = "body"
    color: Literal["foreground", "muted", "primary", "destructive", "success"] = "foreground"
    weight: Literal["normal", "medium", "semibold", "bold"] | None = None

    summary: ClassVar[str] = "Text display with variants"
    category: ClassVar[str] = "content"
    required_props: ClassVar[tuple[str, ...]] = ("text",)


class ImageNode(BaseNode):
    src: str = ""
    alt: str = ""
    width: Length = None
    height: Length = None

    summary: ClassVar[str] = "Image display"
    category: ClassVar[str] = "content"
    required_props: ClassVar[tuple[str, ...]] = ("src",)


class IconNode(BaseNode):
    name: str = ""
    size: float | None = Field(default=None, gt=0)
    color: str | None = None

    summary: ClassVar[str] = "Icon display"
    category: ClassVar[str] = "content"
    required_props: ClassVar[tuple[str, ...]] = ("name",)


class DividerNode(BaseNode):
    orientation: Literal["horizontal", "vertical"] = "horizontal"

    summary: ClassVar[str] = "Visual separator"
    category: ClassVar[str] = "content"


class LinkNode(BaseNode):
    text: Text = ""
    href: Href = None
    variant: Literal["default", "muted", "primary"] = "primary"
    external: bool = False
    on_click: Action | None = None

    summary: ClassVar[str] = "Clickable link"
    category: ClassVar[str] = "content"
    required_props: ClassVar[tuple[str, ...]] = ("text",)


class MarkdownNode(BaseNode):
    content: str = ""

    summary: ClassVar[str] = "Markdown document"
    category: ClassVar[str] = "content"
    required_props: ClassVar[tuple[str, ...]] = ("content",)


# ---------------------------------------------------------------------------
# Interactive
# ---------------------------------------------------------------------------


class ButtonNode(BaseNode):
    text: Text = ""
    variant: Literal["primary", "secondary", "destructive", "ghost", "text"] = "primary"
    size: Literal["sm", "md", "lg"] = "md"
    disabled: bool = False
    on_click: Action | None = None

    summary: ClassVar[str] = "Clickable button"
    category: ClassVar[str] = "interactive"
    required_props: ClassVar[tuple[str, ...]] = ("text",)


class InputNode(BaseNode):
    value: Text = ""
    placeholder: str | None = None
    input_type: Literal["text", "password", "email", "number"] = "text"
    name: str | None = None
    on_change: Action | None = None

    summary: ClassVar[str] = "Text input field"
    category: ClassVar[str] = "interactive"


class TextareaNode(BaseNode):
    value: Text = ""
    placeholder: str | None = None
    rows: int = Field(default=4, ge=1)
    name: str | None = None
    on_change: Action | None = None

    summary: ClassVar[str] = "Multi-line text input"
    category: ClassVar[str] = "interactive"


class EditableTextNode(BaseNode):
    value: Text = ""
    placeholder: str | None = None
    variant: Literal["h1", "h2", "h3", "h4", "body", "caption"] = "body"
    multiline: bool = False
    editable: bool = True
    on_change: Action | None = None

    summary: ClassVar[str] = "Inline editable text"
    category: ClassVar[str] = "interactive"


class SelectOption(LenientModel):
    label: Text = ""
    value: Text = ""


class SelectNode(BaseNode):
    value: Text | None = None
    options: list[SelectOption] = Field(default_factory=list)
    name: str | None = None
    on_change: Action | None = None

    summary: ClassVar[str] = "Dropdown selection"
    category: ClassVar[str] = "interactive"
    required_props: ClassVar[tuple[str, ...]] = ("options",)

    @field_validator("options", mode="before")
    @classmethod
    def _skip_non_objects(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return value


class CheckboxNode(BaseNode):
    checked: bool = False
    task_id: str | None = None
    label: str | None = None
    on_change: Action | None = None

    summary: ClassVar[str] = "Checkbox input"
    category: ClassVar[str] = "interactive"


class TabItem(LenientModel):
    label: Text = ""
    content: Any = None


class TabsNode(BaseNode):
    tabs: list[TabItem] = Field(default_factory=list)
    default_tab: int = Field(default=0, ge=0)

    summary: ClassVar[str] = "Tabbed content container"
    category: ClassVar[str] = "interactive"
    required_props: ClassVar[tuple[str, ...]] = ("tabs",)

    @field_validator("tabs", mode="before")
    @classmethod
    def _skip_non_objects(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return value


class CollapsibleNode(ContainerNode):
    title: Text = ""
    default_open: bool = False

    summary: ClassVar[str] = "Expandable section"
    category: ClassVar[str] = "interactive"
    required_props: ClassVar[tuple[str, ...]] = ("title",)


class NavLinkNode(BaseNode):
    text: Text = ""
    href: Href = None
    active: bool = False
    on_click: Action | None = None

    summary: ClassVar[str] = "Navigation link"
    category: ClassVar[str] = "interactive"
    required_props: ClassVar[tuple[str, ...]] = ("text",)


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


class FormNode(ContainerNode):
    on_submit: Action | None = None

    summary: ClassVar[str] = "Form container with submit handling"
    category: ClassVar[str] = "form"


class FormFieldNode(ContainerNode):
    label: Text = ""
    required: bool = False
    error: str | None = None

    summary: ClassVar[str] = "Form field with label"
    category: ClassVar[str] = "form"
    required_props: ClassVar[tuple[str, ...]] = ("label",)


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

BadgeColor = Literal[
    "default",
    "primary",
    "success",
    "warning",
    "destructive",
    "info",
    "pending",
    "processing",
    "completed",
    "failed",
    "cancelled",
]

TaskStatus = Literal["pending", "processing", "completed", "failed", "cancelled"]


class BadgeNode(BaseNode):
    text: Text = ""
    color: BadgeColor = "default"

    summary: ClassVar[str] = "Status badge"
    category: ClassVar[str] = "feedback"
    required_props: ClassVar[tuple[str, ...]] = ("text",)


class ProgressNode(BaseNode):
    status: TaskStatus = "pending"
    value: float | None = Field(default=None, ge=0, le=100)

    summary: ClassVar[str] = "Progress indicator"
    category: ClassVar[str] = "feedback"
    required_props: ClassVar[tuple[str, ...]] = ("status",)


class ModalNode(ContainerNode):
    title: str | None = None
    open: bool = False
    on_close: Action | None = None

    summary: ClassVar[str] = "Modal dialog"
    category: ClassVar[str] = "feedback"


class AlertNode(BaseNode):
    message: Text = ""
    variant: Literal["info", "success", "warning", "error"] = "info"

    summary: ClassVar[str] = "Alert message"
    category: ClassVar[str] = "feedback"
    required_props: ClassVar[tuple[str, ...]] = ("message",)


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------


class StatChange(LenientModel):
    value: float
    direction: Literal["up", "down"]


class StatCardNode(BaseNode):
    label: Text = ""
    value: Text = ""
    change: StatChange | None = None
    icon: str | None = None

    summary: ClassVar[str] = "Single metric with optional trend"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("label", "value")


class EmptyStateNode(BaseNode):
    title: Text = ""
    description: str | None = None
    icon: str | None = None
    action_label: str | None = None
    on_action: Action | None = None

    summary: ClassVar[str] = "Empty list placeholder with optional call to action"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("title",)


class ChartDatum(LenientModel):
    label: Text = ""
    value: float = 0


class ChartBarNode(BaseNode):
    data: list[ChartDatum] = Field(default_factory=list)
    title: str | None = None
    unit: str | None = None
    color: str | None = None

    summary: ClassVar[str] = "Horizontal bar chart"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("data",)

    @field_validator("data", mode="before")
    @classmethod
    def _skip_non_objects(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return value


class PieSlice(LenientModel):
    id: Text = ""
    label: Text | None = None
    value: float = 0
    color: str | None = None


class ChartPieNode(BaseNode):
    data: Annotated[list[PieSlice], BeforeValidator(_only_objects)] = Field(default_factory=list)
    title: str | None = None
    height: int = Field(default=300, gt=0)
    inner_radius: float = Field(default=0.5, ge=0, lt=1)
    colors: list[str] | None = None

    summary: ClassVar[str] = "Pie or donut chart"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("data",)


class ChartRadarNode(BaseNode):
    data: Annotated[list[dict[str, Any]], BeforeValidator(_only_objects)] = Field(default_factory=list)
    keys: list[Text] = Field(default_factory=list)
    index_by: str = ""
    max_value: float | Literal["auto"] = "auto"
    title: str | None = None
    height: int = Field(default=300, gt=0)

    summary: ClassVar[str] = "Radar chart, one polygon per key"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("data", "keys", "indexBy")


class LinePoint(LenientModel):
    x: Text = ""
    y: float = 0


class LineSeries(LenientModel):
    id: Text = ""
    color: str | None = None
    data: Annotated[list[LinePoint], BeforeValidator(_only_objects)] = Field(default_factory=list)


class ChartLineNode(BaseNode):
    data: Annotated[list[LineSeries], BeforeValidator(_only_objects)] = Field(default_factory=list)
    title: str | None = None
    height: int = Field(default=300, gt=0)
    x_legend: str | None = None
    y_legend: str | None = None
    enable_points: bool = True
    enable_area: bool = False

    summary: ClassVar[str] = "Line or area chart"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("data",)


class RadialBarSegment(LenientModel):
    x: Text = ""
    y: float = 0


class RadialBarTrack(LenientModel):
    id: Text = ""
    data: Annotated[list[RadialBarSegment], BeforeValidator(_only_objects)] = Field(default_factory=list)


class ChartRadialBarNode(BaseNode):
    data: Annotated[list[RadialBarTrack], BeforeValidator(_only_objects)] = Field(default_factory=list)
    title: str | None = None
    height: int = Field(default=200, gt=0)
    max_value: float = Field(default=100, gt=0)
    start_angle: float = 0
    end_angle: float = 360

    summary: ClassVar[str] = "Radial bar gauge, one ring per track"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("data",)


class WordWeight(LenientModel):
    text: Text = ""
    value: float = 0


class ChartWordCloudNode(BaseNode):
    words: Annotated[list[WordWeight], BeforeValidator(_only_objects)] = Field(default_factory=list)
    title: str | None = None
    height: int = Field(default=200, gt=0)
    colors: list[str] | None = None

    summary: ClassVar[str] = "Word cloud sized by weight"
    category: ClassVar[str] = "ext"
    required_props: ClassVar[tuple[str, ...]] = ("words",)


# ---------------------------------------------------------------------------
# Tag → model
# ---------------------------------------------------------------------------

NODE_MODELS: dict[str, type[BaseNode]] = {
    # layout
    "column": ColumnNode,
    "row": RowNode,
    "container": BoxNode,
    "card": CardNode,
    "page": PageNode,
    "nav": NavNode,
    "spacer": SpacerNode,
    # content
    "text": TextNode,
    "image": ImageNode,
    "icon": IconNode,
    "divider": DividerNode,
    "link": LinkNode,
    "markdown": MarkdownNode,
    # interactive
    "button": ButtonNode,
    "input": InputNode,
    "textarea": TextareaNode,
    "editable-text": EditableTextNode,
    "select": SelectNode,
    "checkbox": CheckboxNode,
    "tabs": TabsNode,
    "collapsible": CollapsibleNode,
    "nav-link": NavLinkNode,
    # form
    "form": FormNode,
    "form-field": FormFieldNode,
    # feedback
    "badge": BadgeNode,
    "progress": ProgressNode,
    "modal": ModalNode,
    "alert": AlertNode,
    # ext
    "stat-card": StatCardNode,
    "empty-state": EmptyStateNode,
    "chart-bar": ChartBarNode,
    "chart-pie": ChartPieNode,
    "chart-radar": ChartRadarNode,
    "chart-line": ChartLineNode,
    "chart-radial-bar": ChartRadialBarNode,
    "chart-word-cloud": ChartWordCloudNode,
}

NODE_TYPES: frozenset[str] = frozenset(NODE_MODELS)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def node_type_of(data: Any) -> str | None:
    """The `type` tag of a raw or parsed node, or None if it has none."""
    if isinstance(data, BaseNode):
        return data.type
    if isinstance(data, dict):
        tag = data.get("type")
        if isinstance(tag, str) and tag:
            return tag
    return None


def parse_node(data: Any, model: type[BaseNode] | None = None) -> BaseNode:
    """
    Validate one node. `data` must be a dict with a string `type`.
    Malformed fields fall back to defaults; this never raises for such input.
    """
    if isinstance(data, BaseNode):
        return data
    cls = model or NODE_MODELS.get(data.get("type"), BaseNode)
    return cls.model_validate(data)


def parse_action(data: Any) -> Action | None:
    if isinstance(data, Action):
        return data
    if not isinstance(data, dict):
        return None
    try:
        return Action.model_validate(data)
    except ValidationError:
        return None


def dump_node(node: BaseNode) -> dict[str, Any]:
    """Wire form of a parsed node: camelCase keys, defaults omitted."""
    return node.model_dump(by_alias=True, exclude_defaults=True, mode="json")


def to_jsonable(tree: Any) -> Any:
    """Convert a tree that may mix parsed nodes and raw dicts into plain JSON data."""
    if isinstance(tree, BaseModel):
        return tree.model_dump(by_alias=True, exclude_defaults=True, mode="json")
    if isinstance(tree, dict):
        return {k: to_jsonable(v) for k, v in tree.items()}
    if isinstance(tree, (list, tuple)):
        return [to_jsonable(v) for v in tree]
    return tree


def dumps(tree: Any) -> str:
    return json.dumps(to_jsonable(tree), ensure_ascii=False, sort_keys=True)


def loads(text: str | bytes) -> Any:
    return json.loads(text)


def walk(tree: Any) -> Iterator[dict[str, Any]]:
    """Yield every raw node dict in a tree: children and tab contents included."""
    if isinstance(tree, list):
        for item in tree:
            yield from walk(item)
        return
    if isinstance(tree, BaseNode):
        tree = to_jsonable(tree)
    if not isinstance(tree, dict):
        return
    yield tree
    children = tree.get("children")
    if isinstance(children, (list, dict)):
        yield from walk(children)
    tabs = tree.get("tabs")
    if isinstance(tabs, list):
        for tab in tabs:
            if isinstance(tab, dict):
                yield from walk(tab.get("content"))

"""Extension components: stat-card, empty-state and the charts."""

from __future__ import annotations

import math
from typing import Any

from engine.a2ui.components._helpers import base_attrs, bind_action, format_number
from engine.a2ui.schema import (
    BaseNode,
    ChartBarNode,
    ChartLineNode,
    ChartPieNode,
    ChartRadarNode,
    ChartRadialBarNode,
    ChartWordCloudNode,
    EmptyStateNode,
    StatCardNode,
)
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element


def render_stat_card(node: StatCardNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    head: list[Element] = [Element("span", {"class": "a2ui-stat-label"}, [node.label])]
    if node.icon:
        head.append(Element("span", {"class": "a2ui-stat-icon", "aria-hidden": "true"}, [node.icon]))
    parts: list[Element] = [
        Element("div", {"class": "a2ui-stat-head"}, head),
        Element("div", {"class": "a2ui-stat-value"}, [node.value]),
    ]
    if node.change is not None:
        arrow = "↑" if node.change.direction == "up" else "↓"
        parts.append(
            Element(
                "div",
                {"class": f"a2ui-stat-change a2ui-stat-change--{node.change.direction}"},
                [f"{arrow} {format_number(abs(node.change.value))}%"],
            )
        )
    return Element("div", base_attrs(node, "a2ui-card", "a2ui-stat-card"), parts)


def render_empty_state(node: EmptyStateNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    parts: list[Element] = []
    if node.icon:
        parts.append(Element("span", {"class": "a2ui-empty-icon", "aria-hidden": "true"}, [node.icon]))
    parts.append(Element("h3", {"class": "a2ui-empty-title"}, [node.title]))
    if node.description:
        parts.append(Element("p", {"class": "a2ui-empty-description"}, [node.description]))
    if node.action_label and node.on_action:
        button = Element("button", {"type": "button", "class": "a2ui-button a2ui-button--primary a2ui-button--md"}, [node.action_label])
        bind_action(button, "click", node.on_action, on_action)
        parts.append(button)
    return Element("div", base_attrs(node, "a2ui-empty-state"), parts)


def render_chart_bar(node: ChartBarNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    parts: list[Element] = []
    if node.title:
        parts.append(Element("h4", {"class": "a2ui-chart-title"}, [node.title]))

    peak = max((d.value for d in node.data), default=0)
    suffix = f" {node.unit}" if node.unit else ""
    rows: list[Element] = []
    for datum in node.data:
        share = (datum.value / peak * 100) if peak > 0 else 0
        fill_style = {"width": f"{max(share, 0):.1f}%"}
        if node.color:
            fill_style["background"] = node.color
        rows.append(
            Element(
                "div",
                {"class": "a2ui-bar-row"},
                [
                    Element("span", {"class": "a2ui-bar-label"}, [datum.label]),
                    Element("div", {"class": "a2ui-bar-track"}, [Element("div", {"class": "a2ui-bar-fill", "style": fill_style})]),
                    Element("span", {"class": "a2ui-bar-value"}, [f"{format_number(datum.value)}{suffix}"]),
                ],
            )
        )
    if not rows:
        rows.append(Element("p", {"class": "a2ui-empty"}, ["No data"]))
    parts.append(Element("div", {"class": "a2ui-bar-chart", "role": "list"}, rows))
    return Element("figure", base_attrs(node, "a2ui-chart"), parts)


# ---------------------------------------------------------------------------
# SVG charts
# ---------------------------------------------------------------------------

CHART_COLORS: tuple[str, ...] = ("#6366f1", "#22c55e", "#f59e0b", "#ec4899", "#06b6d4")
TRACK_COLOR = "#f1f0fb"
GRID_COLOR = "#e0e0e0"
MAX_CLOUD_WORDS = 30


def _n(value: float) -> str:
    return format_number(round(value, 2))


def _palette(colors: list[str] | None) -> list[str] | tuple[str, ...]:
    return colors or CHART_COLORS


def _percent(share: float) -> str:
    return f"{format_number(round(share * 100, 1))}%"


def _polar(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    """Angles in degrees, 0 at twelve o'clock, clockwise."""
    rad = math.radians(angle)
    return cx + radius * math.sin(rad), cy - radius * math.cos(rad)


def _arc(cx: float, cy: float, radius: float, start: float, end: float, color: str, width: float) -> Element:
    """Stroked arc; a full turn becomes a circle since SVG arcs cannot close on themselves."""
    attrs: dict[str, Any] = {"fill": "none", "stroke": color, "stroke-width": _n(width)}
    if end - start >= 359.99:
        return Element("circle", {"cx": _n(cx), "cy": _n(cy), "r": _n(radius), **attrs})
    x0, y0 = _polar(cx, cy, radius, start)
    x1, y1 = _polar(cx, cy, radius, end)
    large = 1 if end - start > 180 else 0
    attrs["d"] = f"M {_n(x0)} {_n(y0)} A {_n(radius)} {_n(radius)} 0 {large} 1 {_n(x1)} {_n(y1)}"
    return Element("path", attrs)


def _tooltip(text: str) -> Element:
    return Element("title", {}, [text])


def _svg(width: float, height: float, label: str) -> Element:
    return Element(
        "svg",
        {
            "class": "a2ui-chart-svg",
            "viewBox": f"0 0 {_n(width)} {_n(height)}",
            "width": "100%",
            "height": _n(height),
            "role": "img",
            "aria-label": label,
        },
    )


def _rule(x1: float, y1: float, x2: float, y2: float) -> Element:
    return Element("line", {"x1": _n(x1), "y1": _n(y1), "x2": _n(x2), "y2": _n(y2), "stroke": GRID_COLOR})


def _label(x: float, y: float, text: str, *, anchor: str = "middle", css: str = "a2ui-chart-axis") -> Element:
    return Element("text", {"class": css, "x": _n(x), "y": _n(y), "text-anchor": anchor}, [text])


def _points(coords: list[tuple[float, float]]) -> str:
    return " ".join(f"{_n(x)},{_n(y)}" for x, y in coords)


def _legend(items: list[tuple[str, str]]) -> Element:
    entries = [
        Element(
            "li",
            {"class": "a2ui-chart-legend-item"},
            [Element("span", {"class": "a2ui-chart-swatch", "style": {"background": color}}), label],
        )
        for color, label in items
    ]
    return Element("ul", {"class": "a2ui-chart-legend"}, entries)


def _figure(node: BaseNode, kind: str, body: list[Element]) -> Element:
    parts: list[Element] = []
    title = getattr(node, "title", None)
    if title:
        parts.append(Element("h4", {"class": "a2ui-chart-title"}, [title]))
    parts.extend(body)
    return Element("figure", base_attrs(node, "a2ui-chart", f"a2ui-chart--{kind}"), parts)


def _no_data() -> Element:
    return Element("p", {"class": "a2ui-empty"}, ["No data"])


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def render_chart_pie(node: ChartPieNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    slices = [s for s in node.data if s.value > 0]
    total = sum(s.value for s in slices)
    if total <= 0:
        return _figure(node, "pie", [_no_data()])

    size = node.height
    center = size / 2
    outer = max(center - 4, 1)
    inner = outer * node.inner_radius
    band = outer - inner
    palette = _palette(node.colors)

    svg = _svg(size, size, node.title or "Pie chart")
    legend: list[tuple[str, str]] = []
    angle = 0.0
    for i, item in enumerate(slices):
        span = item.value / total * 360
        color = item.color or palette[i % len(palette)]
        label = item.label or item.id
        arc = _arc(center, center, inner + band / 2, angle, angle + span, color, band)
        arc.append(_tooltip(f"{label}: {format_number(item.value)}"))
        svg.append(arc)
        legend.append((color, f"{label} {_percent(item.value / total)}"))
        angle += span
    return _figure(node, "pie", [svg, _legend(legend)])


def render_chart_radar(node: ChartRadarNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    rows, keys = node.data, node.keys
    if not rows or not keys:
        return _figure(node, "radar", [_no_data()])

    values = [[_as_number(row.get(key)) for key in keys] for row in rows]
    if isinstance(node.max_value, (int, float)) and node.max_value > 0:
        peak = float(node.max_value)
    else:
        peak = max((v for row in values for v in row), default=0.0)
    if peak <= 0:
        peak = 1.0

    size = node.height
    center = size / 2
    radius = max(center - 40, 10)
    step = 360 / len(rows)

    svg = _svg(size, size, node.title or "Radar chart")
    for level in range(1, 6):
        svg.append(
            Element(
                "circle",
                {"cx": _n(center), "cy": _n(center), "r": _n(radius * level / 5), "fill": "none", "stroke": GRID_COLOR},
            )
        )
    for i, row in enumerate(rows):
        svg.append(_rule(center, center, *_polar(center, center, radius, i * step)))
        label = row.get(node.index_by, i) if node.index_by else i
        svg.append(_label(*_polar(center, center, radius + 16, i * step), str(label)))

    legend: list[tuple[str, str]] = []
    for j, key in enumerate(keys):
        color = CHART_COLORS[j % len(CHART_COLORS)]
        shape = [
            _polar(center, center, radius * min(max(row_values[j] / peak, 0.0), 1.0), i * step)
            for i, row_values in enumerate(values)
        ]
        polygon = Element(
            "polygon",
            {"points": _points(shape), "fill": color, "fill-opacity": "0.25", "stroke": color, "stroke-width": "2"},
        )
        polygon.append(_tooltip(key))
        svg.append(polygon)
        legend.append((color, key))
    return _figure(node, "radar", [svg, _legend(legend)])


def render_chart_line(node: ChartLineNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    xs: list[str] = []
    for series in node.data:
        for point in series.data:
            if point.x not in xs:
                xs.append(point.x)
    ys = [point.y for series in node.data for point in series.data]
    if not xs:
        return _figure(node, "line", [_no_data()])

    width, height = 600, node.height
    left, right, top, bottom = 60, 20, 20, 50
    plot_w = width - left - right
    plot_h = max(height - top - bottom, 1)
    lo, hi = min(ys), max(ys)
    if hi == lo:
        hi = lo + 1

    def sx(x: str) -> float:
        if len(xs) == 1:
            return left + plot_w / 2
        return left + xs.index(x) / (len(xs) - 1) * plot_w

    def sy(y: float) -> float:
        return top + (hi - y) / (hi - lo) * plot_h

    baseline = top + plot_h
    middle = top + plot_h / 2
    svg = _svg(width, height, node.title or "Line chart")
    svg.append(_rule(left, baseline, width - right, baseline))
    svg.append(_rule(left, top, left, baseline))
    for x in xs:
        svg.append(_label(sx(x), baseline + 16, x))
    for value, y in ((hi, top), (lo, baseline)):
        svg.append(_label(left - 6, y, _n(value), anchor="end"))
    if node.x_legend:
        svg.append(_label(left + plot_w / 2, height - 6, node.x_legend, css="a2ui-chart-legend-text"))
    if node.y_legend:
        caption = _label(12, middle, node.y_legend, css="a2ui-chart-legend-text")
        caption.attrs["transform"] = f"rotate(-90 12 {_n(middle)})"
        svg.append(caption)

    legend: list[tuple[str, str]] = []
    for i, series in enumerate(node.data):
        if not series.data:
            continue
        color = series.color or CHART_COLORS[i % len(CHART_COLORS)]
        coords = [(sx(p.x), sy(p.y)) for p in series.data]
        if node.enable_area:
            area = [*coords, (coords[-1][0], baseline), (coords[0][0], baseline)]
            svg.append(
                Element(
                    "polygon",
                    {
                        "class": "a2ui-chart-area",
                        "points": _points(area),
                        "fill": color,
                        "fill-opacity": "0.15",
                        "stroke": "none",
                    },
                )
            )
        svg.append(Element("polyline", {"points": _points(coords), "fill": "none", "stroke": color, "stroke-width": "2"}))
        if node.enable_points:
            for point, (x, y) in zip(series.data, coords, strict=True):
                dot = Element("circle", {"cx": _n(x), "cy": _n(y), "r": "4", "fill": "#fff", "stroke": color, "stroke-width": "2"})
                dot.append(_tooltip(f"{series.id} {point.x}: {format_number(point.y)}"))
                svg.append(dot)
        legend.append((color, series.id))
    return _figure(node, "line", [svg, _legend(legend)])


def render_chart_radial_bar(node: ChartRadialBarNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    tracks = [track for track in node.data if track.data]
    if not tracks:
        return _figure(node, "radial-bar", [_no_data()])

    sweep = node.end_angle - node.start_angle
    if sweep <= 0 or sweep > 360:
        sweep = 360.0
    start = node.start_angle

    size = node.height
    center = size / 2
    outer = max(center - 8, 1)
    inner = outer * 0.3
    band = (outer - inner) / len(tracks)
    bar = band * 0.6

    svg = _svg(size, size, node.title or "Radial bar chart")
    legend: dict[str, str] = {}
    for i, track in enumerate(tracks):
        radius = outer - band * i - band / 2
        svg.append(_arc(center, center, radius, start, start + sweep, TRACK_COLOR, bar))
        angle = start
        for j, segment in enumerate(track.data):
            remaining = start + sweep - angle
            span = min(max(segment.y, 0) / node.max_value * sweep, remaining)
            color = CHART_COLORS[j % len(CHART_COLORS)]
            legend.setdefault(segment.x, color)
            if span <= 0:
                continue
            arc = _arc(center, center, radius, angle, angle + span, color, bar)
            arc.append(_tooltip(f"{track.id} {segment.x}: {format_number(segment.y)}"))
            svg.append(arc)
            angle += span
    return _figure(node, "radial-bar", [svg, _legend([(color, label) for label, color in legend.items()])])


def render_chart_word_cloud(node: ChartWordCloudNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    words = sorted(node.words, key=lambda w: w.value, reverse=True)
    if not words:
        return _figure(node, "word-cloud", [_no_data()])

    hi, lo = words[0].value, words[-1].value
    spread = (hi - lo) or 1
    palette = _palette(node.colors)
    spans: list[Element] = []
    for i, word in enumerate(words[:MAX_CLOUD_WORDS]):
        font_size = 12 + (word.value - lo) / spread * 20
        spans.append(
            Element(
                "span",
                {
                    "class": "a2ui-word",
                    "title": f"{word.text}: {format_number(word.value)}",
                    "style": {
                        "fontSize": f"{_n(font_size)}px",
                        "color": palette[i % len(palette)],
                        "fontWeight": 600 if word.value > hi * 0.7 else 400,
                    },
                },
                [word.text],
            )
        )
    cloud = Element("div", {"class": "a2ui-word-cloud", "style": {"height": f"{node.height}px"}}, spans)
    return _figure(node, "word-cloud", [cloud])

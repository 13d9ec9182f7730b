"""Plotly rendering of a finalized :class:`~layerchart.chart_config.ChartConfig`.

Purpose
-------
This module is the drawing collaborator of the layer pipeline. It maps marks,
scales, axes, tooltip, legend, padding and interactions onto a
``plotly.graph_objects.Figure``. The pipeline never inspects the figure; only
``afterRender`` responsive methods and the notebook pane do.

Concepts
--------
- Records are plain mappings. When the series field of a mark exists in the
  data, records are split into one trace per series value, in order of first
  appearance. Otherwise one trace is drawn in the mark color, or the first
  palette color when no valid color was requested.
- Area marks own the legend entries; guide marks (line, point) share the
  legend group of their series and never add entries of their own.
- A tooltip ``callback`` receives the values of the tooltip fields as
  positional arguments and may return a string or a ``{"name", "value"}``
  mapping.

Important gotchas
-----------------
- Plotly has no native "scrollbar"; both slider and scrollbar interactions
  are drawn as an x range slider with an initial window.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import plotly.colors
import plotly.graph_objects as go
from _plotly_utils.basevalidators import ColorValidator

from .chart_config import ChartConfig
from .components import LabelComponent
from .marks import Mark
from .options import expand_padding

logger = logging.getLogger(__name__)

PALETTE: tuple[str, ...] = tuple(plotly.colors.qualitative.Plotly)

SCALE_TO_AXIS_TYPE: dict[str, str] = {
    "cat": "category",
    "time": "date",
    "timeCat": "category",
    "linear": "linear",
    "log": "log",
}

POINT_SYMBOLS: dict[str, str] = {
    "point": "circle",
    "circle": "circle",
    "square": "square",
    "diamond": "diamond",
    "triangle": "triangle-up",
    "triangle-down": "triangle-down",
    "cross": "cross",
}

LABEL_POSITIONS: dict[str, str] = {
    "top": "top center",
    "bottom": "bottom center",
    "left": "middle left",
    "right": "middle right",
    "middle": "middle center",
}

DEFAULT_SCROLLBAR_CATEGORY_SIZE = 32


def _legend_layout(position: str) -> dict[str, Any]:
    side, _, align = position.partition("-")
    align = align or "center"
    if side in ("top", "bottom"):
        x = {"left": 0.0, "center": 0.5, "right": 1.0}.get(align, 0.5)
        return {
            "orientation": "h",
            "x": x,
            "xanchor": align if align in ("left", "right") else "center",
            "y": 1.02 if side == "top" else -0.15,
            "yanchor": "bottom" if side == "top" else "top",
        }
    y = {"top": 1.0, "center": 0.5, "bottom": 0.0}.get(align, 0.5)
    return {
        "orientation": "v",
        "x": -0.12 if side == "left" else 1.02,
        "xanchor": "right" if side == "left" else "left",
        "y": y,
        "yanchor": {"top": "top", "bottom": "bottom"}.get(align, "middle"),
    }


def _series_groups(mark: Mark, data: Sequence[Mapping[str, Any]]) -> list[tuple[Any, list[Mapping[str, Any]]]]:
    field = mark.series
    if field and any(field in row for row in data):
        groups: dict[Any, list[Mapping[str, Any]]] = {}
        for row in data:
            groups.setdefault(row.get(field), []).append(row)
        return list(groups.items())
    return [(None, list(data))]


def _literal_color(value: Any) -> str | None:
    """Return ``value`` if Plotly accepts it as a single color, else None."""
    if not isinstance(value, str):
        return None
    if ColorValidator.perform_validate_coerce(value) is None:
        return None
    return value


def _group_color(mark: Mark, series: Any, index: int) -> str:
    if series is None:
        color = _literal_color(mark.color)
        if color is not None:
            return color
    return PALETTE[index % len(PALETTE)]


def _style(mark: Mark, series: Any) -> Mapping[str, Any]:
    style = mark.style
    if callable(style):
        style = style(series)
    return style or {}


def _label_text(label: LabelComponent, rows: Sequence[Mapping[str, Any]]) -> list[str]:
    texts = []
    for row in rows:
        values = [row.get(name) for name in label.fields]
        if label.formatter is not None:
            texts.append(str(label.formatter(*values)))
        else:
            texts.append(" ".join("" if v is None else str(v) for v in values))
    return texts


def _tooltip_text(callback: Any, values: Sequence[Any]) -> str:
    result = callback(*values)
    if isinstance(result, Mapping):
        return f"{result.get('name', '')}: {result.get('value', '')}"
    return str(result)


def _apply_tooltip(trace: dict[str, Any], mark: Mark, rows: Sequence[Mapping[str, Any]]) -> None:
    tooltip = mark.tooltip or {}
    fields = list(tooltip.get("fields") or [])
    callback = tooltip.get("callback")
    if callback is not None:
        trace["hovertext"] = [
            _tooltip_text(callback, [row.get(name) for name in fields]) for row in rows
        ]
        trace["hoverinfo"] = "text"
    elif fields:
        trace["customdata"] = [[row.get(name) for name in fields] for row in rows]
        lines = [f"{name}: %{{customdata[{idx}]}}" for idx, name in enumerate(fields)]
        trace["hovertemplate"] = "<br>".join(lines) + "<extra></extra>"


def _mark_traces(mark: Mark, data: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    x_field, y_field = mark.position
    traces = []
    for index, (series, rows) in enumerate(_series_groups(mark, data)):
        color = _group_color(mark, series, index)
        style = _style(mark, series)
        name = str(series) if series is not None else y_field
        trace: dict[str, Any] = {
            "x": [row.get(x_field) for row in rows],
            "y": [row.get(y_field) for row in rows],
            "name": name,
            "legendgroup": name,
            "showlegend": mark.type == "area" and series is not None,
        }
        shape = "spline" if mark.shape == "smooth" else "linear"
        if mark.type == "area":
            trace.update(
                mode="lines",
                fill="tozeroy",
                fillcolor=color,
                line={"width": 0, "shape": shape, "color": color},
                opacity=style.get("opacity"),
            )
        elif mark.type == "line":
            trace.update(
                mode="lines",
                line={"width": mark.size, "shape": shape, "color": color},
                opacity=style.get("opacity"),
                hoverinfo="skip",
            )
        elif mark.type == "point":
            trace.update(
                mode="markers",
                marker={
                    "size": mark.size,
                    "color": color,
                    "symbol": POINT_SYMBOLS.get(mark.shape or "point", "circle"),
                },
                opacity=style.get("opacity"),
                hoverinfo="skip",
            )
        else:
            raise ValueError(f"Cannot render mark type {mark.type!r}")

        if isinstance(mark.label, LabelComponent):
            trace["mode"] = trace["mode"] + "+text"
            trace["text"] = _label_text(mark.label, rows)
            trace["textposition"] = LABEL_POSITIONS.get(mark.label.position, "top center")
        if mark.type == "area":
            _apply_tooltip(trace, mark, rows)
        traces.append({k: v for k, v in trace.items() if v is not None})
    return traces


def _axis_layout(scale: Mapping[str, Any], axis: Any) -> dict[str, Any]:
    layout: dict[str, Any] = {}
    scale_type = scale.get("type")
    if scale_type in SCALE_TO_AXIS_TYPE:
        layout["type"] = SCALE_TO_AXIS_TYPE[scale_type]
    if "min" in scale and "max" in scale:
        layout["range"] = [scale["min"], scale["max"]]
    if "tickCount" in scale:
        layout["nticks"] = int(scale["tickCount"])
    if "tickInterval" in scale:
        layout["dtick"] = scale["tickInterval"]
    if scale.get("alias"):
        layout["title"] = {"text": scale["alias"]}
    if axis is False:
        layout["visible"] = False
        return layout
    if isinstance(axis, Mapping):
        layout["visible"] = axis.get("visible", True)
        layout["showgrid"] = bool((axis.get("grid") or {}).get("visible", False))
        layout["showline"] = bool((axis.get("line") or {}).get("visible", False))
        layout["ticks"] = "outside" if (axis.get("tickLine") or {}).get("visible") else ""
        label_cfg = axis.get("label") or {}
        layout["showticklabels"] = label_cfg.get("visible", True)
        if label_cfg.get("autoRotate") is False:
            layout["tickangle"] = 0
        title_cfg = axis.get("title") or {}
        if title_cfg.get("visible") and "title" not in layout:
            layout["title"] = {"text": title_cfg.get("text", "")}
    return layout


def _margin(padding: Any) -> dict[str, Any] | None:
    if padding == "auto" or padding is None:
        return None
    top, right, bottom, left = expand_padding(padding)
    return {"t": top, "r": right, "b": bottom, "l": left, "autoexpand": False}


def _apply_interactions(
    layout: dict[str, Any],
    interactions: Sequence[Mapping[str, Any]],
    *,
    category_count: int,
    plot_width: float,
) -> None:
    x_axis = layout.setdefault("xaxis", {})
    last = max(category_count - 1, 0)
    for interaction in interactions:
        kind = interaction.get("type")
        cfg = interaction.get("cfg") or {}
        if kind == "slider":
            start = float(cfg.get("start", 0.0))
            end = float(cfg.get("end", 1.0))
            x_axis["rangeslider"] = {"visible": True}
            x_axis["range"] = [start * last - 0.5, end * last + 0.5]
        elif kind == "scrollBar":
            size = float(cfg.get("categorySize", DEFAULT_SCROLLBAR_CATEGORY_SIZE))
            visible = max(1, int(plot_width // size))
            x_axis["rangeslider"] = {"visible": True, "thickness": 0.06}
            x_axis["range"] = [-0.5, min(visible, category_count) - 0.5]


def render_chart(
    config: ChartConfig,
    data: Sequence[Mapping[str, Any]],
    *,
    width: int,
    height: int,
    plot_width: float | None = None,
) -> go.Figure:
    """Draw ``config`` over ``data`` and return a new Plotly figure."""
    traces: list[dict[str, Any]] = []
    for mark in config.geometries:
        traces.extend(_mark_traces(mark, data))

    layout: dict[str, Any] = {"width": width, "height": height}
    if config.geometries:
        x_field, y_field = config.geometries[0].position
        axes = config.axes
        layout["xaxis"] = _axis_layout(config.scales.get(x_field, {}), axes.get("x"))
        layout["yaxis"] = _axis_layout(config.scales.get(y_field, {}), axes.get("y"))
        category_count = len({row.get(x_field) for row in data})
    else:
        category_count = 0

    tooltip = config.tooltip
    if tooltip is False:
        layout["hovermode"] = False
    elif isinstance(tooltip, Mapping):
        layout["hovermode"] = "x unified" if tooltip.get("shared") else "closest"
        if tooltip.get("showCrosshairs"):
            crosshair = (tooltip.get("crosshairs") or {}).get("type", "x")
            if "x" in crosshair:
                layout.setdefault("xaxis", {})["showspikes"] = True
            if "y" in crosshair:
                layout.setdefault("yaxis", {})["showspikes"] = True

    legends = config.legends
    if legends is False:
        layout["showlegend"] = False
    elif isinstance(legends, Mapping):
        layout["showlegend"] = True
        layout["legend"] = _legend_layout(str(legends.get("position", "bottom-center")))

    margin = _margin(config.padding)
    if margin is not None:
        layout["margin"] = margin

    if config.title.get("visible"):
        layout["title"] = {"text": config.title.get("text", "")}

    if config.animate:
        layout["transition"] = {"duration": 400, "easing": "cubic-in-out"}

    _apply_interactions(
        layout,
        config.interactions,
        category_count=category_count,
        plot_width=plot_width if plot_width is not None else float(width),
    )

    logger.debug("render_chart: %d trace(s) from %d mark(s)", len(traces), len(config.geometries))
    return go.Figure(data=[go.Scatter(**trace) for trace in traces], layout=layout)


__all__ = ["PALETTE", "render_chart"]

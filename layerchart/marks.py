"""Mark records and the default geometry factory.

Purpose
-------
A :class:`Mark` is the abstract description of one visual element (area, line
or point) before it is drawn. The layer pipeline only reads and writes three of
its slots (``label``, ``tooltip``, ``animate``); everything else is filled in by
:func:`create_mark` from the layer options and consumed by the renderer.

Architecture notes
------------------
- ``create_mark`` is the geometry collaborator. It resolves fields lazily from
  ``context["plot"].options`` so a mark built for a layer always reflects the
  options of the pass that created it.
- :class:`MarkAdjuster` is the extension capability for chart types that share
  the area pipeline. Pass an instance to the layer instead of subclassing when
  only the mark post-processing differs.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

MarkKind = Literal["area", "line", "point"]
MarkRole = Literal["main", "guide"]


@dataclass
class Mark:
    """Geometry description produced by :func:`create_mark`.

    ``series`` names the data field that splits records into series;
    ``color`` is a literal color requested by the user, never a field name.
    ``label`` is ``None`` while unset, ``False`` when disabled, or a label
    component. ``animate`` is ``None`` unless a stage forces it off.
    """

    type: str
    role: str
    position: tuple[str, str]
    series: Optional[str] = None
    color: Optional[str] = None
    shape: Optional[str] = None
    size: Optional[float] = None
    style: Any = field(default_factory=dict)
    label: Any = None
    tooltip: dict[str, Any] = field(default_factory=dict)
    animate: Optional[bool] = None


class MarkAdjuster:
    """No-op mark post-processing hooks.

    Each hook receives the freshly created mark before it is registered and may
    change its configuration. Hooks must not add or remove marks.
    """

    def adjust_area(self, area: Mark) -> None:
        return None

    def adjust_line(self, line: Mark) -> None:
        return None

    def adjust_point(self, point: Mark) -> None:
        return None


def _color_of(options: Mapping[str, Any], block: Mapping[str, Any] | None = None) -> Optional[str]:
    if block and block.get("color"):
        return block["color"]
    return options.get("color")


def _style_of(value: Any) -> Any:
    if callable(value):
        return value
    return copy.deepcopy(value) if value else {}


def _build_area(options: Mapping[str, Any], context: Mapping[str, Any]) -> Mark:
    return Mark(
        type="area",
        role="main",
        position=(options["xField"], options["yField"]),
        series=options.get("seriesField"),
        color=_color_of(options),
        shape="smooth" if options.get("smooth") else "area",
        style=_style_of(options.get("areaStyle")),
    )


def _build_line(options: Mapping[str, Any], context: Mapping[str, Any]) -> Mark:
    line_cfg = context.get("line")
    if line_cfg is None:
        line_cfg = copy.deepcopy(options.get("line") or {})
    style = line_cfg.get("style")
    return Mark(
        type="line",
        role="guide",
        position=(options["xField"], options["yField"]),
        series=options.get("seriesField"),
        color=_color_of(options, line_cfg),
        shape="smooth" if options.get("smooth") else "line",
        size=line_cfg.get("size"),
        style=style if style is not None else {},
    )


def _build_point(options: Mapping[str, Any], context: Mapping[str, Any]) -> Mark:
    point_cfg = context.get("point")
    if point_cfg is None:
        point_cfg = copy.deepcopy(options.get("point") or {})
    style = point_cfg.get("style")
    return Mark(
        type="point",
        role="guide",
        position=(options["xField"], options["yField"]),
        series=options.get("seriesField"),
        color=_color_of(options, point_cfg),
        shape=point_cfg.get("shape", "point"),
        size=point_cfg.get("size"),
        style=style if style is not None else {},
    )


_BUILDERS: dict[tuple[str, str], Callable[[Mapping[str, Any], Mapping[str, Any]], Mark]] = {
    ("area", "main"): _build_area,
    ("line", "guide"): _build_line,
    ("point", "guide"): _build_point,
}


def create_mark(kind: MarkKind, role: MarkRole, context: Mapping[str, Any]) -> Mark:
    """Create the mark ``kind`` in ``role`` for ``context["plot"]``.

    Raises
    ------
    KeyError
        For an unknown ``(kind, role)`` pair or a missing ``plot`` entry.
    """
    builder = _BUILDERS.get((kind, role))
    if builder is None:
        raise KeyError(f"No geometry builder for kind={kind!r}, role={role!r}")
    plot = context["plot"]
    return builder(plot.options, context)


__all__ = ["Mark", "MarkAdjuster", "MarkKind", "MarkRole", "create_mark"]

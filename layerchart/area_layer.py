"""Area chart layer: area mark with optional line and point guides.

Purpose
-------
``AreaLayer`` implements the area chart on top of :class:`ViewLayer`. It
derives the two scales, assembles the marks in a fixed order, attaches label
and tooltip configuration to the area mark, forces animation off when asked,
and runs the responsive stages around the render.

Assembly order
--------------
1. area mark
2. label step, when a ``label`` block is present
3. tooltip step, when ``tooltip`` declares ``fields`` or a ``formatter``
4. ``adjust_area``
5. register area
6. line guide (if ``line.visible``), built from a deep copy of ``line``
7. point guide (if ``point.visible``), built from a deep copy of ``point``

Extension
---------
Chart types sharing this pipeline pass a :class:`~layerchart.marks.MarkAdjuster`
through ``adjuster=``. Subclassing and overriding ``adjust_area``,
``adjust_line`` or ``adjust_point`` works as well.

Examples
--------
>>> from layerchart.area_layer import AreaLayer
>>> layer = AreaLayer(xField="t", yField="v", data=[{"t": "a", "v": 1}])
>>> config = layer.init()
>>> [mark.type for mark in config.geometries]
['area', 'line']
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any, Optional

from .components import create_component
from .events import AREA_EVENT_MAP, EventTranslation
from .marks import Mark, MarkAdjuster, create_mark
from .options import area_default_options
from .responsive import (
    AFTER_RENDER,
    AREA_RESPONSIVE,
    PRE_RENDER,
    ResponsiveRegistry,
    apply_responsive,
)
from .scales import derive_scales, extract_scale
from .view_layer import ViewLayer

GEOM_MAP: dict[str, str] = {
    "area": "area",
    "line": "line",
    "point": "point",
}


class AreaLayer(ViewLayer):
    """Area chart layer."""

    type = "area"
    event_parser = AREA_EVENT_MAP

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        adjuster: Optional[MarkAdjuster] = None,
        geometry_factory: Callable[..., Mark] = create_mark,
        component_factory: Callable[..., Any] = create_component,
        scale_extractor: Callable[[dict[str, Any], Any], None] = extract_scale,
        responsive_registry: Optional[ResponsiveRegistry] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(options, **kwargs)
        self.adjuster = adjuster if adjuster is not None else MarkAdjuster()
        self._geometry_factory = geometry_factory
        self._component_factory = component_factory
        self._scale_extractor = scale_extractor
        self.responsive_registry = (
            responsive_registry if responsive_registry is not None else AREA_RESPONSIVE
        )
        self.area: Optional[Mark] = None
        self.line: Optional[Mark] = None
        self.point: Optional[Mark] = None

    @classmethod
    def default_options(cls) -> dict[str, Any]:
        return area_default_options()

    @property
    def marks(self) -> tuple[Mark, ...]:
        """Marks of the latest pass, area first."""
        return tuple(m for m in (self.area, self.line, self.point) if m is not None)

    # SECTION: lifecycle hooks
    # =========================================================================

    def before_init(self) -> None:
        super().before_init()
        apply_responsive(self, PRE_RENDER, self.responsive_registry)

    def after_render(self) -> None:
        apply_responsive(self, AFTER_RENDER, self.responsive_registry)
        super().after_render()

    def geometry_parser(self, dim: Any, kind: str) -> Optional[str]:
        return GEOM_MAP.get(kind)

    def scale(self) -> None:
        scales = derive_scales(self.options, extract=self._scale_extractor)
        self.set_config("scales", scales)
        super().scale()

    def coord(self) -> None:
        pass

    # SECTION: geometry assembly
    # =========================================================================

    def add_geometry(self) -> None:
        options = self.options
        self.area = self.line = self.point = None

        area = self._geometry_factory("area", "main", {"plot": self})
        self.area = area

        if options.get("label"):
            self.label()

        tooltip = options.get("tooltip")
        if tooltip and (tooltip.get("fields") is not None or tooltip.get("formatter")):
            self.geometry_tooltip()

        self.adjust_area(area)
        self.set_config("geometry", area)

        self._add_line()
        self._add_point()

    def adjust_area(self, area: Mark) -> None:
        self.adjuster.adjust_area(area)

    def adjust_line(self, line: Mark) -> None:
        self.adjuster.adjust_line(line)

    def adjust_point(self, point: Mark) -> None:
        self.adjuster.adjust_point(point)

    def _add_line(self) -> None:
        line_config = copy.deepcopy(self.options.get("line") or {})
        if not line_config.get("visible"):
            return
        line = self._geometry_factory(
            "line", "guide", {"type": "line", "plot": self, "line": line_config}
        )
        if self._label_disabled():
            line.label = False
        self.adjust_line(line)
        self.set_config("geometry", line)
        self.line = line

    def _add_point(self) -> None:
        point_config = copy.deepcopy(self.options.get("point") or {})
        if not point_config.get("visible"):
            return
        point = self._geometry_factory(
            "point", "guide", {"plot": self, "point": point_config}
        )
        self.adjust_point(point)
        self.set_config("geometry", point)
        self.point = point

    # SECTION: annotations
    # =========================================================================

    def _label_disabled(self) -> bool:
        label = self.options.get("label")
        return isinstance(label, Mapping) and label.get("visible") is False

    def label(self) -> None:
        """Attach a label component to the area mark, or disable labels."""
        if self._label_disabled():
            if self.line is not None:
                self.line.label = False
            self.area.label = False
            return

        self.area.label = self._component_factory(
            "label", {"fields": [self.options["yField"]], "plot": self}
        )

    def geometry_tooltip(self) -> None:
        """Copy explicit tooltip fields and formatter onto the area mark.

        An explicit ``fields`` list, even an empty one, is copied verbatim;
        default fields are only synthesized when ``fields`` is absent.
        """
        self.area.tooltip = {}
        tooltip_options = self.options["tooltip"]
        fields = tooltip_options.get("fields")
        if fields is not None:
            self.area.tooltip["fields"] = fields
        if tooltip_options.get("formatter"):
            self.area.tooltip["callback"] = tooltip_options["formatter"]
            if fields is None:
                fields = [self.options["xField"], self.options["yField"]]
                if self.options.get("seriesField"):
                    fields.append(self.options["seriesField"])
                self.area.tooltip["fields"] = fields

    # SECTION: animation and events
    # =========================================================================

    def animation(self) -> None:
        super().animation()
        if self.options.get("animation") is False:
            self.area.animate = False
            if self.line is not None:
                self.line.animate = False
            if self.point is not None:
                self.point.animate = False

    def parse_events(self, event_parser: Mapping[str, EventTranslation] | None = None) -> None:
        super().parse_events(AREA_EVENT_MAP)


__all__ = ["AreaLayer", "GEOM_MAP"]

"""Responsive re-layout stages for cartesian layers.

Purpose
-------
Layout-adjustment callbacks run at two points of every render pass:

- ``preRender``: before the pipeline builds the chart config. Methods adjust
  the working ``layer.options`` of the pass (tick density, label rotation).
- ``afterRender``: after the Plotly figure exists. Methods adjust the rendered
  traces (label thinning).

Gate
----
Both stages run only when ``responsive`` is truthy and ``padding`` is not
``"auto"``. Automatic padding already repositions components, so running both
would adjust twice.

Notes
-----
Methods run synchronously in registration order. They see a fresh copy of the
options on each pass, so calling them on every resize is safe. A method that
triggers a re-render restarts the pipeline; no recursion guard exists, so such
methods must converge.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

PRE_RENDER = "preRender"
AFTER_RENDER = "afterRender"
STAGES: tuple[str, ...] = (PRE_RENDER, AFTER_RENDER)

MIN_TICK_SPACING_PX = 60
MIN_LABEL_SPACING_PX = 28
NARROW_WIDTH_PX = 480


@dataclass(frozen=True)
class ResponsiveMethod:
    """Named layout callback taking the layer instance."""

    name: str
    method: Callable[[Any], None]


class ResponsiveRegistry:
    """Ordered responsive methods grouped by stage."""

    def __init__(self, methods: Mapping[str, Iterable[ResponsiveMethod]] | None = None) -> None:
        self._stages: dict[str, list[ResponsiveMethod]] = {stage: [] for stage in STAGES}
        for stage, entries in (methods or {}).items():
            for entry in entries:
                self.register(stage, entry.name, entry.method)

    def register(self, stage: str, name: str, method: Callable[[Any], None]) -> ResponsiveMethod:
        """Append ``method`` to ``stage`` and return the stored entry."""
        if stage not in self._stages:
            raise ValueError(
                f"Unknown responsive stage {stage!r}; expected one of {STAGES}."
            )
        entry = ResponsiveMethod(name=name, method=method)
        self._stages[stage].append(entry)
        return entry

    def methods_for(self, stage: str) -> tuple[ResponsiveMethod, ...]:
        if stage not in self._stages:
            raise ValueError(
                f"Unknown responsive stage {stage!r}; expected one of {STAGES}."
            )
        return tuple(self._stages[stage])


def responsive_enabled(options: Mapping[str, Any]) -> bool:
    """Return True when responsive stages may run for ``options``."""
    return bool(options.get("responsive")) and options.get("padding") != "auto"


def apply_responsive(layer: Any, stage: str, registry: ResponsiveRegistry | None = None) -> bool:
    """Run the ``stage`` methods for ``layer`` if the gate is open.

    Returns
    -------
    bool
        True when the stage ran.
    """
    if not responsive_enabled(layer.options):
        return False
    registry = registry if registry is not None else AREA_RESPONSIVE
    methods = registry.methods_for(stage)
    logger.debug("responsive stage %s: running %d method(s)", stage, len(methods))
    for entry in methods:
        entry.method(layer)
    return True


# SECTION: built-in methods
# =============================================================================


def responsive_axis(layer: Any) -> None:
    """Pick an x tick count that fits the plot width.

    A ``tickCount`` set by the user on ``xAxis`` always wins.
    """
    initial_axis = layer.initial_options.get("xAxis") or {}
    if "tickCount" in initial_axis:
        return
    options = layer.options
    x_axis = options.setdefault("xAxis", {})
    plot_width = layer.plot_width
    capacity = max(2, int(plot_width // MIN_TICK_SPACING_PX))

    x_field = options.get("xField")
    distinct = len({row.get(x_field) for row in layer.data}) if x_field else 0
    x_axis["tickCount"] = min(capacity, distinct) if distinct >= 2 else capacity

    if plot_width < NARROW_WIDTH_PX:
        label_cfg = x_axis.setdefault("label", {})
        label_cfg["autoRotate"] = True


def responsive_point_label(layer: Any) -> None:
    """Blank out labels that would overlap at the current plot width."""
    figure = layer.figure
    if figure is None:
        return
    capacity = max(1, int(layer.plot_width // MIN_LABEL_SPACING_PX))
    for trace in figure.data:
        mode = getattr(trace, "mode", None) or ""
        text = getattr(trace, "text", None)
        if "text" not in mode or text is None or isinstance(text, str):
            continue
        count = len(text)
        if count <= capacity:
            continue
        keep = set(np.unique(np.linspace(0, count - 1, capacity).round().astype(int)).tolist())
        trace.text = tuple(value if idx in keep else "" for idx, value in enumerate(text))


AREA_RESPONSIVE = ResponsiveRegistry(
    {
        PRE_RENDER: [ResponsiveMethod("responsiveAxis", responsive_axis)],
        AFTER_RENDER: [ResponsiveMethod("responsivePointLabel", responsive_point_label)],
    }
)


def register_responsive_method(
    stage: str,
    name: str,
    method: Callable[[Any], None],
    *,
    registry: ResponsiveRegistry | None = None,
) -> ResponsiveMethod:
    """Append ``method`` to ``stage`` of ``registry`` (the area registry by default)."""
    target = registry if registry is not None else AREA_RESPONSIVE
    return target.register(stage, name, method)


__all__ = [
    "AFTER_RENDER",
    "AREA_RESPONSIVE",
    "PRE_RENDER",
    "ResponsiveMethod",
    "ResponsiveRegistry",
    "apply_responsive",
    "register_responsive_method",
    "responsive_axis",
    "responsive_enabled",
    "responsive_point_label",
]

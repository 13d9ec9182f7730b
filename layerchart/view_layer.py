"""Base view layer: option layering, lifecycle and shared pipeline steps.

Purpose
-------
``ViewLayer`` owns everything chart types have in common: merging user options
over defaults, running the render pass in a fixed order, the cross-cutting
steps (axes, tooltip, legend, animation, interactions), event binding, and
re-rendering on resize. Concrete chart types override the hooks they need and
implement :meth:`ViewLayer.add_geometry`.

Lifecycle
---------
One render pass runs::

    before_init -> scale -> coord -> axis -> tooltip -> legend
    -> add_geometry -> animation -> interactions -> parse_events
    -> finalize -> render_chart -> after_render

Every pass starts from a fresh deep copy of ``initial_options`` and a fresh
:class:`~layerchart.chart_config.ChartConfigBuilder`. Stages write through
:meth:`set_config`; the builder is finalized once into ``self.config``.

Important gotchas
-----------------
- ``initial_options`` is the merged configuration and is never mutated after
  construction; ``options`` is the per-pass working copy.
- Data records are kept by reference in ``self.data`` and are not merged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Optional

import plotly.graph_objects as go

from .chart_config import ChartConfig, ChartConfigBuilder
from .events import EventTranslation, translate_event
from .options import base_default_options, deep_merge, expand_padding
from .render import render_chart
from .scales import merge_meta

logger = logging.getLogger(__name__)

INTERACTION_TYPES = frozenset({"slider", "scrollBar"})
AUTO_MARGIN_X = 160


class ViewLayer:
    """Shared lifecycle for cartesian chart layers."""

    type: str = "view"
    event_parser: Mapping[str, EventTranslation] = {}

    def __init__(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        if options is not None and not isinstance(options, Mapping):
            raise TypeError(
                f"{type(self).__name__} options must be a mapping, got {type(options).__name__}"
            )
        user = dict(options or {})
        user.update(kwargs)
        data = user.pop("data", None)
        self.data: list[Mapping[str, Any]] = list(data) if data is not None else []
        self.initial_options: dict[str, Any] = deep_merge(self.default_options(), user)
        self.options: dict[str, Any] = deep_merge(self.initial_options)
        self.width = int(self.initial_options["width"])
        self.height = int(self.initial_options["height"])

        self.config: Optional[ChartConfig] = None
        self.figure: Optional[go.Figure] = None
        self.render_count = 0
        self._builder: Optional[ChartConfigBuilder] = None
        self._event_bindings: dict[str, list[tuple[Callable[[Any], Any], Callable[[Any], Any]]]] = {}

    @classmethod
    def default_options(cls) -> dict[str, Any]:
        """Return the defaults record for this layer type."""
        return base_default_options()

    # SECTION: geometry helpers
    # =========================================================================

    @property
    def plot_width(self) -> float:
        """Width in pixels left for the plotting area after horizontal padding."""
        padding = self.options.get("padding")
        if padding == "auto" or padding is None:
            return float(max(self.width - AUTO_MARGIN_X, 1))
        _, right, _, left = expand_padding(padding)
        return float(max(self.width - right - left, 1))

    def set_config(self, key: str, value: Any) -> None:
        """Write ``value`` into the chart config of the running pass."""
        if self._builder is None:
            raise RuntimeError("set_config() called outside of a render pass.")
        self._builder.set_config(key, value)

    def get_config(self, key: str) -> Any:
        if self._builder is None:
            raise RuntimeError("get_config() called outside of a render pass.")
        return self._builder.get(key)

    # SECTION: lifecycle
    # =========================================================================

    def init(self) -> ChartConfig:
        """Run the configuration stages and return the finalized chart config."""
        self.options = deep_merge(self.initial_options)
        self.before_init()

        self._builder = ChartConfigBuilder()
        self.set_config("padding", self.options.get("padding", "auto"))
        self.set_config("title", dict(self.options.get("title") or {}))

        self.scale()
        self.coord()
        self.axis()
        self.tooltip()
        self.legend()
        self.add_geometry()
        self.animation()
        self.interactions()
        self.parse_events(self.event_parser)

        self.config = self._builder.finalize()
        logger.debug(
            "%s init: %d geometry(ies) registered", self.type, len(self.config.geometries)
        )
        return self.config

    def render(self) -> go.Figure:
        """Run a full pass and return the Plotly figure."""
        config = self.init()
        self.figure = render_chart(
            config,
            self.data,
            width=self.width,
            height=self.height,
            plot_width=self.plot_width,
        )
        self.after_render()
        self.render_count += 1
        return self.figure

    def change_size(self, width: int, height: int) -> go.Figure:
        """Store a new container size and re-render."""
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"change_size() expects positive pixels, got {width}x{height}")
        self.width = width
        self.height = height
        logger.debug("%s resized to %dx%d; re-rendering", self.type, width, height)
        return self.render()

    def update_data(self, data: Sequence[Mapping[str, Any]]) -> go.Figure:
        """Replace the data records and re-render."""
        self.data = list(data)
        return self.render()

    # SECTION: overridable stages
    # =========================================================================

    def before_init(self) -> None:
        return None

    def scale(self) -> None:
        """Merge per-field ``meta`` overrides into the scales set so far."""
        scales = self.get_config("scales")
        self.set_config("scales", merge_meta(scales, self.options.get("meta")))

    def coord(self) -> None:
        self.set_config("coordinate", {"type": "cartesian"})

    def axis(self) -> None:
        axes: dict[str, Any] = {}
        for name, key in (("x", "xAxis"), ("y", "yAxis")):
            block = self.options.get(key)
            if not block or block.get("visible") is False:
                axes[name] = False
            else:
                axes[name] = block
        self.set_config("axes", axes)

    def tooltip(self) -> None:
        tooltip = self.options.get("tooltip") or {}
        if tooltip.get("visible") is False:
            self.set_config("tooltip", False)
            return
        self.set_config(
            "tooltip",
            {
                "shared": tooltip.get("shared", True),
                "showCrosshairs": tooltip.get("showCrosshairs", False),
                "crosshairs": tooltip.get("crosshairs") or {},
                "offset": tooltip.get("offset", 20),
            },
        )

    def legend(self) -> None:
        legend = self.options.get("legend") or {}
        if legend.get("visible") is False:
            self.set_config("legends", False)
            return
        self.set_config(
            "legends",
            {key: value for key, value in legend.items() if key != "visible"},
        )

    def add_geometry(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement add_geometry()")

    def animation(self) -> None:
        self.set_config("animate", self.options.get("animation") is not False)

    def interactions(self) -> None:
        selected = []
        for interaction in self.options.get("interactions") or ():
            kind = interaction.get("type") if isinstance(interaction, Mapping) else None
            if kind not in INTERACTION_TYPES:
                logger.debug("%s: skipping unsupported interaction %r", self.type, kind)
                continue
            selected.append({"type": kind, "cfg": dict(interaction.get("cfg") or {})})
        self.set_config("interactions", selected)

    def parse_events(self, event_parser: Mapping[str, EventTranslation] | None = None) -> None:
        """Bind ``options["events"]`` handlers through ``event_parser``."""
        table = event_parser if event_parser is not None else self.event_parser
        self._event_bindings = {}
        for name, handler in (self.options.get("events") or {}).items():
            translation = translate_event(name, table)
            if translation is None:
                logger.debug("%s: no event translation for %r", self.type, name)
                continue
            for event_name in translation.names:
                self._event_bindings.setdefault(event_name, []).append(
                    (handler, translation.extract)
                )

    def after_render(self) -> None:
        return None

    # SECTION: events
    # =========================================================================

    @property
    def bound_events(self) -> tuple[str, ...]:
        return tuple(self._event_bindings)

    def dispatch(self, event_name: str, raw: Any = None) -> int:
        """Call the handlers bound to ``event_name`` and return how many ran."""
        bindings = self._event_bindings.get(event_name, ())
        for handler, extract in bindings:
            handler(extract(raw))
        return len(bindings)


__all__ = ["ViewLayer"]

"""Top-level public API for the ``layerchart`` package.

This module re-exports the chart-building surface so users can import from a
single namespace, for example:

>>> from layerchart import AreaLayer, register_default_plot_types  # doctest: +SKIP

Chart types are looked up by name through the plot-type registry. Call
:func:`register_default_plot_types` once at process start before using
:func:`create_plot`; importing the package does not register anything.
"""

from __future__ import annotations

import logging

from .area_layer import GEOM_MAP, AreaLayer
from .chart_config import ChartConfig, ChartConfigBuilder
from .chart_pane import ChartPane, ChartPaneStyle, ContainerSizeDriver
from .components import LabelComponent, create_component
from .events import AREA_EVENT_MAP, EventTranslation, translate_event
from .marks import Mark, MarkAdjuster, create_mark
from .options import (
    AREA_DEFAULTS,
    BASE_VIEW_DEFAULTS,
    area_default_options,
    base_default_options,
    deep_merge,
)
from .registry import (
    create_plot,
    get_plot_type,
    register_default_plot_types,
    register_plot_type,
    registered_plot_types,
    unregister_plot_type,
)
from .render import render_chart
from .responsive import (
    AFTER_RENDER,
    AREA_RESPONSIVE,
    PRE_RENDER,
    ResponsiveMethod,
    ResponsiveRegistry,
    apply_responsive,
    register_responsive_method,
)
from .scales import derive_scales, extract_scale
from .view_layer import ViewLayer

# Importing the package never configures global logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AFTER_RENDER",
    "AREA_DEFAULTS",
    "AREA_EVENT_MAP",
    "AREA_RESPONSIVE",
    "AreaLayer",
    "BASE_VIEW_DEFAULTS",
    "ChartConfig",
    "ChartConfigBuilder",
    "ChartPane",
    "ChartPaneStyle",
    "ContainerSizeDriver",
    "EventTranslation",
    "GEOM_MAP",
    "LabelComponent",
    "Mark",
    "MarkAdjuster",
    "PRE_RENDER",
    "ResponsiveMethod",
    "ResponsiveRegistry",
    "ViewLayer",
    "apply_responsive",
    "area_default_options",
    "base_default_options",
    "create_component",
    "create_mark",
    "create_plot",
    "deep_merge",
    "derive_scales",
    "extract_scale",
    "get_plot_type",
    "register_default_plot_types",
    "register_plot_type",
    "register_responsive_method",
    "registered_plot_types",
    "render_chart",
    "translate_event",
    "unregister_plot_type",
]

"""Event-name translation table for the area chart.

User code registers handlers under domain names (``onAreaClick``,
``onLegendClick``, ...). The base layer's event binding looks each name up here
and receives the external event names to listen on plus a function that pulls
the handler payload out of the raw event.

>>> from layerchart.events import translate_event
>>> translate_event("onAreaClick").names
('area:click',)
>>> translate_event("onSomethingElse") is None
True
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class EventTranslation:
    """External event names for one handler name and its payload extractor."""

    names: tuple[str, ...]
    extract: Callable[[Any], Any]


def _datum(raw: Any) -> Any:
    if isinstance(raw, Mapping) and "data" in raw:
        return raw["data"]
    return raw


def _legend_item(raw: Any) -> Any:
    if isinstance(raw, Mapping) and "item" in raw:
        return raw["item"]
    return raw


def _range_value(raw: Any) -> Any:
    if isinstance(raw, Mapping) and "value" in raw:
        return raw["value"]
    return raw


def _identity(raw: Any) -> Any:
    return raw


_MOUSE_ACTIONS: dict[str, str] = {
    "Click": "click",
    "DblClick": "dblclick",
    "Mousemove": "mousemove",
    "Mouseenter": "mouseenter",
    "Mouseleave": "mouseleave",
    "Mousedown": "mousedown",
    "Mouseup": "mouseup",
    "Contextmenu": "contextmenu",
}


def _shape_events() -> dict[str, EventTranslation]:
    table: dict[str, EventTranslation] = {}
    for shape in ("Area", "Line", "Point"):
        for suffix, action in _MOUSE_ACTIONS.items():
            table[f"on{shape}{suffix}"] = EventTranslation(
                names=(f"{shape.lower()}:{action}",), extract=_datum
            )
    return table


def _layer_events() -> dict[str, EventTranslation]:
    table: dict[str, EventTranslation] = {}
    for suffix, action in _MOUSE_ACTIONS.items():
        table[f"onPlot{suffix}"] = EventTranslation(names=(action,), extract=_identity)
    for suffix in ("Click", "DblClick", "Mouseenter", "Mouseleave"):
        action = _MOUSE_ACTIONS[suffix]
        table[f"onLegend{suffix}"] = EventTranslation(
            names=(f"legend-item:{action}", f"legend-item-name:{action}"),
            extract=_legend_item,
        )
        table[f"onTitle{suffix}"] = EventTranslation(
            names=(f"title:{action}",), extract=_identity
        )
    table["onSliderChange"] = EventTranslation(
        names=("slider:valuechanged",), extract=_range_value
    )
    table["onScrollbarChange"] = EventTranslation(
        names=("scrollbar:valuechange",), extract=_range_value
    )
    return table


AREA_EVENT_MAP: dict[str, EventTranslation] = {**_layer_events(), **_shape_events()}


def translate_event(name: str, table: Mapping[str, EventTranslation] = AREA_EVENT_MAP) -> Optional[EventTranslation]:
    """Return the translation registered for handler ``name``, if any."""
    return table.get(name)


__all__ = ["AREA_EVENT_MAP", "EventTranslation", "translate_event"]

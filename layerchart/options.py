"""Default option records and the deep-merge used to layer them.

Purpose
-------
Every layer starts from a static defaults record. The base view layer owns the
cross-cutting defaults (axes, legend, tooltip, padding) and each chart type
contributes an override record on top. This module keeps both records and the
merge function as plain data plus pure functions, so the composed defaults can
be inspected and tested without instantiating a layer.

Merge rules
-----------
``deep_merge`` walks mappings key-wise and recurses into nested mappings.
Sequences and scalars from later sources overwrite earlier ones. Inputs are
never mutated; values taken from a source are deep-copied, except callables
(formatters, event handlers), which are shared.

Examples
--------
>>> from layerchart.options import deep_merge
>>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}})
{'a': {'b': 1, 'c': 3}}
>>> deep_merge({"xs": [1, 2]}, {"xs": [3]})
{'xs': [3]}
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

BASE_VIEW_DEFAULTS: dict[str, Any] = {
    "width": 800,
    "height": 450,
    "padding": "auto",
    "responsive": False,
    "title": {"visible": False, "text": ""},
    "legend": {"visible": True, "position": "bottom-center"},
    "tooltip": {
        "visible": True,
        "shared": True,
        "showCrosshairs": True,
        "crosshairs": {"type": "x"},
        "offset": 20,
    },
    "xAxis": {
        "visible": True,
        "grid": {"visible": False},
        "line": {"visible": True},
        "tickLine": {"visible": True},
        "label": {"visible": True, "autoRotate": True, "autoHide": True},
        "title": {"visible": False, "offset": 12},
    },
    "yAxis": {
        "visible": True,
        "grid": {"visible": True},
        "line": {"visible": False},
        "tickLine": {"visible": False},
        "label": {"visible": True, "autoHide": True, "autoRotate": False},
        "title": {"visible": False, "offset": 12},
    },
    "label": {"visible": False},
    "animation": True,
    "interactions": [],
    "events": {},
}

AREA_DEFAULTS: dict[str, Any] = {
    "smooth": False,
    "areaStyle": {"opacity": 0.25},
    "line": {
        "visible": True,
        "size": 2,
        "style": {"opacity": 1, "lineJoin": "round", "lineCap": "round"},
    },
    "point": {"visible": False, "size": 4, "shape": "point"},
    "label": {"visible": False, "type": "point"},
    "legend": {"visible": True, "position": "top-left", "wordSpacing": 4},
    "tooltip": {
        "visible": True,
        "shared": True,
        "showCrosshairs": True,
        "crosshairs": {"type": "x"},
        "offset": 20,
    },
}


def deep_merge(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a new dict combining ``sources`` left to right.

    ``None`` sources are skipped so optional user blocks can be passed as-is.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source is None:
            continue
        if not isinstance(source, Mapping):
            raise TypeError(
                f"deep_merge() expects mappings, got {type(source).__name__}"
            )
        _merge_into(merged, source)
    return merged


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge_into(current, value)
        elif isinstance(value, Mapping):
            nested: dict[str, Any] = {}
            _merge_into(nested, value)
            target[key] = nested
        elif callable(value):
            target[key] = value
        else:
            target[key] = copy.deepcopy(value)


def expand_padding(padding: Any) -> tuple[float, float, float, float]:
    """Expand an explicit ``padding`` into ``(top, right, bottom, left)``.

    Accepts a number or a list of 1 to 4 numbers, read the CSS way::

        [a]          -> (a, a, a, a)
        [v, h]       -> (v, h, v, h)
        [t, h, b]    -> (t, h, b, h)
        [t, r, b, l] -> (t, r, b, l)

    Raises
    ------
    ValueError
        For an empty list or one with more than four values.
    """
    if isinstance(padding, (int, float)):
        return (padding, padding, padding, padding)
    values = list(padding)
    if len(values) == 1:
        values = values * 4
    elif len(values) == 2:
        values = values * 2
    elif len(values) == 3:
        values = [values[0], values[1], values[2], values[1]]
    elif len(values) != 4:
        raise ValueError(f"padding takes 1 to 4 values, got {len(values)}: {padding!r}")
    top, right, bottom, left = values
    return (top, right, bottom, left)


def base_default_options() -> dict[str, Any]:
    """Return a fresh copy of the base view-layer defaults."""
    return deep_merge(BASE_VIEW_DEFAULTS)


def area_default_options() -> dict[str, Any]:
    """Return the composed defaults for the area chart type."""
    return deep_merge(BASE_VIEW_DEFAULTS, AREA_DEFAULTS)


__all__ = [
    "AREA_DEFAULTS",
    "BASE_VIEW_DEFAULTS",
    "area_default_options",
    "base_default_options",
    "deep_merge",
    "expand_padding",
]

"""Scale derivation for cartesian layers.

Purpose
-------
Turns the ``xField``/``yField`` mappings and the optional ``xAxis``/``yAxis``
blocks into the scale map stored under ``"scales"`` in the chart config.

Concepts
--------
Axis blocks are written in user vocabulary and carry many keys that only the
axis renderer cares about (``grid``, ``tickLine``, ``label``, ...).
:func:`extract_scale` copies the scale-relevant subset into a scale entry and
normalizes the few user-facing aliases (``"dateTime"`` becomes ``"time"``).

Examples
--------
>>> from layerchart.scales import derive_scales
>>> derive_scales({"xField": "t", "yField": "v", "yAxis": {"min": 0}})
{'t': {'type': 'cat'}, 'v': {'min': 0}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

SCALE_KEYS: tuple[str, ...] = (
    "type",
    "tickCount",
    "tickInterval",
    "min",
    "max",
    "minLimit",
    "maxLimit",
    "nice",
    "mask",
    "formatter",
    "alias",
)

SCALE_TYPE_ALIASES: dict[str, str] = {
    "dateTime": "time",
    "category": "cat",
    "value": "linear",
}


def extract_scale(scale_entry: dict[str, Any], axis_override: Mapping[str, Any] | None) -> None:
    """Merge scale-relevant keys of ``axis_override`` into ``scale_entry`` in place."""
    if not axis_override:
        return
    for key in SCALE_KEYS:
        if key not in axis_override:
            continue
        value = axis_override[key]
        if key == "type":
            value = SCALE_TYPE_ALIASES.get(value, value)
        scale_entry[key] = value


def derive_scales(options: Mapping[str, Any], *, extract=extract_scale) -> dict[str, dict[str, Any]]:
    """Build the two-entry scale map for ``options``.

    Parameters
    ----------
    options : Mapping
        Layer options; ``xField`` and ``yField`` are required.
    extract : callable, optional
        Scale-extraction collaborator, ``extract(entry, axis_block)``.

    Raises
    ------
    ValueError
        If ``xField`` or ``yField`` is missing.
    """
    x_field = options.get("xField")
    y_field = options.get("yField")
    if not x_field or not y_field:
        raise ValueError(
            "Scale derivation needs both xField and yField, "
            f"got xField={x_field!r}, yField={y_field!r}."
        )

    scales: dict[str, dict[str, Any]] = {}
    scales[x_field] = {"type": "cat"}
    if "xAxis" in options:
        extract(scales[x_field], options["xAxis"])

    scales[y_field] = {}
    if "yAxis" in options:
        extract(scales[y_field], options["yAxis"])
    return scales


def merge_meta(scales: dict[str, dict[str, Any]], meta: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Merge per-field ``meta`` overrides into fields already present in ``scales``."""
    if not meta:
        return scales
    for field_name, overrides in meta.items():
        if field_name in scales and isinstance(overrides, Mapping):
            extract_scale(scales[field_name], overrides)
    return scales


__all__ = ["SCALE_KEYS", "derive_scales", "extract_scale", "merge_meta"]

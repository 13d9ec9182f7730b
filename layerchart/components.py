"""Component factory for widgets attached to marks.

Only the ``"label"`` component exists today. It captures the label block of
the requesting layer at creation time together with the fields to print.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class LabelComponent:
    """Text labels drawn next to the data points of a mark."""

    fields: tuple[str, ...]
    type: str = "point"
    position: str = "top"
    offset: int = 0
    formatter: Optional[Callable[..., Any]] = None
    style: dict[str, Any] = field(default_factory=dict)
    plot: Any = field(default=None, repr=False, compare=False)


def _label_component(params: Mapping[str, Any]) -> LabelComponent:
    plot = params["plot"]
    label_cfg = plot.options.get("label")
    # ``label=True`` asks for labels with every setting at its default.
    if not isinstance(label_cfg, Mapping):
        label_cfg = {}
    return LabelComponent(
        fields=tuple(params["fields"]),
        type=label_cfg.get("type", "point"),
        position=label_cfg.get("position", "top"),
        offset=int(label_cfg.get("offset", 0)),
        formatter=label_cfg.get("formatter"),
        style=copy.deepcopy(label_cfg.get("style") or {}),
        plot=plot,
    )


_COMPONENTS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "label": _label_component,
}


def create_component(kind: str, params: Mapping[str, Any]) -> Any:
    """Create component ``kind`` from ``params`` (``fields`` and ``plot``)."""
    if kind not in _COMPONENTS:
        raise KeyError(f"Unknown component kind: {kind!r}")
    return _COMPONENTS[kind](params)


__all__ = ["LabelComponent", "create_component"]

"""Chart-configuration accumulator shared by the layer pipeline stages.

A render pass creates one :class:`ChartConfigBuilder`, hands it to every stage
(``scale``, ``axis``, ``add_geometry``, ...) and finalizes it exactly once into
an immutable :class:`ChartConfig` that the renderer consumes.

Writes go through :meth:`ChartConfigBuilder.set_config`. The ``"geometry"``
key is special: each write appends a mark to the ordered geometry list instead
of replacing the previous value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

GEOMETRY_KEY = "geometry"

_KNOWN_KEYS = frozenset(
    {
        "scales",
        "axes",
        "tooltip",
        "legends",
        "animate",
        "interactions",
        "coordinate",
        "padding",
        "title",
    }
)


@dataclass(frozen=True)
class ChartConfig:
    """Finalized, read-only description of one chart render pass."""

    scales: Mapping[str, Mapping[str, Any]]
    axes: Mapping[str, Any]
    tooltip: Any
    legends: Any
    geometries: tuple[Any, ...]
    animate: bool
    interactions: tuple[Mapping[str, Any], ...]
    coordinate: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({"type": "cartesian"})
    )
    padding: Any = "auto"
    title: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


class ChartConfigBuilder:
    """Mutable accumulator used while a render pass is in progress."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {
            "scales": {},
            "axes": {},
            "tooltip": {},
            "legends": {},
            "animate": True,
            "interactions": [],
            "coordinate": {"type": "cartesian"},
            "padding": "auto",
            "title": {},
        }
        self._geometries: list[Any] = []
        self._finalized = False

    def set_config(self, key: str, value: Any) -> None:
        """Write ``value`` under ``key``; ``"geometry"`` appends a mark."""
        if self._finalized:
            raise RuntimeError("ChartConfigBuilder has already been finalized.")
        if key == GEOMETRY_KEY:
            self._geometries.append(value)
            return
        if key not in _KNOWN_KEYS:
            raise KeyError(f"Unknown chart config key: {key!r}")
        self._values[key] = value

    def get(self, key: str) -> Any:
        """Return the current value for ``key`` (geometry returns a tuple)."""
        if key == GEOMETRY_KEY:
            return tuple(self._geometries)
        return self._values[key]

    @property
    def geometries(self) -> tuple[Any, ...]:
        return tuple(self._geometries)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> ChartConfig:
        """Freeze the accumulated values into a :class:`ChartConfig`."""
        if self._finalized:
            raise RuntimeError("ChartConfigBuilder has already been finalized.")
        self._finalized = True
        values = self._values
        return ChartConfig(
            scales=MappingProxyType(
                {name: dict(entry) for name, entry in values["scales"].items()}
            ),
            axes=MappingProxyType(dict(values["axes"])),
            tooltip=values["tooltip"],
            legends=values["legends"],
            geometries=tuple(self._geometries),
            animate=bool(values["animate"]),
            interactions=tuple(values["interactions"]),
            coordinate=MappingProxyType(dict(values["coordinate"])),
            padding=values["padding"],
            title=MappingProxyType(dict(values["title"])),
        )


__all__ = ["ChartConfig", "ChartConfigBuilder", "GEOMETRY_KEY"]

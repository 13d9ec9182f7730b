"""Process-wide plot-type registry.

Hosting applications instantiate chart types by name. Types must be
registered before they are looked up; the built-in types are registered by an
explicit call to :func:`register_default_plot_types` at process start, never
as an import side effect.

>>> from layerchart.registry import create_plot, register_default_plot_types
>>> register_default_plot_types()
>>> create_plot("area", xField="t", yField="v").type
'area'
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

_REGISTRY: dict[str, Callable[..., Any]] = {}
_LOCK = threading.Lock()


def register_plot_type(key: str, factory: Callable[..., Any], *, replace: bool = False) -> None:
    """Register ``factory`` under ``key``.

    Raises
    ------
    ValueError
        If ``key`` is already taken by a different factory and ``replace`` is
        False.
    """
    if not key:
        raise ValueError("Plot type key must be a non-empty string.")
    with _LOCK:
        existing = _REGISTRY.get(key)
        if existing is not None and existing is not factory and not replace:
            raise ValueError(f"Plot type {key!r} is already registered.")
        _REGISTRY[key] = factory


def unregister_plot_type(key: str) -> None:
    with _LOCK:
        _REGISTRY.pop(key, None)


def get_plot_type(key: str) -> Callable[..., Any]:
    with _LOCK:
        factory = _REGISTRY.get(key)
    if factory is None:
        raise KeyError(
            f"Unknown plot type {key!r}. Register it first "
            "(register_default_plot_types() adds the built-in types)."
        )
    return factory


def registered_plot_types() -> tuple[str, ...]:
    with _LOCK:
        return tuple(sorted(_REGISTRY))


def create_plot(key: str, options: Any = None, **kwargs: Any) -> Any:
    """Instantiate the plot type registered under ``key``."""
    return get_plot_type(key)(options, **kwargs)


def register_default_plot_types() -> None:
    """Register the chart types shipped with the package (idempotent)."""
    from .area_layer import AreaLayer

    register_plot_type("area", AreaLayer)


__all__ = [
    "create_plot",
    "get_plot_type",
    "register_default_plot_types",
    "register_plot_type",
    "registered_plot_types",
    "unregister_plot_type",
]

"""
chart_pane.py: notebook host that re-renders a layer when its container resizes

The layer pipeline re-runs its responsive stages on every render, but it has
no way to learn the size of the notebook cell it lives in. This module closes
that loop:

- `ContainerSizeDriver`
    An `anywidget.AnyWidget` whose frontend watches its parent element with a
    `ResizeObserver` and writes the measured pixel size into the synced
    `width`/`height` traits.

- `ChartPaneStyle`
    Frozen dataclass with the visual options of the pane wrapper.

- `ChartPane`
    Python-side wrapper that renders the layer into a Plotly `FigureWidget`,
    places it next to a hidden driver in a flex host, and calls
    `layer.change_size` whenever the driver reports a new size. Bursts of size
    changes can be coalesced through `ResizeDebouncer`.

Typical usage
-------------

    import ipywidgets as W
    from layerchart import AreaLayer, ChartPane

    layer = AreaLayer(xField="t", yField="v", data=rows,
                      responsive=True, padding=[20, 20, 40, 50])
    pane = ChartPane(layer, resize_debounce_ms=80)
    W.Box([pane.widget], layout=W.Layout(height="60vh", width="100%"))

Key contract
------------
Some ancestor must give the pane a real pixel height, otherwise the observer
never reports a usable size and the layer keeps its configured size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import anywidget
import ipywidgets as W
import plotly.graph_objects as go
import traitlets

from .debouncing import ResizeDebouncer

logger = logging.getLogger(__name__)

__all__ = ["ChartPane", "ChartPaneStyle", "ContainerSizeDriver"]


class ContainerSizeDriver(anywidget.AnyWidget):
    """
    Hidden widget reporting the pixel size of its parent element.

    Traitlets (synced to frontend)
    ------------------------------

    width / height:
        Last measured size in pixels, written by the frontend. ``0`` until the
        first measurement.

    debounce_ms:
        Frontend debounce before a measurement is sent.

    min_delta_px:
        Changes smaller than this in both directions are not sent.
    """

    width = traitlets.Int(0).tag(sync=True)
    height = traitlets.Int(0).tag(sync=True)
    debounce_ms = traitlets.Int(60).tag(sync=True)
    min_delta_px = traitlets.Int(2).tag(sync=True)

    _esm = r"""
    function clampInt(x, dflt) {
      let n = Number(x);
      return Number.isFinite(n) ? Math.trunc(n) : dflt;
    }

    export default {
      render({ model, el }) {
        el.style.display = "none";
        const host = el.parentElement;
        if (!host) return;

        let timer = null;

        function measure() {
          const r = host.getBoundingClientRect();
          const w = Math.round(r.width);
          const h = Math.round(r.height);
          if (!(w > 0 && h > 0)) return;
          const minDelta = clampInt(model.get("min_delta_px"), 2);
          const dw = Math.abs(w - model.get("width"));
          const dh = Math.abs(h - model.get("height"));
          if (dw < minDelta && dh < minDelta) return;
          model.set("width", w);
          model.set("height", h);
          model.save_changes();
        }

        function schedule() {
          if (timer) clearTimeout(timer);
          timer = setTimeout(measure, clampInt(model.get("debounce_ms"), 60));
        }

        const ro = new ResizeObserver(schedule);
        ro.observe(host);

        const onMsg = (msg) => {
          if (msg && msg.type === "measure") schedule();
        };
        model.on("msg:custom", onMsg);

        schedule();

        return () => {
          try { if (timer) clearTimeout(timer); } catch (e) {}
          try { ro.disconnect(); } catch (e) {}
          try { model.off("msg:custom", onMsg); } catch (e) {}
        };
      }
    };
    """

    def measure(self) -> None:
        """Ask the frontend to measure the container again."""
        self.send({"type": "measure"})


@dataclass(frozen=True)
class ChartPaneStyle:
    """
    Visual styling options for `ChartPane`.

    padding_px:
        Inner padding around the host container.
    border:
        CSS border string.
    border_radius_px:
        Corner radius in pixels.
    overflow:
        Overflow policy for the wrapper.
    """

    padding_px: int = 0
    border: str = "1px solid #ddd"
    border_radius_px: int = 8
    overflow: str = "hidden"


class ChartPane:
    """
    Responsive notebook pane for a chart layer.

    Parameters
    ----------
    layer:
        Any layer exposing ``render()``, ``change_size(width, height)``,
        ``figure``, ``width`` and ``height`` (for example `AreaLayer`).
    style:
        `ChartPaneStyle` applied to the outer wrapper.
    resize_debounce_ms:
        When set, each burst of size reports is coalesced through
        `ResizeDebouncer` into one re-render after this many milliseconds.
        The re-render runs on the kernel's asyncio loop; without a running
        loop every report re-renders immediately. ``None`` re-renders on
        every report.
    min_delta_px:
        Reports closer than this to the current layer size are ignored.
    """

    def __init__(
        self,
        layer: Any,
        *,
        style: ChartPaneStyle = ChartPaneStyle(),
        resize_debounce_ms: Optional[int] = None,
        min_delta_px: int = 2,
    ) -> None:
        self.layer = layer
        figure = layer.figure if layer.figure is not None else layer.render()
        self.figure_widget = go.FigureWidget(figure)
        self._min_delta_px = int(min_delta_px)

        self._apply: Callable[[int, int], Any]
        if resize_debounce_ms is None:
            self._apply = self.apply_size
        else:
            self._apply = ResizeDebouncer(self.apply_size, delay_ms=resize_debounce_ms)

        self.driver = ContainerSizeDriver(min_delta_px=self._min_delta_px)
        self.driver.observe(self._on_size_change, names=["width", "height"])

        self._host = W.Box(
            [self.figure_widget, self.driver],
            layout=W.Layout(
                width="100%",
                height="100%",
                min_width="0",
                min_height="0",
                display="flex",
                flex_flow="column",
                overflow="hidden",
            ),
        )
        self._wrap = W.Box(
            [self._host],
            layout=W.Layout(
                width="100%",
                height="100%",
                min_width="0",
                min_height="0",
                padding=f"{int(style.padding_px)}px",
                border=style.border,
                border_radius=f"{int(style.border_radius_px)}px",
                overflow=style.overflow,
                box_sizing="border-box",
            ),
        )

    @property
    def widget(self) -> W.Widget:
        """The widget to embed in an outer ipywidgets layout."""
        return self._wrap

    def measure(self) -> None:
        """Request a fresh container measurement from the frontend."""
        self.driver.measure()

    def _on_size_change(self, change: dict[str, Any]) -> None:
        width = int(self.driver.width)
        height = int(self.driver.height)
        if width <= 0 or height <= 0:
            return
        if (
            abs(width - self.layer.width) < self._min_delta_px
            and abs(height - self.layer.height) < self._min_delta_px
        ):
            return
        self._apply(width, height)

    def apply_size(self, width: int, height: int) -> None:
        """Re-render the layer at ``width`` x ``height`` and refresh the widget."""
        figure = self.layer.change_size(width, height)
        logger.debug("ChartPane refreshed at %dx%d", width, height)
        fw = self.figure_widget
        fw.data = ()
        fw.add_traces(list(figure.data))
        fw.layout = figure.layout

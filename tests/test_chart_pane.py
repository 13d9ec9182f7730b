from __future__ import annotations

from unittest.mock import patch

from layerchart.area_layer import AreaLayer
from layerchart.chart_pane import ChartPane, ChartPaneStyle

ROWS = [{"t": f"d{i}", "v": i} for i in range(12)]


def _layer() -> AreaLayer:
    return AreaLayer(
        xField="t",
        yField="v",
        data=ROWS,
        responsive=True,
        padding=[10, 20, 30, 40],
    )


def test_pane_renders_layer_on_construction() -> None:
    layer = _layer()

    pane = ChartPane(layer)

    assert layer.render_count == 1
    assert len(pane.figure_widget.data) == 2
    assert pane.figure_widget.layout.width == 800


def test_driver_size_report_re_renders_layer() -> None:
    layer = _layer()
    pane = ChartPane(layer)

    pane.driver.width = 500
    pane.driver.height = 300

    assert (layer.width, layer.height) == (500, 300)
    assert pane.figure_widget.layout.width == 500
    assert pane.figure_widget.layout.height == 300
    # plot width 500 - 20 - 40 = 440 px -> seven 60 px slots
    assert pane.figure_widget.layout.xaxis.nticks == 7


def test_small_and_empty_reports_are_ignored() -> None:
    layer = _layer()
    pane = ChartPane(layer, min_delta_px=5)

    with patch.object(layer, "change_size") as change_size:
        pane.driver.height = 452
        pane.driver.width = 802
        pane.driver.width = 0

    change_size.assert_not_called()


class _FakeLoop:
    def __init__(self) -> None:
        self.callbacks: list = []

    def call_later(self, delay: float, callback):
        self.callbacks.append(callback)
        return callback


def test_debounced_pane_applies_latest_size_when_timer_fires() -> None:
    layer = _layer()
    loop = _FakeLoop()
    pane = ChartPane(layer, resize_debounce_ms=80)

    with patch("layerchart.debouncing.asyncio.get_running_loop", return_value=loop):
        pane.driver.width = 640
        pane.driver.height = 480
        pane.driver.width = 700

    assert layer.render_count == 1
    assert len(loop.callbacks) == 1

    loop.callbacks[0]()

    assert (layer.width, layer.height) == (700, 480)
    assert layer.render_count == 2
    assert pane.figure_widget.layout.width == 700


def test_debounced_pane_without_loop_applies_each_report() -> None:
    layer = _layer()
    pane = ChartPane(layer, resize_debounce_ms=80)

    pane.driver.width = 640
    pane.driver.height = 480

    assert (layer.width, layer.height) == (640, 480)
    assert layer.render_count == 2


def test_pane_style_and_measure_delegate() -> None:
    pane = ChartPane(_layer(), style=ChartPaneStyle(padding_px=7, border="1px solid red"))
    called = []
    pane.driver.measure = lambda: called.append(True)

    pane.measure()

    assert called == [True]
    assert pane.widget.layout.padding == "7px"
    assert pane.widget.layout.border == "1px solid red"

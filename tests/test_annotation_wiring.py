from __future__ import annotations

import pytest

from layerchart.area_layer import AreaLayer
from layerchart.components import LabelComponent, create_component


class _RecordingComponents:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, kind, params):
        self.calls.append((kind, params))
        return create_component(kind, params)


def _formatter(*values):
    return " / ".join(str(v) for v in values)


def test_disabled_label_turns_off_area_and_line_without_factory_call() -> None:
    components = _RecordingComponents()
    layer = AreaLayer(
        xField="t",
        yField="v",
        label={"visible": False},
        component_factory=components,
    )

    layer.init()

    assert components.calls == []
    assert layer.area.label is False
    assert layer.line.label is False


def test_visible_label_requests_component_for_y_field() -> None:
    components = _RecordingComponents()
    layer = AreaLayer(
        xField="t",
        yField="v",
        label={"visible": True, "position": "bottom", "style": {"fontSize": 10}},
        component_factory=components,
    )

    layer.init()

    assert len(components.calls) == 1
    kind, params = components.calls[0]
    assert kind == "label"
    assert params["fields"] == ["v"]
    assert params["plot"] is layer
    assert isinstance(layer.area.label, LabelComponent)
    assert layer.area.label.fields == ("v",)
    assert layer.area.label.position == "bottom"
    assert layer.area.label.type == "point"
    assert layer.line.label is None


def test_plain_visible_tooltip_leaves_area_tooltip_empty() -> None:
    layer = AreaLayer(
        xField="t",
        yField="v",
        line={"visible": True},
        point={"visible": False},
        tooltip={"visible": True},
    )

    config = layer.init()

    assert [mark.type for mark in config.geometries] == ["area", "line"]
    assert layer.point is None
    assert layer.area.tooltip == {}


def test_formatter_without_fields_synthesizes_series_aware_fields() -> None:
    layer = AreaLayer(
        xField="t", yField="v", seriesField="s", tooltip={"formatter": _formatter}
    )

    layer.init()

    assert layer.area.tooltip == {"callback": _formatter, "fields": ["t", "v", "s"]}


def test_formatter_without_series_field_uses_x_and_y_only() -> None:
    layer = AreaLayer(xField="t", yField="v", tooltip={"formatter": _formatter})

    layer.init()

    assert layer.area.tooltip["fields"] == ["t", "v"]
    assert layer.area.tooltip["callback"] is _formatter


def test_explicit_fields_are_copied_verbatim() -> None:
    layer = AreaLayer(
        xField="t",
        yField="v",
        seriesField="s",
        tooltip={"fields": ["v", "extra"], "formatter": _formatter},
    )

    layer.init()

    assert layer.area.tooltip == {"fields": ["v", "extra"], "callback": _formatter}


def test_fields_without_formatter_have_no_callback() -> None:
    layer = AreaLayer(xField="t", yField="v", tooltip={"fields": ["t"]})

    layer.init()

    assert layer.area.tooltip == {"fields": ["t"]}


def test_unknown_component_kind_raises() -> None:
    layer = AreaLayer(xField="t", yField="v")

    with pytest.raises(KeyError, match="legend"):
        create_component("legend", {"fields": [], "plot": layer})


def test_label_true_creates_component_with_default_settings() -> None:
    layer = AreaLayer(xField="t", yField="v", label=True)

    layer.init()

    assert isinstance(layer.area.label, LabelComponent)
    assert layer.area.label.fields == ("v",)
    assert layer.area.label.type == "point"
    assert layer.area.label.position == "top"


def test_explicit_empty_fields_are_kept_with_formatter() -> None:
    layer = AreaLayer(
        xField="t", yField="v", tooltip={"fields": [], "formatter": _formatter}
    )

    layer.init()

    assert layer.area.tooltip == {"fields": [], "callback": _formatter}


def test_explicit_empty_fields_alone_still_run_tooltip_step() -> None:
    layer = AreaLayer(xField="t", yField="v", tooltip={"fields": []})

    layer.init()

    assert layer.area.tooltip == {"fields": []}

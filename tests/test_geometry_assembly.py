from __future__ import annotations

import pytest

from layerchart.area_layer import AreaLayer
from layerchart.marks import Mark, MarkAdjuster, create_mark


class _RecordingFactory:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict]] = []

    def __call__(self, kind, role, context):
        self.calls.append((kind, role, context))
        return create_mark(kind, role, context)


class _RecordingAdjuster(MarkAdjuster):
    def __init__(self) -> None:
        self.seen: list[str] = []

    def adjust_area(self, area: Mark) -> None:
        self.seen.append("area")
        area.style["opacity"] = 0.6

    def adjust_line(self, line: Mark) -> None:
        self.seen.append("line")

    def adjust_point(self, point: Mark) -> None:
        self.seen.append("point")
        point.size = 9


def test_only_area_exists_when_guides_are_hidden() -> None:
    layer = AreaLayer(
        xField="t", yField="v", line={"visible": False}, point={"visible": False}
    )

    config = layer.init()

    assert [mark.type for mark in config.geometries] == ["area"]
    assert layer.line is None
    assert layer.point is None
    assert layer.marks == (layer.area,)


def test_marks_are_registered_area_line_point() -> None:
    factory = _RecordingFactory()
    layer = AreaLayer(
        xField="t",
        yField="v",
        point={"visible": True},
        geometry_factory=factory,
    )

    config = layer.init()

    assert [(kind, role) for kind, role, _ in factory.calls] == [
        ("area", "main"),
        ("line", "guide"),
        ("point", "guide"),
    ]
    assert [mark.type for mark in config.geometries] == ["area", "line", "point"]
    assert all(ctx["plot"] is layer for _, _, ctx in factory.calls)
    assert config.geometries[0] is layer.area


def test_line_mark_uses_a_deep_copy_of_the_line_block() -> None:
    line_block = {"visible": True, "size": 3, "style": {"opacity": 0.5}}
    factory = _RecordingFactory()
    layer = AreaLayer(xField="t", yField="v", line=line_block, geometry_factory=factory)

    layer.init()
    line_context = factory.calls[1][2]
    layer.options["line"]["style"]["opacity"] = 0.2

    assert line_context["line"] is not layer.options["line"]
    assert layer.line.style["opacity"] == 0.5
    assert layer.line.style["lineCap"] == "round"
    assert layer.line.size == 3


def test_missing_guide_blocks_are_skipped() -> None:
    layer = AreaLayer(xField="t", yField="v")
    layer.initial_options["line"] = None
    layer.initial_options["point"] = None

    config = layer.init()

    assert [mark.type for mark in config.geometries] == ["area"]


def test_adjuster_runs_once_per_mark_before_registration() -> None:
    adjuster = _RecordingAdjuster()
    layer = AreaLayer(
        xField="t", yField="v", point={"visible": True}, adjuster=adjuster
    )

    config = layer.init()

    assert adjuster.seen == ["area", "line", "point"]
    assert config.geometries[0].style["opacity"] == 0.6
    assert config.geometries[2].size == 9


def test_subclass_override_of_adjust_hook() -> None:
    class _StackedArea(AreaLayer):
        def adjust_area(self, area: Mark) -> None:
            area.shape = "stacked"

    config = _StackedArea(xField="t", yField="v").init()

    assert config.geometries[0].shape == "stacked"


def test_marks_are_replaced_on_every_pass() -> None:
    layer = AreaLayer(xField="t", yField="v")
    layer.init()
    first_area, first_line = layer.area, layer.line

    layer.init()

    assert layer.area is not first_area
    assert layer.line is not first_line


def test_area_mark_reads_encoding_from_options() -> None:
    layer = AreaLayer(
        xField="t", yField="v", seriesField="s", smooth=True, areaStyle={"opacity": 0.4}
    )
    layer.init()

    assert layer.area.position == ("t", "v")
    assert layer.area.series == "s"
    assert layer.area.color is None
    assert layer.line.series == "s"
    assert layer.area.shape == "smooth"
    assert layer.area.style == {"opacity": 0.4}
    assert layer.line.shape == "smooth"


def test_geometry_parser_maps_known_kinds() -> None:
    layer = AreaLayer(xField="t", yField="v")

    assert layer.geometry_parser(None, "area") == "area"
    assert layer.geometry_parser(None, "point") == "point"
    assert layer.geometry_parser(None, "interval") is None


def test_geometry_factory_errors_propagate() -> None:
    layer = AreaLayer(xField="t", yField="v")

    with pytest.raises(KeyError, match="No geometry builder"):
        create_mark("polygon", "main", {"plot": layer})

    def _broken(kind, role, context):
        raise ValueError(f"invalid field for {kind}")

    with pytest.raises(ValueError, match="invalid field for area"):
        AreaLayer(xField="t", yField="v", geometry_factory=_broken).init()

from __future__ import annotations

from layerchart.area_layer import AreaLayer


def test_animation_false_disables_every_existing_mark() -> None:
    layer = AreaLayer(xField="t", yField="v", point={"visible": True}, animation=False)

    config = layer.init()

    assert config.animate is False
    assert [mark.animate for mark in config.geometries] == [False, False, False]


def test_animation_false_skips_absent_guides() -> None:
    layer = AreaLayer(
        xField="t",
        yField="v",
        line={"visible": False},
        animation=False,
    )

    layer.init()

    assert layer.area.animate is False
    assert layer.line is None
    assert layer.point is None


def test_animation_default_and_true_leave_marks_untouched() -> None:
    for options in ({}, {"animation": True}):
        layer = AreaLayer(xField="t", yField="v", point={"visible": True}, **options)

        config = layer.init()

        assert config.animate is True
        assert all(mark.animate is None for mark in config.geometries)


def test_rendered_figure_reflects_animation_flag() -> None:
    data = [{"t": "a", "v": 1}, {"t": "b", "v": 2}]

    animated = AreaLayer(xField="t", yField="v", data=data).render()
    still = AreaLayer(xField="t", yField="v", data=data, animation=False).render()

    assert animated.layout.transition.duration == 400
    assert still.layout.transition.duration is None

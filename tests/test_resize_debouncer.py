from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from layerchart.debouncing import ResizeDebouncer, SizeChange


class _FakeHandle:
    def __init__(self, delay: float, callback):
        self.delay = delay
        self._callback = callback

    def fire(self) -> None:
        self._callback()


class _FakeLoop:
    def __init__(self) -> None:
        self.handles: list[_FakeHandle] = []
        self.handed_over: list[tuple] = []

    def call_later(self, delay: float, callback):
        handle = _FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def call_soon_threadsafe(self, callback, *args):
        self.handed_over.append((callback, args))

    def run_handed_over(self) -> None:
        pending, self.handed_over = self.handed_over, []
        for callback, args in pending:
            callback(*args)


def test_burst_applies_only_the_newest_size_on_the_loop() -> None:
    applied: list[tuple[int, int]] = []
    loop = _FakeLoop()

    with patch("layerchart.debouncing.asyncio.get_running_loop", return_value=loop):
        debouncer = ResizeDebouncer(lambda w, h: applied.append((w, h)), delay_ms=50)
        debouncer(300, 200)
        debouncer(320, 210)
        debouncer(640, 480)

        assert len(loop.handles) == 1
        assert loop.handles[0].delay == pytest.approx(0.05)
        assert debouncer.latest == SizeChange(640, 480)
        assert applied == []

        loop.handles[0].fire()

    assert applied == [(640, 480)]
    assert debouncer.latest is None


def test_next_burst_arms_a_new_timer() -> None:
    applied: list[tuple[int, int]] = []
    loop = _FakeLoop()

    with patch("layerchart.debouncing.asyncio.get_running_loop", return_value=loop):
        debouncer = ResizeDebouncer(lambda w, h: applied.append((w, h)), delay_ms=10)
        debouncer(300, 200)
        loop.handles[0].fire()
        debouncer(500, 400)

        assert len(loop.handles) == 2
        loop.handles[1].fire()

    assert applied == [(300, 200), (500, 400)]


def test_reports_from_other_threads_are_handed_to_the_loop() -> None:
    applied: list[tuple[int, int]] = []
    loop = _FakeLoop()
    debouncer = ResizeDebouncer(lambda w, h: applied.append((w, h)), delay_ms=10, loop=loop)

    # No loop runs in the test thread, so the timer must be armed via the loop.
    debouncer(300, 200)
    debouncer(700, 500)

    assert loop.handles == []
    assert len(loop.handed_over) == 1

    loop.run_handed_over()
    loop.handles[0].fire()

    assert applied == [(700, 500)]


def test_without_loop_each_report_applies_immediately() -> None:
    applied: list[tuple[int, int]] = []
    debouncer = ResizeDebouncer(lambda w, h: applied.append((w, h)), delay_ms=10)

    debouncer(300, 200)
    debouncer(640, 480)

    assert applied == [(300, 200), (640, 480)]
    assert debouncer.latest is None


def test_apply_failure_is_logged_and_later_bursts_still_apply(caplog) -> None:
    state = {"n": 0}

    def _apply(width, height):
        state["n"] += 1
        if state["n"] == 1:
            raise RuntimeError("boom")

    loop = _FakeLoop()

    with patch("layerchart.debouncing.asyncio.get_running_loop", return_value=loop):
        debouncer = ResizeDebouncer(_apply, delay_ms=1)
        with caplog.at_level(logging.ERROR, logger="layerchart.debouncing"):
            debouncer(100, 100)
            loop.handles[0].fire()
            debouncer(200, 200)
            loop.handles[1].fire()

    assert state["n"] == 2
    assert "ResizeDebouncer apply failed for 100x100" in caplog.text


def test_delay_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ResizeDebouncer(lambda w, h: None, delay_ms=0)

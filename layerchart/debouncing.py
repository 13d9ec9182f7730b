"""Trailing-edge debouncing of container resize reports.

A container being dragged produces a burst of size reports, and only the last
one matters. ``ResizeDebouncer`` keeps the newest size, arms one timer per
burst, and re-renders once when the timer fires.

Threading
---------
Notebook widgets belong to the kernel's asyncio loop. The timer is therefore
always armed on that loop, and reports coming from any other thread are handed
over with ``call_soon_threadsafe``, so ``apply`` only ever runs on the loop
thread. With no loop at all (plain scripts, tests) there is no thread that
could safely apply the size later, and each report is applied immediately.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeChange:
    width: int
    height: int


class ResizeDebouncer:
    """Apply the newest reported size once per burst of reports.

    Parameters
    ----------
    apply:
        Callable receiving ``(width, height)``, usually ``ChartPane.apply_size``.
    delay_ms:
        Quiet period after the first report of a burst before ``apply`` runs.
    loop:
        Loop that owns the widgets. Defaults to the loop running in the thread
        of the first report.
    """

    def __init__(
        self,
        apply: Callable[[int, int], Any],
        *,
        delay_ms: int,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be > 0")
        self._apply = apply
        self._delay_s = delay_ms / 1000.0
        self._loop = loop

        self._lock = threading.Lock()
        self._latest: Optional[SizeChange] = None
        self._armed = False

    @property
    def latest(self) -> Optional[SizeChange]:
        """Size waiting for the timer, or ``None``."""
        with self._lock:
            return self._latest

    def __call__(self, width: int, height: int) -> None:
        change = SizeChange(int(width), int(height))
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        loop = self._loop if self._loop is not None else running

        if loop is None:
            self._run(change)
            return
        self._loop = loop

        with self._lock:
            self._latest = change
            if self._armed:
                return
            self._armed = True

        if running is loop:
            loop.call_later(self._delay_s, self._flush)
        else:
            loop.call_soon_threadsafe(loop.call_later, self._delay_s, self._flush)

    def _flush(self) -> None:
        with self._lock:
            change = self._latest
            self._latest = None
            self._armed = False
        if change is not None:
            self._run(change)

    def _run(self, change: SizeChange) -> None:
        try:
            self._apply(change.width, change.height)
        except Exception:
            logger.exception(
                "ResizeDebouncer apply failed for %dx%d", change.width, change.height
            )


__all__ = ["ResizeDebouncer", "SizeChange"]

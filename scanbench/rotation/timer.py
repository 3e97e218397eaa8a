"""
Repeating timer for carousel ticks.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional


logger = logging.getLogger(__name__)


class IntervalTimer:
    """
    Calls `callback` every `period` seconds on a daemon thread.

    Every start()/cancel() bumps a generation counter; a pending wake-up from
    an older generation returns without calling back or re-arming.
    """

    def __init__(self, period: float, callback: Callable[[], None]):
        self.period = period
        self._callback = callback
        self._lock = threading.Lock()
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._active = True
            self._arm_locked(self._generation)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        self._generation += 1
        self._active = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm_locked(self, generation: int) -> None:
        timer = threading.Timer(self.period, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
        try:
            self._callback()
        except Exception:
            # Nobody upstream of a timer thread can handle this
            logger.exception("Timer callback failed")
        with self._lock:
            if generation == self._generation:
                self._arm_locked(generation)


class ManualTimer:
    """
    Timer the host drives by calling fire(), for scripted playback.

    Same start/cancel/active surface as IntervalTimer.
    """

    def __init__(self, period: float, callback: Callable[[], None]):
        self.period = period
        self._callback = callback
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        self._active = True

    def cancel(self) -> None:
        self._active = False

    def fire(self) -> bool:
        if not self._active:
            return False
        self._callback()
        return True

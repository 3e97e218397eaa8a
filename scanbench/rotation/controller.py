"""
Carousel Rotation Controller

Sequences a snapshot of catalog items over time for one tab.

States:
- IDLE: no session; demo payloads on demand (show_demo)
- RUNNING: timer armed, tick() regenerates every interval
- PAUSED: session kept, timer stopped, manual navigation

Navigation rules:
- next() generates a new payload until every item has appeared once, then
  replays history with wrap-around; prev() always replays
- replayed entries are shown exactly as recorded (no re-drawn serials)
- only newly generated payloads reach the activity log
"""

from __future__ import annotations

import logging
import math
import random
import threading
from collections import deque
from dataclasses import replace
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Union

from ..activity import ActivityLog
from ..errors import EncodingSkipped, NothingSelectedError, RenderFailure, ValidationError
from ..models import BarcodeFormat, Item
from ..settings import load_settings
from ..sources import DemoSequence
from .producers import ItemProducer
from .session import (
    DoubleScanMode,
    DoubleScanSelector,
    HistoryEntry,
    RotationSession,
    RotationState,
)
from .timer import IntervalTimer


logger = logging.getLogger(__name__)

Renderer = Callable[[str, str, BarcodeFormat], Any]
TimerFactory = Callable[[float, Callable[[], None]], Any]

PRIMARY_SURFACE = "primary"
SECONDARY_SURFACE = "secondary"
RENDER_FAILURE_LIMIT = 50


def parse_interval(seconds: Any) -> Optional[float]:
    """Positive finite number of seconds, or None."""
    if isinstance(seconds, bool):
        return None
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    return value


class RotationController:
    """
    Playback engine for one tab.

    Args:
        renderer: External render(surface, payload, format) callable;
            failures are logged and counted, never raised; the most recent
            ones are kept in render_failures
        activity_log: Shared log receiving every newly generated payload
        demo_source: Round-robin GTINs for show_demo
        timer_factory: Builds the periodic ticker (IntervalTimer by default)
    """

    def __init__(
        self,
        producer: Optional[ItemProducer] = None,
        renderer: Optional[Renderer] = None,
        activity_log: Optional[ActivityLog] = None,
        demo_source: Optional[DemoSequence] = None,
        settings: Optional[Dict[str, Any]] = None,
        interval_seconds: Optional[float] = None,
        tick_seconds: Optional[float] = None,
        timer_factory: Optional[TimerFactory] = None,
        rng: Optional[random.Random] = None,
    ):
        settings = dict(load_settings(), **(settings or {}))
        self.producer = producer or ItemProducer(rng=rng, default_template_id=settings["default_template"])
        self.renderer = renderer
        self.activity_log = activity_log if activity_log is not None else ActivityLog(settings["activity_limit"])
        self.demo_source = demo_source
        self.interval_seconds = parse_interval(interval_seconds) or float(settings["interval_seconds"])
        self.tick_seconds = parse_interval(tick_seconds) or float(settings["tick_seconds"])
        self.double_scan = DoubleScanSelector()
        self.demo_template_id: Optional[str] = None
        self.render_failures: Deque[RenderFailure] = deque(maxlen=RENDER_FAILURE_LIMIT)
        self.render_failure_count = 0
        self.skipped: List[EncodingSkipped] = []
        self.last_displayed: Optional[HistoryEntry] = None

        self._timer_factory = timer_factory or IntervalTimer
        self._timer: Any = None
        self._timer_token = 0
        self._session: Optional[RotationSession] = None
        self._state = RotationState.IDLE
        self._demo_counter = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> RotationState:
        return self._state

    @property
    def session(self) -> Optional[RotationSession]:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._state is RotationState.RUNNING

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._session is not None:
            return self._session.current
        return self.last_displayed

    def select_double_scan(self, mode: Optional[Union[str, DoubleScanMode]]) -> Optional[DoubleScanMode]:
        """Make `mode` the only active double-scan pairing (None clears)."""
        return self.double_scan.select(mode)

    # ------------------------------------------------------------ transitions

    def start(self, items: Iterable[Item]) -> HistoryEntry:
        """
        Snapshot items, show the first payload and arm the timer.

        Items that fail to encode are listed in `skipped`, once each.

        Raises:
            NothingSelectedError: no items, or none of them can be encoded
        """
        snapshot = tuple(replace(item) for item in items)
        self.skipped = []
        if not snapshot:
            logger.info("Rotation start rejected: nothing selected")
            raise NothingSelectedError("Nothing selected for rotation")

        with self._lock:
            session = RotationSession(
                items=snapshot,
                interval_seconds=self.interval_seconds,
                remaining_seconds=self.interval_seconds,
            )
            entry = self._generate(session)
            if entry is None:
                raise NothingSelectedError("None of the selected items could be encoded")

            self._cancel_timer()
            self._session = session
            self._state = RotationState.RUNNING
            session.is_running = True
            self._arm_timer()
            return entry

    def stop(self) -> None:
        """Discard the session and its history."""
        with self._lock:
            if self._state is RotationState.IDLE:
                return
            self._cancel_timer()
            self._session = None
            self._state = RotationState.IDLE

    def pause(self) -> bool:
        with self._lock:
            if self._state is not RotationState.RUNNING:
                return False
            self._cancel_timer()
            self._session.is_running = False
            self._state = RotationState.PAUSED
            return True

    def resume(self) -> bool:
        """Jump back to the newest entry and re-arm the timer."""
        with self._lock:
            if self._state is not RotationState.PAUSED:
                return False
            session = self._session
            if not session.at_history_end:
                self._display(session.move_to(len(session.history) - 1))
            session.remaining_seconds = session.interval_seconds
            session.is_running = True
            self._state = RotationState.RUNNING
            self._arm_timer()
            return True

    def tick(self) -> Optional[HistoryEntry]:
        """One timer quantum; returns the entry generated on expiry."""
        with self._lock:
            session = self._session
            if self._state is not RotationState.RUNNING or session is None:
                return None
            session.remaining_seconds -= self.tick_seconds
            # Half a quantum absorbs float drift of the repeated subtraction
            if session.remaining_seconds > self.tick_seconds / 2:
                return None
            entry = self._generate(session)
            session.remaining_seconds = session.interval_seconds
            return entry

    def next(self) -> Optional[HistoryEntry]:
        with self._lock:
            session = self._session
            if session is None:
                logger.info("next() ignored: no rotation session")
                return None

            if session.all_seen:
                index = (session.history_cursor + 1) % len(session.history)
                return self._replay(session, index)

            if not session.at_history_end:
                return self._replay(session, session.history_cursor + 1)

            return self._generate(session)

    def prev(self) -> Optional[HistoryEntry]:
        with self._lock:
            session = self._session
            if session is None or not session.history:
                logger.info("prev() ignored: nothing to go back to")
                return None
            index = session.history_cursor - 1
            if index < 0:
                index = len(session.history) - 1
            return self._replay(session, index)

    def set_interval(self, seconds: Any) -> bool:
        """
        Change the rotation period.

        Invalid values (non-numeric, NaN, zero, negative) change nothing.
        A running timer restarts with the new period.
        """
        value = parse_interval(seconds)
        if value is None:
            logger.info("Ignored invalid interval %r", seconds)
            return False

        with self._lock:
            self.interval_seconds = value
            session = self._session
            if session is not None:
                session.interval_seconds = value
                session.remaining_seconds = value
            if self._state is RotationState.RUNNING:
                self._cancel_timer()
                self._arm_timer()
            return True

    def show_demo(self, template_id: Optional[str] = None) -> Optional[HistoryEntry]:
        """Generate and show a demo DataMatrix while no session is live."""
        with self._lock:
            if self._state is not RotationState.IDLE or self.demo_source is None:
                logger.info("Demo display ignored in state %s", self._state.value)
                return None

            demo = self.demo_source
            entry = self.producer.produce_demo(
                gtin=demo.next_value(),
                counter=self._demo_counter,
                total=len(demo),
                next_gtin=demo.next_value,
                template_id=template_id or self.demo_template_id,
                double_scan=self.double_scan.mode,
            )
            self._demo_counter += 1
            self._log_generated(entry)
            self._display(entry)
            return entry

    # --------------------------------------------------------------- internal

    def _generate(self, session: RotationSession) -> Optional[HistoryEntry]:
        """
        Encode the item at the generation cursor, skipping items that fail.

        A failed item is reported once and not retried for the session.
        """
        for _ in range(session.size):
            index = session.cursor
            if index in session.failed_indices:
                session.cursor = (index + 1) % session.size
                continue
            try:
                entry = self.producer.produce(session.items, index, self.double_scan.mode)
            except ValidationError as exc:
                skipped = EncodingSkipped(session.items[index].source_value, exc.message or str(exc), index)
                self.skipped.append(skipped)
                session.failed_indices.add(index)
                session.cursor = (index + 1) % session.size
                logger.warning("Skipped rotation item %s", skipped.message)
                continue

            session.record(entry)
            self._log_generated(entry)
            self._display(entry)
            return entry
        return None

    def _replay(self, session: RotationSession, index: int) -> HistoryEntry:
        entry = session.move_to(index)
        self._display(entry)
        return entry

    def _log_generated(self, entry: HistoryEntry) -> None:
        self.activity_log.add(entry.kind, entry.payload)
        if entry.double_scan is DoubleScanMode.DIFFERENT_DM and entry.secondary is not None:
            self.activity_log.add(entry.kind, entry.secondary.payload)

    def _display(self, entry: HistoryEntry) -> None:
        self.last_displayed = entry
        self._render(PRIMARY_SURFACE, entry.display_payload, entry.display_format)
        if entry.secondary is not None:
            self._render(SECONDARY_SURFACE, entry.secondary.payload, entry.secondary.format)

    def _render(self, surface: str, payload: str, fmt: BarcodeFormat) -> None:
        if self.renderer is None:
            return
        try:
            self.renderer(surface, payload, fmt)
        except Exception as exc:
            # Renderer is external; its failure must not stop playback
            failure = RenderFailure(surface, payload, exc)
            self.render_failures.append(failure)
            self.render_failure_count += 1
            logger.error(failure.message, exc_info=True)

    def _arm_timer(self) -> None:
        self._timer_token += 1
        token = self._timer_token
        self._timer = self._timer_factory(self.tick_seconds, lambda: self._on_timer(token))
        self._timer.start()

    def _cancel_timer(self) -> None:
        self._timer_token += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, token: int) -> None:
        with self._lock:
            if token != self._timer_token:
                return
            self.tick()

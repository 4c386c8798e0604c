"""
Activity Session

State machine for one tracked activity:

    IDLE -> AWAITING_TYPE_SELECTION -> RUNNING <-> PAUSED -> (finished) -> IDLE

Location samples, clock ticks and commands all mutate the same state and are
serialized by one lock. Invalid commands are no-ops and return False.
Stopping silences the location source and the clock before the finished
record is assembled, then hands the record to the sink without waiting for
it to be stored.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

from stridelog.config import settings
from stridelog.features.accounts import AccountContext
from stridelog.features.activities import ActivityRecord
from stridelog.shared.formatters import format_distance_km, format_duration
from stridelog.shared.geo import GeoPoint
from .clock import ClockTicker, SessionClock
from .distance import DistanceAccumulator
from .location import LocationSource
from .segmenter import RouteSegmenter

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_TYPE_SELECTION = "awaiting_type_selection"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session for presentation."""
    state: SessionState
    activity_type: Optional[str]
    segments: tuple[tuple[GeoPoint, ...], ...]
    distance_km: float
    elapsed_seconds: int

    @property
    def duration(self) -> str:
        return format_duration(self.elapsed_seconds)


class ActivitySink(Protocol):
    """Receives finished activities for storage."""

    def submit(self, record: ActivityRecord, account_id: int) -> None:
        ...


Listener = Callable[[SessionSnapshot], None]


class ActivitySession:
    """
    Tracks one activity at a time.

    Usage:
        session = ActivitySession(source, sink=save_queue, account=context)
        session.begin()
        session.select_type("running")
        ...
        record = session.stop()
    """

    def __init__(
        self,
        location_source: LocationSource,
        sink: Optional[ActivitySink] = None,
        account: Optional[AccountContext] = None,
        tick_interval: Optional[float] = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._source = location_source
        self._sink = sink
        self._account = account
        self._now = now

        self._lock = threading.RLock()
        self._state = SessionState.IDLE
        self._activity_type: Optional[str] = None
        self._clock = SessionClock()
        self._distance = DistanceAccumulator()
        self._segmenter = RouteSegmenter()
        self._ticker = ClockTicker(
            self.tick,
            interval=tick_interval if tick_interval is not None else settings.tick_interval_seconds,
        )
        self._listeners: list[Listener] = []

    # =========================================================================
    # Account context
    # =========================================================================

    @property
    def account(self) -> Optional[AccountContext]:
        return self._account

    def set_account(self, account: Optional[AccountContext]) -> None:
        with self._lock:
            self._account = account

    # =========================================================================
    # Read side
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def distance_steps(self) -> list[float]:
        """Per-sample distance increments of the current session."""
        with self._lock:
            return list(self._distance.steps)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                state=self._state,
                activity_type=self._activity_type,
                segments=tuple(tuple(segment) for segment in self._segmenter.segments),
                distance_km=self._distance.total_km,
                elapsed_seconds=self._clock.elapsed_seconds,
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener` with a snapshot after every state change.

        A listener that raises is logged and skipped; the command or sample
        that triggered the notification still succeeds.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Commands
    # =========================================================================

    def begin(self) -> bool:
        """Open a new session and start receiving locations."""
        with self._lock:
            if self._state != SessionState.IDLE:
                return self._ignored("begin")
            self._clear()
            self._state = SessionState.AWAITING_TYPE_SELECTION
            self._source.start_tracking(self.on_location)
        logger.info("New activity session opened")
        self._notify()
        return True

    def select_type(self, activity_type: str) -> bool:
        """Choose the activity type and start the clock."""
        with self._lock:
            if self._state != SessionState.AWAITING_TYPE_SELECTION:
                return self._ignored("select_type")
            self._activity_type = activity_type
            self._state = SessionState.RUNNING
            self._start_clock()
        logger.info(f"Tracking {activity_type}")
        self._notify()
        return True

    def pause(self) -> bool:
        """Stop the clock and remember the last point as resume anchor."""
        with self._lock:
            if self._state != SessionState.RUNNING:
                return self._ignored("pause")
            self._stop_clock()
            self._segmenter.remember_anchor(self._segmenter.last_point)
            self._state = SessionState.PAUSED
            message = f"Paused at {self._clock.elapsed_seconds}s, anchor {self._segmenter.anchor}"
        logger.info(message)
        self._notify()
        return True

    def resume(self) -> bool:
        """Restart the clock and open a new segment at the anchor."""
        with self._lock:
            if self._state != SessionState.PAUSED:
                return self._ignored("resume")
            self._state = SessionState.RUNNING
            self._start_clock()
            anchor = self._segmenter.anchor or self._source.last_known_location()
            self._segmenter.start_new_segment(anchor)
            message = f"Resumed, {self._segmenter.segment_count} segments"
        logger.info(message)
        self._notify()
        return True

    def stop(self) -> Optional[ActivityRecord]:
        """
        Finish the session.

        Returns:
            The finished record, or None when stopping before a type was
            selected (the session is cancelled) or while idle
        """
        with self._lock:
            if self._state == SessionState.IDLE:
                self._ignored("stop")
                return None

            self._source.stop_tracking()
            self._stop_clock()

            record = None
            if self._state in (SessionState.RUNNING, SessionState.PAUSED):
                record = ActivityRecord(
                    type=self._activity_type or settings.default_activity_type,
                    distance_km=self._distance.total_km,
                    duration=format_duration(self._clock.elapsed_seconds),
                    created_at=self._now(),
                    segments=self._segmenter.segments,
                    comment="",
                )
            account = self._account

            self._clear()
            self._state = SessionState.IDLE

        if record is None:
            logger.info("Activity session cancelled")
        else:
            logger.info(
                f"Finished {record.type}: {format_distance_km(record.distance_km)} in {record.duration}, "
                f"{len(record.segments)} segments"
            )
            self._hand_off(record, account)
        self._notify()
        return record

    # =========================================================================
    # Event inputs
    # =========================================================================

    def on_location(self, point: Optional[GeoPoint]) -> None:
        """Location callback; samples outside RUNNING are dropped."""
        if point is None:
            logger.debug("Location update without a fix")
            return

        with self._lock:
            if self._state != SessionState.RUNNING:
                return
            previous = self._segmenter.last_point
            step = self._distance.add(previous, point)
            self._segmenter.append(point)

        logger.debug(f"Point {point.as_tuple()} (+{step:.4f} km)")
        self._notify()

    def tick(self) -> None:
        """One clock period elapsed."""
        with self._lock:
            counted = self._clock.tick()
        if counted:
            self._notify()

    # =========================================================================
    # Internals
    # =========================================================================

    def _start_clock(self) -> None:
        self._clock.start()
        self._ticker.start()

    def _stop_clock(self) -> None:
        self._ticker.stop()
        self._clock.pause()

    def _clear(self) -> None:
        self._activity_type = None
        self._clock.reset()
        self._distance.reset()
        self._segmenter.reset()

    def _ignored(self, command: str) -> bool:
        logger.debug(f"Ignored {command} in state {self._state.value}")
        return False

    def _hand_off(self, record: ActivityRecord, account: Optional[AccountContext]) -> None:
        if account is None or not account.active:
            logger.warning("No logged-in account, finished activity not saved")
            return
        if self._sink is None:
            logger.warning("No activity sink configured, finished activity not saved")
            return
        record.account_id = account.account_id
        self._sink.submit(record, account.account_id)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        if not listeners:
            return
        snapshot = self.snapshot()
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Session listener failed in state {snapshot.state.value}")

"""
Tests for the ActivitySession state machine.

Ticks are driven manually unless a test runs inside an event loop.
"""

import asyncio
import threading
from datetime import datetime

import pytest

from stridelog.features.accounts import AccountContext
from stridelog.features.tracking import ActivitySession, ManualLocationSource, SessionState
from stridelog.shared.geo import GeoPoint, incremental_distance_km

A = GeoPoint(55.7500, 37.6100)
B = GeoPoint(55.7510, 37.6110)
C = GeoPoint(55.7520, 37.6125)
D = GeoPoint(55.7530, 37.6140)
E = GeoPoint(55.7545, 37.6150)

FIXED_NOW = datetime(2026, 10, 19, 8, 0, 0)


class RecordingSink:
    """Collects submitted activities."""

    def __init__(self):
        self.submitted = []

    def submit(self, record, account_id):
        self.submitted.append((record, account_id))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def source():
    return ManualLocationSource()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def account():
    return AccountContext(account_id=7, username="alice")


@pytest.fixture
def session(source, sink, account):
    return ActivitySession(source, sink=sink, account=account, now=lambda: FIXED_NOW)


def tick(session, times):
    for _ in range(times):
        session.tick()


# =============================================================================
# Transitions
# =============================================================================

class TestTransitions:

    def test_initial_state(self, session):
        assert session.state == SessionState.IDLE

    def test_begin_starts_location_source(self, session, source):
        assert session.begin() is True
        assert session.state == SessionState.AWAITING_TYPE_SELECTION
        assert source.is_tracking

    def test_select_type_starts_running(self, session):
        session.begin()
        assert session.select_type("running") is True
        assert session.state == SessionState.RUNNING
        assert session.snapshot().activity_type == "running"

    def test_pause_and_resume(self, session):
        session.begin()
        session.select_type("cycling")
        assert session.pause() is True
        assert session.state == SessionState.PAUSED
        assert session.resume() is True
        assert session.state == SessionState.RUNNING

    @pytest.mark.parametrize("command", ["pause", "resume", "stop"])
    def test_commands_while_idle_are_noops(self, session, command):
        result = getattr(session, command)()
        assert result in (False, None)
        assert session.state == SessionState.IDLE

    def test_select_type_outside_selection_is_noop(self, session):
        assert session.select_type("running") is False
        session.begin()
        session.select_type("running")
        assert session.select_type("cycling") is False
        assert session.snapshot().activity_type == "running"

    def test_begin_twice_is_noop(self, session):
        session.begin()
        assert session.begin() is False
        assert session.state == SessionState.AWAITING_TYPE_SELECTION

    def test_resume_while_running_is_noop(self, session):
        session.begin()
        session.select_type("running")
        assert session.resume() is False

    def test_pause_while_paused_is_noop(self, session):
        session.begin()
        session.select_type("running")
        session.pause()
        assert session.pause() is False
        assert session.state == SessionState.PAUSED

    def test_pause_logs_elapsed_and_anchor(self, session, source, caplog):
        session.begin()
        session.select_type("running")
        source.emit(A)
        tick(session, 2)
        with caplog.at_level("INFO", logger="stridelog.features.tracking.session"):
            session.pause()
        assert f"Paused at 2s, anchor {A}" in caplog.text


# =============================================================================
# Location samples
# =============================================================================

class TestLocationSamples:

    def test_samples_before_type_selection_are_dropped(self, session, source):
        session.begin()
        source.emit(A)
        assert session.snapshot().segments == ()

    def test_first_sample_seeds_segment_without_distance(self, session, source):
        session.begin()
        session.select_type("running")
        source.emit(A)
        snapshot = session.snapshot()
        assert snapshot.segments == ((A,),)
        assert snapshot.distance_km == 0.0

    def test_missing_fix_is_noop(self, session, source):
        session.begin()
        session.select_type("running")
        source.emit(A)
        source.emit(None)
        assert session.snapshot().segments == ((A,),)
        assert session.state == SessionState.RUNNING

    def test_samples_while_paused_are_dropped(self, session, source):
        session.begin()
        session.select_type("running")
        source.emit(A)
        session.pause()
        source.emit(B)
        assert session.snapshot().segments == ((A,),)

    def test_distance_equals_sum_of_steps(self, session, source):
        session.begin()
        session.select_type("running")
        for point in (A, B, C, D, E):
            source.emit(point)
        total = session.snapshot().distance_km
        assert total == pytest.approx(sum(session.distance_steps))
        assert total > 0


# =============================================================================
# Segments
# =============================================================================

class TestSegments:

    @pytest.mark.parametrize("cycles", [0, 1, 3])
    def test_pause_resume_cycles_produce_n_plus_one_segments(self, session, source, cycles):
        session.begin()
        session.select_type("running")
        points = iter([A, B, C, D, E, A, B, C])
        source.emit(next(points))
        for _ in range(cycles):
            session.pause()
            session.resume()
            source.emit(next(points))

        segments = session.snapshot().segments
        assert len(segments) == cycles + 1
        assert all(segments)

    def test_resume_falls_back_to_last_known_location(self, session, source):
        session.begin()
        session.select_type("running")
        session.pause()
        source.emit(B)  # dropped, but becomes the last known location
        session.resume()
        source.emit(C)
        assert session.snapshot().segments == ((B, C),)

    def test_resume_without_any_location(self, session, source):
        session.begin()
        session.select_type("running")
        session.pause()
        session.resume()
        assert session.snapshot().segments == ()
        source.emit(A)
        assert session.snapshot().segments == ((A,),)


# =============================================================================
# Full scenario
# =============================================================================

class TestScenario:

    def test_pause_resume_scenario(self, session, source, sink):
        """A,B,C -> pause -> resume -> D,E -> stop."""
        session.begin()
        session.select_type("running")

        for point in (A, B, C):
            source.emit(point)
            tick(session, 1)

        session.pause()
        tick(session, 30)  # paused time is not counted
        session.resume()

        for point in (D, E):
            source.emit(point)
            tick(session, 1)

        record = session.stop()

        assert record.segments == [[A, B, C], [C, D, E]]
        assert record.duration == "00:00:05"
        expected = (
            incremental_distance_km(A, B)
            + incremental_distance_km(B, C)
            + incremental_distance_km(C, D)
            + incremental_distance_km(D, E)
        )
        assert record.distance_km == pytest.approx(expected)
        assert record.type == "running"
        assert record.comment == ""
        assert record.created_at == FIXED_NOW
        assert sink.submitted == [(record, 7)]
        assert record.account_id == 7


# =============================================================================
# Stop
# =============================================================================

class TestStop:

    def test_stop_resets_session(self, session, source):
        session.begin()
        session.select_type("running")
        source.emit(A)
        tick(session, 2)
        session.stop()

        snapshot = session.snapshot()
        assert snapshot.state == SessionState.IDLE
        assert snapshot.segments == ()
        assert snapshot.distance_km == 0.0
        assert snapshot.elapsed_seconds == 0
        assert snapshot.activity_type is None

    def test_stop_silences_source_and_clock(self, session, source):
        session.begin()
        session.select_type("running")
        session.stop()

        assert not source.is_tracking
        session.on_location(A)
        session.tick()
        snapshot = session.snapshot()
        assert snapshot.segments == ()
        assert snapshot.elapsed_seconds == 0

    def test_stop_while_paused_produces_record(self, session, source, sink):
        session.begin()
        session.select_type("cycling")
        source.emit(A)
        session.pause()
        record = session.stop()
        assert record.segments == [[A]]
        assert len(sink.submitted) == 1

    def test_stop_before_type_selection_cancels(self, session, sink):
        session.begin()
        assert session.stop() is None
        assert session.state == SessionState.IDLE
        assert sink.submitted == []

    def test_activity_without_route_is_kept(self, session, sink):
        session.begin()
        session.select_type("running")
        tick(session, 4)
        record = session.stop()
        assert record.segments == []
        assert record.duration == "00:00:04"
        assert len(sink.submitted) == 1

    def test_no_account_skips_save(self, source, sink):
        session = ActivitySession(source, sink=sink)
        session.begin()
        session.select_type("running")
        record = session.stop()
        assert record is not None
        assert sink.submitted == []

    def test_logged_out_account_skips_save(self, session, sink, account):
        account.logout()
        session.begin()
        session.select_type("running")
        session.stop()
        assert sink.submitted == []

    def test_account_attached_after_construction(self, source, sink):
        session = ActivitySession(source, sink=sink)
        session.begin()
        session.select_type("running")
        source.emit(A)

        session.set_account(AccountContext(account_id=11, username="carol"))
        record = session.stop()

        assert session.account.account_id == 11
        assert sink.submitted == [(record, 11)]
        assert record.account_id == 11

    def test_new_session_after_stop(self, session, source):
        session.begin()
        session.select_type("running")
        source.emit(A)
        session.stop()

        assert session.begin() is True
        session.select_type("cycling")
        source.emit(B)
        assert session.snapshot().segments == ((B,),)


# =============================================================================
# Observation and concurrency
# =============================================================================

class TestSubscribe:

    def test_listener_receives_snapshots(self, session, source):
        states = []
        unsubscribe = session.subscribe(lambda snap: states.append(snap.state))
        session.begin()
        session.select_type("running")
        source.emit(A)
        unsubscribe()
        session.pause()

        assert states == [
            SessionState.AWAITING_TYPE_SELECTION,
            SessionState.RUNNING,
            SessionState.RUNNING,
        ]

    def test_snapshot_duration(self, session):
        session.begin()
        session.select_type("running")
        tick(session, 61)
        assert session.snapshot().duration == "00:01:01"

    def test_failing_listener_does_not_reach_the_source(self, session, source):
        seen = []

        def broken(snapshot):
            raise RuntimeError("render failed")

        session.subscribe(broken)
        session.subscribe(lambda snap: seen.append(snap.segments))
        session.begin()
        session.select_type("running")
        source.emit(A)
        session.tick()

        assert session.snapshot().segments == ((A,),)
        assert session.snapshot().elapsed_seconds == 1
        assert seen[-2] == ((A,),)
        assert session.stop() is not None


class TestConcurrency:

    def test_samples_and_ticks_from_threads(self, session):
        session.begin()
        session.select_type("running")

        def feed(offset):
            for i in range(50):
                session.on_location(GeoPoint(10.0 + offset + i * 1e-4, 20.0))

        def ticks():
            for _ in range(50):
                session.tick()

        threads = [threading.Thread(target=feed, args=(n,)) for n in range(4)]
        threads.append(threading.Thread(target=ticks))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = session.snapshot()
        assert len(snapshot.segments) == 1
        assert len(snapshot.segments[0]) == 200
        assert snapshot.elapsed_seconds == 50
        assert snapshot.distance_km == pytest.approx(sum(session.distance_steps))

    @pytest.mark.asyncio
    async def test_ticker_drives_clock_in_event_loop(self, source):
        session = ActivitySession(source, tick_interval=0.01)
        session.begin()
        session.select_type("running")
        await asyncio.sleep(0.1)
        session.pause()
        elapsed = session.snapshot().elapsed_seconds
        assert elapsed >= 2

        await asyncio.sleep(0.05)
        assert session.snapshot().elapsed_seconds == elapsed
        session.stop()

"""Tests for the session tracker state machine and XP checkpoints."""

import pytest

from mudadventure.events import SessionEnded, SessionStarted, UpdatedXP
from mudadventure.session import AdventureSession, SessionTracker


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def events():
    return []


@pytest.fixture
def tracker(events, clock):
    return SessionTracker(events.append, clock=clock)


class TestIdentity:
    """Test session lifecycle transitions."""

    def test_first_identity_starts_session(self, tracker, events):
        tracker.update_identity("Gandalf")
        assert tracker.is_active
        assert len(events) == 1
        assert isinstance(events[0], SessionStarted)
        assert events[0].session.character_name == "Gandalf"

    def test_same_name_is_noop(self, tracker, events):
        tracker.update_identity("Gandalf")
        tracker.update_identity("Gandalf")
        assert len(events) == 1

    def test_replacement_ends_before_start(self, tracker, events):
        tracker.update_identity("Alice")
        tracker.update_xp(500)
        events.clear()

        tracker.update_identity("Bob")

        assert [type(e) for e in events] == [SessionEnded, SessionStarted]
        assert events[0].session.character_name == "Alice"
        assert events[0].session.is_ended
        assert events[1].session.character_name == "Bob"

    def test_replacement_resets_xp(self, tracker):
        tracker.update_identity("Alice")
        tracker.update_xp(500)
        tracker.update_xp(900)
        tracker.update_identity("Bob")

        session = tracker.session
        assert session.xp is None
        assert session.xp_initial == 0
        assert session.xp_current == 0
        assert tracker.checkpoint() == 0

    def test_end_session(self, tracker, events, clock):
        tracker.update_identity("Alice")
        clock.now = 1060.0
        tracker.end_session()
        assert not tracker.is_active
        assert tracker.session is None
        assert isinstance(events[-1], SessionEnded)
        assert events[-1].session.ended_at == 1060.0

    def test_end_without_session_is_noop(self, tracker, events):
        tracker.end_session()
        assert events == []


class TestXP:
    """Test XP updates and the consuming checkpoint."""

    def test_update_without_session_is_noop(self, tracker, events):
        tracker.update_xp(100)
        assert events == []
        assert tracker.session is None

    def test_update_emits_current(self, tracker, events):
        tracker.update_identity("Alice")
        tracker.update_xp(100)
        tracker.update_xp(150)
        assert events[1:] == [UpdatedXP(100), UpdatedXP(150)]

    def test_initial_set_once(self, tracker):
        tracker.update_identity("Alice")
        tracker.update_xp(100)
        tracker.update_xp(250)
        assert tracker.session.xp_initial == 100
        assert tracker.session.xp_current == 250

    def test_checkpoint_consumes_gain(self, tracker):
        tracker.update_identity("Alice")
        tracker.update_xp(100)
        tracker.update_xp(160)
        assert tracker.checkpoint() == 60
        assert tracker.checkpoint() == 0

    def test_checkpoint_before_any_xp(self, tracker):
        tracker.update_identity("Alice")
        assert tracker.checkpoint() == 0

    def test_checkpoint_without_session(self, tracker):
        assert tracker.checkpoint() == 0

    def test_checkpoint_tracks_losses(self, tracker):
        tracker.update_identity("Alice")
        tracker.update_xp(1000)
        tracker.update_xp(700)
        assert tracker.checkpoint() == -300


class TestSnapshots:
    """Test that handed-out sessions don't change under observers."""

    def test_event_session_is_snapshot(self, tracker, events):
        tracker.update_identity("Alice")
        tracker.update_xp(100)
        started = events[0].session
        assert started.xp is None

    def test_session_property_is_copy(self, tracker):
        tracker.update_identity("Alice")
        copy = tracker.session
        copy.update_xp(999)
        assert tracker.session.xp is None


class TestRate:
    """Test XP per hour."""

    def test_rate_over_time(self):
        session = AdventureSession(character_name="Alice", started_at=0.0)
        session.update_xp(1000)
        session.update_xp(4000)
        assert session.xp_gained == 3000
        assert session.xp_per_hour(now=1800.0) == pytest.approx(6000)

    def test_rate_uses_end_time(self):
        session = AdventureSession(character_name="Alice", started_at=0.0)
        session.update_xp(0)
        session.update_xp(500)
        session.end(3600.0)
        assert session.xp_per_hour(now=7200.0) == pytest.approx(500)

    def test_rate_zero_elapsed(self):
        session = AdventureSession(character_name="Alice", started_at=10.0)
        assert session.xp_per_hour(now=10.0) == 0

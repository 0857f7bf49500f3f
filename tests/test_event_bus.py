"""
Tests for the event bus, event types, payload models and schedulers.
"""

import logging
import threading

import pytest

from playback_tracking.event_bus import EventBus
from playback_tracking.event_types import EventType
from playback_tracking.models import (
    BufferedPayload,
    FirstPlayPayload,
    PausePayload,
    SeekPayload,
    TrackingSession,
)
from playback_tracking.timers import ManualScheduler, ThreadingScheduler, TimerHandle


class TestEventTypes:
    """Test event type validation."""
    
    def test_valid_event_types(self):
        for event_type in ["play", "pause", "timeupdate", "loadstart", "loadeddata",
                           "ended", "dispose", "tracking:pause", "tracking:seek"]:
            assert EventType.is_valid(event_type)
    
    def test_invalid_event_types(self):
        for event_type in ["error", "tracking:performance", "", "PLAY"]:
            assert not EventType.is_valid(event_type)
    
    def test_ingestible_types_exclude_pause_output(self):
        ingestible = EventType.get_ingestible_types()
        assert "tracking:pause" not in ingestible
        assert "tracking:unpause" not in ingestible
        assert "tracking:buffered" in ingestible
        assert "play" in ingestible


class TestEventBus:
    """Test publish/subscribe behavior."""
    
    @pytest.fixture
    def bus(self):
        return EventBus()
    
    def test_handlers_run_in_subscription_order(self, bus):
        calls = []
        bus.subscribe("play", lambda data: calls.append("first"))
        bus.subscribe(EventType.PLAY, lambda data: calls.append("second"))
        
        bus.publish("play")
        assert calls == ["first", "second"]
    
    def test_payload_defaults_to_empty_dict(self, bus):
        received = []
        bus.subscribe("ended", received.append)
        bus.publish(EventType.ENDED)
        assert received == [{}]
    
    def test_unsubscribe(self, bus):
        received = []
        bus.subscribe("pause", received.append)
        assert bus.unsubscribe("pause", received.append)
        assert not bus.unsubscribe("pause", received.append)
        
        bus.publish("pause", {"x": 1})
        assert received == []
    
    def test_failing_handler_does_not_block_others(self, bus, caplog):
        received = []
        
        def broken(data):
            raise ValueError("boom")
        
        bus.subscribe("play", broken)
        bus.subscribe("play", received.append)
        
        with caplog.at_level(logging.ERROR):
            bus.publish("play", {"n": 1})
        
        assert received == [{"n": 1}]
        assert "failed for event 'play'" in caplog.text
    
    def test_unsubscribe_during_publish_applies_next_time(self, bus):
        calls = []
        
        def once(data):
            calls.append("once")
            bus.unsubscribe("play", once)
        
        bus.subscribe("play", once)
        bus.subscribe("play", lambda data: calls.append("always"))
        bus.publish("play")
        bus.publish("play")
        
        assert calls == ["once", "always", "always"]


class TestPayloadModels:
    """Test tolerant parsing of derived event payloads."""
    
    def test_pause_payload(self):
        payload = PausePayload.from_dict({"pauseTime": 1.5, "pauseCount": 2})
        assert payload.pause_time == 1.5
        assert payload.pause_count == 2
        assert payload.to_dict() == {"pauseTime": 1.5, "pauseCount": 2}
    
    def test_missing_and_invalid_fields_become_none(self):
        assert SeekPayload.from_dict({}).seek_count is None
        assert SeekPayload.from_dict({"seekCount": True}).seek_count is None
        assert SeekPayload.from_dict({"seekCount": -1}).seek_count is None
        assert BufferedPayload.from_dict({"secondsToLoad": "1"}).seconds_to_load is None
        assert FirstPlayPayload.from_dict({"secondsToLoad": float("nan")}).seconds_to_load is None
    
    def test_buffered_payload(self):
        payload = BufferedPayload.from_dict({"bufferCount": 4, "secondsToLoad": 0.25})
        assert payload.buffer_count == 4
        assert payload.seconds_to_load == 0.25


class TestTrackingSession:
    """Test the session record."""
    
    def test_new_sessions_have_distinct_ids(self):
        assert TrackingSession().session_id != TrackingSession().session_id
    
    def test_mark_watched(self):
        session = TrackingSession()
        assert session.mark_watched(5)
        assert not session.mark_watched(5)
        assert session.mark_watched(4)
        assert session.watched_duration == 2
    
    def test_report_defaults(self):
        report = TrackingSession().to_report()
        assert report.initial_load_time == 0.0
        assert report.watched_duration == 0


class TestSchedulers:
    """Test timer scheduling."""
    
    def test_manual_scheduler_fires_in_due_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(0.5, lambda: fired.append(("b", scheduler.now())))
        scheduler.call_later(0.2, lambda: fired.append(("a", scheduler.now())))
        
        assert scheduler.advance(1.0) == 2
        assert fired == [("a", 0.2), ("b", 0.5)]
        assert scheduler.now() == 1.0
    
    def test_manual_scheduler_cancel(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.call_later(0.1, lambda: fired.append(1))
        handle.cancel()
        handle.cancel()
        
        assert scheduler.pending == 0
        assert scheduler.advance(1.0) == 0
        assert fired == []
        assert not handle.active
    
    def test_handle_inactive_after_firing(self):
        scheduler = ManualScheduler()
        handle = scheduler.call_later(0.1, lambda: None)
        assert handle.active
        scheduler.advance(0.2)
        assert not handle.active
    
    def test_handle_cancel_callback(self):
        cancelled = []
        handle = TimerHandle(cancel_fn=lambda: cancelled.append(True))
        handle.cancel()
        assert cancelled == [True]
    
    def test_threading_scheduler(self):
        scheduler = ThreadingScheduler()
        done = threading.Event()
        cancelled = threading.Event()
        
        scheduler.call_later(0.01, done.set)
        handle = scheduler.call_later(0.05, cancelled.set)
        handle.cancel()
        
        assert done.wait(timeout=2.0)
        assert not cancelled.wait(timeout=0.2)

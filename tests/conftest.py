"""
Shared fixtures for the playback tracking tests.
"""

import pytest

from playback_tracking.player import RemotePlayer
from playback_tracking.timers import ManualScheduler


class FakeUnloadHooks:
    """Stands in for ``atexit`` so tests can trigger process-exit flushes."""
    
    def __init__(self):
        self.callbacks = []
    
    def register(self, func):
        self.callbacks.append(func)
    
    def unregister(self, func):
        self.callbacks = [c for c in self.callbacks if c != func]
    
    def fire(self):
        for func in list(self.callbacks):
            func()


class EventRecorder:
    """Collects payloads published on a bus, per event name."""
    
    def __init__(self, bus, *event_names):
        self.events = []
        for name in event_names:
            bus.subscribe(name, lambda data, name=name: self.events.append((name, dict(data))))
    
    def of(self, name):
        return [data for event, data in self.events if event == name]


@pytest.fixture
def player():
    """A remote player with nothing loaded."""
    return RemotePlayer("test-player")


@pytest.fixture
def scheduler():
    """Virtual-clock scheduler starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def unload_hooks():
    return FakeUnloadHooks()

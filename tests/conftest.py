"""Shared fixtures: a controllable clock and a started session"""
import pytest

from devtracker.session import TrackingSession


class FakeClock:
    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def session(project, clock):
    s = TrackingSession(project, clock=clock)
    s.start()
    return s

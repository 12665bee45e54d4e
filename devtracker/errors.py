"""Exceptions raised by the tracking core"""


class TrackerError(Exception):
    """Base class for tracker failures"""


class SnapshotError(TrackerError):
    """Reading or writing a snapshot baseline failed (non-fatal, per event)"""


class StartupError(TrackerError):
    """The session cannot start (project path or snapshot directory unusable)"""


class SessionClosedError(TrackerError):
    """An event arrived after the session was closed"""

"""Filesystem watching: feeds add/change/delete events into a tracking session"""

import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .models import EventResult
from .project import iter_project_files


class SessionEventHandler(FileSystemEventHandler):
    """Translates watchdog events into session events"""

    def __init__(
        self,
        session,
        ignore: Iterable[str] = (),
        on_result: Optional[Callable[[EventResult], None]] = None,
        on_error: Optional[Callable[[Exception, str], None]] = None
    ):
        super().__init__()
        self.session = session
        self.ignored = set(ignore)
        self.on_result = on_result
        self.on_error = on_error

    def is_ignored(self, path: str) -> bool:
        """True for paths outside the project, inside the snapshot directory, or with an ignored component"""
        resolved = Path(path).resolve()
        try:
            relative = resolved.relative_to(self.session.project_path)
        except ValueError:
            return True

        try:
            resolved.relative_to(self.session.store.directory.resolve())
            return True
        except ValueError:
            pass

        return any(part in self.ignored for part in relative.parts)

    def dispatch_event(self, kind: str, path):
        path = os.fsdecode(path)
        if self.is_ignored(path):
            return None

        try:
            result = self.session.handle_event(kind, path)
        except Exception as e:
            if self.on_error:
                self.on_error(e, path)
            return None

        if self.on_result:
            self.on_result(result)
        return result

    def on_created(self, event):
        if event.is_directory:
            return
        self.dispatch_event('add', event.src_path)

    def on_modified(self, event):
        if event.is_directory:
            return
        self.dispatch_event('change', event.src_path)

    def on_deleted(self, event):
        if event.is_directory:
            return
        self.dispatch_event('delete', event.src_path)

    def on_moved(self, event):
        if event.is_directory:
            return
        # Editors that save by renaming a temp file over the target produce a
        # move onto a known path; that is an edit of the target
        dest_kind = 'change' if self.session.is_known(os.fsdecode(event.dest_path)) else 'add'
        self.dispatch_event('delete', event.src_path)
        self.dispatch_event(dest_kind, event.dest_path)


class ProjectWatcher:
    """Runs a watchdog observer over the session's project directory"""

    def __init__(
        self,
        session,
        ignore: Iterable[str] = (),
        on_result: Optional[Callable[[EventResult], None]] = None,
        on_error: Optional[Callable[[Exception, str], None]] = None,
        initial_scan: bool = True
    ):
        self.session = session
        self.ignore = list(ignore)
        self.initial_scan = initial_scan
        self.handler = SessionEventHandler(session, self.ignore, on_result, on_error)
        self.observer = None

    def scan(self) -> int:
        """Emit an add event for every existing file; returns the count"""
        count = 0
        for path in iter_project_files(self.session.project_path, self.ignore, skip_hidden=False):
            if self.handler.is_ignored(str(path)):
                continue
            self.handler.dispatch_event('add', str(path))
            count += 1
        return count

    def start(self):
        """Seed baselines for existing files, then start watching"""
        if self.initial_scan:
            self.scan()

        self.observer = Observer()
        self.observer.schedule(self.handler, str(self.session.project_path), recursive=True)
        self.observer.start()

    def stop(self):
        """Stop watching and wait for in-flight events to finish"""
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None

    def is_alive(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

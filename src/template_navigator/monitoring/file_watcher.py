"""
File Watcher - create/change/delete notifications for the artifact index.

``ChangeSource`` is the capability the index subscribes to. The bundled
``PollingChangeSource`` diffs the workspace file set on each ``poll()``
(mtime first, xxhash when the mtime moved) and can run the polling loop on
a daemon thread.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from ..indexing.incremental import FileChangeTracker
from ..indexing.models import FileChangeEvent, FileChangeKind
from ..workspace import Workspace

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[FileChangeEvent], None]


class ChangeSource(ABC):
    """Delivers file change events for files matching a glob."""

    @abstractmethod
    def subscribe(self, glob: str, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register ``callback`` for changes to files matching ``glob``.

        Returns:
            Callable that removes the subscription
        """


class PollingChangeSource(ChangeSource):
    """Polling file monitor over a Workspace."""

    def __init__(self, workspace: Workspace, exclude_glob: Optional[str] = None,
                 interval_seconds: float = 1.0):
        self._workspace = workspace
        self._exclude_glob = exclude_glob
        self._interval = interval_seconds
        self._callbacks: Dict[str, List[ChangeCallback]] = {}
        self._trackers: Dict[str, FileChangeTracker] = {}
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def subscribe(self, glob: str, callback: ChangeCallback) -> Callable[[], None]:
        with self._lock:
            if glob not in self._trackers:
                # Baseline so existing files are not reported as created
                tracker = FileChangeTracker()
                for path in self._workspace.find_files(glob, self._exclude_glob):
                    tracker.update_file_tracking(path)
                self._trackers[glob] = tracker
            self._callbacks.setdefault(glob, []).append(callback)
        logger.debug(f"Subscribed to changes for {glob}")

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._callbacks.get(glob, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._callbacks.pop(glob, None)
                    self._trackers.pop(glob, None)

        return unsubscribe

    @property
    def subscription_count(self) -> int:
        with self._lock:
            return sum(len(callbacks) for callbacks in self._callbacks.values())

    def poll(self) -> List[FileChangeEvent]:
        """
        Scan once and dispatch events to subscribers.

        Returns:
            All events detected by this scan
        """
        all_events: List[FileChangeEvent] = []
        with self._lock:
            pending = [(glob, list(callbacks), self._trackers[glob])
                       for glob, callbacks in self._callbacks.items()]

        for glob, callbacks, tracker in pending:
            events = self._scan(glob, tracker)
            all_events.extend(events)
            for event in events:
                for callback in callbacks:
                    try:
                        callback(event)
                    except Exception:
                        logger.exception(f"Change callback failed for {event.path}")
        return all_events

    def _scan(self, glob: str, tracker: FileChangeTracker) -> List[FileChangeEvent]:
        events: List[FileChangeEvent] = []
        current = self._workspace.find_files(glob, self._exclude_glob)

        for path in current:
            if not tracker.is_tracked(path):
                tracker.update_file_tracking(path)
                events.append(FileChangeEvent(path, FileChangeKind.CREATED))
            elif tracker.is_file_changed(path):
                tracker.update_file_tracking(path)
                events.append(FileChangeEvent(path, FileChangeKind.CHANGED))

        for path in tracker.forget_missing(current):
            events.append(FileChangeEvent(path, FileChangeKind.DELETED))

        if events:
            logger.debug(f"Detected {len(events)} change(s) for {glob}")
        return events

    def start(self) -> None:
        """Start polling on a daemon thread"""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="template-nav-watcher", daemon=True)
        self._thread.start()
        logger.info(f"File watcher started (interval={self._interval}s)")

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self._interval * 2)
            self._thread = None

    def is_monitoring_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self.poll()
            except Exception:
                logger.exception("File watcher poll failed")

    def get_monitoring_status(self) -> dict:
        return {
            'active': self.is_monitoring_active(),
            'interval_seconds': self._interval,
            'subscriptions': self.subscription_count,
        }

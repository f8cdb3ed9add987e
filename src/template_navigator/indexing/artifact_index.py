"""
Artifact Index - name to artifact registry with rebuild and incremental updates.

Readers never see a half-built mapping: a rebuild assembles a fresh dict and
publishes it with a single reference assignment, and incremental updates are
copy-on-write. ``lookup`` additionally waits for an in-flight rebuild so a
caller that triggered one observes its result.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from ..config import NavigatorConfig, get_config
from ..errors import RebuildFailed, WorkspaceTooLarge
from ..utils import FileFilter, read_text_or_none
from ..workspace import Workspace
from .extractor import ArtifactExtractor
from .incremental import FileChangeTracker, content_fingerprint
from .models import Artifact, ArtifactKind, FileChangeEvent, FileChangeKind, RebuildOutcome

if TYPE_CHECKING:
    from ..monitoring import ChangeSource

logger = logging.getLogger(__name__)

ScanResult = Tuple[str, List[Artifact]]


class ArtifactIndex:
    """
    Registry of declared artifacts for one workspace.

    Lifecycle: construct, ``rebuild()``, then feed changes through
    ``apply_change``/``apply_file_change`` (or let the injected change source
    do it), and ``dispose()`` when done. When several files declare the same
    name, the file that sorts last by path wins on rebuild; incremental
    updates overwrite whatever entry is current.
    """

    def __init__(self, workspace: Workspace, config: Optional[NavigatorConfig] = None,
                 extractor: Optional[ArtifactExtractor] = None,
                 change_source: Optional["ChangeSource"] = None):
        self._workspace = workspace
        self._config = config or get_config()
        self._extractor = extractor or ArtifactExtractor()
        self._change_source = change_source
        self._file_filter = FileFilter(self._config.include_glob, [self._config.exclude_glob])

        self._map: Dict[str, Artifact] = {}
        self._tracker = FileChangeTracker()

        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._ready.set()
        self._building = False
        self._rebuild_pending = False
        self._disabled = False
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._last_outcome: Optional[RebuildOutcome] = None
        self._last_rebuild_time: Optional[float] = None

    # ----- STATE -----

    @property
    def is_building(self) -> bool:
        with self._lock:
            return self._building

    @property
    def is_disabled(self) -> bool:
        """True after a rebuild hit the file ceiling; cleared by the next successful rebuild."""
        return self._disabled

    @property
    def is_watching(self) -> bool:
        return self._unsubscribe is not None

    @property
    def last_outcome(self) -> Optional[RebuildOutcome]:
        return self._last_outcome

    def __len__(self) -> int:
        return len(self._map)

    # ----- FULL REBUILD -----

    def rebuild(self) -> RebuildOutcome:
        """
        Re-scan every matching file and replace the mapping.

        A request arriving while a rebuild runs is a no-op returning a
        ``skipped`` outcome. Changes reported during the rebuild are folded
        into one more pass before the building flag clears.
        """
        with self._lock:
            if self._building:
                logger.debug("Rebuild already in progress, skipping request")
                return RebuildOutcome.skipped()
            self._building = True
            self._rebuild_pending = False
            self._ready.clear()

        finished = False
        try:
            while True:
                outcome = self._rebuild_once()
                with self._lock:
                    # Pending check and building reset share one acquisition
                    rerun = self._rebuild_pending and not outcome.too_large
                    self._rebuild_pending = False
                    if not rerun:
                        self._building = False
                        self._ready.set()
                        finished = True
                        break
                logger.info("Files changed during rebuild, rebuilding again")
        finally:
            if not finished:
                with self._lock:
                    self._building = False
                    self._ready.set()

        self._last_outcome = outcome
        if outcome.ok:
            self._install_watches()
        elif outcome.too_large:
            self._remove_watches()
        return outcome

    def _rebuild_once(self) -> RebuildOutcome:
        start_time = time.time()
        file_count = 0
        try:
            files = sorted(self._workspace.find_files(self._config.include_glob, self._config.exclude_glob))
            file_count = len(files)
            if file_count > self._config.max_files:
                raise WorkspaceTooLarge(file_count, self._config.max_files)

            logger.info(f"Indexing {file_count} files...")
            new_map, fingerprints, skipped = self._scan_files(files)
        except WorkspaceTooLarge as e:
            logger.warning(f"{e}; indexing disabled")
            self._publish({}, {})
            self._disabled = True
            return RebuildOutcome.workspace_too_large(e.count)
        except Exception as e:
            # Keep the previously published mapping
            failure = RebuildFailed(e)
            logger.exception(str(failure))
            return RebuildOutcome.failed(str(failure), file_count=file_count)

        self._publish(new_map, fingerprints)
        self._disabled = False
        self._last_rebuild_time = time.time()
        logger.info(
            f"Indexed {len(new_map)} artifacts from {file_count} files "
            f"in {time.time() - start_time:.3f}s ({skipped} skipped)"
        )
        return RebuildOutcome.success(file_count, len(new_map), skipped)

    def _scan_files(self, files: List[str]) -> Tuple[Dict[str, Artifact], Dict[str, str], int]:
        """Read files concurrently, then merge in path order."""
        new_map: Dict[str, Artifact] = {}
        fingerprints: Dict[str, str] = {}
        skipped = 0

        max_workers = max(1, min(self._config.read_workers, len(files)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # map() yields in submission order whatever order reads finish in
            for path, result in zip(files, executor.map(self._scan_file, files)):
                if result is None:
                    skipped += 1
                    continue
                fingerprint, artifacts = result
                fingerprints[path] = fingerprint
                for artifact in artifacts:
                    new_map[artifact.name] = artifact

        return new_map, fingerprints, skipped

    def _scan_file(self, path: str) -> Optional[ScanResult]:
        text = read_text_or_none(self._workspace.read_text, path)
        if text is None:
            return None
        artifacts = self._extractor.extract(text, origin=path)
        if artifacts:
            logger.debug(f"Extracted {len(artifacts)} artifacts from {path}")
        return content_fingerprint(text), artifacts

    def _publish(self, new_map: Dict[str, Artifact], fingerprints: Dict[str, str]) -> None:
        with self._lock:
            self._map = new_map
            self._tracker.replace_all(fingerprints)

    # ----- LOOKUP -----

    def lookup(self, name: str, timeout: Optional[float] = None) -> Optional[Artifact]:
        """
        Return the artifact registered under ``name``.

        Blocks while a rebuild is in flight. With a ``timeout`` that expires
        first, the previously published mapping is consulted instead.
        """
        self._ready.wait(timeout)
        return self._map.get(name)

    def lookup_kind(self, name: str, *kinds: ArtifactKind) -> Optional[Artifact]:
        artifact = self.lookup(name)
        if artifact is None or (kinds and artifact.kind not in kinds):
            return None
        return artifact

    def names(self) -> List[str]:
        return sorted(self._map)

    def artifacts_from(self, path: str) -> List[Artifact]:
        """Artifacts currently registered with ``path`` as their origin"""
        return [artifact for artifact in self._map.values() if artifact.origin == path]

    def snapshot(self) -> Dict[str, Artifact]:
        return dict(self._map)

    # ----- INCREMENTAL UPDATES -----

    def apply_change(self, path: str, kind: FileChangeKind) -> bool:
        """
        Apply a create/change/delete notification for one file.

        Returns:
            True when the mapping reflects the change now, False when it was
            deferred to a rebuild or ignored
        """
        kind = FileChangeKind(kind)
        if self._defer_to_rebuild(path):
            return False

        if kind is FileChangeKind.DELETED:
            return self.apply_file_change(path, None)

        if not self._is_indexed_path(path):
            return False
        # Unreadable on the incremental path means the file is effectively gone
        text = read_text_or_none(self._workspace.read_text, path)
        return self.apply_file_change(path, text)

    def apply_file_change(self, path: str, new_text: Optional[str]) -> bool:
        """
        Replace the contribution of one file; ``None`` means the file was removed.

        Stale entries from the file's previous declarations are dropped
        first, so renamed selectors do not linger.
        """
        with self._lock:
            if self._building:
                self._rebuild_pending = True
                logger.debug(f"Rebuild in progress, deferring change to {path}")
                return False
            if self._disabled:
                return False

            if new_text is None:
                self._tracker.remove_file_tracking(path)
                self._map = self._without_origin(self._map, path)
                logger.debug(f"Removed artifacts from {path}")
                return True

            if not self._tracker.record_content(path, new_text):
                return True

            artifacts = self._extractor.extract(new_text, origin=path)
            updated = self._without_origin(self._map, path)
            for artifact in artifacts:
                updated[artifact.name] = artifact
            self._map = updated
            logger.debug(f"Updated {path}: {len(artifacts)} artifacts")
            return True

    def handle_event(self, event: FileChangeEvent) -> None:
        """ChangeSource callback"""
        self.apply_change(event.path, event.kind)

    def _defer_to_rebuild(self, path: str) -> bool:
        with self._lock:
            if self._building:
                self._rebuild_pending = True
                logger.debug(f"Rebuild in progress, deferring change to {path}")
                return True
            return False

    def _is_indexed_path(self, path: str) -> bool:
        return self._file_filter.should_include_file(self._workspace.relative(path))

    @staticmethod
    def _without_origin(mapping: Dict[str, Artifact], path: str) -> Dict[str, Artifact]:
        return {name: artifact for name, artifact in mapping.items() if artifact.origin != path}

    # ----- WATCHES -----

    def _install_watches(self) -> None:
        if self._change_source is None or self._unsubscribe is not None:
            return
        self._unsubscribe = self._change_source.subscribe(self._config.include_glob, self.handle_event)
        logger.debug(f"Watching {self._config.include_glob} for changes")

    def _remove_watches(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def dispose(self) -> None:
        """Stop watching and drop the mapping."""
        self._remove_watches()
        with self._lock:
            self._map = {}
            self._tracker = FileChangeTracker()

    def status(self) -> Dict[str, Any]:
        outcome = self._last_outcome
        return {
            "building": self.is_building,
            "disabled": self._disabled,
            "watching": self.is_watching,
            "artifact_count": len(self._map),
            "file_count": len(self._tracker.file_hashes),
            "last_rebuild_time": self._last_rebuild_time,
            "last_outcome": outcome.to_dict() if outcome else None,
        }

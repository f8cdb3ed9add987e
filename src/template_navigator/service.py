"""
Navigator service - wires workspace, index, watcher and coordinator together.

This is the surface host glue talks to (the MCP tools, an editor bridge,
tests). Every operation returns plain data; failures are reported in the
result rather than raised.
"""

import logging
from typing import Any, Dict, Optional

from .config import NavigatorConfig, get_config
from .indexing import ArtifactIndex, FileChangeKind, RebuildOutcome, RebuildStatus
from .monitoring import ChangeSource, PollingChangeSource
from .resolution import LookupCoordinator
from .utils import read_text_or_none
from .workspace import LocalWorkspace, Workspace

logger = logging.getLogger(__name__)

INDEXING_TITLE = "Template Navigator: Indexing Angular templates..."
REBUILD_TITLE = "Template Navigator: Rebuilding index..."
DONE_MESSAGE = "Template Navigator: Indexing complete."
FAILED_MESSAGE = "Template Navigator: Indexing failed."
TOO_LARGE_MESSAGE = "Template Navigator: Workspace too large ({count} files), indexing disabled."


class NavigatorService:
    """One navigator instance per project root."""

    def __init__(self, root: Optional[str] = None, workspace: Optional[Workspace] = None,
                 config: Optional[NavigatorConfig] = None,
                 change_source: Optional[ChangeSource] = None, watch: bool = False):
        if workspace is None:
            if root is None:
                raise ValueError("Either root or workspace is required")
            workspace = LocalWorkspace(root)

        self.config = config or get_config()
        self.workspace = workspace
        if change_source is None and watch:
            change_source = PollingChangeSource(
                workspace, self.config.exclude_glob, self.config.poll_interval_seconds
            )
        self.change_source = change_source
        self.index = ArtifactIndex(workspace, self.config, change_source=change_source)
        self.coordinator = LookupCoordinator(self.index, workspace, self.config)

    def initialize(self) -> Dict[str, Any]:
        """Initial index build; an owned poller starts once the index watches."""
        return self._run_rebuild(INDEXING_TITLE, done_message=None)

    def rebuild(self) -> Dict[str, Any]:
        """Manual refresh."""
        return self._run_rebuild(REBUILD_TITLE, done_message=DONE_MESSAGE)

    def _run_rebuild(self, title: str, done_message: Optional[str]) -> Dict[str, Any]:
        logger.info(title)
        outcome = self.index.rebuild()
        self._sync_poller(outcome)
        return {**outcome.to_dict(), "message": self._outcome_message(outcome, done_message)}

    def _sync_poller(self, outcome: RebuildOutcome) -> None:
        """Keep an owned poller running exactly while the index is watching."""
        if not isinstance(self.change_source, PollingChangeSource):
            return
        if self.index.is_watching:
            if not self.change_source.is_monitoring_active():
                self.change_source.start()
        elif outcome.too_large:
            self.change_source.stop()

    @staticmethod
    def _outcome_message(outcome: RebuildOutcome, done_message: Optional[str]) -> Optional[str]:
        if outcome.status is RebuildStatus.TOO_LARGE:
            return TOO_LARGE_MESSAGE.format(count=outcome.file_count)
        if outcome.status is RebuildStatus.FAILED:
            return FAILED_MESSAGE
        if outcome.status is RebuildStatus.OK:
            return done_message
        return None

    def lookup_artifact(self, name: str) -> Optional[Dict[str, Any]]:
        artifact = self.index.lookup(name)
        if artifact is None:
            return None
        return {"kind": artifact.kind.value, "name": artifact.name, "origin": artifact.origin}

    def resolve_at_position(self, path: str, line: int, character: int,
                            text: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Declaration location for a template position, or None."""
        document_path = self.workspace.normalize(path)
        if text is None:
            text = read_text_or_none(self.workspace.read_text, document_path)
            if text is None:
                return None
        location = self.coordinator.resolve(document_path, text, line, character)
        return location.to_dict() if location else None

    def describe_at_position(self, path: str, line: int, character: int,
                             text: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Info panel contents for a template position, or None."""
        document_path = self.workspace.normalize(path)
        if text is None:
            text = read_text_or_none(self.workspace.read_text, document_path)
            if text is None:
                return None
        info = self.coordinator.describe(document_path, text, line, character)
        if info is None:
            return None
        return {"contents": info.contents, "location": info.location.to_dict()}

    def apply_change(self, path: str, kind: str) -> Dict[str, Any]:
        change_kind = FileChangeKind(kind)
        applied = self.index.apply_change(self.workspace.normalize(path), change_kind)
        return {"applied": applied, "deferred": not applied and self.index.is_building}

    def status(self) -> Dict[str, Any]:
        status = self.index.status()
        if isinstance(self.change_source, PollingChangeSource):
            status["watcher"] = self.change_source.get_monitoring_status()
        return status

    def dispose(self) -> None:
        if isinstance(self.change_source, PollingChangeSource):
            self.change_source.stop()
        self.index.dispose()

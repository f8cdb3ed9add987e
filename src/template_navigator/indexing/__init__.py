"""
Artifact discovery and the in-memory index.
"""

from .artifact_index import ArtifactIndex
from .extractor import ArtifactExtractor, extract_artifacts, split_selector
from .incremental import FileChangeTracker, content_fingerprint
from .models import (Artifact, ArtifactKind, FileChangeEvent, FileChangeKind,
                     Location, RebuildOutcome, RebuildStatus)

__all__ = [
    "Artifact",
    "ArtifactExtractor",
    "ArtifactIndex",
    "ArtifactKind",
    "FileChangeEvent",
    "FileChangeKind",
    "FileChangeTracker",
    "Location",
    "RebuildOutcome",
    "RebuildStatus",
    "content_fingerprint",
    "extract_artifacts",
    "split_selector",
]

"""
Model classes for the indexing system.
"""

from .artifact import Artifact, ArtifactKind
from .change_event import FileChangeEvent, FileChangeKind
from .location import ClassReference, HoverInfo, Location, StyleDeclaration
from .rebuild_outcome import RebuildOutcome, RebuildStatus

__all__ = [
    'Artifact',
    'ArtifactKind',
    'ClassReference',
    'FileChangeEvent',
    'FileChangeKind',
    'HoverInfo',
    'Location',
    'RebuildOutcome',
    'RebuildStatus',
    'StyleDeclaration',
]

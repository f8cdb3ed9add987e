"""
File change notifications delivered by a change source.
"""

from dataclasses import dataclass
from enum import Enum


class FileChangeKind(str, Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileChangeEvent:
    path: str
    kind: FileChangeKind

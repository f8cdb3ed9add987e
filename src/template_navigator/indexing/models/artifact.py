"""
Artifact model for declared components, directives and pipes.
"""

from dataclasses import dataclass
from enum import Enum


class ArtifactKind(str, Enum):
    """Kind of declaration an artifact was extracted from."""

    COMPONENT = "component"
    DIRECTIVE = "directive"
    PIPE = "pipe"


@dataclass(frozen=True)
class Artifact:
    """A discovered declaration keyed by one selector token or pipe name."""

    kind: ArtifactKind
    name: str
    origin: str = ""

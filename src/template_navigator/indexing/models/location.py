"""
Lookup result models.
"""

from dataclasses import dataclass
from typing import Optional

from .artifact import Artifact


@dataclass(frozen=True)
class Location:
    """Resolved declaration position (0-based line and column)."""

    file: str
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict:
        return {"file": self.file, "line": self.line, "column": self.column}


@dataclass(frozen=True)
class ClassReference:
    """A style class referenced on a markup line; never stored."""

    class_name: str
    start: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


@dataclass(frozen=True)
class StyleDeclaration:
    """Declaration of a class inside a style sheet."""

    line_index: int
    block: str


@dataclass(frozen=True)
class HoverInfo:
    """Text for a floating info panel plus the location it describes."""

    location: Location
    contents: str
    artifact: Optional[Artifact] = None
    class_name: Optional[str] = None

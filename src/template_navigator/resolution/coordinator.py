"""
Lookup Coordinator - decides which resolver applies at a cursor position.

Order of attempts, first hit wins:

1. style class reference, against the sibling style sheet of the template
2. element tag reference, against component/directive artifacts
3. pipe reference (``| name``), against pipe artifacts

Every path that finds nothing returns None; absence of a definition is a
normal outcome.
"""

import logging
import re
from pathlib import PurePosixPath
from typing import List, NamedTuple, Optional, Tuple

from ..config import NavigatorConfig, get_config
from ..indexing import ArtifactIndex
from ..indexing.models import Artifact, ArtifactKind, HoverInfo, Location
from ..utils import read_text_or_none
from ..workspace import Workspace
from .class_resolver import resolve_class_name
from .style_locator import find_declaration

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[\w-]+")


class _Target(NamedTuple):
    location: Location
    artifact: Optional[Artifact] = None
    class_name: Optional[str] = None
    block: Optional[str] = None


def word_range_at(line: str, character: int) -> Optional[Tuple[int, int]]:
    """Span of the ``[\\w-]+`` word touching ``character``."""
    for match in WORD_PATTERN.finditer(line):
        if match.start() <= character <= match.end():
            return match.start(), match.end()
        if match.start() > character:
            break
    return None


def is_tag_reference(line: str, word: str) -> bool:
    """``<word``, ``</word`` or ``< word`` followed by whitespace, ``>``, ``/`` or end of line"""
    return re.search(rf"</?\s*{re.escape(word)}(\s|>|/|$)", line) is not None


def is_pipe_reference(line: str, word: str) -> bool:
    """``| word`` as in ``{{ value | word }}`` or ``*ngFor="let x of xs | word"``"""
    return re.search(rf"\|\s*{re.escape(word)}\b", line) is not None


class LookupCoordinator:
    """Resolves template positions to declaration locations."""

    def __init__(self, index: ArtifactIndex, workspace: Workspace,
                 config: Optional[NavigatorConfig] = None):
        self._index = index
        self._workspace = workspace
        self._config = config or get_config()

    def sibling_style_sheets(self, document_path: str) -> List[str]:
        """Existing style sheets next to a template, in configured extension order."""
        path = PurePosixPath(self._workspace.normalize(document_path))
        siblings = []
        for ext in self._config.style_extensions:
            candidate = str(path.with_suffix(ext))
            if candidate != str(path) and self._workspace.exists(candidate):
                siblings.append(candidate)
        return siblings

    def resolve(self, document_path: str, document_text: str, line: int, character: int) -> Optional[Location]:
        """Location of the declaration referenced at (line, character), or None."""
        target = self._find_target(document_path, document_text, line, character)
        return target.location if target else None

    def describe(self, document_path: str, document_text: str, line: int, character: int) -> Optional[HoverInfo]:
        """Info panel text for the reference at (line, character), or None."""
        target = self._find_target(document_path, document_text, line, character)
        if target is None:
            return None

        if target.artifact is not None:
            artifact = target.artifact
            contents = f"{artifact.kind.value} `{artifact.name}`\n\nDeclared in {artifact.origin}"
        else:
            contents = f"```css\n{target.block}\n```"
        return HoverInfo(location=target.location, contents=contents,
                         artifact=target.artifact, class_name=target.class_name)

    def _find_target(self, document_path: str, document_text: str, line: int, character: int) -> Optional[_Target]:
        lines = document_text.splitlines()
        if line < 0 or line >= len(lines):
            return None
        line_text = lines[line]

        target = self._resolve_class(document_path, line_text, character)
        if target is not None:
            return target

        word_range = word_range_at(line_text, character)
        if word_range is None:
            return None
        word = line_text[word_range[0]:word_range[1]]

        if is_tag_reference(line_text, word):
            artifact = self._index.lookup_kind(word, ArtifactKind.COMPONENT, ArtifactKind.DIRECTIVE)
            if artifact is not None:
                return _Target(Location(artifact.origin, 0, 0), artifact=artifact)

        if is_pipe_reference(line_text, word):
            artifact = self._index.lookup_kind(word, ArtifactKind.PIPE)
            if artifact is not None:
                return _Target(Location(artifact.origin, 0, 0), artifact=artifact)

        return None

    def _resolve_class(self, document_path: str, line_text: str, character: int) -> Optional[_Target]:
        siblings = self.sibling_style_sheets(document_path)
        if not siblings:
            return None

        class_name = resolve_class_name(line_text, character)
        if class_name is None:
            return None

        for style_path in siblings:
            style_text = read_text_or_none(self._workspace.read_text, style_path)
            if style_text is None:
                continue
            declaration = find_declaration(style_text, class_name)
            if declaration is not None:
                logger.debug(f"Class {class_name} declared at {style_path}:{declaration.line_index}")
                return _Target(Location(style_path, declaration.line_index, 0),
                               class_name=class_name, block=declaration.block)
        return None

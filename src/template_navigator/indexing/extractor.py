"""
Artifact extraction from TypeScript source text using regular expressions.

No parser is involved: a file declares a component or directive when its
text contains the decorator call and a quoted ``selector`` property, and a
pipe when it contains ``@Pipe(`` and a quoted ``name`` property.
Computed or interpolated values are not detected.
"""

import logging
import re
from typing import Dict, List

from .models import Artifact, ArtifactKind

logger = logging.getLogger(__name__)

COMPONENT_DECORATOR = re.compile(r"@Component\s*\(([\s\S]*?)\)")
DIRECTIVE_DECORATOR = re.compile(r"@Directive\s*\(([\s\S]*?)\)")
PIPE_DECORATOR = re.compile(r"@Pipe\s*\(([\s\S]*?)\)")
SELECTOR_PROP = re.compile(r"selector\s*:\s*['\"`]([^'\"`]+)['\"`]")
NAME_PROP = re.compile(r"name\s*:\s*['\"`]([^'\"`]+)['\"`]")

_ATTRIBUTE_BRACKETS = re.compile(r"[\[\]]")


def split_selector(selector: str) -> List[str]:
    """Split a selector list into lookup keys: ``"a, [b]"`` -> ``["a", "b"]``."""
    keys = []
    for token in selector.split(","):
        key = _ATTRIBUTE_BRACKETS.sub("", token.strip())
        if key:
            keys.append(key)
    return keys


class ArtifactExtractor:
    """Lexical extraction backend used by the artifact index."""

    def extract(self, source_text: str, origin: str = "") -> List[Artifact]:
        """
        Extract every declared artifact from one source file.

        Args:
            source_text: Full file contents
            origin: Path recorded on each artifact

        Returns:
            Artifacts in declaration order; empty when nothing matches
        """
        if not source_text:
            return []

        found: Dict[str, Artifact] = {}
        try:
            self._extract_element_artifacts(source_text, origin, found)
            self._extract_pipe(source_text, origin, found)
        except (re.error, TypeError) as e:
            logger.debug(f"Extraction failed for {origin or '<text>'}: {e}")
            return []
        return list(found.values())

    def _extract_element_artifacts(self, text: str, origin: str, found: Dict[str, Artifact]) -> None:
        is_component = COMPONENT_DECORATOR.search(text) is not None
        if not is_component and DIRECTIVE_DECORATOR.search(text) is None:
            return

        match = SELECTOR_PROP.search(text)
        if not match:
            return

        # Component wins when a file matches both decorators
        kind = ArtifactKind.COMPONENT if is_component else ArtifactKind.DIRECTIVE
        for key in split_selector(match.group(1)):
            found.pop(key, None)
            found[key] = Artifact(kind=kind, name=key, origin=origin)

    def _extract_pipe(self, text: str, origin: str, found: Dict[str, Artifact]) -> None:
        if PIPE_DECORATOR.search(text) is None:
            return

        match = NAME_PROP.search(text)
        if not match:
            return

        name = match.group(1).strip()
        if name:
            found.pop(name, None)
            found[name] = Artifact(kind=ArtifactKind.PIPE, name=name, origin=origin)


_default_extractor = ArtifactExtractor()


def extract_artifacts(source_text: str, origin: str = "") -> List[Artifact]:
    """Extract artifacts with the default lexical extractor."""
    return _default_extractor.extract(source_text, origin)

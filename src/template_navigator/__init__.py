"""
Template Navigator - lexical index of Angular components, directives and pipes.

Resolves template references (tags, pipes, style classes) to the file that
declares them, using regular expressions instead of a TypeScript parser.
"""

from .config import NavigatorConfig, get_config, reset_config
from .indexing import Artifact, ArtifactIndex, ArtifactKind, extract_artifacts
from .resolution import LookupCoordinator, find_declaration, resolve_class_name
from .service import NavigatorService

__version__ = "0.3.0"

__all__ = [
    "Artifact",
    "ArtifactIndex",
    "ArtifactKind",
    "LookupCoordinator",
    "NavigatorConfig",
    "NavigatorService",
    "extract_artifacts",
    "find_declaration",
    "get_config",
    "reset_config",
    "resolve_class_name",
]

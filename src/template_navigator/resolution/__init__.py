"""
Template position resolution.
"""

from .class_resolver import class_references, find_class_reference, resolve_class_name
from .coordinator import LookupCoordinator, is_pipe_reference, is_tag_reference, word_range_at
from .style_locator import find_declaration, find_declaration_line

__all__ = [
    "LookupCoordinator",
    "class_references",
    "find_class_reference",
    "find_declaration",
    "find_declaration_line",
    "is_pipe_reference",
    "is_tag_reference",
    "resolve_class_name",
    "word_range_at",
]

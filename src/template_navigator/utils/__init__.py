"""
Utility modules for the Template Navigator.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- file utilities: Glob filtering and walking
"""

from .error_handler import handle_tool_errors, read_text_or_none
from .file_filter import FileFilter, matches_glob
from .file_walker import FileWalker, create_file_walker

__all__ = [
    'handle_tool_errors',
    'read_text_or_none',
    'FileFilter',
    'matches_glob',
    'FileWalker',
    'create_file_walker'
]

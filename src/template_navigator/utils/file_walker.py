"""
Centralized file walking utilities for the Template Navigator.

This module provides unified file traversal that integrates with the
FileFilter glob rules, so rebuilds and the polling watcher see the same
file set.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional

from .file_filter import FileFilter


class FileWalker:
    """Centralized file walking with integrated filtering."""

    def __init__(self, file_filter: Optional[FileFilter] = None):
        """
        Initialize the file walker.

        Args:
            file_filter: FileFilter instance, creates default if None
        """
        self.file_filter = file_filter or FileFilter()

    def walk_files(self, project_path: str) -> Iterator[Path]:
        """
        Walk through all matching files in a project directory.

        Args:
            project_path: Root directory to walk

        Yields:
            Path objects for files that should be processed
        """
        base_path = Path(project_path)

        for root, dirs, files in os.walk(project_path):
            rel_root = Path(root).relative_to(base_path).as_posix()
            rel_root = '' if rel_root == '.' else rel_root + '/'

            # Filter directories in-place to avoid descending into excluded dirs
            dirs[:] = sorted(d for d in dirs if not self.file_filter.should_exclude_directory(rel_root + d))

            for file in sorted(files):
                if self.file_filter.should_include_file(rel_root + file):
                    yield Path(root) / file


def create_file_walker(include_glob: str, exclude_globs: Optional[List[str]] = None) -> FileWalker:
    """
    Factory function to create a FileWalker for one include glob.

    Args:
        include_glob: Files to walk, e.g. ``**/*.ts``
        exclude_globs: Patterns to exclude

    Returns:
        Configured FileWalker instance
    """
    return FileWalker(FileFilter(include_glob, exclude_globs))

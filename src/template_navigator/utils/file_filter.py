"""
Glob-based include/exclude filtering shared by file walking and watching.
"""

import fnmatch
from typing import Iterable, List, Optional

# Directories never worth descending into, whatever the exclude glob says
ALWAYS_EXCLUDED_DIRS = frozenset({'.git', '.hg', '.svn', '.angular', '__pycache__'})


def matches_glob(relative_path: str, pattern: str) -> bool:
    """
    Match a forward-slash relative path against a glob pattern.

    ``**/`` at the start of the pattern also matches zero directories, so
    ``**/*.ts`` matches ``main.ts`` as well as ``src/app/main.ts``.
    """
    path = relative_path.replace('\\', '/').lstrip('/')
    if fnmatch.fnmatchcase(path, pattern):
        return True
    if pattern.startswith('**/'):
        return fnmatch.fnmatchcase(path, pattern[3:])
    return False


class FileFilter:
    """Decides which files and directories belong to the index."""

    def __init__(self, include_glob: str = '**/*', exclude_globs: Optional[Iterable[str]] = None):
        self.include_glob = include_glob
        self.exclude_globs: List[str] = [g for g in (exclude_globs or []) if g]

    def should_include_file(self, relative_path: str) -> bool:
        if not matches_glob(relative_path, self.include_glob):
            return False
        return not self.is_excluded(relative_path)

    def is_excluded(self, relative_path: str) -> bool:
        return any(matches_glob(relative_path, pattern) for pattern in self.exclude_globs)

    def should_exclude_directory(self, relative_dir: str) -> bool:
        """Prune a directory when everything below it would be excluded."""
        name = relative_dir.rstrip('/').rsplit('/', 1)[-1]
        if name in ALWAYS_EXCLUDED_DIRS:
            return True
        return self.is_excluded(relative_dir.rstrip('/') + '/')

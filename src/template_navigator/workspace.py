"""
Host capabilities consumed by the core, plus a local filesystem implementation.

The index and the lookup coordinator only talk to ``Workspace``; editors or
servers embedding the navigator can supply their own implementation backed
by open documents instead of the disk.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .utils import create_file_walker

logger = logging.getLogger(__name__)


class Workspace(ABC):
    """File enumeration and text access."""

    @abstractmethod
    def find_files(self, include_glob: str, exclude_glob: Optional[str] = None) -> List[str]:
        """Return paths of files matching ``include_glob`` and not ``exclude_glob``."""

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Return file text; raises FileNotFoundError or OSError."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True when ``path`` names an existing file."""

    def normalize(self, path: str) -> str:
        """Return the canonical form of ``path`` used as an artifact origin."""
        return path.replace('\\', '/')

    def relative(self, path: str) -> str:
        """Return ``path`` relative to the workspace root, for glob matching."""
        return self.normalize(path)


class LocalWorkspace(Workspace):
    """Workspace rooted at a directory on the local filesystem."""

    def __init__(self, root: str, encoding: str = 'utf-8'):
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            raise ValueError(f"Project path does not exist: {root}")
        self.root = root_path.resolve()
        self.encoding = encoding

    def find_files(self, include_glob: str, exclude_glob: Optional[str] = None) -> List[str]:
        walker = create_file_walker(include_glob, [exclude_glob] if exclude_glob else None)
        files = [path.as_posix() for path in walker.walk_files(str(self.root))]
        logger.debug(f"Found {len(files)} files matching {include_glob} under {self.root}")
        return files

    def read_text(self, path: str) -> str:
        with open(self.normalize(path), 'r', encoding=self.encoding) as f:
            return f.read()

    def exists(self, path: str) -> bool:
        return Path(self.normalize(path)).is_file()

    def normalize(self, path: str) -> str:
        path_obj = Path(path)
        if not path_obj.is_absolute():
            path_obj = self.root / path_obj
        return path_obj.as_posix()

    def relative(self, path: str) -> str:
        normalized = Path(self.normalize(path))
        try:
            return normalized.relative_to(self.root).as_posix()
        except ValueError:
            return normalized.as_posix()

    def __repr__(self) -> str:
        return f"LocalWorkspace(root={self.root.as_posix()!r})"

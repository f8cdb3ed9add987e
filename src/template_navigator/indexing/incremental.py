"""
Change detection for incremental index updates.

Content fingerprints use xxhash so that a save that does not alter the text
(or a watcher reporting the same file twice) skips re-extraction.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import xxhash


def content_fingerprint(text: str) -> str:
    """Fast non-cryptographic hash of file text"""
    return xxhash.xxh3_64(text.encode('utf-8', errors='surrogatepass')).hexdigest()


@dataclass
class FileChangeTracker:
    """Per-file fingerprints and modification times"""
    file_hashes: Dict[str, str] = field(default_factory=dict)
    file_mtimes: Dict[str, float] = field(default_factory=dict)

    def get_file_hash(self, file_path: str) -> str:
        """Hash raw file bytes; empty string when unreadable"""
        try:
            with open(file_path, 'rb') as f:
                return xxhash.xxh3_64(f.read()).hexdigest()
        except (IOError, OSError):
            return ""

    def get_file_mtime(self, file_path: str) -> float:
        try:
            return os.path.getmtime(file_path)
        except (IOError, OSError):
            return 0.0

    def is_tracked(self, file_path: str) -> bool:
        return file_path in self.file_hashes

    def is_file_changed(self, file_path: str) -> bool:
        """Check whether a tracked file changed on disk since it was recorded"""
        if not self.is_tracked(file_path):
            return True

        current_mtime = self.get_file_mtime(file_path)
        cached_mtime = self.file_mtimes.get(file_path, 0.0)

        # Quick mtime check before hashing
        if current_mtime == cached_mtime and cached_mtime != 0.0:
            return False

        return self.get_file_hash(file_path) != self.file_hashes.get(file_path, "")

    def update_file_tracking(self, file_path: str) -> None:
        """Record the on-disk state of a file"""
        self.file_hashes[file_path] = self.get_file_hash(file_path)
        self.file_mtimes[file_path] = self.get_file_mtime(file_path)

    def record_content(self, file_path: str, text: str) -> bool:
        """
        Record the fingerprint of text already read for a file.

        Returns:
            True when the text differs from the previously recorded content
        """
        fingerprint = content_fingerprint(text)
        changed = self.file_hashes.get(file_path) != fingerprint
        self.file_hashes[file_path] = fingerprint
        return changed

    def remove_file_tracking(self, file_path: str) -> None:
        self.file_hashes.pop(file_path, None)
        self.file_mtimes.pop(file_path, None)

    def replace_all(self, fingerprints: Dict[str, str]) -> None:
        """Swap in the fingerprints produced by a full rebuild"""
        self.file_hashes = dict(fingerprints)
        self.file_mtimes = {}

    def forget_missing(self, present: Iterable[str]) -> List[str]:
        """Drop tracking for files no longer present; returns the dropped paths"""
        present_set = set(present)
        missing = [path for path in self.file_hashes if path not in present_set]
        for path in missing:
            self.remove_file_tracking(path)
        return missing

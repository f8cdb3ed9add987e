"""
Result of a full index rebuild.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RebuildStatus(str, Enum):
    OK = "ok"
    TOO_LARGE = "too_large"
    SKIPPED = "skipped"  # another rebuild was already running
    FAILED = "failed"


@dataclass(frozen=True)
class RebuildOutcome:
    status: RebuildStatus
    file_count: int = 0
    artifact_count: int = 0
    skipped_files: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is RebuildStatus.OK

    @property
    def too_large(self) -> bool:
        return self.status is RebuildStatus.TOO_LARGE

    @classmethod
    def success(cls, file_count: int, artifact_count: int, skipped_files: int = 0) -> "RebuildOutcome":
        return cls(RebuildStatus.OK, file_count, artifact_count, skipped_files)

    @classmethod
    def workspace_too_large(cls, file_count: int) -> "RebuildOutcome":
        return cls(RebuildStatus.TOO_LARGE, file_count=file_count)

    @classmethod
    def skipped(cls) -> "RebuildOutcome":
        return cls(RebuildStatus.SKIPPED)

    @classmethod
    def failed(cls, error: str, file_count: int = 0) -> "RebuildOutcome":
        return cls(RebuildStatus.FAILED, file_count=file_count, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "file_count": self.file_count,
            "artifact_count": self.artifact_count,
            "skipped_files": self.skipped_files,
            "error": self.error,
        }

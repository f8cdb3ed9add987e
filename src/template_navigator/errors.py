"""
Error types for the indexing and lookup core.

A file that matches no declaration pattern is not an error: extraction
simply returns nothing. Per-file read failures are logged and skipped.
Only the exceptions below cross module boundaries, and the index turns them
into a RebuildOutcome before they reach a caller.
"""


class NavigatorError(Exception):
    """Base class for template navigator errors"""


class ConfigError(NavigatorError, ValueError):
    """Invalid configuration value"""


class WorkspaceTooLarge(NavigatorError):
    """The candidate file set exceeds the configured ceiling"""

    def __init__(self, count: int, limit: int):
        super().__init__(f"Workspace too large: {count} files exceeds limit of {limit}")
        self.count = count
        self.limit = limit


class RebuildFailed(NavigatorError):
    """An unexpected exception escaped the rebuild loop"""

    def __init__(self, cause: BaseException):
        super().__init__(f"Rebuild failed: {cause}")
        self.cause = cause

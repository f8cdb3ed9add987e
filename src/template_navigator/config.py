"""
Configuration Management for Template Navigator

Sensible defaults with optional environment variable overrides.
"""

import os
from typing import List, Optional, Tuple

from .errors import ConfigError


class NavigatorConfig:
    """Indexing and lookup configuration"""

    DEFAULT_INCLUDE_GLOB = "**/*.ts"
    DEFAULT_EXCLUDE_GLOB = "**/node_modules/**"
    DEFAULT_MAX_FILES = 5000  # Rebuild ceiling - larger workspaces disable indexing
    DEFAULT_READ_WORKERS = 8
    DEFAULT_STYLE_EXTENSIONS = (".scss", ".css", ".sass", ".less")
    DEFAULT_POLL_INTERVAL_SECONDS = 1.0
    DEFAULT_LOG_LEVEL = "ERROR"

    def __init__(self, **overrides):
        self.include_glob = self._get_str_env(
            "TEMPLATE_NAV_INCLUDE_GLOB", self.DEFAULT_INCLUDE_GLOB
        )
        self.exclude_glob = self._get_str_env(
            "TEMPLATE_NAV_EXCLUDE_GLOB", self.DEFAULT_EXCLUDE_GLOB
        )
        self.max_files = self._get_int_env("TEMPLATE_NAV_MAX_FILES", self.DEFAULT_MAX_FILES)
        self.read_workers = self._get_int_env(
            "TEMPLATE_NAV_READ_WORKERS", self.DEFAULT_READ_WORKERS
        )
        self.style_extensions = self._get_list_env(
            "TEMPLATE_NAV_STYLE_EXTENSIONS", self.DEFAULT_STYLE_EXTENSIONS
        )
        self.poll_interval_seconds = self._get_float_env(
            "TEMPLATE_NAV_POLL_INTERVAL_SECONDS", self.DEFAULT_POLL_INTERVAL_SECONDS
        )
        self.log_level = self._get_str_env("TEMPLATE_NAV_LOG_LEVEL", self.DEFAULT_LOG_LEVEL).upper()

        # Explicit keyword arguments win over the environment
        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ConfigError(f"Unknown configuration option: {key}")
            if key == "style_extensions":
                value = self._normalize_extensions(value)
            setattr(self, key, value)

        self._validate_config()

    def _get_str_env(self, key: str, default: str) -> str:
        """Get non-empty string from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_float_env(self, key: str, default: float) -> float:
        """Get float from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return float(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_list_env(self, key: str, default: Tuple[str, ...]) -> List[str]:
        value = os.environ.get(key)
        if value is None or not value.strip():
            return list(default)
        return self._normalize_extensions(value.split(","))

    @staticmethod
    def _normalize_extensions(extensions) -> List[str]:
        normalized = []
        for ext in extensions:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    def _validate_config(self):
        """Validate configuration values"""
        if self.max_files <= 0:
            raise ConfigError("max_files must be positive")
        if self.read_workers <= 0:
            raise ConfigError("read_workers must be positive")
        if self.poll_interval_seconds <= 0:
            raise ConfigError("poll_interval_seconds must be positive")
        if not self.style_extensions:
            raise ConfigError("style_extensions cannot be empty")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown log level: {self.log_level}")

    def __repr__(self) -> str:
        return (
            f"NavigatorConfig("
            f"include_glob={self.include_glob!r}, "
            f"exclude_glob={self.exclude_glob!r}, "
            f"max_files={self.max_files}, "
            f"read_workers={self.read_workers}, "
            f"style_extensions={self.style_extensions}, "
            f"poll_interval_seconds={self.poll_interval_seconds})"
        )


# Global configuration instance
_config: Optional[NavigatorConfig] = None


def get_config() -> NavigatorConfig:
    """Get global navigator configuration instance"""
    global _config
    if _config is None:
        _config = NavigatorConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Template Navigator Environment Variables:

- TEMPLATE_NAV_ROOT: Project root served by the MCP server (default: cwd)
- TEMPLATE_NAV_INCLUDE_GLOB: Source files to index (default: **/*.ts)
- TEMPLATE_NAV_EXCLUDE_GLOB: Files never indexed (default: **/node_modules/**)
- TEMPLATE_NAV_MAX_FILES: Rebuild ceiling; above it indexing is disabled (default: 5000)
- TEMPLATE_NAV_READ_WORKERS: Concurrent file reads during a rebuild (default: 8)
- TEMPLATE_NAV_STYLE_EXTENSIONS: Sibling style sheet extensions, in lookup order
  (default: .scss,.css,.sass,.less)
- TEMPLATE_NAV_POLL_INTERVAL_SECONDS: File watcher polling interval (default: 1.0)
- TEMPLATE_NAV_LOG_LEVEL: Server log level (default: ERROR)

Example usage:
    export TEMPLATE_NAV_MAX_FILES=20000
    export TEMPLATE_NAV_STYLE_EXTENSIONS=.css
"""

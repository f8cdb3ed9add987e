"""
File change monitoring.
"""

from .file_watcher import ChangeCallback, ChangeSource, PollingChangeSource

__all__ = ['ChangeCallback', 'ChangeSource', 'PollingChangeSource']

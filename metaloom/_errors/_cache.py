"""
This module defines the exception raised when a cache artifact cannot be
written to the configured cache directory.
"""

from pathlib import Path


class CacheWriteError(OSError):
    """Raised when a metadata cache artifact cannot be written."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        super().__init__(f"Could not write metadata cache artifact {str(path)!r}: {reason}")

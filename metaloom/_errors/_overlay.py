"""
This module defines the exception raised for malformed overlay files.
"""

from pathlib import Path


class OverlayFormatError(ValueError):
    """Raised when an overlay file cannot be parsed or is not a mapping."""

    def __init__(self, path: str | Path, detail: str):
        self.path = Path(path)
        super().__init__(f"Invalid overlay metadata file {str(path)!r}: {detail}")

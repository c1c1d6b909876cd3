"""
This module is responsible for parsing the structured-data files that feed
the overlay store. It provides a standardized way to read a metadata document
from disk into a Python dictionary.

It contains individual, private reader functions for the formats supported
natively by `metaloom`:
- `_read_yaml`: For YAML files (the format used for cache artifacts too).
- `_read_json`: For JSON files.
- `_read_toml`: For TOML files.

The central component is the `_ConfigReader` class, which inspects a given
file's extension and selects the appropriate reader function. Decoding errors
are reported as `OverlayFormatError` so the caller sees which file is broken;
plain I/O errors (missing or unreadable files) propagate unchanged.
"""

import json
import tomllib
from pathlib import Path

import yaml

from metaloom._errors import OverlayFormatError


def _read_toml(path: str | Path) -> dict:
    """Convert a TOML file to a dictionary."""
    try:
        with Path(path).open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise OverlayFormatError(path, f"error decoding TOML: {e}") from e


def _read_yaml(path: str | Path) -> dict | None:
    """Convert a YAML file to a dictionary."""
    try:
        with Path(path).open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OverlayFormatError(path, f"error decoding YAML: {e}") from e


def _read_json(path: str | Path) -> dict:
    """Convert a JSON file to a dictionary."""
    try:
        with Path(path).open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise OverlayFormatError(path, f"error decoding JSON: {e}") from e


class _ConfigReader:
    """Read a metadata file and return a dictionary."""

    _engines = {
        ".toml": _read_toml,
        ".yaml": _read_yaml,
        ".yml": _read_yaml,
        ".json": _read_json,
    }

    def __init__(self, path: Path | str) -> None:
        if not isinstance(path, (Path, str)):
            raise TypeError("Path must be a string or a pathlib.Path object.")

        self.path = Path(path)
        self.extension = self.path.suffix.lower()

        if self.extension not in self._engines:
            raise OverlayFormatError(
                path,
                f"unsupported extension {self.extension!r}, expected one of "
                f"{sorted(self._engines)}",
            )
        self._engine = self._engines[self.extension]

    def read(self) -> dict | None:
        """Read the file; empty documents yield None."""
        return self._engine(self.path)

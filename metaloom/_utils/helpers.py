"""
This module provides small, general-purpose helper functions that are shared
across the `metaloom` package.

`_replace_recursive` is the merge rule used everywhere overlay metadata meets
generated metadata: mappings are merged key by key, and any other value on
the overlay side (scalars and lists alike) replaces the base value.
"""

import copy
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\-]")


def _replace_recursive(base: Mapping, overlay: Mapping) -> dict:
    """Deep-merge `overlay` into a copy of `base`; overlay wins on conflicts.

    Neither argument is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _replace_recursive(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _dump_str_to_list(s: Any) -> list:
    """Convert a string or path (or an iterable of them) to a list."""
    if s is None:
        return []
    if isinstance(s, (str, Path)):
        return [s]
    if isinstance(s, Iterable):
        return list(s)
    raise TypeError("Argument must be a string, a path or an iterable of them.")


def _safe_filename(name: str) -> str:
    """Replace characters that are not safe in file names with '_'."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name)

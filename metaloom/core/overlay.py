"""
This module provides the `OverlayStore`, which loads externally authored
metadata for classes.

Overlay files live in one or more directories. Each file is a mapping from
fully-qualified class name to class-metadata-shaped data, in the same shape as
the generated cache artifacts:

```yaml
blog.models.Article:
  properties:
    rating:
      read_only: true
```

All files are deep-merged into one store; on conflicting keys the file read
later wins. Directories are read in the configured order, files within a
directory in sorted name order.

The store is loaded at most once: `ensure_loaded()` is idempotent, and
overlay files are not re-read for the lifetime of the store. Create a new
store to pick up changed files.
"""

import copy
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from metaloom._errors import OverlayFormatError
from metaloom._utils import _ConfigReader, _dump_str_to_list, _replace_recursive

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.yml", "*.yaml")


class OverlayStore:
    """Process-lifetime store of overlay metadata keyed by class name.

    Args:
        directories (str | Path | Iterable[str | Path] | None): Directories to
            read overlay files from. Defaults to None (empty store).
        patterns (str | Iterable[str], optional): Glob patterns selecting
            overlay files. YAML, JSON and TOML files are understood. Defaults
            to `("*.yml", "*.yaml")`.
    """

    def __init__(
        self,
        directories: str | Path | Iterable[str | Path] | None = None,
        patterns: str | Iterable[str] = DEFAULT_PATTERNS,
    ):
        self.directories = [Path(d) for d in _dump_str_to_list(directories)]
        self.patterns = _dump_str_to_list(patterns)
        self._metadata: dict[str, dict] | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        """Whether the overlay files have been read."""
        return self._metadata is not None

    def files(self) -> list[Path]:
        """Return the overlay files in the order they are merged."""
        files = []
        for directory in self.directories:
            if not directory.is_dir():
                logger.warning("Overlay metadata directory %s does not exist, skipping", directory)
                continue

            matches = set()
            for pattern in self.patterns:
                matches.update(directory.glob(pattern))
            files.extend(sorted(matches))
        return files

    def ensure_loaded(self) -> None:
        """Read and merge all overlay files, once."""
        with self._lock:
            if self._metadata is not None:
                return

            metadata = {}
            for path in self.files():
                document = _ConfigReader(path).read()

                if not document:
                    logger.debug("Overlay metadata file %s is empty, skipping", path)
                    continue

                if not isinstance(document, dict):
                    raise OverlayFormatError(
                        path, f"expected a mapping of class names, got {type(document).__name__}"
                    )

                for class_name, entry in document.items():
                    if entry is not None and not isinstance(entry, dict):
                        raise OverlayFormatError(
                            path,
                            f"entry for {class_name!r} must be a mapping, got {type(entry).__name__}",
                        )

                metadata = _replace_recursive(metadata, document)
                logger.debug("Loaded overlay metadata file %s (%d classes)", path, len(document))

            self._metadata = metadata

    def get(self, class_name: str) -> dict:
        """Return a copy of the overlay metadata for `class_name`, or {}."""
        self.ensure_loaded()
        return copy.deepcopy(self._metadata.get(class_name) or {})

    def class_names(self) -> list[str]:
        """Return the names of all classes that have overlay metadata."""
        self.ensure_loaded()
        return list(self._metadata)

"""
This module contains the `MetadataService`, the orchestrator of metaloom.

`generate_for(cls)` makes sure a cache artifact exists for a class and for
every one of its ancestors:

1. If the class already has an artifact and force-regenerate (debug) mode is
   off, nothing happens.
2. Otherwise the ancestor chain is walked root-most ancestor first, ending
   with the class itself.
3. Every ancestor not yet processed by this service is built from its own
   declarations, deep-merged with its overlay metadata (overlay wins) and
   written as its own artifact.

An artifact holds only the members its class declares. The serializer reading
the artifacts is responsible for combining them along the inheritance chain.

The service keeps two process-lifetime caches: the set of classes it already
processed, and its `OverlayStore`, which reads overlay files once. Both are
guarded by locks, so a service can be shared between threads.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from metaloom._utils import (
    _class_hierarchy,
    _fully_qualified_name,
    _get_option,
    _replace_recursive,
    _resolve_class,
)

from ._matrix import MetadataMatrix
from .builder import ClassMetadataBuilder
from .cache import MetadataCache
from .overlay import OverlayStore

logger = logging.getLogger(__name__)


class MetadataService:
    """Generates, merges and caches serializer metadata.

    Attributes:
        cache (MetadataCache): Where artifacts are written.
        overlays (OverlayStore): Overlay metadata, loaded once.
        builder (ClassMetadataBuilder): Builds metadata from class declarations.
        processed (set[str]): Class names generated by this service.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        metadata_dirs: str | Path | Iterable[str | Path] | None = None,
        *,
        debug: bool | None = None,
        overlays: OverlayStore | None = None,
        builder: ClassMetadataBuilder | None = None,
    ):
        """Initializes the MetadataService.

        Args:
            cache_dir (str | Path | None, optional): Directory for cache
                artifacts. Defaults to the 'cache_dir' option.
            metadata_dirs (str | Path | Iterable | None, optional): Overlay
                directories. Ignored when `overlays` is given. Defaults to the
                'metadata_dirs' option.
            debug (bool | None, optional): Force-regenerate mode. When None,
                the 'debug' option is read on every call. Defaults to None.
            overlays (OverlayStore | None, optional): A shared overlay store.
            builder (ClassMetadataBuilder | None, optional): A custom builder.

        Raises:
            ValueError: If no cache directory is given or configured.
        """
        cache_dir = cache_dir if cache_dir is not None else _get_option("cache_dir")
        if cache_dir is None:
            raise ValueError(
                "No cache directory configured. Pass 'cache_dir' or call "
                "set_metaloom_option('cache_dir', ...)."
            )

        if overlays is None:
            if metadata_dirs is None:
                metadata_dirs = _get_option("metadata_dirs")
            overlays = OverlayStore(metadata_dirs)

        self.cache = MetadataCache(cache_dir)
        self.overlays = overlays
        self.builder = builder or ClassMetadataBuilder()
        self.processed: set[str] = set()
        self._debug = debug
        self._lock = threading.RLock()

    @property
    def debug(self) -> bool:
        """Whether existing artifacts are ignored and always regenerated."""
        if self._debug is not None:
            return self._debug
        return bool(_get_option("debug"))

    def is_generated(self, cls: type | str) -> bool:
        """Whether an artifact exists for `cls`."""
        return self.cache.exists(_fully_qualified_name(_resolve_class(cls)))

    def class_hierarchy(self, cls: type | str) -> list[type]:
        """Return `cls` and its ancestors, root-most first."""
        return _class_hierarchy(_resolve_class(cls))

    def metadata_for(self, cls: type | str) -> dict:
        """Return the merged metadata of `cls` without writing anything."""
        cls = _resolve_class(cls)
        return _replace_recursive(
            self.builder.build(cls), self.overlays.get(_fully_qualified_name(cls))
        )

    def generate_for(self, cls: type | str) -> list[Path]:
        """
        Write cache artifacts for `cls` and its ancestors.

        Args:
            cls (type | str): The class, or its dotted import path.

        Returns:
            list[Path]: The artifacts written by this call, root-most first.
                Empty when nothing needed to be generated.

        Raises:
            ClassIntrospectionError: If the class or one of its ancestors
                cannot be inspected.
            OverlayFormatError: If an overlay file is malformed.
            CacheWriteError: If an artifact cannot be written.
        """
        cls = _resolve_class(cls)
        class_name = _fully_qualified_name(cls)

        if not self.debug and self.cache.exists(class_name):
            logger.debug("Metadata of %s already cached, skipping", class_name)
            return []

        written = []
        with self._lock:
            for ancestor in _class_hierarchy(cls):
                ancestor_name = _fully_qualified_name(ancestor)
                if ancestor_name in self.processed:
                    continue

                metadata = self.metadata_for(ancestor)
                written.append(self.cache.write(ancestor_name, metadata))
                self.processed.add(ancestor_name)

        logger.debug("Generated metadata of %s (%d artifacts)", class_name, len(written))
        return written

    def generate_for_all(self, classes: Iterable[type | str]) -> list[Path]:
        """Run `generate_for` on every class in order; the first error aborts."""
        written = []
        for cls in classes:
            written.extend(self.generate_for(cls))
        return written

    def read(self, cls: type | str) -> dict | None:
        """Return the cached metadata of `cls`, or None if it has no artifact."""
        return self.cache.read(_fully_qualified_name(_resolve_class(cls)))

    def describe(self, cls: type | str) -> pd.DataFrame:
        """Tabulate the cached metadata of `cls` and its ancestors.

        Missing artifacts are generated first.
        """
        cls = _resolve_class(cls)
        self.generate_for(cls)

        chain = {}
        for ancestor in _class_hierarchy(cls):
            name = _fully_qualified_name(ancestor)
            chain[name] = self.cache.read(name) or {}
        return MetadataMatrix(chain).build()

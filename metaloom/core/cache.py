"""
This module manages the cache artifacts written by the service: one YAML
document per class, named after the fully-qualified class name and holding
`{<class name>: <class metadata>}`.

Artifacts are written to a temporary file first and moved into place, so a
reader never sees a half-written file. They are never modified in place and
never deleted here; invalidation is left to whoever operates the cache
directory.
"""

import logging
import os
import tempfile
from pathlib import Path

import yaml

from metaloom._errors import CacheWriteError
from metaloom._utils import _safe_filename

logger = logging.getLogger(__name__)

ARTIFACT_SUFFIX = ".yml"


class MetadataCache:
    """Cache artifacts stored in `directory`."""

    def __init__(self, directory: str | Path):
        if not isinstance(directory, (str, Path)):
            raise TypeError("Cache directory must be a string or a pathlib.Path.")
        self.directory = Path(directory)

    def path_for(self, class_name: str) -> Path:
        """Return the artifact path of `class_name`."""
        return self.directory / f"{_safe_filename(class_name)}{ARTIFACT_SUFFIX}"

    def exists(self, class_name: str) -> bool:
        return self.path_for(class_name).is_file()

    def write(self, class_name: str, metadata: dict) -> Path:
        """Write the artifact of `class_name`, replacing any previous one."""
        path = self.path_for(class_name)
        document = yaml.safe_dump(
            {class_name: metadata},
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".", suffix=ARTIFACT_SUFFIX)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(document)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheWriteError(path, str(e)) from e

        logger.debug("Wrote metadata cache artifact %s", path)
        return path

    def read(self, class_name: str) -> dict | None:
        """Return the cached metadata of `class_name`, or None if not cached."""
        path = self.path_for(class_name)
        if not path.is_file():
            return None
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
        return document.get(class_name)

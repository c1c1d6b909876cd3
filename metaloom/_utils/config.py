"""
This module manages global configuration settings for the metaloom package.

It offers a simple, centralized mechanism for setting and retrieving
package-level options that affect how metadata is generated. This is
particularly useful for defining environment-wide settings without having to
pass them repeatedly to every `MetadataService`.

Options:
- `cache_dir`: Directory where generated cache artifacts are written.
- `metadata_dirs`: One or more directories holding overlay metadata files.
- `debug`: Force-regenerate mode. When True, existing cache artifacts are
  never trusted and every request rebuilds them.

The module exposes `set_metaloom_option` to modify settings and an internal
`_get_option` to retrieve them, providing a controlled interface to a private,
module-level settings dictionary.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# A private dictionary to hold all package settings.
_settings = {
    "cache_dir": None,
    "metadata_dirs": None,
    "debug": False,
}


def _validate_option(option: str, value: Any) -> Any:
    """Check the type of a single option value and normalize it."""
    if option == "debug":
        if not isinstance(value, bool):
            raise TypeError("Option 'debug' must be a bool.")
        return value

    if option == "cache_dir":
        if not isinstance(value, (str, Path)):
            raise TypeError("Option 'cache_dir' must be a string or a pathlib.Path.")
        return Path(value)

    # metadata_dirs
    if isinstance(value, (str, Path)):
        value = [value]
    if not isinstance(value, Iterable):
        raise TypeError("Option 'metadata_dirs' must be a path or an iterable of paths.")
    value = list(value)
    if not all(isinstance(v, (str, Path)) for v in value):
        raise TypeError("Option 'metadata_dirs' must only contain strings or pathlib.Path.")
    return [Path(v) for v in value]


def set_metaloom_option(options: str | Iterable[str], values: Any) -> None:
    """
    Set one or more configuration options for the metaloom package.

    Args:
        options (str | Iterable[str]): The name(s) of the option(s) to set
            (e.g., 'cache_dir').
        values (Any): The value for a single option, or an iterable of values
            matching `options` one-to-one.
    """

    if isinstance(options, str):
        options = [options]
        values = [values]

    if not isinstance(options, Iterable):
        raise TypeError("Key must be a string or an iterable of strings.")

    if not isinstance(values, Iterable):
        raise TypeError("Values must be an iterable when several options are given.")

    for option, value in zip(options, values, strict=True):
        if not isinstance(option, str):
            raise TypeError("Key must be a string.")

        if option not in _settings:
            raise KeyError(
                f"Invalid option key: {option!r}. Valid options are: {list(_settings.keys())}"
            )

        _settings[option] = _validate_option(option, value)
        logger.debug("metaloom option %r set to %r", option, _settings[option])


def _get_option(key: str) -> Any:
    """
    Get a configuration option for the metaloom package.

    Args:
        key (str): The name of the option to get.
    """
    return _settings.get(key)

"""
This module centralizes custom exception types for the metaloom package,
making them easily importable from a single location.
"""

from ._cache import CacheWriteError
from ._codec import ParameterEncodingError, UnsupportedParameterTypeError
from ._introspection import ClassIntrospectionError
from ._overlay import OverlayFormatError

__all__ = [
    "CacheWriteError",
    "ClassIntrospectionError",
    "OverlayFormatError",
    "ParameterEncodingError",
    "UnsupportedParameterTypeError",
]

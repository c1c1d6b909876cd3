"""
This module defines the exceptions raised by the parameter codec.

`UnsupportedParameterTypeError`:
Raised when a value handed to the encoder is not a string, a number, None,
a list/tuple or a dict. Values are never coerced.

`ParameterEncodingError`:
Raised when a structured value has the right shape but cannot be written as
strict JSON (NaN, unserializable members, ...).
"""


class UnsupportedParameterTypeError(TypeError):
    """Raised when a handler parameter has a type the codec cannot encode."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Unsupported handler parameter type {type(value).__name__!r}."
            f"\n  - Expected: str, int, float, None, list, tuple or dict."
        )


class ParameterEncodingError(ValueError):
    """Raised when a structured handler parameter cannot be encoded to JSON."""

    pass

"""
This module implements the parameter codec used to embed handler parameters
inside a canonical type signature, e.g. `RecordUri<'tx_news[item]','{"a":1}'>`.

- `encode_param` turns a string, number, None, list/tuple or dict into text.
  Structured values are JSON with `&`, `'`, `"`, `<` and `>` escaped as
  `\\u00XX` inside strings, so the result can sit between single quotes and be
  rendered into HTML without breaking out.
- `decode_param` parses text as strict JSON and falls back to the raw text
  when that fails.
- `encode_params` joins several encoded values as `'p1','p2',...`.

Note that `decode_param` is not an inverse of `encode_param` for every string:
a string that happens to be valid JSON (`"true"`, `"12"`, `"null"`, `"[1]"`)
decodes to the JSON value, not to the string. Callers relying on string
parameters must not pass such values.
"""

import json
import re
from collections.abc import Iterable
from typing import Any

from metaloom._errors import ParameterEncodingError, UnsupportedParameterTypeError

# Matches escape pairs (to skip them) and the characters to hex-escape
_HEX_ESCAPE = re.compile(r'\\.|[&\'<>]')
_HEX_ESCAPED = {'\\"': "\\u0022", "&": "\\u0026", "'": "\\u0027", "<": "\\u003C", ">": "\\u003E"}


def _hex_escape(match: re.Match) -> str:
    token = match.group(0)
    return _HEX_ESCAPED.get(token, token)


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def encode_param(value: Any) -> str:
    """
    Encode a single handler parameter.

    Args:
        value (Any): The parameter. Supported: str, int, float, None, list,
            tuple and dict.

    Returns:
        str: The textual form of the parameter.

    Raises:
        UnsupportedParameterTypeError: If `value` has any other type.
        ParameterEncodingError: If a number or structured value cannot be
            written as strict JSON.
    """
    if isinstance(value, str):
        return value

    if value is None:
        return "null"

    if isinstance(value, bool) or not isinstance(value, (int, float, list, tuple, dict)):
        raise UnsupportedParameterTypeError(value)

    try:
        encoded = json.dumps(value, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ParameterEncodingError(
            f"Could not encode {type(value).__name__} parameter to JSON: {e}"
        ) from e

    return _HEX_ESCAPE.sub(_hex_escape, encoded)


def decode_param(value: str) -> Any:
    """
    Decode a handler parameter produced by `encode_param`.

    Strict JSON is tried first; text that is not valid JSON is returned as is.
    """
    if not isinstance(value, str):
        return value

    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:  # json.JSONDecodeError is a ValueError
        return value


def encode_params(params: Iterable[Any]) -> str:
    """Encode and join parameters as `'p1','p2',...`; empty input gives ''."""
    encoded = [encode_param(p) for p in params]
    if not encoded:
        return ""
    return "'" + "','".join(encoded) + "'"

"""
This module defines `TypeDescriptor`, the structured result of type
introspection, and `stringify_type`, which turns a descriptor into the
canonical type signature stored in cache artifacts.

Grammar of a canonical type signature:
- `int`, `float`, `string`, `bool`, ...       builtin scalar types
- `package.module.ClassName`                  classes
- `package.module.ClassName<sub, ...>`        parameterized classes
- `array<sub, ...>` / `array`                 plain collections
- `DateTime<'<format>'>`                      `datetime.datetime`
- `DateTimeImmutable<'<format>'>`             `pandas.Timestamp`

`<format>` is `DATE_FORMAT`, a strftime pattern fixed per interpreter version:
`%:z` (offset with a colon) is only understood by `strftime` from Python 3.12.
"""

import datetime
import sys
from dataclasses import dataclass

import pandas as pd

if sys.version_info >= (3, 12):
    DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%:z"
else:
    DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"

# Checked in order, the first matching base wins
_DATE_TYPES = (
    (pd.Timestamp, "DateTimeImmutable"),
    (datetime.datetime, "DateTime"),
)


@dataclass(frozen=True)
class TypeDescriptor:
    """Structured description of a property type.

    Attributes:
        builtin_type (str): Builtin type name, e.g. 'int', 'string', 'object'
            or 'array'.
        class_name (str | None): Fully-qualified class name for class and
            class-backed collection types.
        collection (bool): Whether the type is a collection.
        value_types (tuple[TypeDescriptor, ...]): Element types of a
            collection.
        cls (type | None): The resolved class, when one is known.
    """

    builtin_type: str
    class_name: str | None = None
    collection: bool = False
    value_types: tuple["TypeDescriptor", ...] = ()
    cls: type | None = None


def _date_type_name(descriptor: TypeDescriptor) -> str | None:
    if not isinstance(descriptor.cls, type):
        return None
    for base, name in _DATE_TYPES:
        if issubclass(descriptor.cls, base):
            return name
    return None


def stringify_type(descriptor: TypeDescriptor) -> str:
    """Return the canonical type signature of `descriptor`."""
    if descriptor.collection:
        if not descriptor.value_types:
            return "array"

        sub_type = ", ".join(stringify_type(t) for t in descriptor.value_types)
        if descriptor.class_name:
            return f"{descriptor.class_name}<{sub_type}>"
        return f"array<{sub_type}>"

    if descriptor.class_name:
        date_name = _date_type_name(descriptor)
        if date_name is not None:
            return f"{date_name}<'{DATE_FORMAT}'>"
        return descriptor.class_name

    return descriptor.builtin_type

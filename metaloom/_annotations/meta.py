"""
This module defines the declarative serializer annotations understood by
`metaloom`.

Annotations are plain, immutable data objects. They are attached to
properties through `typing.Annotated` and to methods through the decorators in
`metaloom._annotations.decorators`:

```python
class Article:
    title: Annotated[str, Groups(["list", "detail"]), SerializedName("headline")]

    @virtual_property()
    @annotate(Type("string"))
    def get_teaser(self): ...
```

All annotations derive from `SerializerAnnotation` so the reader can tell them
apart from unrelated `Annotated` extras. They are frozen dataclasses; list
attributes are returned as copies when accessed, so external mutation does not
affect the stored annotation.
"""

from dataclasses import dataclass, field
from typing import Any


class SerializerAnnotation:
    """Marker base class for every serializer annotation."""

    __slots__ = ()


@dataclass(frozen=True)
class Groups(SerializerAnnotation):
    """Serialization groups the property belongs to."""

    groups: list[str] = field(default_factory=list)

    def __post_init__(self):
        if isinstance(self.groups, str):
            object.__setattr__(self, "groups", [self.groups])
        object.__setattr__(self, "groups", list(self.groups))

    def __getattribute__(self, name: str):
        # Intercept container access to return defensive copies
        val = super().__getattribute__(name)
        if name == "groups" and isinstance(val, list):
            return list(val)
        return val


@dataclass(frozen=True)
class Type(SerializerAnnotation):
    """Explicit type of a property, optionally with handler parameters.

    Subclass it to give frequently used handler types a name of their own.
    """

    name: str
    params: list[Any] = field(default_factory=list)

    def __post_init__(self):
        object.__setattr__(self, "params", list(self.params))

    def __getattribute__(self, name: str):
        val = super().__getattribute__(name)
        if name == "params" and isinstance(val, list):
            return list(val)
        return val


class DateTimeFormat(Type):
    """`DateTime` type with an explicit format string."""

    def __init__(self, format: str, timezone: str | None = None):
        params = [format] if timezone is None else [format, timezone]
        super().__init__("DateTime", params)


@dataclass(frozen=True)
class ReadOnly(SerializerAnnotation):
    """Marks a property as read-only for deserialization."""

    read_only: bool = True


@dataclass(frozen=True)
class Exclude(SerializerAnnotation):
    """Excludes a property, always or when `condition` evaluates true."""

    condition: str = ""


@dataclass(frozen=True)
class MaxDepth(SerializerAnnotation):
    """Limits how deep nested objects below this property are serialized."""

    depth: int


@dataclass(frozen=True)
class SerializedName(SerializerAnnotation):
    """Name used for the property in the serialized document."""

    name: str


@dataclass(frozen=True)
class VirtualProperty(SerializerAnnotation):
    """Marks a public method as the accessor of a computed property."""

    name: str | None = None

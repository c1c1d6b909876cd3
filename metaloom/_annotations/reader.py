"""
This module provides the `AnnotationReader`, which resolves the serializer
annotations attached to the properties and methods of a class.

- Property annotations are the `SerializerAnnotation` extras of the
  property's `typing.Annotated` hint, in declaration order.
- Method annotations are the ones stored by `@annotate` and
  `@virtual_property`.
"""

from collections.abc import Callable
from typing import Annotated, get_origin

from metaloom._utils import _own_type_hints

from .decorators import _ATTRIBUTE
from .meta import SerializerAnnotation


class AnnotationReader:
    """Reads serializer annotations from classes and methods."""

    def get_property_annotations(self, cls: type, name: str) -> list[SerializerAnnotation]:
        """Return the annotations declared on property `name` of `cls`."""
        hint = _own_type_hints(cls).get(name)
        if get_origin(hint) is not Annotated:
            return []
        return [extra for extra in hint.__metadata__ if isinstance(extra, SerializerAnnotation)]

    def get_method_annotations(self, method: Callable) -> list[SerializerAnnotation]:
        """Return every annotation attached to `method`."""
        if isinstance(method, property):
            method = method.fget
        return list(getattr(method, _ATTRIBUTE, []))

    def get_method_annotation(
        self, method: Callable, kind: type[SerializerAnnotation]
    ) -> SerializerAnnotation | None:
        """Return the first annotation of type `kind` attached to `method`."""
        for annotation in self.get_method_annotations(method):
            if isinstance(annotation, kind):
                return annotation
        return None

"""
This module contains the `ClassMetadataBuilder`, which produces the metadata
of a single class from its own declarations.

Properties:
    Every property the class declares itself (annotated names and
    `__slots__` entries) gets a record from its serializer annotations. When
    no annotation gives it a type, the type introspection chain is asked for
    one.

Virtual properties:
    Every public method (or property getter) carrying a `VirtualProperty`
    marker is the accessor of a computed property. Its name is derived from
    the method name by stripping an `is`/`get`/`has` prefix (`isActive` ->
    `active`, `get_full_name` -> `full_name`) unless the marker names it
    explicitly. Records are keyed by the method name, so two methods deriving
    the same property name do not overwrite each other.

Inherited members are left out. The service walks the ancestor chain and
builds every class on its own.
"""

import logging
import re

from metaloom._annotations import AnnotationReader, VirtualProperty
from metaloom._errors import ClassIntrospectionError
from metaloom._utils import _declared_properties, _public_members

from .extractor import PropertyMetadata, VirtualPropertyMetadata, extract_metadata
from .typeinfo import DocstringTypeExtractor, ReflectionTypeExtractor, TypeExtractor
from .types import stringify_type

logger = logging.getLogger(__name__)

# A prefix only counts at a camelCase or snake_case word boundary
_ACCESSOR_PREFIX = re.compile(r"^(?:is|get|has)(?=[A-Z_])_?")


def accessor_name(method_name: str) -> str:
    """Derive the property name of an accessor method.

    Examples:
        >>> accessor_name("isActive")
        'active'
        >>> accessor_name("get_full_name")
        'full_name'
        >>> accessor_name("summary")
        'summary'
    """
    stripped = _ACCESSOR_PREFIX.sub("", method_name, count=1)
    if stripped == method_name or not stripped:
        return method_name
    return stripped[0].lower() + stripped[1:]


def default_type_extractors() -> list[TypeExtractor]:
    """Docstring types first, annotations second."""
    return [DocstringTypeExtractor(), ReflectionTypeExtractor()]


class ClassMetadataBuilder:
    """Builds `{"properties": ..., "virtual_properties": ...}` for a class.

    Args:
        reader (AnnotationReader | None, optional): Reader resolving serializer
            annotations. Defaults to a new `AnnotationReader`.
        type_extractors (list[TypeExtractor] | None, optional): Ordered type
            introspection strategies. Defaults to `default_type_extractors()`.
    """

    def __init__(
        self,
        reader: AnnotationReader | None = None,
        type_extractors: list[TypeExtractor] | None = None,
    ):
        self.reader = reader or AnnotationReader()
        self.type_extractors = (
            list(type_extractors) if type_extractors is not None else default_type_extractors()
        )

    def build(self, cls: type) -> dict[str, dict]:
        """Return the metadata `cls` declares by itself."""
        if not isinstance(cls, type):
            raise ClassIntrospectionError(cls, "not a class")

        return {
            "properties": self.build_properties(cls),
            "virtual_properties": self.build_virtual_properties(cls),
        }

    def build_properties(self, cls: type) -> dict[str, PropertyMetadata]:
        properties = {}
        for name in _declared_properties(cls):
            metadata = extract_metadata(self.reader.get_property_annotations(cls, name))
            self._fill_type(metadata, cls, name)
            properties[name] = metadata
        return properties

    def build_virtual_properties(self, cls: type) -> dict[str, VirtualPropertyMetadata]:
        virtual_properties = {}
        for method_name, method in _public_members(cls):
            marker = self.reader.get_method_annotation(method, VirtualProperty)
            if marker is None:
                continue

            accessor = accessor_name(method_name)
            property_name = marker.name or accessor

            metadata = {"name": property_name, "serialized_name": property_name}
            metadata.update(extract_metadata(self.reader.get_method_annotations(method)))
            self._fill_type(metadata, cls, accessor)
            virtual_properties[method_name] = metadata

        return virtual_properties

    def resolve_type(self, cls: type, name: str) -> str | None:
        """Ask the type extractors in order; the first answer wins."""
        for extractor in self.type_extractors:
            descriptors = extractor.get_types(cls, name)
            if descriptors:
                return stringify_type(descriptors[0])
        return None

    def _fill_type(self, metadata: dict, cls: type, name: str) -> None:
        if metadata.get("type"):
            return

        type_signature = self.resolve_type(cls, name)
        if type_signature:
            metadata["type"] = type_signature
        else:
            logger.debug("No type found for %s.%s", cls.__qualname__, name)

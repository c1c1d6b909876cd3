"""
This module exposes the core components of the metaloom engine: the metadata
service and its building blocks, plus the matrix and graph inspection tools.
"""

from metaloom.core._matrix import MetadataMatrix
from metaloom.core.builder import ClassMetadataBuilder, accessor_name, default_type_extractors
from metaloom.core.cache import MetadataCache
from metaloom.core.codec import decode_param, encode_param, encode_params
from metaloom.core.extractor import PropertyMetadata, VirtualPropertyMetadata, extract_metadata
from metaloom.core.nxgraph import HierarchyGraph
from metaloom.core.overlay import OverlayStore
from metaloom.core.service import MetadataService
from metaloom.core.typeinfo import (
    DocstringTypeExtractor,
    ReflectionTypeExtractor,
    TypeExtractor,
    descriptors_from_hint,
)
from metaloom.core.types import DATE_FORMAT, TypeDescriptor, stringify_type

__all__ = [
    "DATE_FORMAT",
    "ClassMetadataBuilder",
    "DocstringTypeExtractor",
    "HierarchyGraph",
    "MetadataCache",
    "MetadataMatrix",
    "MetadataService",
    "OverlayStore",
    "PropertyMetadata",
    "ReflectionTypeExtractor",
    "TypeDescriptor",
    "TypeExtractor",
    "VirtualPropertyMetadata",
    "accessor_name",
    "decode_param",
    "default_type_extractors",
    "descriptors_from_hint",
    "encode_param",
    "encode_params",
    "extract_metadata",
    "stringify_type",
]

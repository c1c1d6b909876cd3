"""
This module serves as the main entry point for the metaloom package,
exposing its primary public API.
"""

from metaloom._annotations import (
    DateTimeFormat,
    Exclude,
    Groups,
    MaxDepth,
    ReadOnly,
    SerializedName,
    Type,
    VirtualProperty,
    annotate,
    virtual_property,
)
from metaloom.core import (
    HierarchyGraph,
    MetadataMatrix,
    MetadataService,
    OverlayStore,
    decode_param,
    encode_param,
)

# --- Define main API for metaloom module ---
__all__ = [
    "DateTimeFormat",
    "Exclude",
    "Groups",
    "HierarchyGraph",
    "MaxDepth",
    "MetadataMatrix",
    "MetadataService",
    "OverlayStore",
    "ReadOnly",
    "SerializedName",
    "Type",
    "VirtualProperty",
    "annotate",
    "decode_param",
    "encode_param",
    "virtual_property",
]

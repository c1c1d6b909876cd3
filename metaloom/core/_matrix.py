"""
This module defines the MetadataMatrix class, which provides a tabular view
of generated metadata. It serves as an introspection tool for understanding
and debugging what the serializer will see for a class hierarchy.

The `MetadataMatrix` transforms a mapping of class name -> class metadata
(the content of cache artifacts) into a pandas DataFrame:

- **Rows**: One per property and virtual property, indexed by
  `(class, member)`. Virtual properties are keyed by their method name, as in
  the artifacts.
- **Columns**: `kind` ("property" or "virtual") followed by every metadata
  field. `groups` is shown as a comma-separated string.
- **Cells**: The field value, or None when the field is not specified.
"""

from collections.abc import Mapping

import pandas as pd

COLUMNS = [
    "kind",
    "name",
    "serialized_name",
    "type",
    "groups",
    "read_only",
    "exclude",
    "exclude_if",
    "max_depth",
]

_SECTIONS = (("properties", "property"), ("virtual_properties", "virtual"))


class MetadataMatrix:
    """Matrix view of class metadata.

    Args:
        class_metadata (Mapping[str, dict]): Class name -> class metadata, in
            the order the rows should appear.
    """

    def __init__(self, class_metadata: Mapping[str, dict]):
        if not isinstance(class_metadata, Mapping):
            raise TypeError("class_metadata must be a mapping of class name -> metadata")
        for class_name, metadata in class_metadata.items():
            if not isinstance(metadata, Mapping):
                raise TypeError(f"Metadata of {class_name!r} must be a mapping")
        self._classes = class_metadata

    @staticmethod
    def _row(kind: str, record: Mapping) -> list:
        row = []
        for column in COLUMNS:
            if column == "kind":
                row.append(kind)
            elif column == "groups" and record.get("groups") is not None:
                row.append(", ".join(str(g) for g in record["groups"]))
            else:
                row.append(record.get(column))
        return row

    def build(self) -> pd.DataFrame:
        """Construct and return the metadata matrix as a pandas DataFrame."""
        index = []
        data = []
        for class_name, metadata in self._classes.items():
            for section, kind in _SECTIONS:
                for member, record in (metadata.get(section) or {}).items():
                    index.append((class_name, member))
                    data.append(self._row(kind, record or {}))

        if not index:
            return pd.DataFrame(columns=COLUMNS)

        return pd.DataFrame(
            data,
            index=pd.MultiIndex.from_tuples(index, names=["class", "member"]),
            columns=COLUMNS,
        )

"""
This module exposes utility functions from sub-modules for use
within the metaloom package.
"""

from metaloom._utils.config import _get_option, set_metaloom_option
from metaloom._utils.helpers import _dump_str_to_list, _replace_recursive, _safe_filename
from metaloom._utils.inspect import (
    _class_hierarchy,
    _class_hierarchy_graph,
    _declared_properties,
    _fully_qualified_name,
    _own_type_hints,
    _public_members,
    _resolve_class,
)
from metaloom._utils.parsers import _ConfigReader

# Define main API for internal _utils module
# only contains methods/objects used within the package
__all__ = [
    "_ConfigReader",
    "_class_hierarchy",
    "_class_hierarchy_graph",
    "_declared_properties",
    "_dump_str_to_list",
    "_fully_qualified_name",
    "_get_option",
    "_own_type_hints",
    "_public_members",
    "_replace_recursive",
    "_resolve_class",
    "_safe_filename",
    "set_metaloom_option",
]

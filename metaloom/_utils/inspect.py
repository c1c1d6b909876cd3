"""
This module provides the class introspection utilities the metadata builder
and the service rely on. By using Python's `inspect` and `typing` modules,
these helpers discover what a class declares by itself, as opposed to what it
inherits.

Key Functions:
- `_resolve_class`: Accepts a class or a dotted import path ("pkg.mod.Class")
  and returns the class, raising `ClassIntrospectionError` otherwise.
- `_fully_qualified_name`: The identity used for overlays and cache artifacts.
- `_class_hierarchy_graph` / `_class_hierarchy`: Build the inheritance DAG of a
  class as a `networkx.DiGraph` (edges point from parent to child) and walk it
  root-most ancestor first.
- `_own_type_hints`, `_declared_properties`, `_public_members`: Enumerate the
  members a class declares in its own namespace.
"""

import abc
import importlib
import inspect
import typing
from collections.abc import Callable
from typing import Annotated, ClassVar, Generic, Protocol, get_origin

from networkx import DiGraph, lexicographical_topological_sort

from metaloom._errors import ClassIntrospectionError

# Bases that carry no serializable members of their own
_IGNORED_ANCESTORS = (object, Generic, Protocol, abc.ABC)

# Names the interpreter puts into __slots__ without them being properties
_SLOT_INTERNALS = ("__dict__", "__weakref__")


def _fully_qualified_name(cls: type) -> str:
    """Return 'module.QualName' for a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _resolve_class(target: type | str) -> type:
    """Return the class for a class object or a dotted import path."""
    if isinstance(target, type):
        return target

    if not isinstance(target, str):
        raise ClassIntrospectionError(target, "expected a class or a dotted class path")

    module_name, _, qualname = target.rpartition(".")
    if not module_name:
        raise ClassIntrospectionError(target, "expected a dotted path 'module.Class'")

    # Walk back along the path so nested classes ("mod.Outer.Inner") resolve too
    while module_name:
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            module_name, _, head = module_name.rpartition(".")
            qualname = f"{head}.{qualname}"
            continue

        try:
            for part in qualname.split("."):
                obj = getattr(obj, part)
        except AttributeError as e:
            raise ClassIntrospectionError(target, f"{qualname!r} not found in {module_name!r}") from e

        if not isinstance(obj, type):
            raise ClassIntrospectionError(target, "path does not point to a class")
        return obj

    raise ClassIntrospectionError(target, "no importable module in path")


def _class_hierarchy_graph(cls: type) -> DiGraph:
    """Build the inheritance DAG of `cls` with parent -> child edges."""
    graph = DiGraph()
    graph.add_node(cls)
    pending = [cls]

    while pending:
        child = pending.pop()
        for base in child.__bases__:
            if base in _IGNORED_ANCESTORS:
                continue
            if base not in graph:
                pending.append(base)
            graph.add_edge(base, child)

    return graph


def _class_hierarchy(cls: type) -> list[type]:
    """Return the ancestors of `cls`, root-most first, ending with `cls`.

    Ties between unrelated bases are broken by the reversed MRO so the order
    is deterministic.
    """
    if not isinstance(cls, type):
        raise ClassIntrospectionError(cls, "not a class")

    order = {c: i for i, c in enumerate(reversed(cls.__mro__))}
    graph = _class_hierarchy_graph(cls)
    return list(lexicographical_topological_sort(graph, key=order.__getitem__))


def _own_type_hints(cls: type) -> dict[str, typing.Any]:
    """Resolve the annotations declared by `cls` itself (with Annotated extras)."""
    own = inspect.get_annotations(cls)
    if not own:
        return {}

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except Exception as e:  # get_type_hints surfaces NameError, TypeError, ...
        raise ClassIntrospectionError(cls, f"cannot resolve annotations ({e})") from e

    return {name: hints[name] for name in own if name in hints}


def _is_class_var(hint: typing.Any) -> bool:
    if get_origin(hint) is Annotated:
        hint = hint.__origin__
    return hint is ClassVar or get_origin(hint) is ClassVar


def _declared_properties(cls: type) -> list[str]:
    """Return the property names declared by `cls` in declaration order.

    Annotated names come first (ClassVar excluded), then `__slots__` entries
    that were not annotated.
    """
    names = [name for name, hint in _own_type_hints(cls).items() if not _is_class_var(hint)]

    slots = vars(cls).get("__slots__", ())
    if isinstance(slots, str):
        slots = [slots]
    for slot in slots:
        if slot not in _SLOT_INTERNALS and slot not in names:
            names.append(slot)

    return names


def _public_members(cls: type) -> list[tuple[str, Callable]]:
    """Return (name, function) pairs for the public methods `cls` declares.

    Properties contribute their getter, static and class methods their
    underlying function.
    """
    members = []
    for name, value in vars(cls).items():
        if name.startswith("_"):
            continue
        if isinstance(value, property):
            value = value.fget
        elif isinstance(value, (staticmethod, classmethod)):
            value = value.__func__
        if inspect.isfunction(value):
            members.append((name, value))
    return members

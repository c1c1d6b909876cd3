"""
This module provides the type introspection strategy chain the metadata
builder falls back on when a property has no explicit `Type` annotation.

Each strategy exposes `get_types(cls, name)` and returns a list of
`TypeDescriptor` objects, or None when it knows nothing about `name`. The
builder asks the strategies in order and uses the first non-empty answer.

- `DocstringTypeExtractor`: Reads types written in docstrings, parsed with
  `docstring_parser`. It looks at the `Attributes`/`Args` entries of the class
  docstring and at the `Returns` section of accessor methods. It is queried
  first, since docstrings can name richer types than the annotations of older
  code bases do (e.g. `Collection[Tag]` on an untyped attribute).
- `ReflectionTypeExtractor`: Resolves the annotations of the class and of its
  accessor methods with `typing.get_type_hints`.

Accessors for a name such as `fullName` or `full_name` are looked up as the
name itself and with `get`, `is` and `has` prefixes in both snake_case and
camelCase.
"""

import builtins
import collections.abc
import inspect
import logging
import re
import sys
import types
import typing
from collections.abc import Callable
from typing import Annotated, Any, ClassVar, Literal, Protocol, Union, get_args, get_origin

import docstring_parser

from metaloom._errors import ClassIntrospectionError
from metaloom._utils import _fully_qualified_name

from .types import TypeDescriptor

logger = logging.getLogger(__name__)

_SCALARS = {
    int: "int",
    float: "float",
    str: "string",
    bytes: "string",
    bool: "bool",
    object: "object",
}

_COLLECTIONS = {
    list,
    tuple,
    set,
    frozenset,
    dict,
    collections.abc.Collection,
    collections.abc.Iterable,
    collections.abc.Iterator,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}

# Generic origins that say nothing useful about a serialized value
_OPAQUE = {type, collections.abc.Callable}

# Docstring spellings that do not resolve through a module namespace
_DOC_NAMES = {
    "int": int,
    "integer": int,
    "float": float,
    "str": str,
    "string": str,
    "bytes": bytes,
    "bool": bool,
    "boolean": bool,
    "object": object,
    "array": list,
    "list": list,
    "dict": dict,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "List": list,
    "Dict": dict,
    "Tuple": tuple,
    "Set": set,
    "FrozenSet": frozenset,
    "Sequence": list,
    "Iterable": list,
    "Mapping": dict,
}
_DOC_NONE = {"None", "NoneType", "null"}
_DOC_ANY = {"Any", "typing.Any", "mixed"}
_DOC_UNION = {"Optional", "typing.Optional", "Union", "typing.Union"}


class TypeExtractor(Protocol):
    """Strategy returning the types of a property of a class."""

    def get_types(self, cls: type, name: str) -> list[TypeDescriptor] | None: ...


def _unique(descriptors: list[TypeDescriptor]) -> tuple[TypeDescriptor, ...]:
    return tuple(dict.fromkeys(descriptors))


def _collection(
    origin: Any, value_descriptors: list[TypeDescriptor]
) -> list[TypeDescriptor]:
    """Describe a parameterized collection backed by `origin`."""
    values = _unique(value_descriptors)
    if origin in _COLLECTIONS:
        return [TypeDescriptor("array", collection=True, value_types=values)]
    if isinstance(origin, type) and origin not in _OPAQUE:
        return [
            TypeDescriptor(
                "object",
                class_name=_fully_qualified_name(origin),
                collection=True,
                value_types=values,
                cls=origin,
            )
        ]
    return []


def descriptors_from_hint(hint: Any) -> list[TypeDescriptor]:
    """Convert a resolved type hint to type descriptors.

    Unions yield one descriptor per member (None dropped). Hints that carry no
    usable information (Any, TypeVars, callables) yield an empty list.
    """
    origin = get_origin(hint)

    if origin is Annotated or origin is ClassVar:
        return descriptors_from_hint(get_args(hint)[0])

    if origin is Union or origin is types.UnionType:
        found = []
        for arg in get_args(hint):
            found.extend(descriptors_from_hint(arg))
        return list(_unique(found))

    if origin is Literal:
        values = get_args(hint)
        return descriptors_from_hint(type(values[0])) if values else []

    if origin is not None:
        args = [a for a in get_args(hint) if a is not Ellipsis]
        # tuple[int, str] lists element types, everything else ends with the value type
        value_args = args if origin is tuple else args[-1:]
        values = [d for a in value_args for d in descriptors_from_hint(a)]
        return _collection(origin, values)

    if hint is None or hint is type(None) or hint is Any:
        return []

    # NewType and `type X = ...` aliases
    if hasattr(hint, "__supertype__"):
        return descriptors_from_hint(hint.__supertype__)
    if isinstance(getattr(hint, "__value__", None), type):
        return descriptors_from_hint(hint.__value__)

    if isinstance(hint, (str, typing.ForwardRef)):
        name = hint if isinstance(hint, str) else hint.__forward_arg__
        return [TypeDescriptor("object", class_name=name)]

    if hint in _COLLECTIONS:
        return [TypeDescriptor("array", collection=True)]

    if hint in _SCALARS:
        return [TypeDescriptor(_SCALARS[hint])]

    if isinstance(hint, type) and hint not in _OPAQUE:
        return [TypeDescriptor("object", class_name=_fully_qualified_name(hint), cls=hint)]

    return []


def _accessor_candidates(name: str) -> list[str]:
    capitalized = name[:1].upper() + name[1:]
    candidates = [name]
    for prefix in ("get", "is", "has"):
        candidates.extend([f"{prefix}_{name}", f"{prefix}{capitalized}"])
    return candidates


def _accessors(cls: type, name: str) -> list[Callable]:
    """Return the accessor functions available on `cls` for property `name`."""
    found = []
    for candidate in _accessor_candidates(name):
        member = inspect.getattr_static(cls, candidate, None)
        if isinstance(member, property):
            member = member.fget
        elif isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        if inspect.isfunction(member):
            found.append(member)
    return found


def _get_hints(obj: Any, owner: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except Exception as e:  # get_type_hints surfaces NameError, TypeError, ...
        raise ClassIntrospectionError(owner, f"cannot resolve annotations of {obj!r} ({e})") from e


class ReflectionTypeExtractor:
    """Reads property types from annotations."""

    def get_types(self, cls: type, name: str) -> list[TypeDescriptor] | None:
        hints = _get_hints(cls, cls)
        if name in hints:
            return descriptors_from_hint(hints[name]) or None

        for accessor in _accessors(cls, name):
            hints = _get_hints(accessor, cls)
            if "return" in hints:
                return descriptors_from_hint(hints["return"]) or None

        return None


class _TypeSyntaxError(ValueError):
    """Raised for type expressions the docstring parser cannot read."""


_TOKEN = re.compile(r"\s*(?:(\.\.\.)|([A-Za-z_][\w.]*)|([\[\]<>,|]))")


def _tokenize(text: str) -> list[str]:
    tokens = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise _TypeSyntaxError(f"unexpected character at {pos} in {text!r}")
        tokens.append(match.group(match.lastindex))
        pos = match.end()
    return tokens


class _TypeExpressionParser:
    """Parses docstring type expressions such as `list[Tag] | None`.

    The grammar accepts `[...]` and `<...>` for parameters and both `|` and
    `or` for unions. The result is a union: a list of `(name, args)` nodes
    where each arg is again a union.
    """

    def __init__(self, text: str):
        # "int, optional" is the numpydoc spelling of an optional argument
        text = re.sub(r",\s*optional\s*$", "", text.strip())
        self.tokens = _tokenize(text)
        self.pos = 0

    def _peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise _TypeSyntaxError("unexpected end of type expression")
        self.pos += 1
        return token

    def parse(self) -> list[tuple[str, list]]:
        union = self._union()
        if self._peek() is not None:
            raise _TypeSyntaxError(f"unexpected token {self._peek()!r}")
        return union

    def _union(self) -> list[tuple[str, list]]:
        terms = [self._term()]
        while self._peek() in ("|", "or"):
            self._next()
            terms.append(self._term())
        return terms

    def _term(self) -> tuple[str, list]:
        name = self._next()
        if not (name[0].isalpha() or name[0] == "_" or name == "..."):
            raise _TypeSyntaxError(f"expected a type name, got {name!r}")

        args = []
        if self._peek() in ("[", "<"):
            closing = "]" if self._next() == "[" else ">"
            args.append(self._union())
            while self._peek() == ",":
                self._next()
                args.append(self._union())
            if self._next() != closing:
                raise _TypeSyntaxError(f"expected {closing!r}")
        return name, args


class DocstringTypeExtractor:
    """Reads property types from docstrings."""

    def get_types(self, cls: type, name: str) -> list[TypeDescriptor] | None:
        namespace = self._namespace(cls)

        type_name = self._attribute_type(cls, name)
        if type_name is None:
            for accessor in _accessors(cls, name):
                type_name = self._return_type(accessor)
                if type_name is not None:
                    break

        if type_name is None:
            return None

        try:
            union = _TypeExpressionParser(type_name).parse()
        except _TypeSyntaxError as e:
            logger.debug("Ignoring docstring type %r of %s.%s: %s", type_name, cls.__qualname__, name, e)
            return None

        return self._describe_union(union, namespace) or None

    @staticmethod
    def _namespace(cls: type) -> dict[str, Any]:
        module = sys.modules.get(cls.__module__)
        namespace = dict(vars(module)) if module is not None else {}
        namespace.update(vars(cls))
        namespace.setdefault(cls.__name__, cls)
        return namespace

    @staticmethod
    def _attribute_type(cls: type, name: str) -> str | None:
        doc = vars(cls).get("__doc__")
        if not doc:
            return None

        params = docstring_parser.parse(doc).params
        # Attribute entries first, constructor arguments as fallback
        for kinds in (("attribute", "ivar", "var"), ("param", "parameter", "arg", "argument")):
            for param in params:
                if param.args and param.args[0] in kinds and param.arg_name == name and param.type_name:
                    return param.type_name
        return None

    @staticmethod
    def _return_type(accessor: Callable) -> str | None:
        doc = inspect.getdoc(accessor)
        if not doc:
            return None
        returns = docstring_parser.parse(doc).returns
        return returns.type_name if returns is not None and returns.type_name else None

    def _describe_union(self, union: list, namespace: dict[str, Any]) -> list[TypeDescriptor]:
        found = []
        for node in union:
            found.extend(self._describe(node, namespace))
        return list(_unique(found))

    def _describe(self, node: tuple[str, list], namespace: dict[str, Any]) -> list[TypeDescriptor]:
        name, args = node

        if name in _DOC_NONE or name in _DOC_ANY or name == "...":
            return []
        if name in _DOC_UNION:
            return [d for arg in args for d in self._describe_union(arg, namespace)]

        resolved = self._resolve(name, namespace)

        if not args:
            if resolved is None:
                return [TypeDescriptor("object", class_name=name)]
            return descriptors_from_hint(resolved)

        value_args = args if resolved is tuple else args[-1:]
        values = [d for arg in value_args for d in self._describe_union(arg, namespace)]
        if resolved is None:
            return [
                TypeDescriptor("object", class_name=name, collection=True, value_types=_unique(values))
            ]
        return _collection(get_origin(resolved) or resolved, values)

    @staticmethod
    def _resolve(name: str, namespace: dict[str, Any]) -> Any:
        head, *rest = name.split(".")
        if head in namespace:
            obj = namespace[head]
        elif not rest and name in _DOC_NAMES:
            return _DOC_NAMES[name]
        elif hasattr(builtins, head):
            obj = getattr(builtins, head)
        else:
            return None

        for part in rest:
            obj = getattr(obj, part, None)
            if obj is None:
                return None
        return obj

"""
This module implements the '@virtual_property' and '@annotate' decorators.

`@virtual_property`:
Marks a public method (or property getter) as the accessor of a computed
property. The property name is derived from the method name unless `name` is
given.

`@annotate`:
Attaches serializer annotations to a method. It is used both on its own and
below `@virtual_property` to give a virtual property groups, a type, a
serialized name and so on.

Annotations are stored on the function in `_metaloom_annotations`. Decorators
apply bottom-up, so each one prepends its annotations; reading the list then
gives the annotations in source order, top to bottom.
"""

from collections.abc import Callable

from .meta import SerializerAnnotation, VirtualProperty

_ATTRIBUTE = "_metaloom_annotations"


def _attach(f: Callable, annotations: tuple) -> Callable:
    """Prepend annotations to the function (or property getter)."""
    for annotation in annotations:
        if not isinstance(annotation, SerializerAnnotation):
            raise TypeError(
                f"Expected a serializer annotation, got {type(annotation).__name__!r}."
            )

    target = f.fget if isinstance(f, property) else f
    existing = getattr(target, _ATTRIBUTE, [])
    setattr(target, _ATTRIBUTE, [*annotations, *existing])
    return f


def annotate(*annotations: SerializerAnnotation) -> Callable:
    """
    Decorator attaching serializer annotations to a method.

    Args:
        *annotations (SerializerAnnotation): The annotations to attach, in
            declaration order.

    Returns:
        Callable: A decorator returning the method unchanged apart from the
            attached annotations.

    Raises:
        TypeError: If any argument is not a serializer annotation.
    """

    def decorator(f: Callable) -> Callable:
        return _attach(f, annotations)

    return decorator


def virtual_property(name: str | None = None) -> Callable:
    """
    Decorator to mark a public method as a virtual property accessor.

    Args:
        name (str | None, optional): Name of the virtual property. If not
            provided, it is derived from the method name by stripping an
            'is'/'get'/'has' prefix. Defaults to None.

    Returns:
        Callable: The decorated method, carrying a `VirtualProperty` marker.
    """
    if name is not None and not isinstance(name, str):
        raise TypeError("Argument 'name' must be a string or None.")

    def decorator(f: Callable) -> Callable:
        return _attach(f, (VirtualProperty(name=name),))

    return decorator

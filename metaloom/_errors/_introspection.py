"""
This module defines the exception raised when a class cannot be reflected.

`ClassIntrospectionError`:
This `TypeError` is raised by the metadata builder and the service when the
target of a generation request is not a class, cannot be imported from its
dotted path, or carries annotations that cannot be resolved (e.g. a forward
reference to a name that does not exist). It is fatal to the class being
processed and is never swallowed, so a batch run stops at the first failure.
"""


class ClassIntrospectionError(TypeError):
    """Raised when a class cannot be inspected for serializer metadata."""

    def __init__(self, target: object, reason: str):
        self.target = target
        name = getattr(target, "__qualname__", None) or str(target)
        super().__init__(f"Cannot introspect class {name!r}: {reason}")

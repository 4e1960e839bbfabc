"""Method resolution and dispatch along the single-inheritance chain."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from .classes import CONSTRUCTOR, DESTRUCTOR, UNKNOWN, ClassDescriptor, Method
from .errors import MethodNotFoundError, NoNextReceiverError
from .objects import BoundVariables, ObjectInstance

LIFECYCLE_METHODS = frozenset({CONSTRUCTOR, DESTRUCTOR})

Builtin = Callable[[ObjectInstance, Sequence[Any]], Any]

logger = logging.getLogger(__name__)


Resolution = tuple[ClassDescriptor, Method]


def resolve(cls: ClassDescriptor | None, method_name: str) -> Resolution | None:
    """Walk up from ``cls`` and return ``(defining class, method)``."""

    if cls is None:
        return None
    for current in cls.lineage():
        method = current.methods.get(method_name)
        if method is not None:
            return current, method
    return None


def locate(cls: ClassDescriptor | None, method_name: str) -> Method | None:
    """Return the nearest definition of ``method_name`` starting at ``cls``."""

    found = resolve(cls, method_name)
    return found[1] if found else None


class MethodContext:
    """Dispatch context handed to every method body as its first argument.

    It pins the receiver and the class whose body is executing, which is
    what ``next`` continues from; ``my`` always restarts at the receiver's
    concrete class.
    """

    def __init__(
        self,
        resolver: "MethodResolver",
        instance: ObjectInstance,
        method: Method,
        defining_class: ClassDescriptor,
    ) -> None:
        self._resolver = resolver
        self._instance = instance
        self.method = method
        self.defining_class = defining_class

    @property
    def method_name(self) -> str:
        return self.method.name

    @property
    def identity(self) -> int:
        """Stable internal identity; unaffected by rename."""
        return self._instance.identity

    def self(self, what: str = "object") -> Any:
        """Return the current handle, or the identity for ``"namespace"``."""

        self._instance.ensure_alive()
        if what == "object":
            return self._instance.handle
        if what in ("namespace", "identity"):
            return self._instance.identity
        raise ValueError(f"argument {what!r} not understood by self")

    def my(self, method_name: str, *args: Any) -> Any:
        return self._resolver.invoke(self._instance, method_name, args)

    def next(self, *args: Any) -> Any:
        return self._resolver.call_next(self._instance, self.defining_class, self.method.name, args)

    def variable(self, *names: str) -> BoundVariables:
        self._instance.ensure_alive()
        return BoundVariables(self._instance, names)

    def __repr__(self) -> str:
        return (
            f"MethodContext(handle={self._instance.handle!r}, "
            f"method={self.defining_class.name}.{self.method.name})"
        )


class MethodResolver:
    """Implements the dispatch contract for object method calls."""

    def __init__(self, builtins: Mapping[str, Builtin] | None = None) -> None:
        self._builtins: dict[str, Builtin] = dict(builtins or {})

    def add_builtin(self, name: str, handler: Builtin) -> None:
        self._builtins[name] = handler

    def invoke(self, instance: ObjectInstance, method_name: str, args: Sequence[Any]) -> Any:
        """Dispatch ``method_name`` rooted at the receiver's concrete class."""

        instance.ensure_alive()
        builtin = self._builtins.get(method_name)
        if builtin is not None:
            return builtin(instance, tuple(args))

        found = resolve(instance.cls, method_name)
        if found is not None:
            return self.call(instance, found, args)

        if method_name in LIFECYCLE_METHODS:
            return None

        handler = resolve(instance.cls, UNKNOWN)
        if handler is not None:
            logger.debug("%s: routing %s to unknown handler", instance.handle, method_name)
            return self.call(instance, handler, (method_name, *args))

        raise MethodNotFoundError(method_name, instance.handle)

    def call_next(
        self,
        instance: ObjectInstance,
        defining_class: ClassDescriptor,
        method_name: str,
        args: Sequence[Any],
    ) -> Any:
        """Continue ``method_name`` from the superclass of ``defining_class``."""

        found = resolve(defining_class.superclass, method_name)
        if found is None:
            raise NoNextReceiverError(defining_class.name, method_name)
        instance.ensure_alive()
        return self.call(instance, found, args)

    def call(self, instance: ObjectInstance, found: Resolution, args: Sequence[Any]) -> Any:
        owner, method = found
        bound = method.bind(tuple(args))
        context = MethodContext(self, instance, method, owner)
        return method.body(context, *bound)

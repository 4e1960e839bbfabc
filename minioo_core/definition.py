"""Builder that collects a class definition block into a descriptor."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Sequence

from .classes import (
    CONSTRUCTOR,
    DESTRUCTOR,
    ClassDescriptor,
    ClassRegistry,
    Method,
    MethodBody,
    Parameter,
    ParamDecl,
)
from .errors import MultipleSuperclassError, ReservedMethodError, UnknownSuperclassError

RESERVED_METHODS = frozenset({"destroy", "variable"})

DefinitionBlock = Callable[["ClassBuilder"], object]


class ClassBuilder:
    """Collects method, constructor, destructor and superclass declarations.

    Nothing is visible in the registry until :meth:`build` succeeds, so a
    definition block that raises leaves no trace behind.
    """

    def __init__(self, name: str, registry: ClassRegistry) -> None:
        self.name = name
        self._registry = registry
        self._methods: dict[str, Method] = {}
        self._superclass: ClassDescriptor | None = None

    def method(
        self,
        name: str,
        params: Sequence[ParamDecl] = (),
        body: MethodBody | None = None,
    ) -> MethodBody | Callable[[MethodBody], MethodBody]:
        """Declare a method; without ``body`` this returns a decorator."""

        if name in RESERVED_METHODS:
            raise ReservedMethodError(name)
        if not name:
            raise ValueError("method name cannot be empty.")

        def wrap(target: MethodBody) -> MethodBody:
            if not callable(target):
                raise TypeError(f"body of method {name!r} must be callable.")
            self._methods[name] = Method(
                name=name,
                params=tuple(Parameter.parse(spec) for spec in params),
                body=target,
                owner=self.name,
            )
            return target

        if body is None:
            return wrap
        return wrap(body)

    def constructor(
        self,
        params: Sequence[ParamDecl] = (),
        body: MethodBody | None = None,
    ) -> MethodBody | Callable[[MethodBody], MethodBody]:
        return self.method(CONSTRUCTOR, params, body)

    def destructor(
        self, body: MethodBody | None = None
    ) -> MethodBody | Callable[[MethodBody], MethodBody]:
        return self.method(DESTRUCTOR, (), body)

    def superclass(self, name: str) -> None:
        if self._superclass is not None:
            raise MultipleSuperclassError(self.name)
        parent = self._registry.get(name)
        if parent is None:
            raise UnknownSuperclassError(name)
        self._superclass = parent

    def build(self, identity: int) -> ClassDescriptor:
        """Freeze the collected declarations into a descriptor."""

        parent = self._superclass
        if parent is not None and not parent.alive:
            raise UnknownSuperclassError(parent.name)
        return ClassDescriptor(
            name=self.name,
            identity=identity,
            superclass=parent,
            methods=MappingProxyType(dict(self._methods)),
        )

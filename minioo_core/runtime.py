"""Runtime facade that wires the registry, resolver, factory and events."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Sequence

from .classes import ClassRegistry
from .config import RuntimeConfig
from .definition import ClassBuilder, DefinitionBlock
from .errors import DuplicateClassNameError
from .events import CLASS_DEFINED, EventBus
from .handles import ClassHandle, ObjectHandle
from .lifecycle import ObjectFactory
from .objects import BoundVariables, ObjectInstance
from .resolver import MethodResolver


class Runtime:
    """Entry point for defining classes and addressing their objects.

    Each runtime is an isolated world: its own class registry, object table,
    handle counters and event bus. Nothing here is thread safe.
    """

    def __init__(
        self,
        *,
        config: RuntimeConfig | None = None,
        logger: logging.Logger | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.config = config or RuntimeConfig()
        self.logger = logger or logging.getLogger("minioo_core.runtime")
        self.events = events or EventBus()
        self.registry = ClassRegistry()
        self.resolver = MethodResolver()
        self.factory = ObjectFactory(
            self.registry,
            self.resolver,
            self.events,
            config=self.config,
            logger=self.logger,
        )
        self._class_ids = itertools.count(1)
        self._register_builtins()

    def _register_builtins(self) -> None:
        self.resolver.add_builtin("destroy", self._builtin_destroy)
        self.resolver.add_builtin("variable", self._builtin_variable)

    def _builtin_destroy(self, instance: ObjectInstance, args: Sequence[Any]) -> None:
        if args:
            raise TypeError("destroy takes no arguments")
        self.factory.destroy(instance)

    @staticmethod
    def _builtin_variable(instance: ObjectInstance, args: Sequence[Any]) -> BoundVariables:
        return BoundVariables(instance, tuple(str(name) for name in args))

    def define_class(
        self, name: str, block: DefinitionBlock | None = None
    ) -> ClassHandle | Callable[[DefinitionBlock], ClassHandle]:
        """Build and register class ``name`` from ``block``.

        ``block`` receives a :class:`ClassBuilder`. If it raises, nothing is
        registered. Called without a block this returns a decorator.
        """

        if block is None:
            return lambda target: self.define_class(name, target)
        if not name:
            raise ValueError("class name cannot be empty.")
        if name in self.registry:
            raise DuplicateClassNameError(name)

        builder = ClassBuilder(name, self.registry)
        block(builder)
        descriptor = builder.build(next(self._class_ids))
        self.registry.register(descriptor)

        parent = descriptor.superclass.name if descriptor.superclass else None
        self.logger.debug("defined class %s (superclass %s)", name, parent)
        self.events.emit(
            CLASS_DEFINED,
            {"class": name, "identity": descriptor.identity, "superclass": parent},
        )
        return ClassHandle(self, descriptor)

    def get_class(self, name: str) -> ClassHandle:
        return ClassHandle(self, self.registry.resolve(name))

    def object(self, handle: str) -> ObjectHandle:
        """Return a handle for the live object currently named ``handle``."""

        instance = self.factory.table.lookup(handle)
        return ObjectHandle(self, handle, instance.identity)

    def classes(self) -> tuple[str, ...]:
        return self.registry.names()

    def objects(self) -> tuple[str, ...]:
        return self.factory.table.handles()

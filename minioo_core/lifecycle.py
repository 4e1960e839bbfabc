"""Object allocation, construction, renaming and cascading destruction."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Sequence

from .classes import CONSTRUCTOR, DESTRUCTOR, ClassDescriptor, ClassRegistry
from .config import RuntimeConfig
from .errors import ConstructorFailure, HandleInUseError, InvalidHandleError
from .events import (
    CLASS_DESTROYED,
    OBJECT_CREATED,
    OBJECT_DESTROYED,
    OBJECT_RENAMED,
    EventBus,
)
from .objects import ObjectInstance, ObjectTable
from .resolver import MethodResolver


class ObjectFactory:
    """Owns every live object and the counters used to identify them.

    The identity and generated-name counters start at 1 when the factory is
    built and are never reset for its lifetime.
    """

    def __init__(
        self,
        registry: ClassRegistry,
        resolver: MethodResolver,
        events: EventBus,
        *,
        config: RuntimeConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.events = events
        self.config = config or RuntimeConfig()
        self.table = ObjectTable()
        self._logger = logger or logging.getLogger(__name__)
        self._identities = itertools.count(1)
        self._generated = itertools.count(1)

    def create(self, cls: ClassDescriptor, handle: str, args: Sequence[Any]) -> ObjectInstance:
        """Allocate an object bound to ``handle`` and run its constructor."""

        cls.ensure_alive()
        if cls.destroying:
            raise InvalidHandleError(cls.name)
        if not handle:
            raise ValueError("object handle cannot be empty.")
        if self.table.is_bound(handle):
            raise HandleInUseError(handle)
        instance = ObjectInstance(identity=next(self._identities), handle=handle, cls=cls)
        self.table.add(instance)

        try:
            self.resolver.invoke(instance, CONSTRUCTOR, args)
        except Exception as exc:
            self._rollback(instance)
            if self.config.wrap_constructor_errors:
                raise ConstructorFailure(instance.handle, exc) from exc
            exc.add_note(f"while constructing {instance.handle!r} of class {cls.name!r}")
            raise

        if not instance.alive:
            # the constructor destroyed its own object
            return instance
        self._logger.debug("created %s (#%d) of class %s", instance.handle, instance.identity, cls.name)
        self.events.emit(
            OBJECT_CREATED,
            {"handle": instance.handle, "identity": instance.identity, "class": cls.name},
        )
        return instance

    def new(self, cls: ClassDescriptor, args: Sequence[Any]) -> ObjectInstance:
        return self.create(cls, self._next_name(), args)

    def _next_name(self) -> str:
        while True:
            candidate = f"{self.config.name_prefix}#{next(self._generated)}"
            if not self.table.is_bound(candidate):
                return candidate

    def _rollback(self, instance: ObjectInstance) -> None:
        self._logger.warning(
            "constructor of %s (class %s) failed; discarding object",
            instance.handle,
            instance.cls.name,
        )
        self.table.discard(instance)
        instance.release()

    def destroy(self, instance: ObjectInstance) -> None:
        """Run the destructor, then drop the handle, store and identity.

        A destructor that raises leaves the object alive. Destroying an
        object from inside its own destructor is a no-op; the outer call
        completes the teardown.
        """

        instance.ensure_alive()
        if instance.destroying:
            return
        instance.destroying = True
        try:
            self.resolver.invoke(instance, DESTRUCTOR, ())
        finally:
            instance.destroying = False

        handle = instance.handle
        self.table.discard(instance)
        instance.release()
        self._logger.debug("destroyed %s (#%d)", handle, instance.identity)
        self.events.emit(
            OBJECT_DESTROYED,
            {"handle": handle, "identity": instance.identity, "class": instance.cls.name},
        )

    def rename(self, instance: ObjectInstance, new_handle: str) -> None:
        """Rebind ``instance`` to ``new_handle``; an empty name destroys it."""

        instance.ensure_alive()
        if new_handle == "":
            self.destroy(instance)
            return
        old_handle = instance.handle
        if new_handle == old_handle:
            return
        self.table.rebind(instance, new_handle)
        self._logger.debug("renamed %s to %s", old_handle, new_handle)
        self.events.emit(
            OBJECT_RENAMED,
            {"old": old_handle, "new": new_handle, "identity": instance.identity},
        )

    def destroy_class(self, cls: ClassDescriptor) -> None:
        """Destroy direct instances, then each subclass, then ``cls`` itself."""

        cls.ensure_alive()
        if cls.destroying:
            return
        cls.destroying = True
        try:
            for instance in self.table.instances_of(cls):
                if instance.alive:
                    self.destroy(instance)
            for subclass in list(cls.subclasses.values()):
                if subclass.alive:
                    self.destroy_class(subclass)
        finally:
            cls.destroying = False

        self.registry.remove(cls)
        self._logger.debug("destroyed class %s", cls.name)
        self.events.emit(CLASS_DESTROYED, {"class": cls.name, "identity": cls.identity})

"""Caller-facing handles for classes and objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .classes import ClassDescriptor
from .errors import InvalidHandleError
from .objects import ObjectInstance

if TYPE_CHECKING:
    from .runtime import Runtime


@dataclass(frozen=True)
class ClassHandle:
    """A defined class; creates instances and destroys the whole subtree."""

    runtime: "Runtime"
    descriptor: ClassDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def superclass(self) -> str | None:
        parent = self.descriptor.superclass
        return parent.name if parent else None

    @property
    def alive(self) -> bool:
        return self.descriptor.alive

    def create(self, instance_name: str, *args: Any) -> "ObjectHandle":
        instance = self.runtime.factory.create(self.descriptor, instance_name, args)
        return ObjectHandle(self.runtime, instance.handle, instance.identity)

    def new(self, *args: Any) -> "ObjectHandle":
        instance = self.runtime.factory.new(self.descriptor, args)
        return ObjectHandle(self.runtime, instance.handle, instance.identity)

    def destroy(self) -> None:
        self.runtime.factory.destroy_class(self.descriptor)


@dataclass(frozen=True)
class ObjectHandle:
    """An object addressed by its handle and pinned to its stable identity.

    After a rename the facade goes stale and every call raises
    :class:`~minioo_core.errors.InvalidHandleError`; use the handle returned
    by :meth:`rename` instead. A facade never follows its handle to a
    different object that later reuses the same name.
    """

    runtime: "Runtime"
    handle: str
    identity: int

    def _instance(self) -> ObjectInstance:
        instance = self.runtime.factory.table.lookup(self.handle)
        if instance.identity != self.identity:
            raise InvalidHandleError(self.handle)
        return instance

    @property
    def class_name(self) -> str:
        return self._instance().cls.name

    @property
    def alive(self) -> bool:
        table = self.runtime.factory.table
        return table.is_bound(self.handle) and table.lookup(self.handle).identity == self.identity

    def invoke(self, method_name: str, *args: Any) -> Any:
        return self.runtime.resolver.invoke(self._instance(), method_name, args)

    __call__ = invoke

    def destroy(self) -> None:
        self.runtime.factory.destroy(self._instance())

    def rename(self, new_name: str) -> "ObjectHandle | None":
        """Rebind to ``new_name``; an empty name destroys the object."""

        self.runtime.factory.rename(self._instance(), new_name)
        if not new_name:
            return None
        return ObjectHandle(self.runtime, new_name, self.identity)

    def __str__(self) -> str:
        return self.handle

"""Object instances, their variable stores and the handle table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .classes import ClassDescriptor
from .errors import HandleInUseError, InvalidHandleError, UndefinedVariableError


class VariableStore:
    """Per-object mapping of instance variable names to values."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def unset(self, name: str) -> None:
        if name not in self._values:
            raise UndefinedVariableError(name)
        del self._values[name]

    def names(self) -> tuple[str, ...]:
        return tuple(self._values)

    def clear(self) -> None:
        self._values.clear()


@dataclass(eq=False)
class ObjectInstance:
    """A live object: stable identity, current handle, class and variables."""

    identity: int
    handle: str
    cls: ClassDescriptor
    variables: VariableStore = field(default_factory=VariableStore)
    alive: bool = True
    destroying: bool = False

    def ensure_alive(self) -> None:
        if not self.alive:
            raise InvalidHandleError(self.handle)

    def release(self) -> None:
        self.variables.clear()
        self.alive = False


class BoundVariables:
    """Read/write view of selected instance variables.

    Attribute and item access go straight through to the owning object's
    store; only the names bound at creation are reachable.
    """

    __slots__ = ("_instance", "_names")

    def __init__(self, instance: ObjectInstance, names: tuple[str, ...]) -> None:
        object.__setattr__(self, "_instance", instance)
        object.__setattr__(self, "_names", frozenset(names))

    def _store(self, name: str) -> VariableStore:
        if name not in self._names:
            raise AttributeError(f"variable {name!r} is not bound in this scope")
        self._instance.ensure_alive()
        return self._instance.variables

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._store(name).get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._store(name).set(name, value)

    def __delattr__(self, name: str) -> None:
        self._store(name).unset(name)

    __getitem__ = __getattr__
    __setitem__ = __setattr__
    __delitem__ = __delattr__

    def __contains__(self, name: object) -> bool:
        return name in self._names and name in self._instance.variables

    def __repr__(self) -> str:
        return f"BoundVariables({sorted(self._names)!r})"


class ObjectTable:
    """Maps stable identities to instances and current handles to identities."""

    def __init__(self) -> None:
        self._by_identity: dict[int, ObjectInstance] = {}
        self._by_handle: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._by_identity)

    def __iter__(self) -> Iterator[ObjectInstance]:
        return iter(tuple(self._by_identity.values()))

    def add(self, instance: ObjectInstance) -> None:
        if instance.handle in self._by_handle:
            raise HandleInUseError(instance.handle)
        self._by_identity[instance.identity] = instance
        self._by_handle[instance.handle] = instance.identity

    def lookup(self, handle: str) -> ObjectInstance:
        identity = self._by_handle.get(handle)
        if identity is None:
            raise InvalidHandleError(handle)
        return self._by_identity[identity]

    def is_bound(self, handle: str) -> bool:
        return handle in self._by_handle

    def rebind(self, instance: ObjectInstance, new_handle: str) -> None:
        """Move ``instance`` to ``new_handle``, invalidating the old one."""

        if self._by_handle.get(instance.handle) != instance.identity:
            raise InvalidHandleError(instance.handle)
        if new_handle in self._by_handle:
            raise HandleInUseError(new_handle)
        del self._by_handle[instance.handle]
        self._by_handle[new_handle] = instance.identity
        instance.handle = new_handle

    def discard(self, instance: ObjectInstance) -> None:
        self._by_identity.pop(instance.identity, None)
        if self._by_handle.get(instance.handle) == instance.identity:
            del self._by_handle[instance.handle]

    def instances_of(self, cls: ClassDescriptor) -> list[ObjectInstance]:
        """Direct instances of ``cls`` in creation order."""

        return [instance for instance in self._by_identity.values() if instance.cls is cls]

    def handles(self) -> tuple[str, ...]:
        return tuple(instance.handle for instance in self._by_identity.values())

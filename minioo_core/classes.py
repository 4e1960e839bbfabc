"""Class descriptors, method records and the in-memory class registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Sequence

from .errors import DuplicateClassNameError, InvalidHandleError, WrongArgumentsError

CONSTRUCTOR = "constructor"
DESTRUCTOR = "destructor"
UNKNOWN = "unknown"
VARIADIC = "args"

MethodBody = Callable[..., Any]
ParamDecl = str | tuple[str, Any]

logger = logging.getLogger(__name__)


class _Required:
    def __repr__(self) -> str:
        return "<required>"


REQUIRED: Any = _Required()


@dataclass(frozen=True)
class Parameter:
    """One declared method parameter, optionally with a default value."""

    name: str
    default: Any = REQUIRED

    @classmethod
    def parse(cls, spec: ParamDecl) -> "Parameter":
        if isinstance(spec, Parameter):
            return spec
        if isinstance(spec, str):
            name, default = spec, REQUIRED
        else:
            name, default = spec
        if not name:
            raise ValueError("parameter name cannot be empty.")
        return cls(name=name, default=default)

    def __str__(self) -> str:
        if self.default is REQUIRED:
            return self.name
        return f"{self.name}={self.default!r}"


@dataclass(frozen=True)
class Method:
    """A method body together with its declared parameters and defining class."""

    name: str
    params: tuple[Parameter, ...]
    body: MethodBody
    owner: str

    @property
    def variadic(self) -> bool:
        return bool(self.params) and self.params[-1].name == VARIADIC

    def bind(self, args: Sequence[Any]) -> tuple[Any, ...]:
        """Match ``args`` against the parameter list, filling in defaults.

        A trailing parameter named ``args`` absorbs the remaining arguments,
        which are passed on positionally after the fixed ones.
        """

        fixed = self.params[:-1] if self.variadic else self.params
        if len(args) > len(fixed) and not self.variadic:
            raise WrongArgumentsError(self.name, self.signature, len(args))
        values = list(args[: len(fixed)])
        for param in fixed[len(values):]:
            if param.default is REQUIRED:
                raise WrongArgumentsError(self.name, self.signature, len(args))
            values.append(param.default)
        return tuple(values) + tuple(args[len(fixed):])

    @property
    def signature(self) -> str:
        return " ".join(str(param) for param in self.params)


@dataclass(eq=False)
class ClassDescriptor:
    """A defined class: identity, optional superclass and method table.

    ``subclasses`` holds non-owning back-references, in registration order,
    used only to cascade destruction downward.
    """

    name: str
    identity: int
    superclass: ClassDescriptor | None
    methods: Mapping[str, Method]
    subclasses: dict[int, ClassDescriptor] = field(default_factory=dict)
    alive: bool = True
    destroying: bool = False

    def ensure_alive(self) -> None:
        if not self.alive:
            raise InvalidHandleError(self.name)

    def lineage(self) -> Iterable[ClassDescriptor]:
        """Yield this class followed by each ancestor, nearest first."""

        current: ClassDescriptor | None = self
        while current is not None:
            yield current
            current = current.superclass

    def __repr__(self) -> str:
        parent = self.superclass.name if self.superclass else None
        return f"ClassDescriptor(name={self.name!r}, superclass={parent!r}, alive={self.alive})"


class ClassRegistry:
    """A registry that tracks live classes by name."""

    def __init__(self) -> None:
        self._by_name: dict[str, ClassDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def register(self, descriptor: ClassDescriptor) -> None:
        """Register a finished descriptor and link it under its superclass."""

        if descriptor.name in self._by_name:
            raise DuplicateClassNameError(descriptor.name)
        self._by_name[descriptor.name] = descriptor
        if descriptor.superclass is not None:
            descriptor.superclass.subclasses[descriptor.identity] = descriptor
        logger.debug("registered class %s", descriptor.name)

    def get(self, name: str) -> ClassDescriptor | None:
        return self._by_name.get(name)

    def resolve(self, name: str) -> ClassDescriptor:
        descriptor = self._by_name.get(name)
        if descriptor is None:
            raise InvalidHandleError(name)
        return descriptor

    def remove(self, descriptor: ClassDescriptor) -> None:
        """Drop the registry entry and method table of ``descriptor``."""

        if self._by_name.get(descriptor.name) is not descriptor:
            raise InvalidHandleError(descriptor.name)
        del self._by_name[descriptor.name]
        parent = descriptor.superclass
        if parent is not None:
            parent.subclasses.pop(descriptor.identity, None)
        descriptor.methods = MappingProxyType({})
        descriptor.alive = False
        logger.debug("removed class %s", descriptor.name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

"""Custom errors raised by the minioo object runtime."""

from __future__ import annotations

from typing import Any


class ObjectRuntimeError(Exception):
    """Base class for object runtime errors."""


class DuplicateClassNameError(ObjectRuntimeError):
    """Raised when a class name is already bound in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"can't create class {name!r}: a class already exists with that name")
        self.name = name


class MultipleSuperclassError(ObjectRuntimeError):
    """Raised when a definition declares a second superclass."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"only one superclass allowed for class {class_name!r}")
        self.class_name = class_name


class UnknownSuperclassError(ObjectRuntimeError):
    """Raised when ``superclass()`` names a class that does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"superclass {name!r} is not a defined class")
        self.name = name


class MethodNotFoundError(ObjectRuntimeError):
    """Raised when dispatch finds neither the method nor an ``unknown`` handler."""

    def __init__(self, method_name: str, handle: str) -> None:
        super().__init__(f"unknown method {method_name!r} for object {handle!r}")
        self.method_name = method_name
        self.handle = handle


class NoNextReceiverError(ObjectRuntimeError):
    """Raised when ``next`` has no ancestor implementation to continue into."""

    def __init__(self, class_name: str, method_name: str) -> None:
        super().__init__(
            f"'next' has no receiver in the hierarchy above {class_name!r} for method {method_name!r}"
        )
        self.class_name = class_name
        self.method_name = method_name


class InvalidHandleError(ObjectRuntimeError):
    """Raised when an object or class handle is unknown or already destroyed."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"invalid handle {handle!r}")
        self.handle = handle


class HandleInUseError(ObjectRuntimeError):
    """Raised when a handle is already bound to another live object."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"handle {handle!r} is already in use")
        self.handle = handle


class ConstructorFailure(ObjectRuntimeError):
    """Wraps an error raised from inside a constructor body."""

    def __init__(self, handle: str, original: BaseException) -> None:
        super().__init__(f"constructor for {handle!r} failed: {original}")
        self.handle = handle
        self.original = original


class UndefinedVariableError(ObjectRuntimeError, KeyError):
    """Raised when reading an instance variable that was never set."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"can't read {self.name!r}: no such variable"


class ReservedMethodError(ObjectRuntimeError, ValueError):
    """Raised when a definition tries to replace a built-in method."""

    def __init__(self, method_name: str) -> None:
        super().__init__(f"method {method_name!r} is built in and cannot be redefined")
        self.method_name = method_name


class WrongArgumentsError(ObjectRuntimeError, TypeError):
    """Raised when a call does not match the declared parameter list."""

    def __init__(self, method_name: str, params: Any, received: int) -> None:
        super().__init__(
            f"wrong # args for {method_name!r}: should be ({params}), got {received}"
        )
        self.method_name = method_name
        self.received = received

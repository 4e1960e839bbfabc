"""Minimal class-based object runtime with single inheritance."""

from .classes import ClassDescriptor, ClassRegistry, Method, Parameter
from .config import RuntimeConfig, default_config_path
from .definition import ClassBuilder
from .errors import (
    ConstructorFailure,
    DuplicateClassNameError,
    HandleInUseError,
    InvalidHandleError,
    MethodNotFoundError,
    MultipleSuperclassError,
    NoNextReceiverError,
    ObjectRuntimeError,
    ReservedMethodError,
    UndefinedVariableError,
    UnknownSuperclassError,
    WrongArgumentsError,
)
from .events import Event, EventBus
from .handles import ClassHandle, ObjectHandle
from .resolver import MethodContext, MethodResolver, locate
from .runtime import Runtime

__all__ = [
    "Runtime",
    "RuntimeConfig",
    "default_config_path",
    "ClassBuilder",
    "ClassDescriptor",
    "ClassRegistry",
    "ClassHandle",
    "ObjectHandle",
    "Method",
    "Parameter",
    "MethodContext",
    "MethodResolver",
    "locate",
    "Event",
    "EventBus",
    "ObjectRuntimeError",
    "DuplicateClassNameError",
    "MultipleSuperclassError",
    "UnknownSuperclassError",
    "MethodNotFoundError",
    "NoNextReceiverError",
    "InvalidHandleError",
    "HandleInUseError",
    "ConstructorFailure",
    "UndefinedVariableError",
    "ReservedMethodError",
    "WrongArgumentsError",
]

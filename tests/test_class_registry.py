"""Unit tests for class definition and the class registry."""

from __future__ import annotations

import pytest

from minioo_core import (
    ClassBuilder,
    DuplicateClassNameError,
    InvalidHandleError,
    MultipleSuperclassError,
    ReservedMethodError,
    Runtime,
    UnknownSuperclassError,
)


def _empty(_: ClassBuilder) -> None:
    """Definition block that declares nothing."""


def test_define_class_registers_methods() -> None:
    runtime = Runtime()

    def block(cls: ClassBuilder) -> None:
        cls.method("greet", ["who"], lambda this, who: f"hi {who}")
        cls.constructor([], lambda this: None)
        cls.destructor(lambda this: None)

    handle = runtime.define_class("Greeter", block)

    assert handle.name == "Greeter"
    assert handle.superclass is None
    assert set(handle.descriptor.methods) == {"greet", "constructor", "destructor"}
    assert runtime.classes() == ("Greeter",)


def test_duplicate_class_name_is_rejected() -> None:
    runtime = Runtime()
    runtime.define_class("A", _empty)

    with pytest.raises(DuplicateClassNameError) as excinfo:
        runtime.define_class("A", _empty)
    assert excinfo.value.name == "A"


def test_superclass_links_back_reference() -> None:
    runtime = Runtime()
    base = runtime.define_class("Base", _empty)
    derived = runtime.define_class("Derived", lambda cls: cls.superclass("Base"))

    assert derived.superclass == "Base"
    assert list(base.descriptor.subclasses.values()) == [derived.descriptor]


def test_second_superclass_fails() -> None:
    runtime = Runtime()
    runtime.define_class("A", _empty)
    runtime.define_class("B", _empty)

    def block(cls: ClassBuilder) -> None:
        cls.superclass("A")
        cls.superclass("B")

    with pytest.raises(MultipleSuperclassError):
        runtime.define_class("C", block)


def test_unknown_superclass_fails() -> None:
    runtime = Runtime()
    with pytest.raises(UnknownSuperclassError) as excinfo:
        runtime.define_class("Orphan", lambda cls: cls.superclass("Missing"))
    assert excinfo.value.name == "Missing"


def test_class_cannot_name_itself_as_superclass() -> None:
    runtime = Runtime()
    with pytest.raises(UnknownSuperclassError):
        runtime.define_class("Loop", lambda cls: cls.superclass("Loop"))
    assert "Loop" not in runtime.classes()


def test_failed_definition_leaves_no_trace() -> None:
    runtime = Runtime()
    base = runtime.define_class("Base", _empty)

    def block(cls: ClassBuilder) -> None:
        cls.superclass("Base")
        cls.method("m", [], lambda this: None)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        runtime.define_class("Broken", block)

    assert runtime.classes() == ("Base",)
    assert base.descriptor.subclasses == {}
    runtime.define_class("Broken", _empty)


@pytest.mark.parametrize("name", ["destroy", "variable"])
def test_builtin_method_names_are_reserved(name: str) -> None:
    runtime = Runtime()
    with pytest.raises(ReservedMethodError):
        runtime.define_class("C", lambda cls: cls.method(name, [], lambda this: None))


def test_define_class_as_decorator() -> None:
    runtime = Runtime()

    @runtime.define_class("Counter")
    def Counter(cls: ClassBuilder) -> None:
        @cls.method("value")
        def value(this):
            return 42

    assert Counter.name == "Counter"
    assert Counter.new().invoke("value") == 42


def test_get_class_unknown_name() -> None:
    runtime = Runtime()
    with pytest.raises(InvalidHandleError):
        runtime.get_class("Nope")


def test_later_definition_of_same_method_wins() -> None:
    runtime = Runtime()

    def block(cls: ClassBuilder) -> None:
        cls.method("m", [], lambda this: "first")
        cls.method("m", [], lambda this: "second")

    assert runtime.define_class("C", block).new().invoke("m") == "second"

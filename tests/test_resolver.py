"""Dispatch tests for method resolution, ``my``, ``next`` and ``unknown``."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

import pytest

from minioo_core import (
    ClassBuilder,
    ClassDescriptor,
    Method,
    MethodNotFoundError,
    NoNextReceiverError,
    Parameter,
    Runtime,
    WrongArgumentsError,
    locate,
)


class _RecordingTable(dict):
    """Method table that records every name it was asked for."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.lookups: list[str] = []

    def get(self, key: str, default: Any = None) -> Any:
        self.lookups.append(key)
        return super().get(key, default)


def _method(name: str, owner: str) -> Method:
    return Method(name=name, params=(), body=lambda this: owner, owner=owner)


def test_locate_without_superclass_only_checks_own_table() -> None:
    table = _RecordingTable(m=_method("m", "Solo"))
    solo = ClassDescriptor(name="Solo", identity=1, superclass=None, methods=table)

    assert locate(solo, "m") is table["m"]
    assert locate(solo, "missing") is None
    assert table.lookups == ["m", "missing"]


def test_locate_walks_up_the_chain() -> None:
    base_m = _method("m", "A")
    a = ClassDescriptor("A", 1, None, MappingProxyType({"m": base_m}))
    b = ClassDescriptor("B", 2, a, MappingProxyType({}))
    c = ClassDescriptor("C", 3, b, MappingProxyType({}))

    assert locate(c, "m") is base_m
    assert locate(c, "other") is None


def _chain(runtime: Runtime, calls: list[str]) -> None:
    def a(cls: ClassBuilder) -> None:
        cls.method("who", [], lambda this: calls.append("A") or "A")

    def b(cls: ClassBuilder) -> None:
        cls.superclass("A")

        def who(this):
            calls.append("B")
            return this.next()

        cls.method("who", [], who)

    def c(cls: ClassBuilder) -> None:
        cls.superclass("B")

        def who(this):
            calls.append("C")
            return this.next()

        cls.method("who", [], who)

    def sibling(cls: ClassBuilder) -> None:
        cls.superclass("A")
        cls.method("who", [], lambda this: calls.append("Sibling") or "Sibling")

    runtime.define_class("A", a)
    runtime.define_class("B", b)
    runtime.define_class("Sibling", sibling)
    runtime.define_class("C", c)


def test_next_from_b_resolves_into_a_only() -> None:
    runtime = Runtime()
    calls: list[str] = []
    _chain(runtime, calls)

    assert runtime.get_class("C").new().invoke("who") == "A"
    assert calls == ["C", "B", "A"]

    calls.clear()
    assert runtime.get_class("B").new().invoke("who") == "A"
    assert calls == ["B", "A"]


def test_overriding_method_chains_with_next() -> None:
    runtime = Runtime()
    output: list[str] = []

    runtime.define_class("Base", lambda cls: cls.method("m", [], lambda this: output.append("m-base")))

    def derived(cls: ClassBuilder) -> None:
        cls.superclass("Base")

        @cls.method("m")
        def m(this):
            output.append("m-derived")
            this.next()

    runtime.define_class("Derived", derived)
    runtime.get_class("Derived").create("d").invoke("m")

    assert output == ["m-derived", "m-base"]


def test_my_dispatches_from_concrete_class() -> None:
    runtime = Runtime()

    def base(cls: ClassBuilder) -> None:
        cls.method("describe", [], lambda this: f"I am {this.my('kind')}")
        cls.method("kind", [], lambda this: "base")

    def derived(cls: ClassBuilder) -> None:
        cls.superclass("Base")
        cls.method("kind", [], lambda this: "derived")

    runtime.define_class("Base", base)
    runtime.define_class("Derived", derived)

    assert runtime.get_class("Base").new().invoke("describe") == "I am base"
    assert runtime.get_class("Derived").new().invoke("describe") == "I am derived"


def test_next_without_superclass_has_no_receiver() -> None:
    runtime = Runtime()
    runtime.define_class("Solo", lambda cls: cls.method("m", [], lambda this: this.next()))

    with pytest.raises(NoNextReceiverError) as excinfo:
        runtime.get_class("Solo").new().invoke("m")
    assert excinfo.value.class_name == "Solo"
    assert excinfo.value.method_name == "m"


def test_next_without_ancestor_method_has_no_receiver() -> None:
    runtime = Runtime()
    runtime.define_class("Base", lambda cls: None)

    def derived(cls: ClassBuilder) -> None:
        cls.superclass("Base")
        cls.method("m", [], lambda this: this.next())

    runtime.define_class("Derived", derived)
    with pytest.raises(NoNextReceiverError):
        runtime.get_class("Derived").new().invoke("m")


def test_unknown_handler_receives_name_and_args() -> None:
    runtime = Runtime()

    def block(cls: ClassBuilder) -> None:
        cls.method("unknown", ["name", "args"], lambda this, name, *args: (name, args))

    obj = runtime.define_class("Catcher", block).new()
    assert obj.invoke("nosuch", 1, 2) == ("nosuch", (1, 2))
    assert obj("other") == ("other", ())


def test_missing_method_without_unknown_fails() -> None:
    runtime = Runtime()
    obj = runtime.define_class("Plain", lambda cls: None).create("p")

    with pytest.raises(MethodNotFoundError) as excinfo:
        obj.invoke("nosuch")
    assert excinfo.value.method_name == "nosuch"
    assert excinfo.value.handle == "p"


def test_unknown_does_not_intercept_errors_from_found_methods() -> None:
    runtime = Runtime()
    seen: list[str] = []

    def block(cls: ClassBuilder) -> None:
        cls.method("unknown", ["name", "args"], lambda this, name, *args: seen.append(name))
        cls.method("fails", [], lambda this: 1 / 0)

    obj = runtime.define_class("C", block).new()
    with pytest.raises(ZeroDivisionError):
        obj.invoke("fails")
    assert seen == []


def test_lifecycle_methods_never_reach_unknown() -> None:
    runtime = Runtime()
    seen: list[str] = []
    cls = runtime.define_class(
        "C",
        lambda c: c.method("unknown", ["name", "args"], lambda this, name, *args: seen.append(name)),
    )

    cls.create("c").destroy()
    assert seen == []


def test_parameter_binding_defaults_and_variadic() -> None:
    method = Method(
        name="m",
        params=(Parameter("a"), Parameter.parse(("b", 2)), Parameter("args")),
        body=lambda this, *values: values,
        owner="C",
    )

    assert method.bind((1,)) == (1, 2)
    assert method.bind((1, 5, 6, 7)) == (1, 5, 6, 7)
    with pytest.raises(WrongArgumentsError):
        method.bind(())


def test_wrong_argument_count_is_reported() -> None:
    runtime = Runtime()
    obj = runtime.define_class("C", lambda cls: cls.method("one", ["x"], lambda this, x: x)).new()

    with pytest.raises(WrongArgumentsError):
        obj.invoke("one")
    with pytest.raises(TypeError):
        obj.invoke("one", 1, 2)


def test_self_selectors() -> None:
    runtime = Runtime()

    def block(cls: ClassBuilder) -> None:
        cls.method("names", [], lambda this: (this.self(), this.self("object"), this.self("namespace")))
        cls.method("bad", [], lambda this: this.self("class"))

    obj = runtime.define_class("C", block).create("thing")
    handle, same, identity = obj.invoke("names")
    assert handle == same == "thing"
    assert identity == obj.identity
    with pytest.raises(ValueError):
        obj.invoke("bad")

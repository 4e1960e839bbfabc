"""Sample Base/Derived classes that exercise every runtime capability."""

from __future__ import annotations

from typing import Any, Callable

from minioo_core import ClassBuilder, Runtime

Writer = Callable[[str], None]


def _join(values: tuple[Any, ...]) -> str:
    return ", ".join(str(value) for value in values)


def define_demo_classes(runtime: Runtime, out: Writer) -> None:
    """Define ``Base`` and ``Derived`` in ``runtime``, reporting through ``out``."""

    def base(cls: ClassBuilder) -> None:
        @cls.constructor(["x", "y"])
        def constructor(this, x, y):
            out(f"Base constructor ({this.self()}): {x}, {y}")

        @cls.method("m")
        def m(this):
            out("Base::m called")

        @cls.method("n", ["args"])
        def n(this, *args):
            out(f"Base::n called: {_join(args)}")
            this.my("m")

        @cls.method("unknown", ["methodname", "args"])
        def unknown(this, methodname, *args):
            out(f"Base::unknown called for {methodname} {_join(args)}")

        @cls.destructor()
        def destructor(this):
            out(f"Base::destructor ({this.self()})")

    def derived(cls: ClassBuilder) -> None:
        cls.superclass("Base")

        @cls.constructor(["x", "y"])
        def constructor(this, x, y):
            out(f"Derived constructor ({this.self()}): {x}, {y}")
            this.next(x, y)

        @cls.destructor()
        def destructor(this):
            out(f"Derived::destructor called ({this.self()})")
            this.next()

        @cls.method("n", ["args"])
        def n(this, *args):
            out(f"Derived::n ({this.self()}): {_join(args)}")
            this.next(*args)

        @cls.method("put", ["val"])
        def put(this, val):
            this.variable("var").var = val

        @cls.method("get")
        def get(this):
            return this.variable("var").var

    runtime.define_class("Base", base)
    runtime.define_class("Derived", derived)


def run_demo(runtime: Runtime | None = None, out: Writer = print) -> Runtime:
    runtime = runtime or Runtime()
    define_demo_classes(runtime, out)
    base_cls = runtime.get_class("Base")
    derived_cls = runtime.get_class("Derived")

    b = base_cls.create("b", "dum", "dee")
    derived_cls.create("d", "fee", "fi")
    o = derived_cls.new("fo", "fum")
    o.invoke("put", 10)
    out(f"v:{o.invoke('get')}")
    b.invoke("m")
    b.invoke("n")
    o.invoke("m")
    o.invoke("n")
    o.invoke("nosuchmethod", "arg1", "arg2")
    o.destroy()
    b.rename("")
    base_cls.destroy()
    return runtime

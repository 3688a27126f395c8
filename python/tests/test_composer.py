from __future__ import annotations

import pytest

from latebind import (
    Base,
    Config,
    InvalidArgument,
    Namespace,
    Runtime,
    UnimplementedInitializer,
    describe,
    extend,
    instantiate,
    snapshot,
)


def _point_class(runtime: Runtime):
    Point = runtime.extend(Base, "Point")

    def init(self, x, y=0):
        self.x = x
        self.y = y

    Point.add_method({"init": init, "norm": lambda self: abs(self.x) + abs(self.y)})
    return Point


def test_create_runs_init(runtime: Runtime) -> None:
    Point = _point_class(runtime)
    point = Point.create(3, y=-4)
    assert isinstance(point, Point)
    assert (point.x, point.y) == (3, -4)
    assert point.norm() == 7


def test_create_without_init_fails(runtime: Runtime) -> None:
    Bare = runtime.extend(Base, "Bare")
    with pytest.raises(UnimplementedInitializer):
        Bare.create()


def test_extend_carries_runtime(runtime: Runtime) -> None:
    Child = runtime.extend(Base, "Child")
    Grandchild = Child.extend("Grandchild")
    assert Child.runtime() is runtime
    assert Grandchild.runtime() is runtime
    assert Grandchild.__name__ == "Grandchild"
    assert issubclass(Grandchild, Child)


def test_base_falls_back_to_default_runtime() -> None:
    from latebind import default_runtime

    assert Base.runtime() is default_runtime()


def test_create_dispatches_to_surrogate(runtime: Runtime) -> None:
    classes = Namespace()
    classes.Shape = runtime.extend(Base, "Shape")
    classes.Shape.add_method({"init": lambda self, *sides: setattr(self, "sides", sides)})
    classes.Triangle = runtime.extend(classes.Shape, "Triangle")
    classes.Square = runtime.extend(classes.Shape, "Square")
    classes.Shape.add_surrogate(classes, "Triangle", lambda *sides: len(sides) == 3)
    classes.Shape.add_surrogate(classes, "Square", "length(args) == `4`")

    triangle = classes.Shape.create(3, 4, 5)
    square = classes.Shape.create(1, 1, 1, 1)
    shape = classes.Shape.create(1, 2)
    assert type(triangle) is classes.Triangle
    assert triangle.sides == (3, 4, 5)
    assert type(square) is classes.Square
    assert type(shape) is classes.Shape


def test_surrogate_must_be_a_class(runtime: Runtime) -> None:
    registry = Namespace()
    registry.factory = lambda: None
    Shape = runtime.extend(Base, "Shape")
    Shape.add_method({"init": lambda self: None})
    Shape.add_surrogate(registry, "factory", lambda: True)
    with pytest.raises(InvalidArgument):
        Shape.create()


def test_layered_classes_allow_member_overrides() -> None:
    runtime = Runtime(Config(dual_layer=True))
    Service = runtime.extend(Base, "Service")
    Service.add_method({"fetch": lambda self: "real"})
    members = Service.__bases__[0]
    assert describe(members, "fetch") is not None
    assert describe(Service, "fetch") is None

    runtime.define(Service, "fetch", lambda self: "stubbed", configurable=True)
    assert runtime.instantiate(Service).fetch() == "stubbed"
    del Service.fetch
    assert runtime.instantiate(Service).fetch() == "real"


def test_instance_level_property_helpers(runtime: Runtime) -> None:
    Widget = runtime.extend(Base, "Widget")
    widget = runtime.instantiate(Widget)
    assert widget.add_public({"label": "ok"}) is widget
    widget.add_constant({"kind": "widget"})
    widget.add_private({"state": 1})
    widget.add_private_constant({"token": "t"})
    widget.add_mock({"ping": lambda: "pong"})
    assert widget.ping() == "pong"
    assert widget.remove_mocks() is widget
    assert snapshot(widget) == {"label": "ok", "kind": "widget"}
    assert (widget._state, widget._token) == (1, "t")
    assert describe(Widget, "label") is None


def test_class_level_property_helpers(runtime: Runtime) -> None:
    Widget = runtime.extend(Base, "Widget")
    Widget.add_constant({"kind": "widget"})
    Widget.add_private_method({"helper": lambda self: "help"})
    instance = runtime.instantiate(Widget)
    assert instance.kind == "widget"
    assert instance._helper() == "help"


def test_module_level_composer_functions(runtime: Runtime) -> None:
    Plain = extend(Base, "Plain")
    assert Plain.__runtime__ is None
    instance = instantiate(Plain)
    assert isinstance(instance, Plain)
    with pytest.raises(InvalidArgument):
        extend(object)
    with pytest.raises(InvalidArgument):
        instantiate(Namespace)

from __future__ import annotations

import pytest

from latebind import (
    AttributeRecord,
    AttributeViolation,
    Base,
    Config,
    InvalidArgument,
    Namespace,
    Runtime,
    describe,
    has_own,
    snapshot,
)


def _flags(record: AttributeRecord) -> tuple[bool, bool, bool]:
    return (record.writable, record.enumerable, record.configurable)


def test_flags_not_set_default_to_hidden_and_immutable(
    runtime: Runtime, ns: Namespace
) -> None:
    runtime.define_all(ns, {"test": lambda: None})
    record = describe(ns, "test")
    assert callable(record.value)
    assert _flags(record) == (False, False, False)


def test_loose_defaults(loose_runtime: Runtime, ns: Namespace) -> None:
    loose_runtime.define(ns, "test", 1)
    assert _flags(describe(ns, "test")) == (True, True, True)


def test_explicit_flags_override_defaults(loose_runtime: Runtime, ns: Namespace) -> None:
    loose_runtime.define(ns, "test", 1, writable=False, enumerable=True, configurable=False)
    assert _flags(describe(ns, "test")) == (False, True, False)


def test_force_writable(ns: Namespace) -> None:
    runtime = Runtime(Config(force_writable=True))
    runtime.define_all(ns, {"test": lambda: None}, False, False, False)
    assert _flags(describe(ns, "test")) == (True, False, False)


def test_flags_set(runtime: Runtime, ns: Namespace) -> None:
    result = runtime.define_all(ns, {"test": lambda: None}, True, True, True)
    assert result is ns
    assert _flags(describe(ns, "test")) == (True, True, True)


def test_prefixed(runtime: Runtime, ns: Namespace) -> None:
    runtime.define_prefixed(ns, "_", {"test": 1, "_hello": 2}, True, True, True)
    assert not has_own(ns, "test")
    assert ns._test == 1
    assert ns._hello == 2
    assert not has_own(ns, "__hello")


def test_prefixed_rejects_bad_prefix(runtime: Runtime, ns: Namespace) -> None:
    with pytest.raises(InvalidArgument):
        runtime.define_prefixed(ns, "", {"test": 1})
    with pytest.raises(InvalidArgument):
        runtime.define_prefixed(ns, "__", {"name__": 1})


def test_class_assembly(runtime: Runtime, ns: Namespace) -> None:
    def test_method() -> None:
        pass

    assert runtime.add_method(ns, {"test": test_method}) is ns
    runtime.add_constant(ns, {"foo": "foo"})
    runtime.add_private(ns, {"bar": "bar"})
    assert snapshot(ns) == {"test": test_method, "foo": "foo"}
    assert ns._bar == "bar"
    assert _flags(describe(ns, "_bar")) == (True, False, False)


def test_private_family_uses_configured_prefix(ns: Namespace) -> None:
    runtime = Runtime(Config(private_prefix="p_"))
    runtime.add_private_constant(ns, {"secret": 1})
    runtime.add_private_method(ns, {"helper": lambda: 2})
    assert ns.p_secret == 1
    assert ns.p_helper() == 2
    assert _flags(describe(ns, "p_secret")) == (False, False, False)


def test_public_members_are_writable(runtime: Runtime, ns: Namespace) -> None:
    runtime.add_public(ns, {"name": "first"})
    ns.name = "second"
    assert ns.name == "second"
    assert _flags(describe(ns, "name")) == (True, True, False)


def test_methods_must_be_callable(runtime: Runtime, ns: Namespace) -> None:
    with pytest.raises(InvalidArgument):
        runtime.add_method(ns, {"test": "not a function"})
    assert not has_own(ns, "test")


def test_read_only_redefinition_fails(runtime: Runtime, ns: Namespace) -> None:
    runtime.define(ns, "x", 1)
    with pytest.raises(AttributeViolation):
        runtime.define(ns, "x", 2, writable=False)
    assert ns.x == 1


def test_identical_redefinition_is_allowed(runtime: Runtime, ns: Namespace) -> None:
    runtime.define(ns, "x", "same")
    runtime.define(ns, "x", "same")
    assert ns.x == "same"


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        pytest.param(dict(writable=True), AttributeViolation, id="make-writable"),
        pytest.param(dict(configurable=True), AttributeViolation, id="make-configurable"),
        pytest.param(dict(enumerable=True), AttributeViolation, id="make-enumerable"),
    ],
)
def test_non_configurable_flag_changes_fail(
    runtime: Runtime, ns: Namespace, flags: dict, expected: type
) -> None:
    runtime.define(ns, "x", 1)
    with pytest.raises(expected):
        runtime.define(ns, "x", 1, **flags)


def test_writable_non_configurable_can_be_locked(runtime: Runtime, ns: Namespace) -> None:
    runtime.define(ns, "x", 1, writable=True)
    runtime.define(ns, "x", 2, writable=False)
    assert ns.x == 2
    with pytest.raises(AttributeViolation):
        ns.x = 3


def test_configurable_record_is_replaced(runtime: Runtime, ns: Namespace) -> None:
    runtime.define(ns, "x", 1, configurable=True)
    runtime.define(ns, "x", 2, writable=True, enumerable=True)
    assert _flags(describe(ns, "x")) == (True, True, False)


def test_multi_key_definition_is_all_or_nothing(runtime: Runtime, ns: Namespace) -> None:
    runtime.define(ns, "locked", 1)
    with pytest.raises(AttributeViolation):
        runtime.define_all(ns, {"fresh": 1, "locked": 2})
    assert not has_own(ns, "fresh")


def test_mocks(runtime: Runtime, ns: Namespace) -> None:
    def test_method() -> None:
        pass

    runtime.add_mock(ns, {"foo": test_method})
    assert snapshot(ns) == {"foo": test_method}
    assert runtime.remove_mocks(ns) is ns
    assert snapshot(ns) == {}


def test_remove_all_callable_spares_values_and_locked_callables(
    runtime: Runtime, ns: Namespace
) -> None:
    runtime.add_constant(ns, {"value": 1, "locked": len})
    runtime.add_mock(ns, {"stub": lambda: None})
    ns.plain_stub = lambda: None
    runtime.remove_all_callable(ns)
    assert sorted(snapshot(ns)) == ["locked", "value"]


def test_target_in_single_layer_mode(runtime: Runtime) -> None:
    cls = runtime.extend(Base, "Single")
    assert runtime.target(cls) is cls


def test_target_in_dual_layer_mode() -> None:
    runtime = Runtime(Config(dual_layer=True))
    cls = runtime.extend(Base, "Layered")
    members = cls.__bases__[0]
    assert members.__name__ == "LayeredMembers"
    assert runtime.target(cls) is members
    assert runtime.target(runtime.instantiate(cls)) is cls

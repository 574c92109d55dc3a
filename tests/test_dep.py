import pytest

from svcutils.dep import (
    Dep,
    DepMode,
    DependencyProvider,
    dep_names,
    deps_from_names,
    eager,
    eager_typed,
    lazy,
    lazy_optional,
    lazy_optional_typed,
    lazy_typed,
    optional,
    optional_typed,
)


class _TestService:
    pass


@pytest.mark.parametrize(
    "mode, expected",
    [
        (DepMode.EAGER, "eager"),
        (DepMode.LAZY, "lazy"),
        (DepMode.OPTIONAL, "optional"),
        (DepMode.LAZY_OPTIONAL, "lazy_optional"),
    ],
)
def test_mode_str(mode, expected):
    assert str(mode) == expected


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        DepMode(99)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (DepMode.EAGER, False),
        (DepMode.LAZY, True),
        (DepMode.OPTIONAL, False),
        (DepMode.LAZY_OPTIONAL, True),
    ],
)
def test_is_lazy(mode, expected):
    assert mode.is_lazy() is expected


@pytest.mark.parametrize(
    "mode, expected",
    [
        (DepMode.EAGER, False),
        (DepMode.LAZY, False),
        (DepMode.OPTIONAL, True),
        (DepMode.LAZY_OPTIONAL, True),
    ],
)
def test_is_optional(mode, expected):
    assert mode.is_optional() is expected


@pytest.mark.parametrize(
    "factory, mode",
    [
        (eager, DepMode.EAGER),
        (lazy, DepMode.LAZY),
        (optional, DepMode.OPTIONAL),
        (lazy_optional, DepMode.LAZY_OPTIONAL),
    ],
)
def test_untyped_constructors(factory, mode):
    dep = factory("test-service")
    assert dep.name == "test-service"
    assert dep.mode == mode
    assert dep.type is None


@pytest.mark.parametrize(
    "factory, mode",
    [
        (eager_typed, DepMode.EAGER),
        (lazy_typed, DepMode.LAZY),
        (optional_typed, DepMode.OPTIONAL),
        (lazy_optional_typed, DepMode.LAZY_OPTIONAL),
    ],
)
def test_typed_constructors(factory, mode):
    dep = factory("test-service", _TestService)
    assert dep.name == "test-service"
    assert dep.mode == mode
    assert dep.type is _TestService


@pytest.mark.parametrize(
    "deps, expected",
    [
        ([], []),
        ([eager("service1")], ["service1"]),
        (
            [eager("service1"), lazy("service2"), optional("service3")],
            ["service1", "service2", "service3"],
        ),
    ],
)
def test_dep_names(deps, expected):
    assert dep_names(deps) == expected


@pytest.mark.parametrize(
    "names, expected",
    [
        ([], []),
        (["service1"], [eager("service1")]),
        (
            ["service1", "service2", "service3"],
            [eager("service1"), eager("service2"), eager("service3")],
        ),
    ],
)
def test_deps_from_names(names, expected):
    result = deps_from_names(names)
    assert result == expected
    assert all(dep.mode == DepMode.EAGER for dep in result)


def test_round_trip():
    original = ["service1", "service2", "service3"]
    assert dep_names(deps_from_names(original)) == original


def test_dependency_provider_protocol():
    class Handler:
        def dependencies(self):
            return [eager("logger"), lazy("cache")]

    handler = Handler()
    assert isinstance(handler, DependencyProvider)
    assert dep_names(handler.dependencies()) == ["logger", "cache"]


def test_dep_is_immutable_and_comparable():
    dep = Dep("db", mode=DepMode.LAZY)
    assert dep == lazy("db")
    with pytest.raises(AttributeError):
        dep.name = "other"
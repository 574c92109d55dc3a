import pytest

from svcutils.dep import DepMode, eager, lazy, optional
from svcutils.options import (
    RegisterOption,
    merge_options,
    scoped,
    singleton,
    transient,
    with_dependencies,
    with_deps,
    with_di_metadata,
    with_group,
)


def test_singleton():
    assert singleton().lifecycle == "singleton"


def test_transient():
    assert transient().lifecycle == "transient"


def test_scoped():
    assert scoped().lifecycle == "scoped"


def test_with_dependencies():
    opt = with_dependencies("service1", "service2", "service3")
    assert opt.dependencies == ["service1", "service2", "service3"]


def test_with_deps():
    deps = [eager("service1"), lazy("service2"), optional("service3")]
    opt = with_deps(*deps)
    assert len(opt.deps) == 3
    assert [d.name for d in opt.deps] == ["service1", "service2", "service3"]
    assert [d.mode for d in opt.deps] == [DepMode.EAGER, DepMode.LAZY, DepMode.OPTIONAL]


def test_with_di_metadata():
    assert with_di_metadata("key1", "value1").metadata == {"key1": "value1"}


def test_with_group():
    assert with_group("handlers").groups == ["handlers"]


def test_merge_empty():
    result = merge_options([])
    assert result.lifecycle == "singleton"
    assert result.metadata == {}


def test_merge_single():
    assert merge_options([transient()]).lifecycle == "transient"


def test_merge_multiple():
    result = merge_options(
        [
            singleton(),
            with_dependencies("service1", "service2"),
            with_deps(lazy("service3")),
            with_di_metadata("key1", "value1"),
            with_di_metadata("key2", "value2"),
            with_group("group1"),
            with_group("group2"),
        ]
    )
    assert result.lifecycle == "singleton"
    assert len(result.dependencies) == 2
    assert len(result.deps) == 1
    assert len(result.metadata) == 2
    assert result.groups == ["group1", "group2"]


def test_merge_lifecycle_override():
    assert merge_options([singleton(), transient(), scoped()]).lifecycle == "scoped"


def test_merge_metadata_override():
    result = merge_options(
        [
            with_di_metadata("key1", "value1"),
            with_di_metadata("key2", "value2"),
            with_di_metadata("key1", "value1_override"),
        ]
    )
    assert result.metadata == {"key1": "value1_override", "key2": "value2"}


def test_merge_does_not_mutate_inputs():
    opt = with_dependencies("a")
    merge_options([opt, with_dependencies("b")])
    assert opt.dependencies == ["a"]


_MIXED = RegisterOption(
    dependencies=["service1", "service2"],
    deps=[lazy("service3"), optional("service4")],
)


@pytest.mark.parametrize(
    "opt, expected",
    [
        (RegisterOption(), 0),
        (with_dependencies("service1", "service2"), 2),
        (with_deps(eager("service1"), lazy("service2")), 2),
        (_MIXED, 4),
    ],
)
def test_all_deps_count(opt, expected):
    assert len(opt.all_deps()) == expected


def test_all_deps_strings_become_eager():
    deps = with_dependencies("service1", "service2").all_deps()
    assert len(deps) == 2
    assert all(dep.mode == DepMode.EAGER for dep in deps)


@pytest.mark.parametrize(
    "opt, expected",
    [
        (RegisterOption(), []),
        (with_dependencies("service1", "service2"), ["service1", "service2"]),
        (with_deps(eager("service1"), lazy("service2")), ["service1", "service2"]),
        (_MIXED, ["service3", "service4", "service1", "service2"]),
    ],
)
def test_all_dep_names(opt, expected):
    assert opt.all_dep_names() == expected


def test_combined_usage():
    result = merge_options(
        [
            scoped(),
            with_deps(eager("logger"), lazy("cache"), optional("metrics")),
            with_dependencies("config"),
            with_di_metadata("version", "1.0.0"),
            with_di_metadata("author", "test"),
            with_group("handlers"),
        ]
    )
    assert result.lifecycle == "scoped"
    assert len(result.all_deps()) == 4
    assert result.metadata["version"] == "1.0.0"
    assert result.metadata["author"] == "test"
    assert result.groups == ["handlers"]
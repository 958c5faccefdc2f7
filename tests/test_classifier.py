from __future__ import annotations

import pytest

from model.dependencies import PackageDependencies, ReadKind
from rules.patterns import PackagePattern
from validation.classifier import classify

PACKAGES = {
    "shop.api": ["shop.core", "shop.vendor"],
    "shop.core": ["shop.db"],
    "shop.db": ["shop.events"],
    "shop.events": ["shop.core"],
}
DECLARED_READS = [
    (source, target)
    for source, reads in PACKAGES.items()
    for target in reads
    if target != "shop.vendor"
]


@pytest.fixture
def model() -> PackageDependencies:
    return PackageDependencies(
        PACKAGES,
        [PackagePattern.parse("com.vendor.*"), PackagePattern.parse("shop.vendor")],
    )


@pytest.mark.parametrize(("source", "target"), DECLARED_READS)
def test_declared_reads_are_allowed(
    model: PackageDependencies, source: str, target: str
) -> None:
    assert classify(model, model.get_package(source), target) is ReadKind.ALLOWED


def test_undeclared_read_outside_cycle_is_disallowed(
    model: PackageDependencies,
) -> None:
    api = model.get_package("shop.api")

    assert classify(model, api, "shop.db") is ReadKind.DISALLOWED
    assert classify(model, api, "shop.legacy") is ReadKind.DISALLOWED


def test_undeclared_read_within_declared_cycle_is_cycle(
    model: PackageDependencies,
) -> None:
    core = model.get_package("shop.core")
    events = model.get_package("shop.events")

    assert classify(model, core, "shop.events") is ReadKind.CYCLE
    assert classify(model, events, "shop.db") is ReadKind.CYCLE


def test_cycle_requires_shared_component_of_declared_reads() -> None:
    model = PackageDependencies({"a": ["b"], "b": []})

    assert classify(model, model.get_package("b"), "a") is ReadKind.DISALLOWED


def test_mutual_declared_reads_are_allowed_not_cycle() -> None:
    model = PackageDependencies({"a": ["b"], "b": ["a"]})

    assert classify(model, model.get_package("b"), "a") is ReadKind.ALLOWED


def test_self_reference_is_not_reported(model: PackageDependencies) -> None:
    for name in PACKAGES:
        assert classify(model, model.get_package(name), name) is None


def test_builtin_package_is_not_reported(model: PackageDependencies) -> None:
    assert classify(model, model.get_package("shop.api"), "builtins") is None


def test_whitelisted_target_is_never_reported(model: PackageDependencies) -> None:
    api = model.get_package("shop.api")

    assert classify(model, api, "com.vendor.http") is None
    assert classify(model, api, "shop.vendor") is None


def test_whitelist_wins_over_configured_target() -> None:
    model = PackageDependencies(
        {"a": [], "b": []}, [PackagePattern.parse("b")]
    )

    assert classify(model, model.get_package("a"), "b") is None


def test_unconfigured_source_is_not_judged(model: PackageDependencies) -> None:
    legacy = model.get_package("shop.legacy")

    assert classify(model, legacy, "shop.db") is None


def test_empty_target_is_not_reported(model: PackageDependencies) -> None:
    assert classify(model, model.get_package("shop.api"), "") is None

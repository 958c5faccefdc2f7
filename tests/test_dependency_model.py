from __future__ import annotations

from model.dependencies import Package, PackageDependencies
from rules.config import DeptectiveConfig
from rules.patterns import PackagePattern


def _model(
    packages: dict[str, list[str]], whitelist: list[str] | None = None
) -> PackageDependencies:
    return PackageDependencies(
        packages,
        [PackagePattern.parse(pattern) for pattern in whitelist or []],
    )


def test_get_package_returns_configured_package() -> None:
    model = _model({"shop.api": ["shop.core"]})

    package = model.get_package("shop.api")

    assert package == Package("shop.api", True, frozenset({"shop.core"}))
    assert package.reads("shop.core")
    assert not package.reads("shop.db")


def test_get_package_memoizes_unconfigured_placeholder() -> None:
    model = _model({"shop.api": []})

    first = model.get_package("shop.legacy")
    second = model.get_package("shop.legacy")

    assert first is second
    assert not first.configured
    assert first.allowed_reads == frozenset()
    assert not model.is_configured("shop.legacy")


def test_reads_is_false_for_unknown_source() -> None:
    model = _model({"a": ["b"]})

    assert model.reads("a", "b")
    assert not model.reads("b", "a")
    assert not model.reads("missing", "b")


def test_is_whitelisted_uses_patterns() -> None:
    model = _model({}, whitelist=["com.vendor.*", "numpy"])

    assert model.is_whitelisted("com.vendor.http")
    assert model.is_whitelisted("numpy")
    assert not model.is_whitelisted("numpy.linalg")
    assert not model.is_whitelisted("shop")


def test_cycles_computed_over_configured_reads() -> None:
    model = _model({"a": ["b"], "b": ["c"], "c": ["a"], "d": ["a"]})

    assert model.cycles == [["a", "b", "c"]]
    assert model.in_same_cycle("a", "c")
    assert model.in_same_cycle("c", "b")
    assert not model.in_same_cycle("d", "a")


def test_cycles_ignore_unconfigured_targets() -> None:
    model = _model({"a": ["b"], "b": ["x"]})

    assert model.cycles == []
    assert not model.in_same_cycle("a", "x")


def test_from_config_builds_model() -> None:
    config = DeptectiveConfig.model_validate(
        {
            "packages": [
                {"name": "shop.api", "reads": ["shop.core"]},
                {"name": "shop.core"},
            ],
            "whitelisted": ["requests.*"],
            "builtin_package": "core",
        }
    )

    model = PackageDependencies.from_config(config)

    assert [package.name for package in model.configured_packages()] == [
        "shop.api",
        "shop.core",
    ]
    assert model.reads("shop.api", "shop.core")
    assert model.is_whitelisted("requests.adapters")
    assert model.builtin_package == "core"


def test_deep_read_chain_builds_model() -> None:
    names = [f"p{i:05d}" for i in range(2000)]
    reads = {name: [successor] for name, successor in zip(names, names[1:])}
    reads[names[-1]] = []

    model = _model(reads)

    assert model.cycles == []
    assert model.reads(names[0], names[1])

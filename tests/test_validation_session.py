from __future__ import annotations

import pytest

from model.components import GraphAggregator
from model.dependencies import PackageDependencies, ReadKind
from rules.patterns import PackagePattern
from validation.events import EnterPackage, ObserveReference, SourceLocation
from validation.findings import (
    IllegalDependency,
    MissingConfiguration,
    ReportingPolicy,
    UnconfiguredPackage,
)
from validation.session import (
    NoCurrentPackageError,
    SessionAbortedError,
    ValidationSession,
)


def _model() -> PackageDependencies:
    return PackageDependencies(
        {"a": ["b"], "b": []},
        [PackagePattern.parse("com.vendor.*")],
    )


def test_round_trip_scenario_reports_illegal_and_unconfigured_once() -> None:
    session = ValidationSession(_model())

    findings = session.process(
        [
            EnterPackage("a"),
            ObserveReference("b"),
            ObserveReference("c"),
            ObserveReference("com.vendor.http"),
            EnterPackage("c"),
        ]
    )

    assert findings == [
        IllegalDependency(from_package="a", to_package="c"),
        UnconfiguredPackage(name="c"),
    ]


def test_unconfigured_package_reported_once_per_name() -> None:
    session = ValidationSession(_model())

    session.process(
        [
            EnterPackage("x"),
            EnterPackage("a"),
            EnterPackage("x"),
            EnterPackage("y"),
            EnterPackage("x"),
        ]
    )

    assert session.findings == [UnconfiguredPackage("x"), UnconfiguredPackage("y")]


def test_illegal_dependencies_are_not_deduplicated() -> None:
    session = ValidationSession(_model())
    first = SourceLocation("a/one.py", 3)
    second = SourceLocation("a/two.py", 7)

    session.process(
        [
            EnterPackage("a"),
            ObserveReference("c", first),
            ObserveReference("c", second),
            ObserveReference("c", second),
        ]
    )

    assert [finding.location for finding in session.findings] == [
        first,
        second,
        second,
    ]


def test_unconfigured_source_references_are_not_judged() -> None:
    session = ValidationSession(_model())

    session.process([EnterPackage("c"), ObserveReference("a"), ObserveReference("d")])

    assert session.findings == [UnconfiguredPackage("c")]


def test_findings_carry_configured_severity() -> None:
    session = ValidationSession(
        _model(),
        reporting_policy=ReportingPolicy.WARNING,
        unconfigured_package_reporting_policy=ReportingPolicy.ERROR,
    )

    session.process([EnterPackage("a"), ObserveReference("c"), EnterPackage("c")])

    assert [finding.severity for finding in session.findings] == [
        ReportingPolicy.WARNING,
        ReportingPolicy.ERROR,
    ]
    assert session.has_errors


def test_warnings_only_do_not_count_as_errors() -> None:
    session = ValidationSession(_model(), reporting_policy=ReportingPolicy.WARNING)

    session.process([EnterPackage("a"), ObserveReference("c")])

    assert len(session.findings) == 1
    assert not session.has_errors


def test_reference_before_any_package_is_a_protocol_error() -> None:
    session = ValidationSession(_model())

    with pytest.raises(NoCurrentPackageError, match="'b'"):
        session.process([ObserveReference("b")])


def test_explicit_context_api_threads_the_package() -> None:
    session = ValidationSession(_model())

    package = session.enter_package("a")

    assert session.observe_reference(package, "b") is ReadKind.ALLOWED
    assert session.observe_reference(package, "c") is ReadKind.DISALLOWED
    assert session.observe_reference(package, "a") is None
    assert session.findings == [IllegalDependency("a", "c")]


def test_missing_configuration_is_single_fatal_finding() -> None:
    session = ValidationSession(None, missing_reason="deptective.toml not found")

    findings = session.process([EnterPackage("a"), ObserveReference("b")])

    assert not session.config_is_valid()
    assert findings == [MissingConfiguration(reason="deptective.toml not found")]
    assert findings[0].severity is ReportingPolicy.ERROR
    assert session.has_errors


def test_missing_configuration_rejects_individual_events() -> None:
    session = ValidationSession(None)

    with pytest.raises(SessionAbortedError):
        session.enter_package("a")


def test_session_feeds_aggregator_with_classified_reads() -> None:
    aggregator = GraphAggregator()
    session = ValidationSession(_model(), aggregator=aggregator)

    session.process(
        [
            EnterPackage("a"),
            ObserveReference("b"),
            ObserveReference("b"),
            ObserveReference("c"),
            ObserveReference("com.vendor.http"),
            EnterPackage("c"),
            ObserveReference("a"),
        ]
    )

    snapshot = aggregator.snapshot()
    assert snapshot.packages == ("a", "b", "c")
    assert snapshot.edges(ReadKind.ALLOWED) == [("a", "b", 2)]
    assert snapshot.edges(ReadKind.DISALLOWED) == [("a", "c", 1)]
    assert snapshot.whitelisted == ("com.vendor.*",)


def test_sessions_sharing_a_model_keep_independent_state() -> None:
    model = _model()
    first = ValidationSession(model)
    second = ValidationSession(model)

    first.process([EnterPackage("x")])
    second.process([EnterPackage("x")])

    assert first.findings == [UnconfiguredPackage("x")]
    assert second.findings == [UnconfiguredPackage("x")]


def test_finding_messages_and_dicts() -> None:
    illegal = IllegalDependency("a", "c", location=SourceLocation("a/mod.py", 4))
    unconfigured = UnconfiguredPackage("c")

    assert illegal.message() == "Package a does not read c, but references it"
    assert illegal.to_dict() == {
        "kind": "illegal_dependency",
        "from": "a",
        "to": "c",
        "severity": "error",
        "location": "a/mod.py:4",
    }
    assert unconfigured.message() == "Package c is not configured"
    assert unconfigured.to_dict()["severity"] == "warning"
    assert MissingConfiguration().message() == "No dependency configuration found"

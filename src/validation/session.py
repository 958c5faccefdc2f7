"""Validation of a stream of package reference events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from model.dependencies import ReadKind
from validation.classifier import classify
from validation.events import EnterPackage, ObserveReference
from validation.findings import (
    IllegalDependency,
    MissingConfiguration,
    ReportingPolicy,
    UnconfiguredPackage,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.components import GraphAggregator
    from model.dependencies import Package, PackageDependencies
    from validation.events import Event
    from validation.findings import Finding

logger = logging.getLogger(__name__)


class NoCurrentPackageError(RuntimeError):
    """Raised when a reference is observed before any package was entered."""


class SessionAbortedError(RuntimeError):
    """Raised when events are fed to a session without a configuration."""


class ValidationSession:
    """Validates references against a dependency model.

    Each session owns its findings and the set of unconfigured packages it
    has already reported; the model itself is only read. Findings are
    collected in arrival order and never raised.
    """

    def __init__(
        self,
        model: PackageDependencies | None,
        *,
        reporting_policy: ReportingPolicy = ReportingPolicy.ERROR,
        unconfigured_package_reporting_policy: ReportingPolicy = (
            ReportingPolicy.WARNING
        ),
        missing_reason: str | None = None,
        aggregator: GraphAggregator | None = None,
    ) -> None:
        self.model = model
        self.reporting_policy = reporting_policy
        self.unconfigured_package_reporting_policy = (
            unconfigured_package_reporting_policy
        )
        self.aggregator = aggregator
        self.findings: list[Finding] = []
        self._reported_unconfigured: set[str] = set()

        if model is None:
            self.findings.append(MissingConfiguration(reason=missing_reason))
        elif aggregator is not None:
            for pattern in model.whitelist:
                aggregator.add_whitelisted_pattern(pattern)

    def config_is_valid(self) -> bool:
        return self.model is not None

    @property
    def has_errors(self) -> bool:
        return any(
            finding.severity is ReportingPolicy.ERROR for finding in self.findings
        )

    def _require_model(self) -> PackageDependencies:
        if self.model is None:
            msg = "Session has no dependency configuration and accepts no events"
            raise SessionAbortedError(msg)
        return self.model

    def enter_package(self, name: str, location: object = None) -> Package:
        """Make ``name`` the source of subsequent references and return it."""
        package = self._require_model().get_package(name)

        if self.aggregator is not None:
            self.aggregator.add_package(name)

        if not package.configured and name not in self._reported_unconfigured:
            self._reported_unconfigured.add(name)
            self.findings.append(
                UnconfiguredPackage(
                    name=name,
                    severity=self.unconfigured_package_reporting_policy,
                    location=location,
                )
            )

        return package

    def observe_reference(
        self, package: Package, to_name: str, location: object = None
    ) -> ReadKind | None:
        """Classify a reference from ``package`` and record the outcome."""
        kind = classify(self._require_model(), package, to_name)
        logger.debug("%s -> %s: %s", package.name, to_name, kind)

        if kind is None:
            return None

        if kind is ReadKind.DISALLOWED:
            self.findings.append(
                IllegalDependency(
                    from_package=package.name,
                    to_package=to_name,
                    severity=self.reporting_policy,
                    location=location,
                )
            )

        if self.aggregator is not None:
            self.aggregator.record(package.name, to_name, kind)

        return kind

    def process(self, events: Iterable[Event]) -> list[Finding]:
        """Feed an ordered event stream through the session.

        A session without configuration does not consume the stream and
        only returns its MissingConfiguration finding.

        Raises:
            NoCurrentPackageError: If a reference precedes every package.
        """
        if self.model is None:
            return self.findings

        current: Package | None = None
        for event in events:
            if isinstance(event, EnterPackage):
                current = self.enter_package(event.name, event.location)
            elif isinstance(event, ObserveReference):
                if current is None:
                    msg = (
                        f"Reference to '{event.to}' observed before any "
                        "package was entered"
                    )
                    raise NoCurrentPackageError(msg)
                self.observe_reference(current, event.to, event.location)
            else:
                msg = f"Unsupported event: {event!r}"
                raise TypeError(msg)

        return self.findings


__all__ = ["NoCurrentPackageError", "SessionAbortedError", "ValidationSession"]

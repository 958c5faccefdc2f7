from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from export import DotSerializer, JsonConfigSerializer
from model.components import GraphAggregator
from model.dependencies import PackageDependencies
from rules.config import ConfigError, load_config
from scan.references import iter_events
from validation.collector import ReferenceCollector
from validation.findings import ReportingPolicy
from validation.session import ValidationSession

if TYPE_CHECKING:
    from pathlib import Path

    from export import ModelSerializer
    from model.components import GraphSnapshot
    from rules.config import DeptectiveConfig
    from validation.findings import Finding

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = ".deptective"


@dataclass
class RunResult:
    findings: list[Finding] = field(default_factory=list)
    snapshot: GraphSnapshot | None = None
    exported: list[Path] = field(default_factory=list)
    config_is_valid: bool = True

    @property
    def has_errors(self) -> bool:
        return any(
            finding.severity is ReportingPolicy.ERROR for finding in self.findings
        )


def _write_exports(
    snapshot: GraphSnapshot,
    out_dir: Path,
    serializers: list[ModelSerializer],
) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for serializer in serializers:
        path = out_dir / serializer.filename
        path.write_text(serializer.serialize(snapshot), encoding="utf-8")
        logger.info("Wrote %s export to %s", serializer.name, path)
        written.append(path)
    return written


def _resolve_config(
    root: Path, config: DeptectiveConfig | None
) -> tuple[DeptectiveConfig | None, str | None]:
    if config is not None:
        return config, None
    try:
        return load_config(root), None
    except ConfigError as exc:
        logger.error("%s", exc)
        return None, str(exc)


def run_validation(
    root: Path,
    *,
    config: DeptectiveConfig | None = None,
    reporting_policy: ReportingPolicy = ReportingPolicy.ERROR,
    unconfigured_package_reporting_policy: ReportingPolicy = ReportingPolicy.WARNING,
    visualize: bool = False,
    out_dir: Path | None = None,
) -> RunResult:
    """Validate the package references of the Python sources under root.

    Args:
        root: Root directory of the sources to validate
        config: Configuration to use; loaded from root when omitted
        reporting_policy: Severity of illegal dependency findings
        unconfigured_package_reporting_policy: Severity of unconfigured
            package findings
        visualize: Write a DOT rendering of the observed graph
        out_dir: Directory for exports (default: root/.deptective)

    Returns:
        RunResult with findings in arrival order and written export paths.
    """
    resolved, reason = _resolve_config(root, config)
    model = PackageDependencies.from_config(resolved) if resolved is not None else None

    aggregator = GraphAggregator() if visualize else None
    session = ValidationSession(
        model,
        reporting_policy=reporting_policy,
        unconfigured_package_reporting_policy=unconfigured_package_reporting_policy,
        missing_reason=reason,
        aggregator=aggregator,
    )

    result = RunResult(config_is_valid=session.config_is_valid())
    if not session.config_is_valid():
        result.findings = list(session.findings)
        return result

    result.findings = list(session.process(iter_events(root, resolved)))
    logger.info(
        "Validated %s: %d finding(s), %d error(s)",
        root,
        len(result.findings),
        sum(1 for f in result.findings if f.severity is ReportingPolicy.ERROR),
    )

    if aggregator is not None:
        result.snapshot = aggregator.snapshot()
        result.exported = _write_exports(
            result.snapshot, out_dir or root / DEFAULT_OUTPUT_DIR, [DotSerializer()]
        )

    return result


def run_analysis(
    root: Path,
    *,
    config: DeptectiveConfig | None = None,
    out_dir: Path | None = None,
) -> RunResult:
    """Record the observed package graph and export it.

    Writes a configuration proposal (deptective.json) and a DOT rendering.
    Reads are classified against the configuration when one is present
    and recorded as UNKNOWN otherwise.
    """
    resolved, _reason = _resolve_config(root, config)
    model = PackageDependencies.from_config(resolved) if resolved is not None else None

    aggregator = ReferenceCollector(model).collect(iter_events(root, resolved))
    snapshot = aggregator.snapshot()

    return RunResult(
        snapshot=snapshot,
        exported=_write_exports(
            snapshot,
            out_dir or root / DEFAULT_OUTPUT_DIR,
            [JsonConfigSerializer(), DotSerializer()],
        ),
        config_is_valid=resolved is not None,
    )


__all__ = ["DEFAULT_OUTPUT_DIR", "RunResult", "run_analysis", "run_validation"]

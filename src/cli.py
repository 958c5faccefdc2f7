"""Command-line interface for deptective."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from run import run_analysis, run_validation
from validation.findings import ReportingPolicy

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_MISSING_CONFIG = 2

_POLICIES = [policy.value for policy in ReportingPolicy]


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Source root (default: .)",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for exported files (default: <root>/.deptective)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deptective")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate package references against the configuration"
    )
    _add_common_arguments(validate_parser)
    validate_parser.add_argument(
        "--reporting-policy",
        choices=_POLICIES,
        default=ReportingPolicy.ERROR.value,
        help="Severity of illegal package dependencies (default: error)",
    )
    validate_parser.add_argument(
        "--unconfigured-package-reporting-policy",
        choices=_POLICIES,
        default=ReportingPolicy.WARNING.value,
        help="Severity of packages missing from the configuration (default: warning)",
    )
    validate_parser.add_argument(
        "--visualize",
        action="store_true",
        help="Write a GraphViz rendering of the observed package graph",
    )

    analyze_parser = subparsers.add_parser(
        "analyze", help="Export the observed package graph and a config proposal"
    )
    _add_common_arguments(analyze_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_out_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _handle_validate(root: Path, args: argparse.Namespace) -> int:
    result = run_validation(
        root,
        reporting_policy=ReportingPolicy(args.reporting_policy),
        unconfigured_package_reporting_policy=ReportingPolicy(
            args.unconfigured_package_reporting_policy
        ),
        visualize=args.visualize,
        out_dir=_resolve_out_dir(args.out_dir),
    )

    for finding in result.findings:
        location = finding.location if finding.location is not None else root
        sys.stderr.write(
            f"{location}: {finding.severity.value}: {finding.message()}\n"
        )

    if not result.config_is_valid:
        return EXIT_MISSING_CONFIG
    if result.has_errors:
        return EXIT_VIOLATIONS
    return EXIT_OK


def _handle_analyze(root: Path, args: argparse.Namespace) -> int:
    result = run_analysis(root, out_dir=_resolve_out_dir(args.out_dir))
    for path in result.exported:
        sys.stdout.write(f"{path}\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    if args.command == "validate":
        return _handle_validate(root, args)

    if args.command == "analyze":
        return _handle_analyze(root, args)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())

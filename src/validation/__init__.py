"""Reference classification and validation sessions."""

from validation.classifier import classify
from validation.collector import ReferenceCollector
from validation.events import EnterPackage, ObserveReference, SourceLocation
from validation.findings import (
    Finding,
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

__all__ = [
    "EnterPackage",
    "Finding",
    "IllegalDependency",
    "MissingConfiguration",
    "NoCurrentPackageError",
    "ObserveReference",
    "ReferenceCollector",
    "ReportingPolicy",
    "SessionAbortedError",
    "SourceLocation",
    "UnconfiguredPackage",
    "ValidationSession",
    "classify",
]

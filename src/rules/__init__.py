"""Dependency rule configuration and package patterns."""

from rules.config import (
    ConfigError,
    DeptectiveConfig,
    PackageDef,
    load_config,
)
from rules.patterns import PackagePattern, matches

__all__ = [
    "ConfigError",
    "DeptectiveConfig",
    "PackageDef",
    "PackagePattern",
    "load_config",
    "matches",
]

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rules.patterns import PackagePattern

CONFIG_FILENAME = "deptective.toml"
JSON_CONFIG_FILENAME = "deptective.json"

DEFAULT_BUILTIN_PACKAGE = "builtins"


class PackageDef(BaseModel):
    """Declared package and the packages it may read."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Fully-qualified dotted package name")
    reads: list[str] = Field(
        default_factory=list,
        description="Packages this package is allowed to reference",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or any(not part for part in v.split(".")):
            msg = f"Invalid package name '{v}'"
            raise ValueError(msg)
        return v


class DeptectiveConfig(BaseModel):
    """Configuration describing the allowed package dependency graph."""

    model_config = ConfigDict(extra="forbid")

    packages: list[PackageDef] = Field(
        default_factory=list,
        description="Declared packages with their allowed reads",
    )
    whitelisted: list[str] = Field(
        default_factory=list,
        description="Package patterns exempt from validation",
    )
    builtin_package: str = Field(
        default=DEFAULT_BUILTIN_PACKAGE,
        description="Implicitly available package that is never reported",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    whitelist_stdlib: bool = Field(
        default=True,
        description="Skip references to standard library modules",
    )

    @field_validator("whitelisted")
    @classmethod
    def validate_whitelisted(cls, v: list[str]) -> list[str]:
        for pattern in v:
            PackagePattern.parse(pattern)
        return v

    @model_validator(mode="after")
    def validate_unique_packages(self) -> DeptectiveConfig:
        seen: set[str] = set()
        duplicates: set[str] = set()
        for package in self.packages:
            if package.name in seen:
                duplicates.add(package.name)
            seen.add(package.name)

        if duplicates:
            msg = f"Duplicate package declarations: {', '.join(sorted(duplicates))}"
            raise ValueError(msg)

        return self

    def whitelist_patterns(self) -> list[PackagePattern]:
        return [PackagePattern.parse(pattern) for pattern in self.whitelisted]


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def _read_toml(config_path: Path) -> Any:
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e


def _read_json(config_path: Path) -> Any:
    try:
        return orjson.loads(config_path.read_bytes())
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {config_path}: {e}"
        raise ConfigError(msg) from e


def find_config_file(root: Path) -> Path | None:
    """Return the config file under root, preferring TOML over JSON."""
    for filename in (CONFIG_FILENAME, JSON_CONFIG_FILENAME):
        candidate = root / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path) -> DeptectiveConfig:
    if config_path.suffix == ".json":
        data = _read_json(config_path)
    else:
        data = _read_toml(config_path)

    try:
        return DeptectiveConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def load_config(root: Path) -> DeptectiveConfig | None:
    """Load configuration from deptective.toml or deptective.json.

    Returns None when neither file exists; a present but malformed file
    raises ConfigError.
    """
    config_path = find_config_file(Path(root))
    if config_path is None:
        return None
    return load_config_file(config_path)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_BUILTIN_PACKAGE",
    "JSON_CONFIG_FILENAME",
    "ConfigError",
    "DeptectiveConfig",
    "PackageDef",
    "find_config_file",
    "load_config",
    "load_config_file",
]

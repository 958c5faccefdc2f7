"""Reference events for a tree of Python sources."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from parse.ast_imports import extract_imports, resolve_relative_import
from scan.files import iter_source_files
from validation.events import EnterPackage, ObserveReference, SourceLocation

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from parse.ast_imports import ImportRecord
    from rules.config import DeptectiveConfig
    from scan.files import SourceFile
    from validation.events import Event

logger = logging.getLogger(__name__)

STDLIB_MODULES = frozenset(sys.stdlib_module_names)


class _PackageIndex:
    """Maps module and package names of the scanned tree to packages."""

    def __init__(self, files: list[SourceFile]) -> None:
        self.module_packages = {source.module: source.package for source in files}
        self.packages: set[str] = set()
        for source in files:
            parts = source.package.split(".") if source.package else []
            for end in range(1, len(parts) + 1):
                self.packages.add(".".join(parts[:end]))

    def package_of(self, name: str) -> str | None:
        if name in self.module_packages:
            return self.module_packages[name]
        if name in self.packages:
            return name
        return None

    def is_local(self, name: str) -> bool:
        top_level = name.split(".")[0]
        return top_level in self.packages or top_level in self.module_packages


def _target_package(
    source: SourceFile, record: ImportRecord, index: _PackageIndex
) -> str:
    if record.is_relative:
        base = resolve_relative_import(source.package, record.module, record.level)
    else:
        base = record.module

    if record.name:
        qualified = f"{base}.{record.name}" if base else record.name
        package = index.package_of(qualified)
        if package is not None:
            return package

    package = index.package_of(base)
    if package is not None:
        return package
    return base


def _is_stdlib(name: str, index: _PackageIndex) -> bool:
    return name.split(".")[0] in STDLIB_MODULES and not index.is_local(name)


def iter_events(root: Path, config: DeptectiveConfig | None = None) -> Iterator[Event]:
    """Yield EnterPackage/ObserveReference events for every scanned file.

    Files are visited in sorted order. Each file opens with an EnterPackage
    for its package followed by one ObserveReference per imported name.
    Modules of the default package (top-level scripts) are skipped.
    """
    files = list(
        iter_source_files(
            root,
            include_patterns=config.include if config else None,
            exclude_patterns=config.exclude if config else None,
            nested_gitignore=config.nested_gitignore if config else False,
        )
    )
    index = _PackageIndex(files)
    skip_stdlib = config.whitelist_stdlib if config else True

    for source in files:
        if not source.package:
            logger.debug("Skipping %s in the default package", source.relative_path)
            continue

        yield EnterPackage(source.package, SourceLocation(source.relative_path))

        for record in extract_imports(source.path):
            target = _target_package(source, record, index)
            if skip_stdlib and target and _is_stdlib(target, index):
                continue
            yield ObserveReference(
                target, SourceLocation(source.relative_path, record.line)
            )


__all__ = ["STDLIB_MODULES", "iter_events"]

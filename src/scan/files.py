"""Discovery of Python source files and the packages they belong to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from utils import is_package_init, module_to_package, path_to_module

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    path: Path
    relative_path: str
    module: str
    package: str


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _matches_filters(
    rel_path: str,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if include_patterns and not any(fnmatch(rel_path, pat) for pat in include_patterns):
        return False
    return not (
        exclude_patterns and any(fnmatch(rel_path, pat) for pat in exclude_patterns)
    )


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = sorted(
        {
            path
            for path in [root / ".gitignore", *root.rglob(".gitignore")]
            if path.is_file() and not path.is_symlink()
        },
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_python_files(
    directory: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all Python files under a directory, respecting .gitignore.

    Symlinks and files resolving outside the directory are skipped. Files
    are yielded sorted by relative path for deterministic ordering.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched: list[tuple[str, Path]] = []
    for path in directory.rglob("*.py"):
        if not path.is_file() or path.is_symlink():
            continue
        if not _is_within_root(path, directory):
            continue
        rel_path = path.relative_to(directory).as_posix()
        if gitignore_matches is not None and gitignore_matches(str(path)):
            continue
        if _matches_filters(rel_path, include_patterns, exclude_patterns):
            matched.append((rel_path, path))

    matched.sort()
    for _rel_path, path in matched:
        yield path


def _is_importable(module: str) -> bool:
    return bool(module) and all(part.isidentifier() for part in module.split("."))


def iter_source_files(
    directory: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[SourceFile]:
    """Yield Python files with their module and package names.

    Files whose path does not form a dotted module name are skipped, e.g.
    scripts under ``.github/`` or ``tools/make-release.py``.
    """
    for path in find_python_files(
        directory,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        nested_gitignore=nested_gitignore,
    ):
        relative_path = path.relative_to(directory).as_posix()
        module = path_to_module(relative_path)
        if not _is_importable(module):
            logger.debug("Skipping %s: %r is not a module name", relative_path, module)
            continue
        package = module_to_package(module, is_init=is_package_init(relative_path))
        logger.debug("Found %s (package %r)", relative_path, package)
        yield SourceFile(
            path=path,
            relative_path=relative_path,
            module=module,
            package=package,
        )


__all__ = ["SourceFile", "find_python_files", "iter_source_files"]

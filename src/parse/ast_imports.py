"""AST-based import extraction."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportRecord:
    """One imported name.

    ``module`` is the imported module for ``import x.y`` and the source
    module for ``from x import y`` (empty for ``from . import y``). ``name``
    is the imported attribute of a from-import, empty otherwise. ``level``
    is 0 for absolute imports and the number of leading dots otherwise.
    """

    line: int
    module: str
    name: str = ""
    level: int = 0

    @property
    def is_relative(self) -> bool:
        return self.level > 0


def _records_for_import(node: ast.Import) -> list[ImportRecord]:
    return [ImportRecord(line=node.lineno, module=alias.name) for alias in node.names]


def _records_for_import_from(node: ast.ImportFrom) -> list[ImportRecord]:
    module = node.module or ""
    return [
        ImportRecord(
            line=node.lineno,
            module=module,
            name="" if alias.name == "*" else alias.name,
            level=node.level,
        )
        for alias in node.names
    ]


def extract_imports(file_path: Path) -> list[ImportRecord]:
    """Extract import statements from a Python file, ordered by position.

    The source is handed to the parser as bytes so a BOM or a PEP 263
    coding cookie selects the encoding. Files that cannot be decoded or
    parsed yield no imports.
    """
    try:
        tree = ast.parse(file_path.read_bytes(), str(file_path))
    except (SyntaxError, ValueError) as exc:
        logger.warning("Skipping imports of %s: %s", file_path, exc)
        return []

    records: list[ImportRecord] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            records.extend(_records_for_import(node))
        elif isinstance(node, ast.ImportFrom):
            records.extend(_records_for_import_from(node))

    records.sort(key=lambda record: (record.line, record.module, record.name))
    return records


def resolve_relative_import(
    importing_package: str,
    relative_module: str,
    level: int,
) -> str:
    """Resolve a relative import to an absolute module name.

    Args:
        importing_package: Package of the importing module (e.g., "pkg.sub")
        relative_module: The relative module name (e.g., "foo" from ".foo")
        level: Number of dots (1 for ".", 2 for "..", etc.)

    Returns:
        Absolute module name (e.g., "pkg.sub.foo")

    Examples:
        >>> resolve_relative_import("pkg.sub", "foo", 1)
        'pkg.sub.foo'
        >>> resolve_relative_import("pkg.sub", "", 1)
        'pkg.sub'
        >>> resolve_relative_import("pkg.sub", "bar", 2)
        'pkg.bar'
    """
    parts = importing_package.split(".") if importing_package else []

    if level - 1 > len(parts):
        return relative_module

    base_parts = parts[: len(parts) - (level - 1)]

    if relative_module:
        return ".".join([*base_parts, relative_module])
    return ".".join(base_parts)


__all__ = ["ImportRecord", "extract_imports", "resolve_relative_import"]

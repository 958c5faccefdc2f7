"""Parsing utilities for Python sources."""

from parse.ast_imports import ImportRecord, extract_imports, resolve_relative_import

__all__ = [
    "ImportRecord",
    "extract_imports",
    "resolve_relative_import",
]

"""Classification of observed package references."""

from __future__ import annotations

from typing import TYPE_CHECKING

from model.dependencies import ReadKind

if TYPE_CHECKING:
    from model.dependencies import Package, PackageDependencies


def is_exempt(model: PackageDependencies, from_package: Package, to_name: str) -> bool:
    """Return True for references that are never reported or tracked."""
    if to_name == model.builtin_package:
        return True
    if model.is_whitelisted(to_name):
        return True
    if not from_package.configured:
        return True
    if from_package.name == to_name:
        return True
    return not to_name


def classify(
    model: PackageDependencies, from_package: Package, to_name: str
) -> ReadKind | None:
    """Classify a reference from ``from_package`` to package ``to_name``.

    Returns None when the reference is exempt: the builtin package, a
    whitelisted target, an unconfigured source, a self-reference or an
    unnamed target. Otherwise the reference is ALLOWED when declared,
    CYCLE when both ends share a cycle of declared reads and DISALLOWED
    in every other case.
    """
    if is_exempt(model, from_package, to_name):
        return None
    if from_package.reads(to_name):
        return ReadKind.ALLOWED
    if model.in_same_cycle(from_package.name, to_name):
        return ReadKind.CYCLE
    return ReadKind.DISALLOWED


__all__ = ["classify", "is_exempt"]

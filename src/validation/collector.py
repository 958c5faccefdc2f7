"""Collection of the observed package graph without validating it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from model.components import GraphAggregator
from model.dependencies import ReadKind
from rules.config import DEFAULT_BUILTIN_PACKAGE
from validation.classifier import classify
from validation.events import EnterPackage, ObserveReference
from validation.session import NoCurrentPackageError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.dependencies import PackageDependencies
    from validation.events import Event

logger = logging.getLogger(__name__)


class ReferenceCollector:
    """Records every observed read into a GraphAggregator.

    Reads of configured packages are classified exactly as a validation
    session would. Reads of unconfigured packages, or of any package when
    there is no model, cannot be judged and are recorded as UNKNOWN.
    """

    def __init__(
        self,
        model: PackageDependencies | None = None,
        aggregator: GraphAggregator | None = None,
    ) -> None:
        self.model = model
        self.aggregator = aggregator if aggregator is not None else GraphAggregator()
        if model is not None:
            for pattern in model.whitelist:
                self.aggregator.add_whitelisted_pattern(pattern)

    def _kind(self, from_name: str, to_name: str) -> ReadKind | None:
        if not to_name or to_name == from_name:
            return None
        if self.model is None:
            return None if to_name == DEFAULT_BUILTIN_PACKAGE else ReadKind.UNKNOWN

        package = self.model.get_package(from_name)
        if package.configured:
            return classify(self.model, package, to_name)
        if to_name == self.model.builtin_package or self.model.is_whitelisted(to_name):
            return None
        return ReadKind.UNKNOWN

    def collect(self, events: Iterable[Event]) -> GraphAggregator:
        current: str | None = None
        for event in events:
            if isinstance(event, EnterPackage):
                current = event.name
                self.aggregator.add_package(current)
            elif isinstance(event, ObserveReference):
                if current is None:
                    msg = (
                        f"Reference to '{event.to}' observed before any "
                        "package was entered"
                    )
                    raise NoCurrentPackageError(msg)
                kind = self._kind(current, event.to)
                if kind is not None:
                    self.aggregator.record(current, event.to, kind)

        logger.debug("Collected %d components", len(self.aggregator.components()))
        return self.aggregator


__all__ = ["ReferenceCollector"]

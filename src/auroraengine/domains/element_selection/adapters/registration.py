"""Character registration adapter.

Receives the aggregates produced by selection handlers. This is the
minimal owning aggregate for a character under construction; conflicts
between unrelated rules are not resolved here.
"""
from __future__ import annotations

import logging
from typing import Dict, List

from ..entities import ElementAggregate

logger = logging.getLogger(__name__)


class CharacterAggregateRegistry:
    """Holds the aggregates registered for one character.

    Registration is keyed by aggregate instance identity: registering the
    same instance twice, or unregistering an instance that was never
    registered, is a ValueError.
    """

    def __init__(self, name: str = "character") -> None:
        self.name = name
        self._aggregates: Dict[str, ElementAggregate] = {}

    async def register(self, aggregate: ElementAggregate) -> None:
        if aggregate.aggregate_id in self._aggregates:
            raise ValueError(
                f"Aggregate {aggregate.aggregate_id} is already registered "
                f"on {self.name}"
            )
        self._aggregates[aggregate.aggregate_id] = aggregate
        logger.debug("%s: registered %s", self.name, aggregate)

    async def unregister(self, aggregate: ElementAggregate) -> None:
        current = self._aggregates.get(aggregate.aggregate_id)
        if current is not aggregate:
            raise ValueError(
                f"Aggregate {aggregate.aggregate_id} is not registered "
                f"on {self.name}"
            )
        del self._aggregates[aggregate.aggregate_id]
        logger.debug("%s: unregistered %s", self.name, aggregate)

    @property
    def aggregates(self) -> List[ElementAggregate]:
        return list(self._aggregates.values())

    def elements_of_type(self, element_type: str) -> List[str]:
        return [
            a.element.name
            for a in self._aggregates.values()
            if a.element.element_type == element_type
        ]

    def __contains__(self, aggregate: object) -> bool:
        return (
            isinstance(aggregate, ElementAggregate)
            and self._aggregates.get(aggregate.aggregate_id) is aggregate
        )

    def __len__(self) -> int:
        return len(self._aggregates)


class CharacterRegistrationProvider:
    """Hands every handler the same character registry."""

    def __init__(self, registry: CharacterAggregateRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CharacterAggregateRegistry()

    def get_aggregate_registration_manager(self) -> CharacterAggregateRegistry:
        return self.registry

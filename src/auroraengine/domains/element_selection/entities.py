"""Entities for the Element Selection Context.

ElementAggregate is the committed result of a selection. It has
identity: two aggregates wrapping the same element are still distinct,
so unregistration always targets the exact instance that was registered.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from auroraengine.domains.element_selection.value_objects import (
    ElementSelectionHandlerContext,
    SelectionRule,
)
from auroraengine.domains.shared import Element


@dataclass(eq=False)
class ElementAggregate:
    """The selected element plus the provenance of the selection.

    Ownership moves to the registration manager once registered; the
    handler keeps a reference only to request unregistration later.
    """
    element: Element
    context_identifier: str
    selection_rule: SelectionRule
    aggregate_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(
        cls,
        element: Element,
        context: ElementSelectionHandlerContext,
    ) -> "ElementAggregate":
        """Build an aggregate for an element picked under a handler context."""
        return cls(
            element=element,
            context_identifier=context.identifier,
            selection_rule=context.selection_rule,
        )

    @property
    def element_identifier(self) -> str:
        return self.element.identifier

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aggregate_id": self.aggregate_id,
            "element_identifier": self.element.identifier,
            "element_name": self.element.name,
            "element_type": self.element.element_type,
            "context_identifier": self.context_identifier,
            "selection_rule": self.selection_rule.element_type,
            "created_at": self.created_at.isoformat(),
        }

    def __str__(self) -> str:
        return f"ElementAggregate({self.element.name}, id={self.aggregate_id})"

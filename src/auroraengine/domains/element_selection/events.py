"""Domain Events for the Element Selection Context.

Domain events capture significant occurrences within the bounded context.
They are used for:
- Audit logging of character-building choices
- Notifying orchestration code of handler lifecycle changes
- Debugging selection workflows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from auroraengine.domains.element_selection.value_objects import SelectionRule


@dataclass(frozen=True)
class HandlerCreated:
    """Emitted when the manager creates a handler for a rule."""
    handler_id: str
    selection_rule: SelectionRule
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"HandlerCreated(handler={self.handler_id}, "
            f"rule={self.selection_rule})"
        )


@dataclass(frozen=True)
class HandlerInitialized:
    """Emitted when a handler has pushed its header and options."""
    handler_id: str
    selection_rule: SelectionRule
    option_count: int
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"HandlerInitialized(handler={self.handler_id}, "
            f"rule={self.selection_rule}, "
            f"options={self.option_count})"
        )


@dataclass(frozen=True)
class ElementAggregateRegistered:
    """Emitted after the registration manager accepted an aggregate.

    Use cases:
    - Audit trail of character choices
    - Refreshing dependent selections in orchestration code
    """
    handler_id: str
    aggregate_id: str
    element_identifier: str
    selection_rule: SelectionRule
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"ElementAggregateRegistered(element={self.element_identifier}, "
            f"aggregate={self.aggregate_id}, "
            f"rule={self.selection_rule})"
        )


@dataclass(frozen=True)
class ElementAggregateUnregistered:
    """Emitted after the registration manager released an aggregate."""
    handler_id: str
    aggregate_id: str
    element_identifier: str
    selection_rule: SelectionRule
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"ElementAggregateUnregistered(element={self.element_identifier}, "
            f"aggregate={self.aggregate_id}, "
            f"rule={self.selection_rule})"
        )


@dataclass(frozen=True)
class HandlerRemoved:
    """Emitted when the manager drops a handler from its registry.

    had_selection is True when the handler still held an aggregate,
    which usually means the caller skipped unregister().
    """
    handler_id: str
    selection_rule: SelectionRule
    had_selection: bool
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"HandlerRemoved(handler={self.handler_id}, "
            f"rule={self.selection_rule}, "
            f"had_selection={self.had_selection})"
        )

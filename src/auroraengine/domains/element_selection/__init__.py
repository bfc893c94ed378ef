"""Element Selection Context - Picking one element for a selection rule.

This bounded context manages:
- The selection handler lifecycle (created, initialized, selected, disposed)
- The session-scoped registry of handlers keyed by selection rule
- Wiring each handler's presenter and registration manager

Presentation code only receives an ElementSelectionInteractor, which
can register and unregister but never initialize.
"""

# Value Objects
from auroraengine.domains.element_selection.value_objects import (
    ElementSelectionError,
    ElementSelectionHandlerContext,
    HandlerState,
    IdentifierGenerator,
    InvalidStateTransitionError,
    OptionNotFoundError,
    SelectionOption,
    SelectionRule,
    UuidIdentifierGenerator,
)

# Entities
from auroraengine.domains.element_selection.entities import (
    ElementAggregate,
)

# Aggregates
from auroraengine.domains.element_selection.aggregates import (
    ElementSelectionHandler,
    ElementSelectionInteractor,
)

# Domain Events
from auroraengine.domains.element_selection.events import (
    ElementAggregateRegistered,
    ElementAggregateUnregistered,
    HandlerCreated,
    HandlerInitialized,
    HandlerRemoved,
)

# Services and Protocols
from auroraengine.domains.element_selection.services import (
    AggregateRegistrationProvider,
    ElementAggregateRegistrationManager,
    ElementDataProvider,
    ElementSelectionHandlerFactory,
    ElementSelectionHandlerManager,
    ElementSelectionPresenter,
    ElementSelectionPresenterFactory,
    EventPublisher,
    PresenterConfiguration,
)

# Repository
from auroraengine.domains.element_selection.repository import (
    InMemoryElementRepository,
)

__all__ = [
    # Value Objects
    "ElementSelectionError",
    "ElementSelectionHandlerContext",
    "HandlerState",
    "IdentifierGenerator",
    "InvalidStateTransitionError",
    "OptionNotFoundError",
    "SelectionOption",
    "SelectionRule",
    "UuidIdentifierGenerator",
    # Entities
    "ElementAggregate",
    # Aggregates
    "ElementSelectionHandler",
    "ElementSelectionInteractor",
    # Events
    "ElementAggregateRegistered",
    "ElementAggregateUnregistered",
    "HandlerCreated",
    "HandlerInitialized",
    "HandlerRemoved",
    # Services and Protocols
    "AggregateRegistrationProvider",
    "ElementAggregateRegistrationManager",
    "ElementDataProvider",
    "ElementSelectionHandlerFactory",
    "ElementSelectionHandlerManager",
    "ElementSelectionPresenter",
    "ElementSelectionPresenterFactory",
    "EventPublisher",
    "PresenterConfiguration",
    # Repository
    "InMemoryElementRepository",
]

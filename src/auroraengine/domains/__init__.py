"""Domain-Driven Design bounded contexts for aurora-engine.

This package contains:
- Shared Kernel: the element and component model
- Element Selection Context: picking one element per selection rule
  and committing it to the character being built
"""

from auroraengine.domains.shared import (
    DisplayNameComponent,
    Element,
    ElementBuilder,
    ElementComponent,
)

from auroraengine.domains.element_selection import (
    ElementAggregate,
    ElementSelectionError,
    ElementSelectionHandler,
    ElementSelectionHandlerFactory,
    ElementSelectionHandlerManager,
    ElementSelectionInteractor,
    InvalidStateTransitionError,
    OptionNotFoundError,
    SelectionOption,
    SelectionRule,
)

__all__ = [
    # Shared Kernel
    "DisplayNameComponent",
    "Element",
    "ElementBuilder",
    "ElementComponent",
    # Element Selection
    "ElementAggregate",
    "ElementSelectionError",
    "ElementSelectionHandler",
    "ElementSelectionHandlerFactory",
    "ElementSelectionHandlerManager",
    "ElementSelectionInteractor",
    "InvalidStateTransitionError",
    "OptionNotFoundError",
    "SelectionOption",
    "SelectionRule",
]

"""Value Objects for the Element Selection Context.

Value objects are immutable domain primitives that encapsulate
validation rules and provide type safety.

- SelectionRule: which element type a selection targets
- ElementSelectionHandlerContext: handler identity bound to a rule
- SelectionOption: presentation-facing projection of an element
- HandlerState: lifecycle states of a selection handler
- ElementSelectionError and subclasses: domain failures
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from auroraengine.domains.shared import Element


@dataclass(frozen=True)
class SelectionRule:
    """Constraint naming the element type a selection workflow targets.

    Two rules with the same element type are equal, so the handler
    manager treats them as the same registry key.
    """
    element_type: str

    def __post_init__(self) -> None:
        """Validate and normalize the element type."""
        if not isinstance(self.element_type, str) or not self.element_type.strip():
            raise ValueError("SelectionRule element_type cannot be empty")
        # frozen dataclass, bypass __setattr__ to store the stripped value
        object.__setattr__(self, "element_type", self.element_type.strip())

    def matches(self, element: "Element") -> bool:
        """Check whether an element belongs to this rule's type."""
        return element.element_type == self.element_type

    def __str__(self) -> str:
        return self.element_type


class HandlerState(Enum):
    """Lifecycle states of an element selection handler."""
    CREATED = "created"
    INITIALIZED = "initialized"
    SELECTED = "selected"
    DISPOSED = "disposed"


@runtime_checkable
class IdentifierGenerator(Protocol):
    """Source of collision-resistant identifiers for handler contexts."""

    def new_identifier(self) -> str: ...


class UuidIdentifierGenerator:
    """Default generator backed by random UUIDs."""

    def new_identifier(self) -> str:
        return str(uuid.uuid4())


@dataclass(frozen=True)
class ElementSelectionHandlerContext:
    """Identity and rule of a single selection handler.

    Created once per handler and owned by it. Use create() rather than
    the constructor so the identifier is always freshly generated.
    """
    identifier: str
    selection_rule: SelectionRule

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("Handler context identifier cannot be empty")

    @classmethod
    def create(
        cls,
        selection_rule: SelectionRule,
        identifier_generator: Optional[IdentifierGenerator] = None,
    ) -> "ElementSelectionHandlerContext":
        """Create a new context with a generated identifier.

        Args:
            selection_rule: The rule the handler is scoped to
            identifier_generator: Identifier source (uuid4 by default)

        Returns:
            A new ElementSelectionHandlerContext
        """
        generator = identifier_generator or UuidIdentifierGenerator()
        return cls(
            identifier=generator.new_identifier(),
            selection_rule=selection_rule,
        )

    @property
    def element_type(self) -> str:
        return self.selection_rule.element_type


@dataclass(frozen=True)
class SelectionOption:
    """Presentation-facing projection of a candidate element.

    Decouples the handler from whatever the presentation layer needs
    to render a choice.
    """
    identifier: str
    display_name: str
    element_type: str = ""

    @classmethod
    def from_element(cls, element: "Element") -> "SelectionOption":
        return cls(
            identifier=element.identifier,
            display_name=element.display_name,
            element_type=element.element_type,
        )

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "display_name": self.display_name,
            "element_type": self.element_type,
        }

    def __str__(self) -> str:
        return self.display_name


class ElementSelectionError(Exception):
    """Base class for element selection domain failures.

    Collaborator failures (data provider, presenter, registration) are
    never wrapped in this type; they propagate unchanged.
    """


class InvalidStateTransitionError(ElementSelectionError):
    """Raised when an operation is not valid in the handler's current state.

    Attributes:
        operation: The attempted operation (initialize, register, ...)
        current_state: The handler state at the time of the call
    """

    def __init__(
        self,
        operation: str,
        current_state: HandlerState,
        message: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.current_state = current_state
        super().__init__(
            message
            or f"Cannot {operation} a selection handler in state "
            f"'{current_state.value}'"
        )

    def __repr__(self) -> str:
        return (
            f"InvalidStateTransitionError(operation={self.operation!r}, "
            f"current_state={self.current_state!r})"
        )


class OptionNotFoundError(ElementSelectionError):
    """Raised when a picked option is not among the last pushed options.

    Attributes:
        option_identifier: The identifier that was requested
        available: Identifiers of the options that were pushed
    """

    def __init__(self, option_identifier: str, available: Sequence[str] = ()) -> None:
        self.option_identifier = option_identifier
        self.available = tuple(available)
        super().__init__(
            f"Selection option '{option_identifier}' not found "
            f"({len(self.available)} options available)"
        )

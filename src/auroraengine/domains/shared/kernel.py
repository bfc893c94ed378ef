"""Shared Kernel - Core element types shared across bounded contexts.

These types are intentionally minimal and shared between:
- Element Selection Context (consumes elements, projects them to options)
- Character registration (receives the selected elements as aggregates)

An element is an identifier, a display name, a type tag and an open bag
of components. Contexts attach behaviour to elements through components
instead of subclassing Element.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Literal,
    Optional,
    Type,
    TypeVar,
)

from pydantic import BeforeValidator


class ElementComponent:
    """Marker base class for components attached to an element."""


TComponent = TypeVar("TComponent", bound=ElementComponent)


class DisplayNameComponent(ElementComponent, ABC):
    """Component that supplies a display name for its element.

    When an element carries one of these, selection options use its
    display name instead of the raw element name.
    """

    @abstractmethod
    def get_display_name(self) -> str:
        """Gets the display name for this component."""


class ElementComponents:
    """Capability bag holding at most one component per concrete type."""

    def __init__(self) -> None:
        self._components: Dict[type, ElementComponent] = {}

    def add_component(self, component: ElementComponent) -> None:
        """Attach a component, replacing any of the same concrete type.

        Raises:
            TypeError: If component is not an ElementComponent
        """
        if not isinstance(component, ElementComponent):
            raise TypeError(
                f"Expected an ElementComponent, got {type(component).__name__}"
            )
        self._components[type(component)] = component

    def get_component(self, component_type: Type[TComponent]) -> Optional[TComponent]:
        """Get the first component that is an instance of component_type.

        Exact type matches win over subclass matches.
        """
        exact = self._components.get(component_type)
        if exact is not None:
            return exact  # type: ignore[return-value]
        for component in self._components.values():
            if isinstance(component, component_type):
                return component
        return None

    def has_component(self, component_type: Type[ElementComponent]) -> bool:
        return self.get_component(component_type) is not None

    def remove_component(self, component_type: Type[ElementComponent]) -> bool:
        return self._components.pop(component_type, None) is not None

    def __iter__(self) -> Iterator[ElementComponent]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._components)
        return f"ElementComponents([{names}])"


@dataclass(eq=False)
class Element:
    """A domain entity belonging to a type (language, skill, trait, ...).

    Elements compare by identifier. They are supplied by an element data
    provider and are never owned by the selection context.
    """
    identifier: str
    name: str
    element_type: str
    components: ElementComponents = field(default_factory=ElementComponents)

    def __post_init__(self) -> None:
        if not self.identifier or not self.identifier.strip():
            raise ValueError("Element identifier cannot be empty")
        if not self.element_type or not self.element_type.strip():
            raise ValueError(
                f"Element '{self.identifier}' must have an element type"
            )

    def add_component(self, component: ElementComponent) -> "Element":
        """Attach a component and return the element for chaining."""
        self.components.add_component(component)
        return self

    def try_get_component(
        self, component_type: Type[TComponent]
    ) -> Optional[TComponent]:
        """Return the component of the requested type, or None."""
        return self.components.get_component(component_type)

    def is_of_type(self, element_type: str) -> bool:
        return self.element_type == element_type

    @property
    def display_name(self) -> str:
        """Name shown to users, preferring a DisplayNameComponent."""
        component = self.try_get_component(DisplayNameComponent)
        if component is not None:
            return component.get_display_name()
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __str__(self) -> str:
        return f"{self.element_type}:{self.name} ({self.identifier})"


@dataclass
class ElementDraft:
    """Mutable element description filled in by ElementBuilder callbacks."""
    identifier: str = ""
    name: str = ""
    element_type: str = ""
    components: List[ElementComponent] = field(default_factory=list)


class ElementBuilder:
    """Builds elements from a configuration callback.

    Usage:
        def configure(draft):
            draft.identifier = "ID_LANGUAGE_ELVISH"
            draft.name = "Elvish"
            draft.element_type = "Language"

        elvish = ElementBuilder().compose(configure)
    """

    def compose(self, configure: Callable[[ElementDraft], Any]) -> Element:
        draft = ElementDraft()
        configure(draft)
        element = Element(
            identifier=draft.identifier,
            name=draft.name,
            element_type=draft.element_type,
        )
        for component in draft.components:
            element.add_component(component)
        return element

    def create(
        self,
        identifier: str,
        name: str,
        element_type: str,
        *components: ElementComponent,
    ) -> Element:
        """Shorthand for compose() when all values are known up front."""
        element = Element(identifier=identifier, name=name, element_type=element_type)
        for component in components:
            element.add_component(component)
        return element


# ============================================================
# Tool parameter types
# ============================================================
#
# Annotated aliases with BeforeValidator so MCP tool parameters are
# normalized before validation.
# ============================================================


def _strip_str(v: Any) -> Any:
    """Strip surrounding whitespace from string input."""
    return v.strip() if isinstance(v, str) else v


def _normalize_str(v: Any) -> Any:
    """Normalize string input: strip whitespace, lowercase."""
    return v.strip().lower() if isinstance(v, str) else v


ElementTypeName = Annotated[str, BeforeValidator(_strip_str)]

OptionIdentifier = Annotated[str, BeforeValidator(_strip_str)]

SelectionStatusDetail = Annotated[
    Literal["summary", "full"],
    BeforeValidator(_normalize_str),
]

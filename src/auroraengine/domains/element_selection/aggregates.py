"""Aggregates for the Element Selection Context.

The ElementSelectionHandler is the aggregate root for one in-progress
selection. It owns the lifecycle:

    CREATED --initialize--> INITIALIZED --register--> SELECTED
                                 ^                       |
                                 +------unregister-------+

and DISPOSED once the manager removes it. Presentation code never holds
the handler itself; it receives an ElementSelectionInteractor, which
forwards register/unregister only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from auroraengine.domains.element_selection.entities import ElementAggregate
from auroraengine.domains.element_selection.events import (
    ElementAggregateRegistered,
    ElementAggregateUnregistered,
    HandlerInitialized,
)
from auroraengine.domains.element_selection.value_objects import (
    ElementSelectionHandlerContext,
    HandlerState,
    InvalidStateTransitionError,
    OptionNotFoundError,
    SelectionOption,
    SelectionRule,
)
from auroraengine.domains.shared import Element

if TYPE_CHECKING:
    from auroraengine.domains.element_selection.services import (
        ElementAggregateRegistrationManager,
        ElementDataProvider,
        ElementSelectionPresenter,
        EventPublisher,
    )

logger = logging.getLogger(__name__)

DEFAULT_HEADER_TEMPLATE = "Select a {element_type}"


@dataclass(eq=False)
class ElementSelectionHandler:
    """Aggregate root for a single element selection workflow.

    Invariants:
    - initialize() runs at most once and queries the data provider once
    - At most one ElementAggregate is held at a time
    - register() is only valid while INITIALIZED, unregister() only while SELECTED
    - At most one register/unregister call is in flight per handler
    - Collaborator failures propagate unchanged
    - A disposed handler stays DISPOSED, even if it was removed mid-call
    """
    context: ElementSelectionHandlerContext
    data_provider: "ElementDataProvider"
    registration_manager: "ElementAggregateRegistrationManager"
    presenter: "ElementSelectionPresenter"
    event_publisher: Optional["EventPublisher"] = None
    header_template: str = DEFAULT_HEADER_TEMPLATE
    sort_options: bool = False

    state: HandlerState = field(default=HandlerState.CREATED, init=False)
    _elements: Dict[str, Element] = field(default_factory=dict, init=False, repr=False)
    _options: Tuple[SelectionOption, ...] = field(default=(), init=False, repr=False)
    _aggregate: Optional[ElementAggregate] = field(default=None, init=False, repr=False)
    _in_flight: Optional[str] = field(default=None, init=False, repr=False)
    _events: List[object] = field(default_factory=list, init=False, repr=False)

    @property
    def unique_identifier(self) -> str:
        return self.context.identifier

    @property
    def selection_rule(self) -> SelectionRule:
        return self.context.selection_rule

    @property
    def options(self) -> Tuple[SelectionOption, ...]:
        """Options pushed to the presenter by the last initialize()."""
        return self._options

    @property
    def selected_aggregate(self) -> Optional[ElementAggregate]:
        return self._aggregate

    @property
    def is_busy(self) -> bool:
        return self._in_flight is not None

    def build_header(self) -> str:
        return self.header_template.format(element_type=self.selection_rule.element_type)

    def initialize(self) -> List[SelectionOption]:
        """Fetch candidate elements and push header and options to the presenter.

        Returns:
            The options pushed to the presenter

        Raises:
            InvalidStateTransitionError: If the handler was already initialized
        """
        self._require_state("initialize", HandlerState.CREATED)

        rule = self.selection_rule
        elements = self._unique(self.data_provider.get_elements(rule.matches))
        if self.sort_options:
            elements.sort(key=lambda e: e.display_name.casefold())

        self._elements = {element.identifier: element for element in elements}
        self._options = tuple(SelectionOption.from_element(e) for e in elements)

        # header must reach the presenter before the options
        self.presenter.update_header(self.build_header())
        self.presenter.update_selection_options(list(self._options))

        self.state = HandlerState.INITIALIZED
        logger.debug(
            "Selection handler %s initialized for %s with %d options",
            self.unique_identifier, rule, len(self._options),
        )
        self._record(HandlerInitialized(
            handler_id=self.unique_identifier,
            selection_rule=rule,
            option_count=len(self._options),
        ))
        return list(self._options)

    async def register(self, option_identifier: str) -> ElementAggregate:
        """Register the element behind a pushed option.

        Args:
            option_identifier: Identifier of one of the pushed options

        Returns:
            The registered ElementAggregate

        Raises:
            InvalidStateTransitionError: If not INITIALIZED or a call is in flight
            OptionNotFoundError: If the identifier was not among the pushed options
        """
        self._require_idle("register")
        self._require_state("register", HandlerState.INITIALIZED)

        element = self._elements.get(option_identifier)
        if element is None:
            raise OptionNotFoundError(
                option_identifier, [option.identifier for option in self._options]
            )

        aggregate = ElementAggregate.create(element, self.context)
        self._in_flight = "register"
        try:
            await self.registration_manager.register(aggregate)
        except Exception:
            logger.warning(
                "Registration of %s failed for handler %s",
                element, self.unique_identifier,
            )
            raise
        finally:
            self._in_flight = None

        self._aggregate = aggregate
        if self.state is HandlerState.DISPOSED:
            logger.warning(
                "Handler %s was removed while registering %s; the aggregate "
                "stays registered and must be released by the caller",
                self.unique_identifier, element,
            )
        else:
            self.state = HandlerState.SELECTED
            logger.info("Registered %s for %s", element, self.selection_rule)
        self._record(ElementAggregateRegistered(
            handler_id=self.unique_identifier,
            aggregate_id=aggregate.aggregate_id,
            element_identifier=element.identifier,
            selection_rule=self.selection_rule,
        ))
        return aggregate

    async def unregister(self) -> ElementAggregate:
        """Release the held aggregate through the registration manager.

        Returns:
            The aggregate that was unregistered

        Raises:
            InvalidStateTransitionError: If nothing is selected or a call is in flight
        """
        self._require_idle("unregister")
        self._require_state("unregister", HandlerState.SELECTED)

        aggregate = self._aggregate
        if aggregate is None:
            raise InvalidStateTransitionError(
                "unregister", self.state, "No element is registered by this handler"
            )
        self._in_flight = "unregister"
        try:
            await self.registration_manager.unregister(aggregate)
        except Exception:
            logger.warning(
                "Unregistration of %s failed for handler %s",
                aggregate, self.unique_identifier,
            )
            raise
        finally:
            self._in_flight = None

        self._aggregate = None
        # a handler removed mid-call stays disposed
        if self.state is not HandlerState.DISPOSED:
            self.state = HandlerState.INITIALIZED
        logger.info("Unregistered %s for %s", aggregate.element, self.selection_rule)
        self._record(ElementAggregateUnregistered(
            handler_id=self.unique_identifier,
            aggregate_id=aggregate.aggregate_id,
            element_identifier=aggregate.element_identifier,
            selection_rule=self.selection_rule,
        ))
        return aggregate

    def dispose(self) -> None:
        """Mark the handler unusable. Does not unregister anything."""
        self.state = HandlerState.DISPOSED

    def as_interactor(self) -> "ElementSelectionInteractor":
        return ElementSelectionInteractor(self)

    def get_events(self) -> List[object]:
        """Get and clear collected domain events.

        Returns:
            List of domain events that occurred during operations
        """
        events = self._events.copy()
        self._events.clear()
        return events

    def status(self) -> Dict[str, Any]:
        return {
            "handler_id": self.unique_identifier,
            "selection_rule": self.selection_rule.element_type,
            "state": self.state.value,
            "option_count": len(self._options),
            "selected": self._aggregate.to_dict() if self._aggregate else None,
            "busy": self.is_busy,
        }

    def _unique(self, elements: Sequence[Element]) -> List[Element]:
        """Drop repeated identifiers, keeping the first occurrence."""
        seen: Dict[str, Element] = {}
        for element in elements:
            if element.identifier in seen:
                logger.warning(
                    "Ignoring duplicate element %s for %s",
                    element.identifier, self.selection_rule,
                )
                continue
            seen[element.identifier] = element
        return list(seen.values())

    def _require_state(self, operation: str, expected: HandlerState) -> None:
        if self.state is not expected:
            raise InvalidStateTransitionError(operation, self.state)

    def _require_idle(self, operation: str) -> None:
        if self._in_flight is not None:
            raise InvalidStateTransitionError(
                operation,
                self.state,
                f"Cannot {operation} while a {self._in_flight} call is in flight",
            )

    def _record(self, event: object) -> None:
        self._events.append(event)
        if self.event_publisher is not None:
            self.event_publisher.publish(event)


class ElementSelectionInteractor:
    """Restricted view of a handler for presentation-layer code.

    Exposes register/unregister only; initialize is unreachable from here.
    """

    __slots__ = ("_handler",)

    def __init__(self, handler: ElementSelectionHandler) -> None:
        self._handler = handler

    @property
    def unique_identifier(self) -> str:
        return self._handler.unique_identifier

    @property
    def options(self) -> Tuple[SelectionOption, ...]:
        return self._handler.options

    async def register(self, option_identifier: str) -> ElementAggregate:
        return await self._handler.register(option_identifier)

    async def unregister(self) -> ElementAggregate:
        return await self._handler.unregister()

    def __repr__(self) -> str:
        return f"ElementSelectionInteractor(handler={self._handler.unique_identifier})"

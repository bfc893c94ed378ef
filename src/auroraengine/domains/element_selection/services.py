"""Element Selection Domain Services.

Contains the ElementSelectionHandlerFactory, the
ElementSelectionHandlerManager and the Protocol definitions for the
collaborators the context depends on (anti-corruption layer).
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from auroraengine.domains.element_selection.aggregates import (
    DEFAULT_HEADER_TEMPLATE,
    ElementSelectionHandler,
)
from auroraengine.domains.element_selection.entities import ElementAggregate
from auroraengine.domains.element_selection.events import HandlerCreated, HandlerRemoved
from auroraengine.domains.element_selection.value_objects import (
    ElementSelectionHandlerContext,
    IdentifierGenerator,
    SelectionOption,
    SelectionRule,
    UuidIdentifierGenerator,
)
from auroraengine.domains.shared import Element

logger = logging.getLogger(__name__)


# ── Protocol Definitions ──────────────────────────────────────────────

@runtime_checkable
class ElementDataProvider(Protocol):
    """Supplies candidate elements (infrastructure)."""
    def get_elements(
        self, predicate: Callable[[Element], bool]
    ) -> Sequence[Element]: ...


@runtime_checkable
class ElementSelectionPresenter(Protocol):
    """Renders a selection (presentation layer, e.g. a view model)."""
    def update_header(self, text: str) -> None: ...

    def update_selection_options(self, options: Sequence[SelectionOption]) -> None: ...


@dataclass
class PresenterConfiguration:
    """Settings applied to a presenter before the factory returns it."""
    element_type: str = ""


@runtime_checkable
class ElementSelectionPresenterFactory(Protocol):
    """Creates one presenter per handler."""
    def create_presenter(
        self, configure: Callable[[PresenterConfiguration], None]
    ) -> ElementSelectionPresenter: ...


@runtime_checkable
class ElementAggregateRegistrationManager(Protocol):
    """Receives selected aggregates, e.g. the character being built."""
    async def register(self, aggregate: ElementAggregate) -> None: ...

    async def unregister(self, aggregate: ElementAggregate) -> None: ...


@runtime_checkable
class AggregateRegistrationProvider(Protocol):
    """Hands out registration managers (per call or shared)."""
    def get_aggregate_registration_manager(
        self,
    ) -> ElementAggregateRegistrationManager: ...


class EventPublisher(Protocol):
    """Protocol for publishing domain events."""
    def publish(self, event: object) -> None: ...


# ── ElementSelectionHandlerFactory ────────────────────────────────────

@dataclass
class ElementSelectionHandlerFactory:
    """Wires a handler's collaborators from its context.

    The returned handler is not initialized: nothing is fetched from the
    data provider until the caller invokes initialize(). Collaborator
    failures propagate unchanged.
    """
    data_provider: ElementDataProvider
    registration_provider: AggregateRegistrationProvider
    presenter_factory: ElementSelectionPresenterFactory
    event_publisher: Optional[EventPublisher] = None
    header_template: str = DEFAULT_HEADER_TEMPLATE
    sort_options: bool = False

    def create(self, context: ElementSelectionHandlerContext) -> ElementSelectionHandler:
        """Build a handler for the given context.

        Args:
            context: Handler context carrying the identifier and rule

        Returns:
            A wired ElementSelectionHandler in state CREATED
        """
        if context is None:
            raise ValueError("A handler context is required")

        element_type = context.selection_rule.element_type

        def configure(configuration: PresenterConfiguration) -> None:
            configuration.element_type = element_type

        presenter = self.presenter_factory.create_presenter(configure)
        registration_manager = (
            self.registration_provider.get_aggregate_registration_manager()
        )

        return ElementSelectionHandler(
            context=context,
            data_provider=self.data_provider,
            registration_manager=registration_manager,
            presenter=presenter,
            event_publisher=self.event_publisher,
            header_template=self.header_template,
            sort_options=self.sort_options,
        )


# ── ElementSelectionHandlerManager ────────────────────────────────────

@dataclass(eq=False)
class ElementSelectionHandlerManager:
    """Registry of live handlers for one character-building session.

    Keyed by SelectionRule value; holds at most one handler per rule.
    create() on a rule that already has a handler returns the existing
    handler instead of building a new one. remove() is a registry
    operation only: it never unregisters the handler's aggregate.
    """
    factory: ElementSelectionHandlerFactory
    identifier_generator: IdentifierGenerator = field(
        default_factory=UuidIdentifierGenerator
    )
    event_publisher: Optional[EventPublisher] = None

    _handlers: Dict[SelectionRule, ElementSelectionHandler] = field(
        default_factory=dict, init=False, repr=False
    )
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    def create(self, rule: SelectionRule) -> List[ElementSelectionHandler]:
        """Create (or return) the handler for a rule.

        Returns:
            A single-element list with the handler for the rule
        """
        with self._lock:
            existing = self._handlers.get(rule)
            if existing is not None:
                logger.debug(
                    "Handler %s already active for %s",
                    existing.unique_identifier, rule,
                )
                return [existing]

            context = ElementSelectionHandlerContext.create(
                rule, self.identifier_generator
            )
            handler = self.factory.create(context)
            self._handlers[rule] = handler

        logger.debug("Created selection handler %s for %s", context.identifier, rule)
        self._publish(HandlerCreated(
            handler_id=context.identifier,
            selection_rule=rule,
        ))
        return [handler]

    def remove(self, rule: SelectionRule) -> bool:
        """Remove the handler for a rule.

        Returns:
            True if a handler was removed, False if none existed
        """
        with self._lock:
            handler = self._handlers.pop(rule, None)
            if handler is None:
                return False
            # an in-flight call may still leave an aggregate registered
            had_selection = handler.selected_aggregate is not None or handler.is_busy
            handler.dispose()

        if had_selection:
            logger.warning(
                "Removed handler %s for %s while it still holds a registered element",
                handler.unique_identifier, rule,
            )
        else:
            logger.debug("Removed selection handler %s for %s", handler.unique_identifier, rule)
        self._publish(HandlerRemoved(
            handler_id=handler.unique_identifier,
            selection_rule=rule,
            had_selection=had_selection,
        ))
        return True

    def get(self, rule: SelectionRule) -> Optional[ElementSelectionHandler]:
        with self._lock:
            return self._handlers.get(rule)

    def clear(self) -> int:
        """Remove every handler. Returns the number removed."""
        with self._lock:
            rules = list(self._handlers)
        return sum(1 for rule in rules if self.remove(rule))

    @property
    def rules(self) -> List[SelectionRule]:
        with self._lock:
            return list(self._handlers)

    @property
    def handlers(self) -> List[ElementSelectionHandler]:
        with self._lock:
            return list(self._handlers.values())

    def __contains__(self, rule: object) -> bool:
        with self._lock:
            return rule in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    def __iter__(self) -> Iterator[ElementSelectionHandler]:
        return iter(self.handlers)

    def _publish(self, event: object) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)

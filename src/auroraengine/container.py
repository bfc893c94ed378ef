"""Dependency Injection Container for aurora-engine domains.

This container wires the element selection context to its collaborators:
- Element repository (data provider)
- Presenter factory (presentation layer)
- Character registration provider (owning aggregate)

Handler managers are session-scoped, so independent character-building
sessions never see each other's handlers.

Usage:
    from auroraengine.container import get_container

    container = get_container()
    manager = container.get_selection_manager("session-1")
    handler = manager.create(SelectionRule("Language"))[0]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from auroraengine.config import SelectionSettings
    from auroraengine.domains.element_selection import (
        ElementSelectionHandlerManager,
        InMemoryElementRepository,
    )
    from auroraengine.domains.element_selection.adapters import (
        CharacterRegistrationProvider,
        InMemorySelectionPresenterFactory,
    )

logger = logging.getLogger(__name__)

# Singleton container instance
_container: Optional["ServiceContainer"] = None


@dataclass
class ServiceContainer:
    """Simple dependency injection container for selection services.

    Shared services (element repository, presenter factory, settings) are
    created lazily. Each session gets its own handler manager and its own
    character registration provider.
    """

    _settings: Optional["SelectionSettings"] = field(default=None, repr=False)
    _element_repository: Optional["InMemoryElementRepository"] = field(
        default=None, repr=False
    )
    _presenter_factory: Optional["InMemorySelectionPresenterFactory"] = field(
        default=None, repr=False
    )

    # Session-scoped services
    _selection_managers: Dict[str, "ElementSelectionHandlerManager"] = field(
        default_factory=dict, repr=False
    )
    _registration_providers: Dict[str, "CharacterRegistrationProvider"] = field(
        default_factory=dict, repr=False
    )

    @property
    def settings(self) -> "SelectionSettings":
        """Get the selection settings, loading them from the environment once."""
        if self._settings is None:
            from auroraengine.config import load_selection_settings
            self._settings = load_selection_settings()
        return self._settings

    @property
    def element_repository(self) -> "InMemoryElementRepository":
        """Get the shared element repository."""
        if self._element_repository is None:
            from auroraengine.domains.element_selection import InMemoryElementRepository
            self._element_repository = InMemoryElementRepository()
        return self._element_repository

    @property
    def presenter_factory(self) -> "InMemorySelectionPresenterFactory":
        """Get the shared presenter factory."""
        if self._presenter_factory is None:
            from auroraengine.domains.element_selection.adapters import (
                InMemorySelectionPresenterFactory,
            )
            self._presenter_factory = InMemorySelectionPresenterFactory()
        return self._presenter_factory

    def get_registration_provider(self, session_id: str) -> "CharacterRegistrationProvider":
        """Get or create the character registration provider for a session."""
        if session_id not in self._registration_providers:
            from auroraengine.domains.element_selection.adapters import (
                CharacterAggregateRegistry,
                CharacterRegistrationProvider,
            )
            self._registration_providers[session_id] = CharacterRegistrationProvider(
                CharacterAggregateRegistry(name=session_id)
            )
        return self._registration_providers[session_id]

    def get_selection_manager(self, session_id: str) -> "ElementSelectionHandlerManager":
        """Get or create the element selection handler manager for a session.

        Args:
            session_id: The session identifier

        Returns:
            ElementSelectionHandlerManager for the session
        """
        if session_id not in self._selection_managers:
            from auroraengine.domains.element_selection import (
                ElementSelectionHandlerFactory,
                ElementSelectionHandlerManager,
            )
            factory = ElementSelectionHandlerFactory(
                data_provider=self.element_repository,
                registration_provider=self.get_registration_provider(session_id),
                presenter_factory=self.presenter_factory,
                header_template=self.settings.header_template,
                sort_options=self.settings.sort_options,
            )
            self._selection_managers[session_id] = ElementSelectionHandlerManager(
                factory=factory
            )
            logger.debug(f"Created selection manager for session {session_id}")
        return self._selection_managers[session_id]

    def list_sessions(self) -> List[str]:
        return sorted(self._selection_managers)

    def clear_session(self, session_id: str) -> None:
        """Clear all session-specific data.

        Args:
            session_id: The session to clear
        """
        manager = self._selection_managers.pop(session_id, None)
        if manager is not None:
            manager.clear()
        self._registration_providers.pop(session_id, None)
        logger.debug(f"Cleared container data for session {session_id}")


def get_container() -> ServiceContainer:
    """Get the global service container instance.

    Returns:
        The singleton ServiceContainer
    """
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """Reset the global container. Used by tests."""
    global _container
    _container = None

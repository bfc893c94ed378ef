"""Pytest fixtures for element selection domain tests.

Collaborators are mocks so tests can verify exactly which calls the
handler, factory and manager make.
"""

from __future__ import annotations

from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from auroraengine.domains.element_selection import (
    ElementSelectionHandlerFactory,
    ElementSelectionHandlerManager,
)
from auroraengine.domains.shared import Element, ElementBuilder


class SequentialIdentifierGenerator:
    """Deterministic identifier source for tests."""

    def __init__(self, prefix: str = "handler") -> None:
        self.prefix = prefix
        self.issued = 0

    def new_identifier(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued}"


@pytest.fixture
def languages() -> List[Element]:
    builder = ElementBuilder()
    elements = []
    for name in ("Common", "Undercommon", "Elvish", "Druidic"):
        identifier = f"ID_{len(elements) + 1}"

        def configure(draft, identifier=identifier, name=name):
            draft.identifier = identifier
            draft.name = name
            draft.element_type = "Language"

        elements.append(builder.compose(configure))
    return elements


@pytest.fixture
def data_provider(languages):
    provider = MagicMock()
    provider.get_elements.return_value = languages
    return provider


@pytest.fixture
def presenter():
    return MagicMock()


@pytest.fixture
def presenter_factory(presenter):
    factory = MagicMock()
    factory.create_presenter.return_value = presenter
    return factory


@pytest.fixture
def registration_manager():
    manager = MagicMock()
    manager.register = AsyncMock(return_value=None)
    manager.unregister = AsyncMock(return_value=None)
    return manager


@pytest.fixture
def registration_provider(registration_manager):
    provider = MagicMock()
    provider.get_aggregate_registration_manager.return_value = registration_manager
    return provider


@pytest.fixture
def event_publisher():
    return MagicMock()


@pytest.fixture
def identifier_generator() -> SequentialIdentifierGenerator:
    return SequentialIdentifierGenerator()


@pytest.fixture
def handler_factory(data_provider, registration_provider, presenter_factory):
    return ElementSelectionHandlerFactory(
        data_provider=data_provider,
        registration_provider=registration_provider,
        presenter_factory=presenter_factory,
    )


@pytest.fixture
def manager(handler_factory, identifier_generator):
    return ElementSelectionHandlerManager(
        factory=handler_factory,
        identifier_generator=identifier_generator,
    )

"""In-memory presenter adapter.

Stands in for a view model when selections are driven through the MCP
server: it keeps the last header and options so tool calls can return
them to the client.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..services import PresenterConfiguration
from ..value_objects import SelectionOption

logger = logging.getLogger(__name__)


class InMemorySelectionPresenter:
    """Records what a handler pushed for later retrieval."""

    def __init__(self, configuration: PresenterConfiguration) -> None:
        self.configuration = configuration
        self.header: Optional[str] = None
        self.options: List[SelectionOption] = []
        self.update_count = 0

    @property
    def element_type(self) -> str:
        return self.configuration.element_type

    def update_header(self, text: str) -> None:
        self.header = text

    def update_selection_options(self, options: Sequence[SelectionOption]) -> None:
        self.options = list(options)
        self.update_count += 1
        logger.debug(
            "Presenter for %s received %d options", self.element_type, len(self.options)
        )

    def render(self) -> dict:
        return {
            "header": self.header,
            "element_type": self.element_type,
            "options": [option.to_dict() for option in self.options],
        }


class InMemorySelectionPresenterFactory:
    """Creates InMemorySelectionPresenter instances and keeps track of them."""

    def __init__(self) -> None:
        self.created: List[InMemorySelectionPresenter] = []

    def create_presenter(
        self, configure: Callable[[PresenterConfiguration], None]
    ) -> InMemorySelectionPresenter:
        configuration = PresenterConfiguration()
        configure(configuration)
        presenter = InMemorySelectionPresenter(configuration)
        self.created.append(presenter)
        return presenter

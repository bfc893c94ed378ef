"""Element selection adapters."""
from .mcp_tool import ElementSelectionToolAdapter
from .presenter import InMemorySelectionPresenter, InMemorySelectionPresenterFactory
from .registration import CharacterAggregateRegistry, CharacterRegistrationProvider

__all__ = [
    "CharacterAggregateRegistry",
    "CharacterRegistrationProvider",
    "ElementSelectionToolAdapter",
    "InMemorySelectionPresenter",
    "InMemorySelectionPresenterFactory",
]

"""Aurora Engine - Element selection for interactive character building."""

__version__ = "0.1.0"

"""Configuration for aurora-engine."""

from auroraengine.config.settings import SelectionSettings, load_selection_settings

__all__ = ["SelectionSettings", "load_selection_settings"]

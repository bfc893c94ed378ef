"""Configuration helpers for element selection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_DEFAULT_HEADER_TEMPLATE = "Select a {element_type}"
_DEFAULT_LOG_LEVEL = "INFO"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}
_ENV_LOADED = False


@dataclass(frozen=True)
class SelectionSettings:
    """Holds runtime settings for selection handlers and the server."""

    header_template: str = _DEFAULT_HEADER_TEMPLATE
    sort_options: bool = False
    log_level: str = _DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if "{element_type}" not in self.header_template:
            raise ValueError(
                "Header template must contain the '{element_type}' placeholder, "
                f"got {self.header_template!r}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def with_overrides(
        self,
        *,
        header_template: Optional[str] = None,
        sort_options: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> "SelectionSettings":
        """Return a copy with the provided overrides applied."""

        cfg = self
        if header_template:
            cfg = replace(cfg, header_template=header_template)
        if sort_options is not None:
            cfg = replace(cfg, sort_options=sort_options)
        if log_level:
            cfg = replace(cfg, log_level=log_level)
        return cfg


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise RuntimeError(f"{name} must be a boolean flag, got {raw!r}")


def load_selection_settings(
    *,
    header_template: Optional[str] = None,
    sort_options: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> SelectionSettings:
    """Load settings from environment variables and overrides."""

    _ensure_env_loaded()

    resolved_template = (
        header_template
        or os.getenv("AURORA_SELECTION_HEADER_TEMPLATE")
        or _DEFAULT_HEADER_TEMPLATE
    )
    resolved_sort = (
        sort_options
        if sort_options is not None
        else _env_flag("AURORA_SELECTION_SORT_OPTIONS", False)
    )
    resolved_level = (
        log_level
        or os.getenv("AURORA_LOG_LEVEL", "").strip()
        or _DEFAULT_LOG_LEVEL
    )

    return SelectionSettings(
        header_template=resolved_template,
        sort_options=resolved_sort,
        log_level=resolved_level.upper(),
    )


def _ensure_env_loaded() -> None:
    """Load a .env file from the working directory once per process.

    Variables already present in the environment win over the file.
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True
    dotenv_path = Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)

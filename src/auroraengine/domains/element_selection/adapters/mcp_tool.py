"""MCP Tool Adapter for element selection.

Translates MCP tool calls (plain strings) into manager, handler and
interactor calls for one session, and turns domain failures into
structured responses.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from ..aggregates import ElementSelectionHandler
from ..services import ElementSelectionHandlerManager
from ..value_objects import (
    ElementSelectionError,
    InvalidStateTransitionError,
    OptionNotFoundError,
    SelectionRule,
)

logger = logging.getLogger(__name__)


def _error_response(error: ElementSelectionError, element_type: str) -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "success": False,
        "error": str(error),
        "error_type": type(error).__name__,
        "element_type": element_type,
    }
    if isinstance(error, OptionNotFoundError):
        response["available_options"] = list(error.available)
    elif isinstance(error, InvalidStateTransitionError):
        response["state"] = error.current_state.value
    return response


class ElementSelectionToolAdapter:
    """Adapts element selection MCP tool calls to the handler manager.

    Handlers are addressed by element type. Orchestration operations
    (create, initialize, remove) go to the manager and handler; picks go
    through the handler's interactor only.
    """

    def __init__(self, manager: ElementSelectionHandlerManager) -> None:
        self._manager = manager


    def create(self, element_type: str) -> Dict[str, Any]:
        try:
            rule = SelectionRule(element_type)
        except ValueError as e:
            return self._invalid(element_type, e)
        handlers = self._manager.create(rule)
        return {
            "success": True,
            "element_type": rule.element_type,
            "handlers": [h.status() for h in handlers],
        }

    def initialize(self, element_type: str) -> Dict[str, Any]:
        handler, failure = self._lookup(element_type)
        if handler is None:
            return failure
        try:
            options = handler.initialize()
        except ElementSelectionError as e:
            return _error_response(e, element_type)
        return {
            "success": True,
            "handler_id": handler.unique_identifier,
            "header": handler.build_header(),
            "options": [option.to_dict() for option in options],
        }

    async def register(self, element_type: str, option_identifier: str) -> Dict[str, Any]:
        handler, failure = self._lookup(element_type)
        if handler is None:
            return failure
        interactor = handler.as_interactor()
        try:
            aggregate = await interactor.register(option_identifier)
        except ElementSelectionError as e:
            return _error_response(e, element_type)
        return {"success": True, "registered": aggregate.to_dict()}

    async def unregister(self, element_type: str) -> Dict[str, Any]:
        handler, failure = self._lookup(element_type)
        if handler is None:
            return failure
        interactor = handler.as_interactor()
        try:
            aggregate = await interactor.unregister()
        except ElementSelectionError as e:
            return _error_response(e, element_type)
        return {"success": True, "unregistered": aggregate.to_dict()}

    def remove(self, element_type: str) -> Dict[str, Any]:
        try:
            rule = SelectionRule(element_type)
        except ValueError as e:
            return self._invalid(element_type, e)
        removed = self._manager.remove(rule)
        return {"success": True, "removed": removed, "element_type": element_type}

    def status(self, element_type: Optional[str] = None, detail: str = "summary") -> Dict[str, Any]:
        if element_type:
            handler, failure = self._lookup(element_type)
            if failure.get("error_type") == "ValueError":
                return failure
            handlers = [handler] if handler is not None else []
        else:
            handlers = self._manager.handlers
        entries = []
        for handler in handlers:
            entry = handler.status()
            if detail == "full":
                entry["options"] = [o.to_dict() for o in handler.options]
            entries.append(entry)
        return {"success": True, "count": len(entries), "handlers": entries}

    def _lookup(
        self, element_type: str
    ) -> Tuple[Optional[ElementSelectionHandler], Dict[str, Any]]:
        """Resolve the handler for an element type, or the failure response."""
        try:
            rule = SelectionRule(element_type)
        except ValueError as e:
            return None, self._invalid(element_type, e)
        handler = self._manager.get(rule)
        if handler is None:
            return None, self._missing(element_type)
        return handler, {}

    @staticmethod
    def _invalid(element_type: str, error: ValueError) -> Dict[str, Any]:
        return {
            "success": False,
            "error": str(error),
            "error_type": type(error).__name__,
            "element_type": element_type,
        }

    @staticmethod
    def _missing(element_type: str) -> Dict[str, Any]:
        logger.debug("No selection handler active for %s", element_type)
        return {
            "success": False,
            "error": f"No selection handler is active for '{element_type}'. "
            f"Call selection_create first.",
            "element_type": element_type,
        }

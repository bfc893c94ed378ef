"""MCP server exposing the element selection workflow."""

import argparse
import logging
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP

from auroraengine.config import load_selection_settings
from auroraengine.container import get_container
from auroraengine.domains.element_selection.adapters import ElementSelectionToolAdapter
from auroraengine.domains.shared import (
    Element,
    ElementTypeName,
    OptionIdentifier,
    SelectionStatusDetail,
)

logger = logging.getLogger(__name__)

_INSTRUCTIONS = (
    "Character building by element selection. Seed elements with element_add, "
    "then for a given element type call selection_create, selection_initialize, "
    "and pick one of the returned options with selection_register. "
    "selection_unregister reverts a pick; selection_remove drops the handler."
)


def _create_mcp_server() -> FastMCP:
    """Create the FastMCP server instance."""
    return FastMCP("Aurora Element Selection", instructions=_INSTRUCTIONS)


mcp = _create_mcp_server()


def _adapter(session_id: str) -> ElementSelectionToolAdapter:
    manager = get_container().get_selection_manager(session_id)
    return ElementSelectionToolAdapter(manager)


@mcp.tool(
    name="element_add",
    description="Add an element (identifier, name, element type) to the element store.",
)
async def element_add(
    identifier: str,
    name: str,
    element_type: ElementTypeName,
) -> Dict[str, Any]:
    """Add or replace an element in the shared in-memory store."""

    repository = get_container().element_repository
    repository.add(Element(identifier=identifier, name=name, element_type=element_type))
    return {
        "success": True,
        "identifier": identifier,
        "element_type": element_type,
        "count": len(repository),
    }


@mcp.tool(
    name="selection_create",
    description="Create the selection handler for an element type (returns the existing one if active).",
)
async def selection_create(
    element_type: ElementTypeName,
    session_id: str = "default",
) -> Dict[str, Any]:
    return _adapter(session_id).create(element_type)


@mcp.tool(
    name="selection_initialize",
    description="Load the candidate elements for an active selection and return header and options.",
)
async def selection_initialize(
    element_type: ElementTypeName,
    session_id: str = "default",
) -> Dict[str, Any]:
    return _adapter(session_id).initialize(element_type)


@mcp.tool(
    name="selection_register",
    description="Pick one of the options of an initialized selection and register it on the character.",
)
async def selection_register(
    element_type: ElementTypeName,
    option_id: OptionIdentifier,
    session_id: str = "default",
) -> Dict[str, Any]:
    return await _adapter(session_id).register(element_type, option_id)


@mcp.tool(
    name="selection_unregister",
    description="Revert the current pick of a selection.",
)
async def selection_unregister(
    element_type: ElementTypeName,
    session_id: str = "default",
) -> Dict[str, Any]:
    return await _adapter(session_id).unregister(element_type)


@mcp.tool(
    name="selection_remove",
    description="Drop the selection handler for an element type. Does not revert its pick.",
)
async def selection_remove(
    element_type: ElementTypeName,
    session_id: str = "default",
) -> Dict[str, Any]:
    return _adapter(session_id).remove(element_type)


@mcp.tool(
    name="selection_status",
    description="Report active selection handlers and what the character has registered.",
)
async def selection_status(
    element_type: Optional[ElementTypeName] = None,
    detail: SelectionStatusDetail = "summary",
    session_id: str = "default",
) -> Dict[str, Any]:
    result = _adapter(session_id).status(element_type, detail)
    registry = get_container().get_registration_provider(session_id).registry
    result["registered"] = [a.to_dict() for a in registry.aggregates]
    return result


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Aurora element selection MCP server."
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="MCP transport to serve on (default stdio).",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface for the http transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the http transport (default 8000).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Override AURORA_LOG_LEVEL.",
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    """Start the element selection MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    settings = load_selection_settings(log_level=args.log_level)
    logging.basicConfig(level=settings.log_level_value)

    logger.info("Starting Aurora element selection server (transport=%s)", args.transport)
    if args.transport == "http":
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run()


if __name__ == "__main__":
    main()

"""Tests for the element selection MCP tools through the in-memory client."""

import pytest
import pytest_asyncio

from fastmcp import Client
from auroraengine.container import reset_container
from auroraengine.server import mcp

LANGUAGES = [
    ("ID_1", "Common"),
    ("ID_2", "Undercommon"),
    ("ID_3", "Elvish"),
    ("ID_4", "Druidic"),
]


@pytest_asyncio.fixture
async def mcp_client():
    reset_container()
    async with Client(mcp) as client:
        for identifier, name in LANGUAGES:
            await client.call_tool(
                "element_add",
                {"identifier": identifier, "name": name, "element_type": "Language"},
            )
        yield client
    reset_container()


@pytest.mark.asyncio
async def test_language_selection_flow(mcp_client):
    res = await mcp_client.call_tool("selection_create", {"element_type": "Language"})
    assert res.data["success"] is True
    assert res.data["handlers"][0]["state"] == "created"

    res = await mcp_client.call_tool("selection_initialize", {"element_type": "Language"})
    assert res.data["header"] == "Select a Language"
    names = [o["display_name"] for o in res.data["options"]]
    assert names == ["Common", "Undercommon", "Elvish", "Druidic"]

    res = await mcp_client.call_tool(
        "selection_register", {"element_type": "Language", "option_id": "ID_3"}
    )
    assert res.data["success"] is True
    assert res.data["registered"]["element_name"] == "Elvish"

    res = await mcp_client.call_tool("selection_status", {})
    assert [a["element_name"] for a in res.data["registered"]] == ["Elvish"]
    assert res.data["handlers"][0]["state"] == "selected"

    res = await mcp_client.call_tool("selection_unregister", {"element_type": "Language"})
    assert res.data["success"] is True

    res = await mcp_client.call_tool("selection_status", {"detail": "FULL"})
    assert res.data["registered"] == []
    assert len(res.data["handlers"][0]["options"]) == 4

    res = await mcp_client.call_tool("selection_remove", {"element_type": "Language"})
    assert res.data["removed"] is True


@pytest.mark.asyncio
async def test_register_before_initialize_fails(mcp_client):
    await mcp_client.call_tool("selection_create", {"element_type": "Language"})
    res = await mcp_client.call_tool(
        "selection_register", {"element_type": "Language", "option_id": "ID_1"}
    )
    assert res.data["success"] is False
    assert res.data["error_type"] == "InvalidStateTransitionError"


@pytest.mark.asyncio
async def test_sessions_are_isolated(mcp_client):
    await mcp_client.call_tool(
        "selection_create", {"element_type": "Language", "session_id": "alice"}
    )
    res = await mcp_client.call_tool(
        "selection_initialize", {"element_type": "Language", "session_id": "bob"}
    )
    assert res.data["success"] is False

    res = await mcp_client.call_tool(
        "selection_initialize", {"element_type": " Language ", "session_id": "alice"}
    )
    assert res.data["success"] is True


@pytest.mark.asyncio
async def test_blank_element_type_returns_error_payload(mcp_client):
    res = await mcp_client.call_tool("selection_create", {"element_type": "   "})
    assert res.data["success"] is False
    assert res.data["error_type"] == "ValueError"

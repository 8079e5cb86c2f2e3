"""Tests for the MCP server tool handlers."""

import asyncio
import json

import pytest

pytest.importorskip("mcp")

from mcp_bstanim import server  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_session():
    """Give every test its own engine session."""
    server.session = server.EngineSession()
    yield
    server.session = server.EngineSession()


def call(name, arguments=None):
    result = asyncio.run(server.dispatch_tool(name, arguments or {}))
    text = result[0].text
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def insert_keys(*keys):
    for key in keys:
        call("start_operation", {"operation": "insert", "key": key})
    call("run_until_idle")


def test_start_operation_and_run_until_idle():
    insert_keys(50, 30, 70)

    started = call("start_operation", {"operation": "search", "key": 70})
    assert started["started"] is True
    assert started["mode"] == "searching"
    assert started["cursor"] == 50

    result = call("run_until_idle")
    assert result["mode"] == "idle"
    assert result["found"] is True
    assert result["cursor"] == 70
    assert result["elapsed"] > 0


def test_start_noop_operation():
    result = call("start_operation", {"operation": "delete", "key": 5})
    assert result["started"] is False
    assert result["mode"] == "idle"


def test_advance_steps_the_traversal():
    insert_keys(50, 30, 70)
    call("start_operation", {"operation": "inorder"})

    result = call("advance", {"dt": 0.4, "ticks": 2})

    assert result["mode"] == "traversing"
    assert result["traversal_order"] == "inorder"
    assert result["cursor"] == 50
    assert result["edge"] == [50, 30]
    assert result["frame_count"] >= 2


def test_adjust_key_feeds_default_key():
    assert call("adjust_key", {"delta": 5}) == {"pending_key": 15}

    call("start_operation", {"operation": "insert"})
    frame = call("get_frame")

    assert [node["key"] for node in frame["nodes"]] == [15]
    assert frame["pending_key"] == 15


def test_get_frame_and_visualization():
    insert_keys(2, 1, 3)

    frame = call("get_frame", {"include_narration": False})
    assert len(frame["nodes"]) == 3
    assert "narration" not in frame

    vis = call("get_tree_visualization", {"format": "mermaid"})
    assert vis["format"] == "mermaid"
    assert vis["node_count"] == 3
    assert "graph TD" in vis["source"]


def test_reset_tool():
    insert_keys(1, 2)

    result = call("reset")

    assert result["status"] == "reset"
    assert call("get_frame")["nodes"] == []


@pytest.mark.parametrize(
    "name,arguments,message",
    [
        ("start_operation", {}, "operation must be a non-empty string"),
        ("start_operation", {"operation": "rotate"}, "Unknown operation"),
        ("start_operation", {"operation": "insert", "key": "7"}, "key must be an integer"),
        ("advance", {"dt": -1}, "dt must be non-negative"),
        ("advance", {"ticks": 0}, "ticks must be at least 1"),
        ("advance", {"dt": 100}, "dt is too large"),
        ("adjust_key", {"delta": 1.5}, "delta must be an integer"),
        ("run_until_idle", {"fps": 0}, "fps must be a positive number"),
        ("get_tree_visualization", {"format": "png"}, "format must be"),
    ],
)
def test_parameter_validation(name, arguments, message):
    result = call(name, arguments)
    assert isinstance(result, str)
    assert "Parameter validation error" in result
    assert message in result


def test_unknown_tool():
    with pytest.raises(ValueError, match="Unknown tool"):
        asyncio.run(server.dispatch_tool("nope", {}))


def test_tool_definitions_cover_handlers():
    names = {tool.name for tool in server.tool_definitions()}
    assert names == set(server.TOOL_HANDLERS)

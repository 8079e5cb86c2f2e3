"""bstanim MCP server implementation."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import anyio
import click
import mcp.types as types
from mcp.server.lowlevel import Server

from bstanim import AnimationEngine, build_snapshot, list_operations, load_config
from bstanim.config import EngineConfig
from bstanim.errors import AnimationError
from bstanim.renderers.json_yaml import snapshot_to_dict
from bstanim.renderers.mermaid import snapshot_to_mermaid

logger = logging.getLogger(__name__)

MAX_TICKS = 10000
MAX_DT = 10.0


class EngineSession:
    """Wraps the single engine driven by the connected client."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.engine = AnimationEngine(config)
        self.frame_count = 0

    def advance(self, dt: float, ticks: int) -> None:
        self.engine.update(dt, ticks=ticks)
        self.frame_count += ticks

    def frame_summary(self) -> Dict[str, Any]:
        engine = self.engine
        return {
            "mode": engine.mode.value,
            "traversal_order": engine.traversal_order.value
            if engine.traversal_order is not None
            else None,
            "clock": round(engine.clock, 6),
            "frame_count": self.frame_count,
            "cursor": engine.cursor.key if engine.cursor is not None else None,
            "edge": [engine.edge[0].key, engine.edge[1].key] if engine.edge else None,
            "found": engine.found,
            "pending_key": engine.pending_key,
            "narration": engine.narration.revealed,
        }


session = EngineSession()
session_lock = asyncio.Lock()


def _text(payload: Any) -> List[types.ContentBlock]:
    if not isinstance(payload, str):
        payload = json.dumps(payload, indent=2)
    return [types.TextContent(type="text", text=payload)]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_operation_args(arguments: Dict[str, Any]) -> Optional[str]:
    """Validate start_operation inputs."""
    operation = arguments.get("operation")
    if not isinstance(operation, str) or not operation.strip():
        return "operation must be a non-empty string"
    if operation.lower() not in list_operations():
        return (
            f"Unknown operation '{operation}'. "
            f"Available operations: {', '.join(list_operations())}"
        )
    if "key" in arguments and arguments["key"] is not None and not _is_int(arguments["key"]):
        return f"key must be an integer, got {type(arguments['key']).__name__}"
    return None


def _validate_advance_args(arguments: Dict[str, Any]) -> Optional[str]:
    """Validate advance inputs are within acceptable ranges."""
    dt = arguments.get("dt", 1 / 60)
    ticks = arguments.get("ticks", 1)
    if isinstance(dt, bool) or not isinstance(dt, (int, float)):
        return f"dt must be a number, got {type(dt).__name__}"
    if dt < 0:
        return f"dt must be non-negative, got {dt}"
    if dt > MAX_DT:
        return f"dt is too large ({dt}). Maximum allowed value is {MAX_DT}."
    if not _is_int(ticks):
        return f"ticks must be an integer, got {type(ticks).__name__}"
    if ticks < 1:
        return f"ticks must be at least 1, got {ticks}"
    if ticks > MAX_TICKS:
        return f"ticks is too large ({ticks}). Maximum allowed value is {MAX_TICKS}."
    return None


async def start_operation_tool(arguments: dict) -> List[types.ContentBlock]:
    validation_error = _validate_operation_args(arguments)
    if validation_error:
        return _text(f"Parameter validation error: {validation_error}")

    async with session_lock:
        try:
            started = session.engine.start(arguments["operation"], arguments.get("key"))
        except AnimationError as e:
            return _text(f"Error starting operation: {e}")
        result = {"operation": arguments["operation"].lower(), "started": started}
        result.update(session.frame_summary())
    return _text(result)


async def adjust_key_tool(arguments: dict) -> List[types.ContentBlock]:
    delta = arguments.get("delta")
    if not _is_int(delta):
        return _text("Parameter validation error: delta must be an integer")
    async with session_lock:
        pending_key = session.engine.adjust_key(delta)
    return _text({"pending_key": pending_key})


async def reset_tool(arguments: dict) -> List[types.ContentBlock]:
    async with session_lock:
        session.engine.reset()
        result = {"status": "reset"}
        result.update(session.frame_summary())
    return _text(result)


async def advance_tool(arguments: dict) -> List[types.ContentBlock]:
    validation_error = _validate_advance_args(arguments)
    if validation_error:
        return _text(f"Parameter validation error: {validation_error}")

    async with session_lock:
        try:
            session.advance(float(arguments.get("dt", 1 / 60)), arguments.get("ticks", 1))
        except AnimationError as e:
            return _text(f"Engine error during update: {e}")
        result = session.frame_summary()
    return _text(result)


async def run_until_idle_tool(arguments: dict) -> List[types.ContentBlock]:
    fps = arguments.get("fps", 60)
    max_seconds = arguments.get("max_seconds", 120)
    if isinstance(fps, bool) or not isinstance(fps, (int, float)) or fps <= 0:
        return _text("Parameter validation error: fps must be a positive number")
    if isinstance(max_seconds, bool) or not isinstance(max_seconds, (int, float)) or max_seconds <= 0:
        return _text("Parameter validation error: max_seconds must be a positive number")

    async with session_lock:
        try:
            elapsed = session.engine.run_until_idle(fps=fps, max_seconds=max_seconds)
        except AnimationError as e:
            return _text(f"Engine error during update: {e}")
        session.frame_count += int(round(elapsed * fps))
        result = {"elapsed": round(elapsed, 6)}
        result.update(session.frame_summary())
    return _text(result)


async def get_frame_tool(arguments: dict) -> List[types.ContentBlock]:
    async with session_lock:
        try:
            snapshot = build_snapshot(session.engine)
            result = snapshot_to_dict(
                snapshot, include_narration=arguments.get("include_narration", True)
            )
        except AnimationError as e:
            return _text(f"Error building frame: {e}")
    return _text(result)


async def get_tree_visualization_tool(arguments: dict) -> List[types.ContentBlock]:
    format_type = arguments.get("format", "mermaid")
    if format_type not in ("mermaid", "dot"):
        return _text("Parameter validation error: format must be 'mermaid' or 'dot'")

    async with session_lock:
        try:
            snapshot = build_snapshot(session.engine)
        except AnimationError as e:
            return _text(f"Error building frame: {e}")

    if format_type == "mermaid":
        source = snapshot_to_mermaid(snapshot)
    else:
        try:
            from bstanim.renderers.graphviz_renderer import snapshot_to_graph

            source = snapshot_to_graph(snapshot, title=arguments.get("title")).source
        except AnimationError as e:
            return _text(f"Error: {e}")

    return _text(
        {
            "format": format_type,
            "source": source,
            "node_count": len(snapshot.nodes),
        }
    )


TOOL_HANDLERS = {
    "start_operation": start_operation_tool,
    "adjust_key": adjust_key_tool,
    "reset": reset_tool,
    "advance": advance_tool,
    "run_until_idle": run_until_idle_tool,
    "get_frame": get_frame_tool,
    "get_tree_visualization": get_tree_visualization_tool,
}


async def dispatch_tool(name: str, arguments: dict) -> List[types.ContentBlock]:
    """Route a tool call to its handler."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise ValueError(f"Unknown tool: {name}")
    return await handler(arguments or {})


def tool_definitions() -> List[types.Tool]:
    return [
        types.Tool(
            name="start_operation",
            title="Start Operation",
            description="Start an animated tree operation, cancelling any operation in flight",
            inputSchema={
                "type": "object",
                "required": ["operation"],
                "properties": {
                    "operation": {
                        "type": "string",
                        "enum": list_operations(),
                        "description": "Operation to animate",
                    },
                    "key": {
                        "type": "integer",
                        "description": "Key to act on (default: the pending key)",
                    },
                },
            },
        ),
        types.Tool(
            name="adjust_key",
            title="Adjust Pending Key",
            description="Change the pending key used when no key is given",
            inputSchema={
                "type": "object",
                "required": ["delta"],
                "properties": {
                    "delta": {"type": "integer", "description": "Amount to add"}
                },
            },
        ),
        types.Tool(
            name="reset",
            title="Reset Tree",
            description="Remove every node and clear all animation state",
            inputSchema={"type": "object", "properties": {}},
        ),
        types.Tool(
            name="advance",
            title="Advance Frames",
            description="Advance the engine by a number of ticks of a fixed time delta",
            inputSchema={
                "type": "object",
                "properties": {
                    "dt": {
                        "type": "number",
                        "description": "Seconds per tick (default: 1/60)",
                    },
                    "ticks": {
                        "type": "integer",
                        "description": "Number of ticks (default: 1)",
                        "default": 1,
                    },
                },
            },
        ),
        types.Tool(
            name="run_until_idle",
            title="Run Until Idle",
            description="Advance at a fixed frame rate until the active operation finishes",
            inputSchema={
                "type": "object",
                "properties": {
                    "fps": {"type": "number", "default": 60},
                    "max_seconds": {"type": "number", "default": 120},
                },
            },
        ),
        types.Tool(
            name="get_frame",
            title="Get Frame",
            description="Return the current frame snapshot (nodes, edges, cursor, narration)",
            inputSchema={
                "type": "object",
                "properties": {
                    "include_narration": {"type": "boolean", "default": True}
                },
            },
        ),
        types.Tool(
            name="get_tree_visualization",
            title="Get Tree Visualization",
            description="Return Mermaid or Graphviz source for the current frame",
            inputSchema={
                "type": "object",
                "properties": {
                    "format": {
                        "type": "string",
                        "enum": ["mermaid", "dot"],
                        "default": "mermaid",
                    },
                    "title": {"type": "string"},
                },
            },
        ),
    ]


@click.command()
@click.option("--port", default=8000, help="Port to listen on for SSE")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default="stdio",
    help="Transport type",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with pacing/layout settings",
)
def main(port: int, transport: str, config_path: Optional[str]) -> int:
    """Main entry point for the bstanim MCP server."""
    global session
    try:
        session = EngineSession(load_config(config_path))
    except AnimationError as e:
        raise click.ClickException(str(e))

    app = Server("bstanim-mcp-server")

    @app.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.ContentBlock]:
        """Handle tool calls."""
        return await dispatch_tool(name, arguments)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List available tools."""
        return tool_definitions()

    if transport == "sse":
        from mcp.server.sse import SseServerTransport
        from starlette.applications import Starlette
        from starlette.responses import Response
        from starlette.routing import Mount, Route

        sse = SseServerTransport("/messages/")

        async def handle_sse(request):
            async with sse.connect_sse(
                request.scope, request.receive, request._send
            ) as streams:
                await app.run(
                    streams[0], streams[1], app.create_initialization_options()
                )
            return Response()

        starlette_app = Starlette(
            debug=True,
            routes=[
                Route("/sse", endpoint=handle_sse, methods=["GET"]),
                Mount("/messages/", app=sse.handle_post_message),
            ],
        )

        import uvicorn

        uvicorn.run(starlette_app, host="127.0.0.1", port=port)
    else:
        from mcp.server.stdio import stdio_server

        async def arun():
            async with stdio_server() as streams:
                await app.run(
                    streams[0], streams[1], app.create_initialization_options()
                )

        anyio.run(arun)

    return 0


if __name__ == "__main__":
    main()

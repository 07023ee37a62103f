"""MCP server exposing the take_screenshot tool over stdio."""
from __future__ import annotations

import logging
from typing import Optional

import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from .config import Config
from .capture.errors import CaptureError
from .capture.service import take_screenshot
from .capture.strategy import CaptureRequest

logger = logging.getLogger(__name__)

SERVER_NAME = "screenshot-server"
SERVER_VERSION = "1.1.0"

TOOL_DEFINITIONS = [
    types.Tool(
        name="take_screenshot",
        description="Take a screenshot of all monitors, specific monitor, or a specific window",
        inputSchema={
            "type": "object",
            "properties": {
                "filename": {
                    "type": "string",
                    "description": "Filename for the screenshot (default: screenshot.png)",
                    "default": "screenshot.png",
                },
                "monitor": {
                    "type": ["string", "number"],
                    "description": 'Which monitor to capture: "all" (default), "primary", or monitor number (1, 2, etc.) counted left to right',
                    "default": "all",
                },
                "windowTitle": {
                    "type": "string",
                    "description": "Capture a specific window by its title (partial match supported)",
                },
                "processName": {
                    "type": "string",
                    "description": 'Capture a specific window by process name (e.g., "notepad.exe" or just "notepad")',
                },
                "folder": {
                    "type": "string",
                    "description": "Folder to save into: Windows (C:\\...), WSL (/mnt/c/...) or relative path (default: screenshots/ in the workspace)",
                },
            },
        },
    ),
]

server = Server(SERVER_NAME)
_cfg: Optional[Config] = None


def init_server(cfg: Config) -> Server:
    global _cfg
    _cfg = cfg
    return server


@server.list_tools()
async def list_tools() -> list[types.Tool]:
    return TOOL_DEFINITIONS


@server.call_tool()
async def call_tool(name: str, arguments: Optional[dict]) -> list[types.TextContent]:
    """Dispatch a tool call. Raised errors reach the host as isError results."""
    if name != "take_screenshot":
        raise CaptureError(f"Unknown tool: {name}")

    request = CaptureRequest.from_arguments(arguments)
    result = await take_screenshot(request, cfg=_cfg)
    if not result.succeeded:
        raise CaptureError(result.message)
    return [types.TextContent(type="text", text=result.message)]


async def serve_stdio() -> None:
    options = InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Screenshot MCP server running...")
        await server.run(read_stream, write_stream, options)

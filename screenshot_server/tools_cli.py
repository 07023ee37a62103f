"""
Screenshot Tool Runner
======================
Runs the screenshot tool once from a shell, without an MCP host, using
the same pipeline the server uses.

Usage:
    python3 -m screenshot_server.tools_cli <tool_name> '<json_args>'

Examples:
    python3 -m screenshot_server.tools_cli take_screenshot '{}'
    python3 -m screenshot_server.tools_cli take_screenshot '{"monitor":2,"filename":"right.png"}'
    python3 -m screenshot_server.tools_cli take_screenshot '{"processName":"notepad.exe"}'
    python3 -m screenshot_server.tools_cli take_screenshot '{"windowTitle":"Chrome","folder":"C:\\\\Temp"}'
"""
from __future__ import annotations

import asyncio
import json
import sys

from .capture.classifier import CaptureResult
from .capture.service import take_screenshot
from .capture.strategy import CaptureRequest
from .config import load_config

AVAILABLE_TOOLS = ("take_screenshot",)


async def _run(tool_name: str, args: dict) -> CaptureResult:
    if tool_name == "take_screenshot":
        cfg = load_config()
        return await take_screenshot(CaptureRequest.from_arguments(args), cfg=cfg)
    return CaptureResult(
        False,
        f"[ERROR] Unknown tool: {tool_name}\nAvailable: {', '.join(AVAILABLE_TOOLS)}",
    )


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    tool_name = sys.argv[1]

    # Parse JSON args (second arg) or default to empty dict
    if len(sys.argv) >= 3:
        try:
            args = json.loads(sys.argv[2])
        except json.JSONDecodeError as e:
            print(f"[ERROR] Invalid JSON args: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        args = {}

    if not isinstance(args, dict):
        print("[ERROR] JSON args must be an object", file=sys.stderr)
        sys.exit(1)

    result = asyncio.run(_run(tool_name, args))
    print(result.message)
    if not result.succeeded:
        sys.exit(1)


if __name__ == "__main__":
    main()

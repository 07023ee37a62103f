"""Runs a generated capture script through Windows PowerShell."""
from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import CaptureError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "powershell.exe"


@dataclass(frozen=True)
class ExecutionOutcome:
    exited_abnormally: bool
    stdout: str
    stderr: str
    returncode: Optional[int] = 0


def encode_script(script: str) -> str:
    """Base64 of the UTF-16LE script text, as ``-EncodedCommand`` expects."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def decode_script(encoded: str) -> str:
    return base64.b64decode(encoded).decode("utf-16-le")


def build_command(script: str, executable: str = DEFAULT_EXECUTABLE) -> list[str]:
    return [
        executable,
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy", "Bypass",
        "-OutputFormat", "Text",
        "-EncodedCommand", encode_script(script),
    ]


async def run_script(
    script: str,
    executable: str = DEFAULT_EXECUTABLE,
    timeout: Optional[float] = None,
) -> ExecutionOutcome:
    """
    Execute ``script`` in a fresh PowerShell process and wait for it.

    With ``timeout=None`` this waits as long as the capture takes.
    Raises OSError if PowerShell cannot be launched and CaptureError on timeout.
    """
    cmd = build_command(script, executable)
    logger.debug("Launching %s (%d-char script)", executable, len(script))

    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.communicate()
        raise CaptureError(f"PowerShell timed out after {timeout}s")

    outcome = ExecutionOutcome(
        exited_abnormally=proc.returncode != 0,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
        returncode=proc.returncode,
    )
    logger.debug("PowerShell exited with status %s", proc.returncode)
    return outcome

"""Separates real PowerShell failures from the noise it writes on success.

Windows PowerShell started from another process frequently writes
progress records and other CLIXML-shaped diagnostics to stderr even when
the script ran cleanly. Those records carry ``ErrorId`` tags, so the word
"Error" alone is only treated as a failure when no such tag is present.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import CaptureError
from .executor import ExecutionOutcome

logger = logging.getLogger(__name__)

_FAILURE_MARKERS = ("throw", "Exception", "not found")
_NO_WINDOW_MARKER = "No window found"


@dataclass(frozen=True)
class CaptureResult:
    succeeded: bool
    message: str


def has_real_error(stderr: str) -> bool:
    """True if ``stderr`` holds a genuine failure rather than verbose noise."""
    if not stderr:
        return False
    if any(marker in stderr for marker in _FAILURE_MARKERS):
        return True
    return "Error" in stderr and "ErrorId" not in stderr


def check_outcome(outcome: ExecutionOutcome) -> str:
    """
    Raise CaptureError if the PowerShell run failed.

    Returns the script's own status output on success.
    """
    stderr = outcome.stderr.strip()
    stdout = outcome.stdout.strip()

    if has_real_error(stderr):
        message = stderr
        if _NO_WINDOW_MARKER in stderr and stdout:
            logger.error("Available windows from stdout:\n%s", stdout)
            message = f"{stderr}\n\n{stdout}"
        raise CaptureError(message)

    if outcome.exited_abnormally:
        raise CaptureError(stderr or f"PowerShell exited with status {outcome.returncode}")

    if stderr:
        logger.debug("Ignoring PowerShell diagnostic output: %s", stderr[:500])
    return stdout


def classify_outcome(outcome: ExecutionOutcome, host_path: str) -> CaptureResult:
    """Turn a finished run into a CaptureResult, requiring the file to exist."""
    try:
        status = check_outcome(outcome)
        if not os.path.exists(host_path):
            raise CaptureError(f"Screenshot file was not created: {host_path}")
    except CaptureError as e:
        logger.warning("Screenshot failed: %s", e)
        return CaptureResult(succeeded=False, message=str(e))
    return CaptureResult(succeeded=True, message=status)

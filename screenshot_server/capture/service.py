"""Screenshot request pipeline: resolve → select → build → run → classify → respond."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from ..config import Config
from .classifier import CaptureResult, classify_outcome
from .errors import CaptureError
from .executor import ExecutionOutcome, run_script
from .paths import ensure_directory, resolve_destination
from .script_builder import build_script
from .strategy import CaptureRequest, strategy_for

logger = logging.getLogger(__name__)

# (script, executable, timeout) -> outcome
ScriptRunner = Callable[[str, str, Optional[float]], Awaitable[ExecutionOutcome]]


def format_response(result: CaptureResult, display_path: str) -> CaptureResult:
    """Wrap a classified result in the caller-facing message."""
    if result.succeeded:
        return CaptureResult(True, f"Screenshot saved successfully to: {display_path}")
    return CaptureResult(False, f"Failed to take screenshot: {result.message}")


async def take_screenshot(
    request: CaptureRequest,
    cfg: Optional[Config] = None,
    cwd: Optional[str] = None,
    runner: ScriptRunner = run_script,
) -> CaptureResult:
    """
    Capture a screenshot as described by ``request``.

    Never raises: every failure becomes an unsuccessful CaptureResult whose
    message is ready to hand back to the caller.
    """
    cfg = cfg or Config()
    destination = None

    try:
        destination = resolve_destination(
            request.folder, request.filename, cwd=cwd, default_folder=cfg.default_folder
        )
        strategy = strategy_for(request)
        logger.info("Capturing %s → %s", strategy.label, destination.display_path)

        ensure_directory(destination)
        script = build_script(
            strategy,
            destination.foreign_path,
            padding=cfg.window_padding,
            settle_delay_ms=cfg.settle_delay_ms,
        )
        outcome = await runner(script, cfg.powershell_executable, cfg.powershell_timeout)
        result = classify_outcome(outcome, destination.host_path)
    except (CaptureError, OSError) as e:
        logger.warning("Screenshot failed: %s", e)
        result = CaptureResult(False, str(e))
    except Exception as e:
        logger.error("Unexpected screenshot error: %s", e, exc_info=True)
        result = CaptureResult(False, str(e))

    if result.succeeded:
        logger.info("Screenshot saved to %s", destination.host_path)
    return format_response(result, destination.display_path if destination else "")

"""Capture pipeline exceptions."""
from __future__ import annotations


class CaptureError(Exception):
    """A capture failed; ``str(exc)`` is the text shown to the caller."""

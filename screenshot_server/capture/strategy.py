"""Capture requests and the four capture strategies."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

DEFAULT_FILENAME = "screenshot.png"
ALL_MONITORS = "all"
PRIMARY_MONITOR = "primary"

_EXE_SUFFIX_RE = re.compile(r"\.exe$", re.IGNORECASE)


@dataclass(frozen=True)
class CaptureRequest:
    filename: str = DEFAULT_FILENAME
    monitor: str = ALL_MONITORS
    window_title: Optional[str] = None
    process_name: Optional[str] = None
    folder: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Optional[dict]) -> "CaptureRequest":
        """Build a request from a tool-call parameter bag (camelCase keys)."""
        args = arguments or {}
        monitor = args.get("monitor")
        if monitor is None or monitor == "":
            monitor = ALL_MONITORS
        return cls(
            filename=args.get("filename") or DEFAULT_FILENAME,
            monitor=str(monitor).strip(),
            window_title=args.get("windowTitle") or None,
            process_name=args.get("processName") or None,
            folder=args.get("folder") or None,
        )


@dataclass(frozen=True)
class WindowByTitle:
    title: str

    @property
    def label(self) -> str:
        return f"window '{self.title}'"


@dataclass(frozen=True)
class WindowByProcess:
    process: str

    @property
    def label(self) -> str:
        return f"process '{self.process}'"


@dataclass(frozen=True)
class Monitor:
    # "primary" or a 1-based index, validated by the capture script itself
    selector: str

    @property
    def label(self) -> str:
        return f"monitor {self.selector}"


@dataclass(frozen=True)
class AllMonitors:
    @property
    def label(self) -> str:
        return "all monitors"


CaptureStrategy = Union[WindowByTitle, WindowByProcess, Monitor, AllMonitors]


def strip_exe_suffix(process_name: str) -> str:
    return _EXE_SUFFIX_RE.sub("", process_name)


def select_strategy(
    window_title: Optional[str] = None,
    process_name: Optional[str] = None,
    monitor: Union[str, int, None] = ALL_MONITORS,
) -> CaptureStrategy:
    """Pick exactly one strategy; a window title beats a process name,
    and either beats the monitor selector."""
    if window_title:
        return WindowByTitle(window_title)
    if process_name:
        return WindowByProcess(strip_exe_suffix(process_name))
    selector = ALL_MONITORS if monitor is None else str(monitor).strip()
    if selector in ("", ALL_MONITORS):
        return AllMonitors()
    return Monitor(selector)


def strategy_for(request: CaptureRequest) -> CaptureStrategy:
    return select_strategy(request.window_title, request.process_name, request.monitor)

"""Configuration loader: YAML file with built-in defaults."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/screenshot_server.yaml"
CONFIG_ENV_VAR = "SCREENSHOT_SERVER_CONFIG"


class Config:
    """Loaded configuration."""

    def __init__(self, raw: Optional[dict] = None):
        self._raw = raw or {}

    def get(self, *keys, default=None):
        """Navigate nested keys: cfg.get('capture', 'window_padding')"""
        obj = self._raw
        for key in keys:
            if not isinstance(obj, dict):
                return default
            obj = obj.get(key, None)
            if obj is None:
                return default
        return obj

    # ── PowerShell executor ──────────────────────────────────────────────

    @property
    def powershell_executable(self) -> str:
        return self.get("powershell", "executable", default="powershell.exe")

    @property
    def powershell_timeout(self) -> Optional[float]:
        timeout = self.get("powershell", "timeout")
        return float(timeout) if timeout else None

    # ── Capture tuning ───────────────────────────────────────────────────

    @property
    def default_folder(self) -> str:
        return self.get("capture", "default_folder", default="screenshots")

    @property
    def window_padding(self) -> int:
        return int(self.get("capture", "window_padding", default=10))

    @property
    def settle_delay_ms(self) -> int:
        return int(self.get("capture", "settle_delay_ms", default=200))

    # ── Logging ──────────────────────────────────────────────────────────

    @property
    def log_dir(self) -> str:
        return self.get("paths", "log_dir", default="./logs")

    @property
    def log_level(self) -> str:
        return self.get("logging", "level", default="INFO").upper()


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from YAML.

    An explicit path (argument or $SCREENSHOT_SERVER_CONFIG) must exist.
    The implicit default path is optional; without it the built-in
    defaults apply.
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    p = Path(explicit or DEFAULT_CONFIG_PATH)
    if not p.exists():
        if explicit:
            raise FileNotFoundError(
                f"Config file not found: {p}\n"
                f"Copy config/screenshot_server.yaml.example to {p} and adjust it."
            )
        return Config()

    with open(p, "r") as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Config loaded from %s", p)
    return Config(raw)

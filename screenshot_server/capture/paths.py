"""Output path resolution across the WSL mount and Windows drive dialects.

The capture runs inside Windows PowerShell, but the request (and the
post-capture existence check) may be handled on the Linux side of WSL.
Every destination is therefore resolved into two spellings:

* ``host_path``    — where this process can find the file afterwards.
* ``foreign_path`` — what PowerShell must be told to write to.

Only the ``/mnt/<letter>/...`` <-> ``<LETTER>:\\...`` drive mount is
translated; anything else is passed through untouched.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_MOUNT_RE = re.compile(r"^/mnt/([a-z])/(.*)$", re.DOTALL)
_DRIVE_RE = re.compile(r"^([A-Za-z]):[\\/](.*)$", re.DOTALL)


@dataclass(frozen=True)
class ResolvedDestination:
    host_path: str
    foreign_path: str
    display_path: str

    @property
    def host_dir(self) -> str:
        return os.path.dirname(self.host_path)


def is_foreign_path(path: str) -> bool:
    """True for drive-letter absolute paths such as ``C:\\Users\\me``."""
    return bool(_DRIVE_RE.match(path))


def is_mounted_drive_path(path: str) -> bool:
    """True for WSL drive mounts such as ``/mnt/c/Users/me``."""
    return bool(_MOUNT_RE.match(path))


def to_foreign_path(host_path: str) -> str:
    """``/mnt/c/Users/me`` -> ``C:\\Users\\me``; other paths unchanged."""
    m = _MOUNT_RE.match(host_path)
    if not m:
        return host_path
    letter, rest = m.groups()
    return f"{letter.upper()}:\\" + rest.replace("/", "\\")


def to_host_path(foreign_path: str) -> str:
    """``C:\\Users\\me`` -> ``/mnt/c/Users/me``; other paths unchanged."""
    m = _DRIVE_RE.match(foreign_path)
    if not m:
        return foreign_path
    letter, rest = m.groups()
    return f"/mnt/{letter.lower()}/" + rest.replace("\\", "/")


def _join_foreign(folder: str, filename: str) -> str:
    folder = folder.replace("/", "\\")
    if not folder.endswith("\\"):
        folder += "\\"
    return folder + filename.replace("/", "\\")


def _join_posix(folder: str, filename: str) -> str:
    if not folder.endswith("/"):
        folder += "/"
    return folder + filename


def resolve_destination(
    folder: Optional[str],
    filename: str,
    cwd: Optional[str] = None,
    default_folder: str = "screenshots",
) -> ResolvedDestination:
    """Work out where a screenshot goes, in every dialect that needs it.

    Args:
        folder: caller-supplied folder, or None for the workspace default.
            Accepts ``C:\\...`` drive paths, ``/mnt/c/...`` mounts, and
            absolute or relative Linux paths.
        filename: image file name (appended verbatim).
        cwd: base for relative folders; defaults to the process cwd.
        default_folder: folder used under ``cwd`` when ``folder`` is absent.
    """
    cwd = cwd or os.getcwd()

    if not folder:
        host = os.path.join(cwd, default_folder, filename)
        return ResolvedDestination(
            host_path=host,
            foreign_path=to_foreign_path(host),
            display_path=_join_posix(default_folder, filename),
        )

    if is_foreign_path(folder):
        foreign = _join_foreign(folder, filename)
        return ResolvedDestination(
            host_path=to_host_path(foreign),
            foreign_path=foreign,
            display_path=foreign,
        )

    if is_mounted_drive_path(folder):
        host = _join_posix(folder, filename)
        return ResolvedDestination(
            host_path=host,
            foreign_path=to_foreign_path(host),
            display_path=host,
        )

    # Relative or plain Linux path: best effort, PowerShell can only reach
    # it when it lands under a /mnt/<letter>/ mount.
    resolved = os.path.normpath(os.path.join(cwd, os.path.expanduser(folder)))
    host = os.path.join(resolved, filename)
    return ResolvedDestination(
        host_path=host,
        foreign_path=to_foreign_path(host),
        display_path=_join_posix(folder, filename),
    )


def ensure_directory(destination: ResolvedDestination) -> None:
    """Create the destination's parent directory (and intermediates)."""
    Path(destination.host_dir).mkdir(parents=True, exist_ok=True)
    logger.debug("Output directory ready: %s", destination.host_dir)

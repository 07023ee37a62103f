"""Shared fixtures: a fake PowerShell runner that records what it was asked to run."""

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))

from screenshot_server.capture.executor import ExecutionOutcome
from screenshot_server.config import Config


class FakeRunner:
    """Stands in for run_script. Optionally writes the PNG the script would have saved."""

    def __init__(self, stdout="", stderr="", returncode=0, create_file=True, raises=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.create_file = create_file
        self.raises = raises
        self.calls = []
        self.save_to = None

    async def __call__(self, script, executable, timeout):
        self.calls.append((script, executable, timeout))
        if self.raises is not None:
            raise self.raises
        if self.create_file and self.save_to:
            Path(self.save_to).write_bytes(b"\x89PNG\r\n\x1a\n")
        return ExecutionOutcome(
            exited_abnormally=self.returncode != 0,
            stdout=self.stdout,
            stderr=self.stderr,
            returncode=self.returncode,
        )

    @property
    def script(self):
        return self.calls[-1][0]


@pytest.fixture
def cfg():
    return Config({"powershell": {"executable": "pwsh-test.exe"}})


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path

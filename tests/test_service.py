"""End-to-end request pipeline with a fake PowerShell."""

import os

import pytest

from screenshot_server.capture.classifier import CaptureResult
from screenshot_server.capture.executor import decode_script
from screenshot_server.capture.service import format_response, take_screenshot
from screenshot_server.capture.strategy import CaptureRequest
from screenshot_server.config import Config

from conftest import FakeRunner


def test_format_success():
    result = format_response(CaptureResult(True, "ignored"), "screenshots/a.png")
    assert result == CaptureResult(True, "Screenshot saved successfully to: screenshots/a.png")


def test_format_failure():
    result = format_response(CaptureResult(False, "boom"), "screenshots/a.png")
    assert result == CaptureResult(False, "Failed to take screenshot: boom")


@pytest.mark.asyncio
async def test_default_request_captures_all_monitors(workspace, cfg):
    runner = FakeRunner(stdout="Screenshot saved successfully\r\n")
    runner.save_to = os.path.join(os.getcwd(), "screenshots", "test.png")

    result = await take_screenshot(CaptureRequest.from_arguments({"filename": "test.png"}), cfg=cfg, runner=runner)

    assert result == CaptureResult(True, "Screenshot saved successfully to: screenshots/test.png")
    script, executable, timeout = runner.calls[0]
    assert "VirtualScreen" in script
    assert executable == "pwsh-test.exe"
    assert timeout is None
    assert (workspace / "screenshots").is_dir()


@pytest.mark.asyncio
async def test_missing_window(workspace, cfg):
    runner = FakeRunner(
        stdout="Available windows:\r\n  - Untitled - Notepad (Process: notepad)\r\nSearch term: 'NoSuchApp'",
        stderr='No window found with title containing: NoSuchApp\r\n+ throw "No window found with title containing: $SearchTerm"',
        returncode=1,
    )

    result = await take_screenshot(CaptureRequest(window_title="NoSuchApp"), cfg=cfg, runner=runner)

    assert not result.succeeded
    assert result.message.startswith("Failed to take screenshot: ")
    assert "No window found with title containing: NoSuchApp" in result.message
    assert "$SearchTerm = 'NoSuchApp'" in runner.script


@pytest.mark.asyncio
async def test_success_run_without_file_fails(workspace, cfg):
    runner = FakeRunner(stdout="Screenshot saved successfully", create_file=False)

    result = await take_screenshot(CaptureRequest(), cfg=cfg, runner=runner)

    assert not result.succeeded
    assert "was not created" in result.message


@pytest.mark.asyncio
async def test_launch_failure(workspace, cfg):
    runner = FakeRunner(raises=FileNotFoundError(2, "No such file or directory", "pwsh-test.exe"))

    result = await take_screenshot(CaptureRequest(), cfg=cfg, runner=runner)

    assert not result.succeeded
    assert "No such file or directory" in result.message


@pytest.mark.asyncio
async def test_directory_creation_failure(workspace, cfg):
    (workspace / "blocked").write_text("not a directory")
    runner = FakeRunner()

    result = await take_screenshot(CaptureRequest(folder="blocked/sub"), cfg=cfg, runner=runner)

    assert not result.succeeded
    assert result.message.startswith("Failed to take screenshot: ")
    assert runner.calls == []


@pytest.mark.asyncio
async def test_windows_folder_reaches_script(workspace, cfg, monkeypatch):
    created = []
    monkeypatch.setattr("screenshot_server.capture.service.ensure_directory", created.append)
    runner = FakeRunner(stdout="Screenshot of process 'notepad' saved successfully")
    request = CaptureRequest.from_arguments({"processName": "notepad.exe", "folder": "C:\\Shots", "filename": "n.png"})

    result = await take_screenshot(request, cfg=cfg, runner=runner)

    assert created[0].host_path == "/mnt/c/Shots/n.png"
    assert "$SavePath = 'C:\\\\Shots\\\\n.png'" in runner.script
    assert "$SearchTerm = 'notepad'" in runner.script
    # nothing was written to /mnt/c/Shots/n.png
    assert not result.succeeded


@pytest.mark.asyncio
async def test_monitor_and_tuning_from_config(workspace):
    cfg = Config({"capture": {"window_padding": 4, "settle_delay_ms": 50, "default_folder": "caps"}})
    runner = FakeRunner(stdout="ok")
    runner.save_to = os.path.join(os.getcwd(), "caps", "w.png")

    result = await take_screenshot(CaptureRequest(filename="w.png", window_title="Editor"), cfg=cfg, runner=runner)

    assert result.message == "Screenshot saved successfully to: caps/w.png"
    assert "$Padding = 4\n" in runner.script
    assert "$SettleMs = 50\n" in runner.script


@pytest.mark.asyncio
async def test_default_runner_script_is_decodable(workspace, cfg, monkeypatch):
    seen = {}

    async def fake_exec(*cmd, **kwargs):
        seen["script"] = decode_script(cmd[-1])
        raise FileNotFoundError("powershell.exe")

    monkeypatch.setattr("asyncio.create_subprocess_exec", fake_exec)
    result = await take_screenshot(CaptureRequest(monitor="primary"), cfg=cfg)

    assert not result.succeeded
    assert "$MonitorSelector = 'primary'" in seen["script"]


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments", [{"folder": 5}, {"filename": 7}])
async def test_non_string_parameters_become_failed_result(workspace, cfg, arguments):
    runner = FakeRunner()

    result = await take_screenshot(CaptureRequest.from_arguments(arguments), cfg=cfg, runner=runner)

    assert not result.succeeded
    assert result.message.startswith("Failed to take screenshot: ")
    assert runner.calls == []

from __future__ import annotations

import platform

import pytest
from click.testing import CliRunner

import mobilepreview.cli as cli_module
from fakes import DEVICES_JSON, RUNTIMES_JSON, SDK_PACKAGES, FakeRunner, command_error
from mobilepreview.cli import cli


@pytest.fixture
def fake_runner(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr(cli_module, "CommandRunner", lambda logger=None: runner)
    return runner


def test_init_writes_config(tmp_path) -> None:
    out = tmp_path / "preview.yaml"

    result = CliRunner().invoke(cli, ["init", "-o", str(out)])
    assert result.exit_code == 0
    assert "ios:" in out.read_text()

    again = CliRunner().invoke(cli, ["init", "-o", str(out)])
    assert again.exit_code == 1
    assert "already exists" in again.output


def test_setup_android_reports_failures(fake_runner, monkeypatch) -> None:
    monkeypatch.delenv("ANDROID_HOME", raising=False)
    fake_runner.responses = {
        "plugins --core": "@salesforce/lwc-dev-server 2.11.0\n",
        "sdkmanager": command_error("sdkmanager --list", "sdkmanager: not found", 127),
    }

    result = CliRunner().invoke(cli, ["setup", "-p", "android"])

    assert result.exit_code == 1
    assert "Setup (" in result.output
    assert "Passed" in result.output
    assert "Failed" in result.output
    assert "FAILED: 1/4 requirements met" in result.output


def test_setup_ios_passes(fake_runner, monkeypatch) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platform, "mac_ver", lambda: ("14.0", ("", "", ""), "arm64"))
    fake_runner.responses = {
        "plugins --core": "@salesforce/lwc-dev-server 2.11.0\n",
        "xcode-select": "/Applications/Xcode.app/Contents/Developer\n",
        "runtimes": RUNTIMES_JSON,
    }

    result = CliRunner().invoke(cli, ["setup", "-p", "ios"])

    assert result.exit_code == 0, result.output
    assert "PASSED: 4/4 requirements met" in result.output


def test_setup_rejects_unknown_platform() -> None:
    result = CliRunner().invoke(cli, ["setup", "-p", "blackberry"])
    assert result.exit_code == 2


def test_setup_invalid_config(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("ios:\n  supported_runtimes: []\n")

    result = CliRunner().invoke(cli, ["setup", "-p", "ios", "-c", str(path)])

    assert result.exit_code == 1
    assert "Error loading configuration" in result.output


def test_runtimes_and_devices(fake_runner) -> None:
    fake_runner.responses = {"runtimes": RUNTIMES_JSON, "devices": DEVICES_JSON}

    runtimes = CliRunner().invoke(cli, ["runtimes"])
    assert runtimes.exit_code == 0
    assert runtimes.output.split() == ["iOS-14-4", "iOS-13-0"]

    devices = CliRunner().invoke(cli, ["devices"])
    assert devices.exit_code == 0
    assert "AAAA-1111" in devices.output
    assert "BBBB-2222" in devices.output


def test_launch_requires_exactly_one_target() -> None:
    result = CliRunner().invoke(cli, ["launch", "-d", "iPhone 12"])
    assert result.exit_code == 2

    result = CliRunner().invoke(cli, ["launch", "-d", "x", "--url", "http://x", "--app", "com.x"])
    assert result.exit_code == 2


def test_launch_url_resolves_device_name(fake_runner) -> None:
    fake_runner.responses = {"runtimes": RUNTIMES_JSON, "devices": DEVICES_JSON}

    result = CliRunner().invoke(cli, ["launch", "-d", "iPhone 12", "--url", "http://localhost:3333"])

    assert result.exit_code == 0, result.output
    assert "open -a Simulator" in fake_runner.commands
    assert fake_runner.commands[-3:] == [
        "/usr/bin/xcrun simctl boot BBBB-2222",
        '/usr/bin/xcrun simctl bootstatus "BBBB-2222"',
        '/usr/bin/xcrun simctl openurl "BBBB-2222" http://localhost:3333',
    ]


def test_launch_app_failure_exits_nonzero(fake_runner) -> None:
    fake_runner.responses = {
        "runtimes": RUNTIMES_JSON,
        "devices": DEVICES_JSON,
        "bootstatus": command_error("bootstatus", "timed out"),
    }

    result = CliRunner().invoke(cli, [
        "launch", "-d", "AAAA-1111",
        "--app", "com.example.preview",
        "--component", "c:hello",
        "--project-dir", "/work",
    ])

    assert result.exit_code == 1
    assert "wait_ready" in result.output
    assert fake_runner.count("simctl launch") == 0


@pytest.mark.parametrize(
    "extra",
    [
        [],
        ["--component", "c:hello"],
        ["--project-dir", "/work"],
    ],
)
def test_launch_app_requires_component_and_project_dir(fake_runner, extra) -> None:
    result = CliRunner().invoke(cli, ["launch", "-d", "AAAA-1111", "--app", "com.example.preview", *extra])

    assert result.exit_code == 2
    assert "--app requires --component and --project-dir" in result.output
    assert fake_runner.commands == []


def test_launch_failure_lists_skipped_steps(fake_runner) -> None:
    fake_runner.responses = {
        "runtimes": RUNTIMES_JSON,
        "devices": DEVICES_JSON,
        "terminate": command_error("terminate", "not running"),
        "simctl launch": command_error("launch", "app not installed"),
    }

    result = CliRunner().invoke(cli, [
        "launch", "-d", "AAAA-1111",
        "--app", "com.example.preview",
        "--component", "c:hello",
        "--project-dir", "/work",
    ])

    assert result.exit_code == 1
    assert "terminate skipped" in result.output
    assert "Step 'launch' failed" in result.output
    assert fake_runner.commands[-1] == (
        '/usr/bin/xcrun simctl launch "AAAA-1111" com.example.preview '
        "ComponentName=c:hello ProjectDir=/work"
    )


def test_devices_with_malformed_listing(fake_runner) -> None:
    fake_runner.responses = {"runtimes": RUNTIMES_JSON, "devices": '{"devices": ["iPhone 11"]}'}

    result = CliRunner().invoke(cli, ["devices"])

    assert result.exit_code == 0
    assert "No supported simulators found" in result.output


@pytest.mark.parametrize("command", ["runtimes", "devices"])
def test_listing_commands_log_under_xcode_child(fake_runner, monkeypatch, command) -> None:
    fake_runner.responses = {"runtimes": RUNTIMES_JSON, "devices": DEVICES_JSON}
    loggers = []
    service = cli_module.XcodeService

    def recording_service(runner, config, logger=None):
        loggers.append(logger.name)
        return service(runner, config, logger=logger)

    monkeypatch.setattr(cli_module, "XcodeService", recording_service)

    result = CliRunner().invoke(cli, [command])

    assert result.exit_code == 0, result.output
    assert loggers == ["mobilepreview.xcode"]

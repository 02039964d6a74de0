import subprocess
import sys

import pytest

import mysqlprovisioner.services.command_runner as command_runner_module
from mysqlprovisioner.errors import ClientUnavailableError, ProvisionerError
from mysqlprovisioner.services.command_runner import CommandRunner


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


def test_command_runner_raises_with_stderr_when_check_enabled():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(ProvisionerError, match="boom"):
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"],
            check=True,
        )


def test_command_runner_returns_failed_result_by_default():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.stderr.write('denied'); sys.exit(1)"],
    )

    assert result.returncode == 1
    assert result.stderr == "denied"


def test_command_runner_pipes_input_text_to_stdin():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"],
        input_text="select 1;",
    )

    assert result.returncode == 0
    assert result.stdout == "SELECT 1;"


def test_command_runner_passes_environment_to_child_only():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import os, sys; sys.stdout.write(os.environ.get('MYSQL_PWD', ''))"],
        env={"MYSQL_PWD": "s3cret"},
    )

    assert result.stdout == "s3cret"


def test_command_runner_reports_missing_binary():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(ClientUnavailableError, match="Required command not found"):
        runner.run(["definitely-not-a-real-binary-for-tests"])


def test_command_runner_waits_for_child_without_timeout(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(command_runner_module.subprocess, "run", fake_run)
    runner = CommandRunner(logger=DummyLogger())

    runner.run(["mysql", "--batch"], input_text="select 1;")

    assert "timeout" not in seen
    assert seen["input"] == "select 1;"

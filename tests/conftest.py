"""Shared fixtures for the mock-code test suite."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from mockcode.hooks import CommandResult, HookEvent
from mockcode.session import create_session_context

ROOT = Path(__file__).resolve().parent.parent
FIXTURES = Path(__file__).resolve().parent / "fixtures"


class FakeRunner:
    """
    Command runner that records calls instead of spawning processes.

    `results` maps a command to a CommandResult or to an exception to raise.
    Unknown commands succeed with empty output.
    """

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []

    def run(self, command, input, timeout):
        self.calls.append({"command": command, "payload": json.loads(input), "timeout": timeout})
        outcome = self.results.get(command, CommandResult(0, "", ""))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def commands(self):
        return [call["command"] for call in self.calls]


class RecordingExecutor:
    """
    Executor that records every fired event.

    `responses` maps an event to the value fire() returns for it; `fail_on`
    makes fire() raise for that event.
    """

    def __init__(self, responses=None, fail_on=None):
        self.responses = dict(responses or {})
        self.fail_on = fail_on
        self.fired = []

    def fire(self, event, data=None):
        self.fired.append((event, dict(data or {})))
        if event == self.fail_on:
            raise RuntimeError(f"{event.value} exploded")
        return self.responses.get(event)

    @property
    def events(self):
        return [event for event, _ in self.fired]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def recording_executor():
    return RecordingExecutor()


@pytest.fixture
def base_dir(tmp_path):
    path = tmp_path / "mock-home"
    path.mkdir()
    return path


@pytest.fixture
def session(base_dir):
    return create_session_context("/Users/test/git/project", base_dir)


@pytest.fixture
def sh_command():
    """Build a hook command that runs a fixture script through sh."""
    def build(name):
        return f"sh {FIXTURES / name}"
    return build


@pytest.fixture
def write_hooks(tmp_path):
    """Write a hooks config file and return its path."""
    def write(entries):
        path = tmp_path / "hooks.json"
        path.write_text(json.dumps({"hooks": entries}), encoding="utf-8")
        return path
    return write


@pytest.fixture
def run_cli(tmp_path):
    """Run main.py in a subprocess with an isolated MOCK_CODE_HOME."""
    def run(args, stdin=None, env=None, timeout=30):
        full_env = dict(os.environ)
        full_env["MOCK_CODE_HOME"] = str(tmp_path / "cli-home")
        full_env.update(env or {})
        return subprocess.run(
            [sys.executable, str(ROOT / "main.py"), *args],
            input=stdin if stdin is not None else "",
            capture_output=True,
            text=True,
            env=full_env,
            cwd=str(tmp_path),
            timeout=timeout,
        )
    return run

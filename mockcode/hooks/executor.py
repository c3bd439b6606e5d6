"""
Hook Executor for the lifecycle hooks system.

The executor dispatches a lifecycle event to every hook subscribed to it.
Each hook runs as a shell command that receives a JSON payload on stdin and
may print one JSON object on stdout. Hooks for one event run sequentially,
in declaration order, and the last successful response wins.

A failing hook (spawn error, non-zero exit, timeout, malformed output) is
reported on stderr and otherwise ignored: fire() never raises because of it.
"""

import json
import os
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from .types import HookEvent, HookEntry, HookPayload, HookResponse
from .registry import load_hooks_config, describe_hooks
from ..errors import HookInvocationError
from ..logger import logger


DEFAULT_HOOK_TIMEOUT = 10.0  # seconds
OUTPUT_GRACE_PERIOD = 1.0  # seconds to finish reading output after a hook exits


@dataclass
class CommandResult:
    """Outcome of a command that ran to completion."""
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(Protocol):
    """
    Capability to run a shell command with some stdin and a deadline.

    Implementations must raise subprocess.TimeoutExpired after killing the
    command when the deadline passes, and OSError when it cannot be started.
    """

    def run(self, command: str, input: str, timeout: float) -> CommandResult:
        ...


class _PipeReader(threading.Thread):
    """Collects everything written to a pipe until EOF."""

    def __init__(self, pipe):
        super().__init__(daemon=True)
        self._pipe = pipe
        self._chunks: List[bytes] = []
        self._lock = threading.Lock()

    def run(self) -> None:
        try:
            while True:
                chunk = os.read(self._pipe.fileno(), 65536)
                if not chunk:
                    break
                with self._lock:
                    self._chunks.append(chunk)
        except OSError:
            pass
        finally:
            self._pipe.close()

    def text(self) -> str:
        with self._lock:
            data = b"".join(self._chunks)
        return data.decode("utf-8", errors="replace")


def _feed(pipe, data: bytes) -> None:
    """Write the payload to stdin; hooks that exit without reading it are fine."""
    try:
        pipe.write(data)
    except OSError:
        pass
    finally:
        try:
            pipe.close()
        except OSError:
            pass


class SubprocessRunner:
    """
    Runs commands through `sh -c` in their own process group.

    The deadline covers the hook process itself. Once it has exited, output
    is collected for at most `grace_period` seconds, so background children
    that inherited stdout cannot hold the hook's answer hostage.
    """

    def __init__(self, grace_period: float = OUTPUT_GRACE_PERIOD):
        self.grace_period = grace_period

    def run(self, command: str, input: str, timeout: float) -> CommandResult:
        proc = subprocess.Popen(
            ["sh", "-c", command],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=True,
        )
        stdout = _PipeReader(proc.stdout)
        stderr = _PipeReader(proc.stderr)
        feeder = threading.Thread(target=_feed, args=(proc.stdin, input.encode("utf-8")), daemon=True)
        for thread in (feeder, stdout, stderr):
            thread.start()

        try:
            returncode = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            self._kill(proc)
            # Reap the child; whatever it printed so far is discarded.
            proc.wait()
            raise

        deadline = time.monotonic() + self.grace_period
        for reader in (stdout, stderr):
            reader.join(max(0.0, deadline - time.monotonic()))
        return CommandResult(returncode, stdout.text(), stderr.text())

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        # Kill the whole group so grandchildren spawned by the shell don't
        # keep the pipes open.
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass


class HookExecutor:
    """
    Executes hook commands for lifecycle events.

    Example:
        entries = load_hooks_config("hooks.json")
        executor = HookExecutor(entries, timeout=5.0)

        response = executor.fire(HookEvent.UserPromptSubmit, {"prompt": "hello"})
        if response and isinstance(response.get("prompt"), str):
            prompt = response["prompt"]
    """

    def __init__(
        self,
        entries: List[HookEntry],
        runner: Optional[CommandRunner] = None,
        timeout: float = DEFAULT_HOOK_TIMEOUT,
    ):
        """
        Initialize the executor.

        Args:
            entries: Hook entries, in declaration order
            runner: Command runner (defaults to SubprocessRunner)
            timeout: Per-hook wall-clock limit in seconds
        """
        self._entries = tuple(entries)
        self._runner = runner or SubprocessRunner()
        self.timeout = timeout

    @property
    def entries(self) -> List[HookEntry]:
        return list(self._entries)

    def hooks_for(self, event: HookEvent) -> List[HookEntry]:
        """Entries subscribed to an event, in declaration order."""
        return [entry for entry in self._entries if entry.matches(event)]

    def fire(
        self,
        event: HookEvent,
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[HookResponse]:
        """
        Run all hooks for an event.

        Args:
            event: The lifecycle event
            data: Event-specific payload data

        Returns:
            The response of the last hook that succeeded with a JSON object,
            or None if no hook produced one
        """
        matching = self.hooks_for(event)
        if not matching:
            return None

        payload = HookPayload(event=event, data=dict(data or {})).to_json()
        last_response: Optional[HookResponse] = None

        for entry in matching:
            try:
                response = self._invoke(entry, payload)
            except HookInvocationError as e:
                logger.error(f"[hooks] {e}")
                continue
            if response is not None:
                last_response = response

        return last_response

    def _invoke(self, entry: HookEntry, payload: str) -> Optional[HookResponse]:
        """Run a single hook and parse its output."""
        logger.debug(f"[hooks] Running {entry.event} hook: {entry.command}")
        try:
            result = self._runner.run(entry.command, payload, self.timeout)
        except subprocess.TimeoutExpired:
            raise HookInvocationError(entry.command, f"timed out after {self.timeout:g}s")
        except OSError as e:
            raise HookInvocationError(entry.command, f"could not be started: {e}")

        if result.returncode != 0:
            raise HookInvocationError(
                entry.command,
                f"exited with code {result.returncode}: {result.stderr.strip()}",
            )

        output = result.stdout.strip()
        if not output:
            return None

        try:
            response = json.loads(output)
        except json.JSONDecodeError as e:
            raise HookInvocationError(entry.command, f"returned invalid JSON: {e}")

        if not isinstance(response, dict):
            raise HookInvocationError(
                entry.command,
                f"returned {type(response).__name__} instead of a JSON object",
            )
        return response


class NoopHookExecutor:
    """Executor used when no hooks config is given: every event is a no-op."""

    def fire(
        self,
        event: HookEvent,
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[HookResponse]:
        return None


def create_hook_executor(
    config_path: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
    runner: Optional[CommandRunner] = None,
) -> Union[HookExecutor, NoopHookExecutor]:
    """
    Build the executor for a run.

    Args:
        config_path: Hooks config file, or None for no hooks
        timeout: Per-hook timeout in seconds (default DEFAULT_HOOK_TIMEOUT)
        runner: Optional command runner override

    Raises:
        ConfigError: If the hooks config cannot be loaded
    """
    if config_path is None:
        return NoopHookExecutor()

    entries = load_hooks_config(config_path)
    for event_name, commands in describe_hooks(entries).items():
        logger.info(f"[hooks] {event_name}: {', '.join(commands)}")

    return HookExecutor(
        entries,
        runner=runner,
        timeout=DEFAULT_HOOK_TIMEOUT if timeout is None else timeout,
    )

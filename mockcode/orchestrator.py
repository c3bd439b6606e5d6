"""
Lifecycle Orchestrator.

Drives one simulated session and fires hook events in a fixed order:

    SessionStart
    (UserPromptSubmit, PreToolUse, PostToolUse) x N prompts
    Stop
    SessionEnd

Stop and SessionEnd fire exactly once, whether the prompt loop finished
normally or raised.
"""

import sys
from enum import Enum
from typing import Iterable, Iterator, List, Optional, TextIO, Union

from .errors import MockCodeError, PipelineError
from .hooks import HookEvent, HookExecutor, NoopHookExecutor
from .logger import logger
from .matcher import match
from .scenario import ScenarioResponse
from .session import SessionContext, Turn, append_history, append_session

PROMPT_INDICATOR = "> "


class SessionPhase(Enum):
    NotStarted = "not_started"
    SessionActive = "session_active"
    Draining = "draining"
    Ended = "ended"


def single_prompt(prompt: str) -> Iterator[str]:
    """Prompt source for -p mode: exactly one cycle."""
    yield prompt


def interactive_prompts(
    stream: Optional[TextIO] = None,
    prompt_stream: Optional[TextIO] = None,
) -> Iterator[str]:
    """
    Prompt source for interactive mode.

    Writes the prompt indicator to prompt_stream (stderr by default) before
    each read and yields lines until end of input. Blank lines are skipped.
    """
    stream = stream or sys.stdin
    prompt_stream = prompt_stream or sys.stderr

    while True:
        prompt_stream.write(PROMPT_INDICATOR)
        prompt_stream.flush()
        line = stream.readline()
        if not line:
            return
        prompt = line.rstrip("\r\n")
        if not prompt.strip():
            continue
        yield prompt


class LifecycleOrchestrator:
    """
    Runs prompt cycles and fires lifecycle hooks around them.

    Example:
        orchestrator = LifecycleOrchestrator(
            executor=create_hook_executor("hooks.json"),
            responses=load_scenario_file("scenario.json"),
            session=create_session_context(os.getcwd()),
        )
        orchestrator.run(single_prompt("hello"))
    """

    def __init__(
        self,
        executor: Union[HookExecutor, NoopHookExecutor],
        responses: List[ScenarioResponse],
        session: SessionContext,
        output: Optional[TextIO] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            executor: Hook executor (NoopHookExecutor when no hooks are configured)
            responses: Scenario responses to match prompts against
            session: Session context for history and transcript logging
            output: Stream for simulated responses (stdout by default)
        """
        self.executor = executor
        self.responses = responses
        self.session = session
        self.output = output
        self.phase = SessionPhase.NotStarted
        self.parent_uuid: Optional[str] = None

    def run(self, prompts: Iterable[str]) -> int:
        """
        Run a whole session.

        Args:
            prompts: Prompt source, consumed lazily

        Returns:
            Number of prompt cycles processed

        Raises:
            PipelineError: If a cycle failed (after Stop and SessionEnd fired)
        """
        if self.phase is not SessionPhase.NotStarted:
            raise RuntimeError(f"Session already {self.phase.value}")

        cycles = 0
        current: Optional[str] = None
        try:
            self.executor.fire(HookEvent.SessionStart)
            self.phase = SessionPhase.SessionActive

            for prompt in prompts:
                current = prompt
                self.process_prompt(prompt)
                current = None
                cycles += 1
        except MockCodeError:
            raise
        except Exception as e:
            raise PipelineError(str(e) or type(e).__name__, prompt=current) from e
        finally:
            self._drain()

        return cycles

    def process_prompt(self, prompt: str) -> str:
        """
        Run one prompt cycle.

        Returns:
            The printed response
        """
        effective = prompt
        response = self.executor.fire(HookEvent.UserPromptSubmit, {"prompt": prompt})
        if isinstance(response, dict) and isinstance(response.get("prompt"), str):
            effective = response["prompt"]
            logger.debug(f"[hooks] Prompt rewritten: {prompt!r} -> {effective!r}")

        self.executor.fire(HookEvent.PreToolUse, {"prompt": effective})

        result = match(effective, self.responses)
        output = self.output or sys.stdout
        output.write(result + "\n")
        output.flush()

        self.executor.fire(HookEvent.PostToolUse, {"prompt": effective, "result": result})

        append_history(prompt, self.session)
        self.parent_uuid = append_session(Turn.user(effective), self.session, self.parent_uuid)
        self.parent_uuid = append_session(Turn.assistant(result), self.session, self.parent_uuid)

        return result

    def _drain(self) -> None:
        """Fire the terminal events."""
        self.phase = SessionPhase.Draining
        try:
            self.executor.fire(HookEvent.Stop)
        finally:
            try:
                self.executor.fire(HookEvent.SessionEnd)
            finally:
                self.phase = SessionPhase.Ended

"""
Lifecycle Hooks Module

Hooks are external shell commands that run at fixed points of a simulated
session. Each one receives a JSON payload on stdin and may answer with a JSON
object on stdout.

Available Hook Events:
- SessionStart: Before the first prompt
- UserPromptSubmit: A prompt was received (a {"prompt": ...} answer rewrites it)
- PreToolUse: Before the prompt is matched
- PostToolUse: After the response was printed
- Stop: The prompt loop ended, normally or with an error
- SessionEnd: Right after Stop

Example usage:
    from mockcode.hooks import HookEvent, create_hook_executor

    hooks = create_hook_executor("hooks.json")
    hooks.fire(HookEvent.SessionStart)
    response = hooks.fire(HookEvent.UserPromptSubmit, {"prompt": "hello"})
"""

from .types import HookEvent, HookEntry, HookPayload, HookResponse
from .registry import load_hooks_config, describe_hooks
from .executor import (
    DEFAULT_HOOK_TIMEOUT,
    CommandResult,
    CommandRunner,
    SubprocessRunner,
    HookExecutor,
    NoopHookExecutor,
    create_hook_executor,
)

__all__ = [
    'HookEvent', 'HookEntry', 'HookPayload', 'HookResponse',
    'load_hooks_config', 'describe_hooks',
    'DEFAULT_HOOK_TIMEOUT', 'CommandResult', 'CommandRunner', 'SubprocessRunner',
    'HookExecutor', 'NoopHookExecutor', 'create_hook_executor',
]

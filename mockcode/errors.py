"""
Error types for mock-code.

- ConfigError: a scenario or hooks file is malformed (fatal, before SessionStart)
- HookInvocationError: a single hook failed (always recovered by the executor)
- PipelineError: anything else that breaks a prompt cycle (fatal, after Stop/SessionEnd)
"""

from typing import Optional


class MockCodeError(Exception):
    """Base class for all mock-code errors."""


class ConfigError(MockCodeError):
    """Raised when a scenario or hooks configuration file is invalid."""


class HookInvocationError(MockCodeError):
    """Raised when a hook command fails, times out or returns unusable output."""

    def __init__(self, command: str, message: str):
        super().__init__(f'Hook "{command}" {message}')
        self.command = command


class PipelineError(MockCodeError):
    """Raised when a prompt cycle fails for any reason other than a hook."""

    def __init__(self, message: str, prompt: Optional[str] = None):
        super().__init__(message)
        self.prompt = prompt

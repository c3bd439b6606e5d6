"""
Interactive scenario wizard.

Asks for pattern/message pairs until the user is done and returns the
scenario document. Questions go to stderr so the JSON printed on stdout can
be redirected straight into a file.
"""

import sys
from typing import Callable, Dict, List, Optional, TextIO, Union

Validator = Callable[[str], Union[str, bool]]


def required(value: str) -> Union[str, bool]:
    """Reject empty and whitespace-only answers."""
    return "Value cannot be empty" if value.strip() == "" else True


class PromptFunctions:
    """Terminal-backed question helpers; tests replace these with fakes."""

    def __init__(self, stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stderr = stderr or sys.stderr

    def _ask(self, message: str) -> str:
        self.stderr.write(f"{message} ")
        self.stderr.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError("Input closed before the scenario was complete")
        return line.rstrip("\r\n")

    def input(self, message: str, validate: Optional[Validator] = None) -> str:
        while True:
            value = self._ask(message)
            verdict = validate(value) if validate else True
            if verdict is True:
                return value
            self.stderr.write(f"  {verdict}\n")

    def confirm(self, message: str) -> bool:
        value = self._ask(f"{message} (y/N)")
        return value.strip().lower() in ("y", "yes")


def create_scenario(prompts: Optional[PromptFunctions] = None) -> Dict[str, List[Dict[str, str]]]:
    """
    Run the wizard.

    Args:
        prompts: Question helpers (defaults to the terminal)

    Returns:
        {"responses": [{"pattern": ..., "message": ...}, ...]}
    """
    prompts = prompts or PromptFunctions()
    responses = []

    add_more = True
    while add_more:
        pattern = prompts.input("Pattern (regex):", validate=required)
        message = prompts.input("Message (response):", validate=required)
        responses.append({"pattern": pattern, "message": message})

        add_more = prompts.confirm("Add another response?")

    return {"responses": responses}

"""
Hook types and data structures for the lifecycle hooks system.
"""

import json
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Union


class HookEvent(Enum):
    """
    Lifecycle events a hook can subscribe to.

    Members are declared in the order they fire during a session:
    - SessionStart: Once, before the first prompt is read
    - UserPromptSubmit: A prompt was received; hooks may rewrite it
    - PreToolUse: Right before the prompt is matched against the scenario
    - PostToolUse: Right after the response was produced
    - Stop: The prompt loop finished (or failed)
    - SessionEnd: Last event of the session, after Stop
    """
    SessionStart = "SessionStart"
    UserPromptSubmit = "UserPromptSubmit"
    PreToolUse = "PreToolUse"
    PostToolUse = "PostToolUse"
    Stop = "Stop"
    SessionEnd = "SessionEnd"


@dataclass(frozen=True)
class HookEntry:
    """
    A single hook declaration from the hooks config file.

    The event is kept as the raw string from the file: names outside
    HookEvent load fine but never match a fired event.
    """
    event: str
    command: str

    def matches(self, event: Union[HookEvent, str]) -> bool:
        """Check whether this entry subscribes to the given event."""
        name = event.value if isinstance(event, HookEvent) else event
        return self.event == name

    @property
    def is_known_event(self) -> bool:
        return self.event in HookEvent.__members__


@dataclass
class HookPayload:
    """
    Document written to a hook's stdin.

    Attributes:
        event: The event being fired
        data: Event-specific data, e.g. {"prompt": ...} or {"prompt": ..., "result": ...}
    """
    event: HookEvent
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert payload to dictionary for serialization."""
        return {
            'event': self.event.value,
            'data': self.data,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


# Whatever JSON object a hook printed on stdout.
HookResponse = Dict[str, Any]

"""
Session log for simulated conversations.

Writes the same on-disk layout an interactive agent leaves behind:
- <base>/history.jsonl: one line per submitted prompt
- <base>/projects/<encoded cwd>/<session id>.jsonl: the transcript, where
  every turn points at the previous one through parentUuid

The parent reference is passed in and returned explicitly; nothing here
keeps state between calls.
"""

import json
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .logger import logger

DEFAULT_BASE_DIR = Path.home() / ".mock-code" / "claude"


@dataclass(frozen=True)
class SessionContext:
    """
    Identity of one simulated session.

    Attributes:
        session_id: Unique session identifier (uuid4)
        cwd: Project directory the session runs in
        base_dir: Root directory for history and transcripts
    """
    session_id: str
    cwd: str
    base_dir: Path

    @property
    def history_path(self) -> Path:
        return self.base_dir / "history.jsonl"

    @property
    def transcript_path(self) -> Path:
        return self.base_dir / "projects" / encode_path(self.cwd) / f"{self.session_id}.jsonl"


@dataclass(frozen=True)
class Turn:
    """One side of an exchange."""
    type: str  # "user" or "assistant"
    content: str

    @classmethod
    def user(cls, content: str) -> 'Turn':
        return cls(type="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> 'Turn':
        return cls(type="assistant", content=content)


def encode_path(cwd: str) -> str:
    """Flatten a directory path into a single directory name."""
    return cwd.replace("/", "-")


def create_session_context(
    cwd: str,
    base_dir: Optional[Union[str, Path]] = None,
) -> SessionContext:
    """
    Start a new session.

    Args:
        cwd: Project directory
        base_dir: Storage root (defaults to ~/.mock-code/claude)
    """
    if base_dir is None:
        base_dir = DEFAULT_BASE_DIR
    return SessionContext(
        session_id=str(uuid.uuid4()),
        cwd=cwd,
        base_dir=Path(base_dir),
    )


def _append_line(path: Path, entry: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry) + "\n")


def append_history(prompt: str, ctx: SessionContext) -> None:
    """Record a submitted prompt in the global history file."""
    entry = {
        "display": prompt,
        "pastedContents": {},
        "timestamp": int(time.time() * 1000),
        "project": ctx.cwd,
        "sessionId": ctx.session_id,
    }
    _append_line(ctx.history_path, entry)


def append_session(
    turn: Turn,
    ctx: SessionContext,
    parent_uuid: Optional[str] = None,
) -> str:
    """
    Append a turn to the session transcript.

    Args:
        turn: The user or assistant turn
        ctx: Session context
        parent_uuid: uuid returned by the previous call, None for the first turn

    Returns:
        The uuid of the new turn, to pass as parent_uuid next time
    """
    turn_uuid = str(uuid.uuid4())

    if turn.type == "user":
        message = {"role": "user", "content": turn.content}
    elif turn.type == "assistant":
        message = {"role": "assistant", "content": [{"type": "text", "text": turn.content}]}
    else:
        raise ValueError(f"Invalid turn type: {turn.type}")

    entry = {
        "type": turn.type,
        "parentUuid": parent_uuid,
        "sessionId": ctx.session_id,
        "cwd": ctx.cwd,
        "message": message,
        "uuid": turn_uuid,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    _append_line(ctx.transcript_path, entry)
    logger.debug(f"[session] {turn.type} turn {turn_uuid} (parent {parent_uuid})")
    return turn_uuid

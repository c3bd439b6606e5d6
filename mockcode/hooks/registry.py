"""
Hook Registry: loads the hooks configuration file.

Expected format:

    {
      "hooks": [
        {"event": "SessionStart", "command": "./scripts/on-start.sh"},
        {"event": "UserPromptSubmit", "command": "python rewrite.py"}
      ]
    }
"""

import json
from pathlib import Path
from typing import Dict, List, Union

from .types import HookEntry
from ..errors import ConfigError
from ..logger import logger


def load_hooks_config(path: Union[str, Path]) -> List[HookEntry]:
    """
    Load and validate a hooks configuration file.

    Only the structure is validated. Event names outside HookEvent are kept
    (they never fire) and commands are not checked for existence.

    Args:
        path: Path to the JSON hooks file

    Returns:
        Hook entries in declaration order

    Raises:
        ConfigError: If the file is unreadable, not JSON, or structurally invalid
    """
    try:
        content = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Invalid hooks config: cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid hooks config: {path} is not valid JSON: {e}") from e

    hooks = content.get("hooks") if isinstance(content, dict) else None
    if not isinstance(hooks, list):
        raise ConfigError("Invalid hooks config: missing 'hooks' array")

    entries = []
    for raw in hooks:
        if (
            not isinstance(raw, dict)
            or not isinstance(raw.get("event"), str)
            or not isinstance(raw.get("command"), str)
        ):
            raise ConfigError(
                "Invalid hook entry: each entry must have 'event' and 'command' strings"
            )
        entry = HookEntry(event=raw["event"], command=raw["command"])
        if not entry.is_known_event:
            logger.debug(f"[hooks] Unknown event '{entry.event}' for {entry.command}; it will never fire")
        entries.append(entry)

    logger.debug(f"[hooks] Loaded {len(entries)} hook(s) from {path}")
    return entries


def describe_hooks(entries: List[HookEntry]) -> Dict[str, List[str]]:
    """
    Group hook commands by event name.

    Args:
        entries: Loaded hook entries

    Returns:
        Dictionary of event name -> commands, in declaration order
    """
    result: Dict[str, List[str]] = {}
    for entry in entries:
        result.setdefault(entry.event, []).append(entry.command)
    return result

"""
Scenario loading.

A scenario is an ordered list of regex -> message rules:

    {"responses": [{"pattern": "^hello", "message": "Hi there!"}]}
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from .errors import ConfigError
from .logger import logger


@dataclass(frozen=True)
class ScenarioResponse:
    """A single canned response."""
    pattern: str
    message: str


DEFAULT_RESPONSE = "[mock-response]"

# Used when no scenario file is given.
DEFAULT_RESPONSES = [ScenarioResponse(pattern=".*", message=DEFAULT_RESPONSE)]


def load_scenario_file(path: Union[str, Path]) -> List[ScenarioResponse]:
    """
    Load and validate a scenario file.

    Args:
        path: Path to the JSON scenario file

    Returns:
        Responses in file order

    Raises:
        ConfigError: If the file is unreadable, not JSON, or structurally invalid
    """
    try:
        content = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Invalid scenario file: cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid scenario file: {path} is not valid JSON: {e}") from e

    raw_responses = content.get("responses") if isinstance(content, dict) else None
    if not isinstance(raw_responses, list):
        raise ConfigError("Invalid scenario file: missing 'responses' array")

    responses = []
    for raw in raw_responses:
        if (
            not isinstance(raw, dict)
            or not isinstance(raw.get("pattern"), str)
            or not isinstance(raw.get("message"), str)
        ):
            raise ConfigError(
                "Invalid scenario response: each entry must have 'pattern' and 'message' strings"
            )
        responses.append(ScenarioResponse(pattern=raw["pattern"], message=raw["message"]))

    logger.debug(f"[scenario] Loaded {len(responses)} response(s) from {path}")
    return responses

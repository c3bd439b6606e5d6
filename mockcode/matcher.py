"""First-match-wins regex matching of prompts against a scenario."""

import re
from typing import List

from .scenario import ScenarioResponse
from .logger import logger

NO_MATCH = "[no-match-found]"


def match(text: str, responses: List[ScenarioResponse]) -> str:
    """
    Find the response for a prompt.

    Patterns are searched anywhere in the text (anchor with ^/$ as needed).
    Invalid patterns are skipped.

    Returns:
        The message of the first matching response, or NO_MATCH
    """
    for response in responses:
        try:
            regex = re.compile(response.pattern)
        except re.error as e:
            logger.debug(f"[scenario] Skipping invalid pattern {response.pattern!r}: {e}")
            continue

        if regex.search(text):
            return response.message

    return NO_MATCH

"""Decide whether an incoming message asks for a forecast, and for where."""

import re

# e.g. "The weather in Los Angeles, CA is..." or "The forecast for Boston.."
PHRASE_REGEX = re.compile(
    r"^\s*The\s+(?:weather|forecast)\s+(?:for|in)\s+(.*?)(?:\s+is)?\s?\.{2,}",
    re.IGNORECASE,
)

COMMANDS = ["weather", "forecast", "subscribe", "unsubscribe"]


def match_phrase(content: str) -> str | None:
    """Return the place name from a weather phrase, or None if it isn't one."""
    match = PHRASE_REGEX.match(content)
    if not match:
        return None
    place = match.group(1).strip()
    return place or None


def parse_command(content: str) -> tuple[str | None, str]:
    """Parse command and argument from user input.

    Returns:
        Tuple of (command, argument). The command is None when the text
        starts with none of the known commands.

    """
    content_lower = content.lower().strip()

    for cmd in COMMANDS:
        if content_lower == cmd:
            return cmd, ""
        if content_lower.startswith(cmd + " "):
            argument = content.strip()[len(cmd) :].strip()
            return cmd, argument

    return None, content.strip()

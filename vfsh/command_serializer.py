"""Render a command name and options back into a command line."""

import json
from typing import Any, Mapping

from vfsh.command_parser import OPTION_PREFIX


def render_value(value: Any) -> str:
    """Render an option value as command-line text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def serialize(name: str, options: Mapping[str, Any]) -> str:
    """
    Serialize a command name and its options.

    Flags (``True``) are written without a value. Values are not re-quoted,
    so a value containing whitespace will not parse back to the same option.

    Args:
        name: Command name
        options: Option map in the order options should appear

    Returns:
        Space-joined command line
    """
    tokens = [name]
    for key, value in options.items():
        tokens.append(f"{OPTION_PREFIX}{key}")
        if value is not True:
            tokens.append(render_value(value))
    return " ".join(tokens)

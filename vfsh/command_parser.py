"""Command parser for vfsh command lines."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from vfsh.tokenizer import tokenize

OPTION_PREFIX = "--"


@dataclass
class ParsedCommand:
    """Represents a parsed command."""
    name: str
    positionals: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    def as_list(self) -> List[Any]:
        """Return the flat ``[name, *positionals, options]`` form."""
        return [self.name, *self.positionals, self.options]

    @classmethod
    def from_list(cls, items: Sequence[Any]) -> "ParsedCommand":
        """Build a command from its flat form; the last item must be the option map."""
        if not items or not isinstance(items[-1], dict):
            raise ValueError("Flat command must end with an option map")
        *params, options = items
        name = params[0] if params else ""
        return cls(name=name, positionals=list(params[1:]), options=dict(options))


def is_option(token: str) -> bool:
    """Check if a token names an option."""
    return token.startswith(OPTION_PREFIX)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON literals
    raise ValueError(name)


def decode_value(token: str) -> Any:
    """Decode an option value as a JSON literal, keeping the raw text otherwise."""
    try:
        return json.loads(token, parse_constant=_reject_constant)
    except ValueError:
        return token


def parse(tokens: Sequence[str]) -> ParsedCommand:
    """
    Parse tokens into a command.

    ``--name value`` pairs become options; a ``--name`` with nothing after it,
    or followed by another option, is a flag set to ``True``. Every other
    token is positional and the first positional is the command name.

    Args:
        tokens: Tokens produced by the tokenizer

    Returns:
        ParsedCommand for the tokens
    """
    params: List[str] = []
    options: Dict[str, Any] = {}

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if is_option(token):
            name = token[len(OPTION_PREFIX):]
            if index == len(tokens) or is_option(tokens[index]):
                options[name] = True
            else:
                options[name] = decode_value(tokens[index])
                index += 1
        else:
            params.append(token)

    name = params[0] if params else ""
    return ParsedCommand(name=name, positionals=params[1:], options=options)


def parse_line(line: str) -> ParsedCommand:
    """Tokenize and parse a raw input line."""
    return parse(tokenize(line))

"""vfsh - shell for a remote virtual filesystem."""

__version__ = "0.1.0"

from vfsh.tokenizer import tokenize
from vfsh.command_parser import ParsedCommand, parse, parse_line
from vfsh.command_serializer import serialize
from vfsh.history import HistoryNavigator
from vfsh.errors import CommandUsageError, RemoteError, ShellError, UnterminatedQuote

__all__ = [
    "CommandUsageError",
    "HistoryNavigator",
    "ParsedCommand",
    "RemoteError",
    "ShellError",
    "UnterminatedQuote",
    "parse",
    "parse_line",
    "serialize",
    "tokenize",
    "__version__",
]

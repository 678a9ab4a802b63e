"""Tokenizer for vfsh command lines."""

from typing import List

from vfsh.errors import UnterminatedQuote

QUOTES = ("'", '"')
SPACE = " "
ESCAPE = "\\"


def _read_whitespace(source: str, offset: int) -> int:
    """Skip a run of spaces and return the offset after it."""
    while offset < len(source) and source[offset] == SPACE:
        offset += 1
    return offset


def _read_bare(source: str, offset: int, tokens: List[str]) -> int:
    """Read a bare token up to the next space."""
    end = source.find(SPACE, offset)
    if end == -1:
        end = len(source)
    tokens.append(source[offset:end])
    return end


def _read_quoted(source: str, start: int, tokens: List[str]) -> int:
    """
    Read a quoted token starting at the opening quote.

    A backslash and the character after it are both copied into the token
    unchanged; the closing quote is consumed but not kept.

    Args:
        source: Trimmed input line
        start: Offset of the opening quote
        tokens: Token list to append to

    Returns:
        Offset just past the closing quote
    """
    quote = source[start]
    end = start + 1
    chars = []
    while end < len(source):
        char = source[end]
        if char == quote:
            tokens.append("".join(chars))
            return end + 1
        if char == ESCAPE:
            chars.append(source[end:end + 2])
            end += 2
        else:
            chars.append(char)
            end += 1
    raise UnterminatedQuote(source[start:end])


def tokenize(line: str) -> List[str]:
    """
    Split a command line into tokens.

    Args:
        line: Raw input line

    Returns:
        Tokens in input order

    Raises:
        UnterminatedQuote: If a quoted token is never closed
    """
    source = line.strip()
    tokens: List[str] = []
    offset = 0
    while offset < len(source):
        char = source[offset]
        if char in QUOTES:
            offset = _read_quoted(source, offset, tokens)
        elif char == SPACE:
            offset = _read_whitespace(source, offset)
        else:
            offset = _read_bare(source, offset, tokens)
    return tokens

"""Exceptions raised by the vfsh command pipeline."""

from typing import Optional


class ShellError(Exception):
    """Base class for errors surfaced to the user as a failed submission."""


class UnterminatedQuote(ShellError, ValueError):
    """A quoted token was opened but never closed."""

    def __init__(self, fragment: str):
        self.fragment = fragment
        super().__init__(f"String was not quoted properly: {fragment}")


class CommandUsageError(ShellError):
    """Positional arguments did not fit the command's declared slots."""

    def __init__(self, message: str, usage: str):
        self.usage = usage
        super().__init__(f"{message}. Usage: {usage}")


class RemoteError(ShellError):
    """The remote filesystem rejected an operation."""

    def __init__(self, status: int, reason: str, path: Optional[str] = None):
        self.status = status
        self.reason = reason
        self.path = path
        super().__init__(reason or f"Remote operation failed with status {status}")

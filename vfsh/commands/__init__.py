"""Command registry, dispatcher and built-in filesystem commands."""

from vfsh.commands.registry import CommandDescriptor, CommandRegistry, HelpCommand, dispatch
from vfsh.commands.handlers import FileCommands, build_registry, resolve_path

__all__ = [
    "CommandDescriptor",
    "CommandRegistry",
    "FileCommands",
    "HelpCommand",
    "build_registry",
    "dispatch",
    "resolve_path",
]

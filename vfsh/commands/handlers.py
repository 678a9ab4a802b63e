"""Filesystem command handlers."""

import json
import logging
import posixpath
from typing import Any, Dict, List, Optional

from rich.markup import escape

from vfsh.client import RemoteFileSystem
from vfsh.commands.registry import CommandDescriptor, CommandRegistry, help_descriptor

logger = logging.getLogger(__name__)

ROOT = "/"

ENTRY_STYLES = {
    "directory": "bold cyan",
    "file": "white",
}


def resolve_path(base: str, path: str) -> str:
    """
    Resolve a path against a working directory, URL style.

    Absolute paths replace the base, ``.`` and ``..`` are collapsed without
    climbing above the root, and a trailing slash (or a final ``.``/``..``
    segment) keeps the result a directory path.

    Args:
        base: Working directory, ending in ``/``
        path: Path typed by the user

    Returns:
        Absolute path
    """
    if not path:
        return base

    resolved = posixpath.normpath(posixpath.join(base, path))
    if resolved.startswith("//"):
        resolved = ROOT + resolved.lstrip("/")

    last = path.rsplit("/", 1)[-1]
    if (path.endswith("/") or last in (".", "..")) and not resolved.endswith("/"):
        resolved += "/"
    return resolved


class FileCommands:
    """Handler-set for the remote filesystem; owns the working path."""

    def __init__(self, remote: RemoteFileSystem, work_path: str = ROOT):
        self.remote = remote
        self.work_path = resolve_path(ROOT, work_path)
        if not self.work_path.endswith("/"):
            self.work_path += "/"

    def resolve(self, path: str = "") -> str:
        return resolve_path(self.work_path, path)

    def pwd(self) -> str:
        return escape(self.work_path)

    def cd(self, path: str = ROOT) -> str:
        target = self.resolve(path)
        self.work_path = target if target.endswith("/") else target + "/"
        logger.debug("Working path is now %s", self.work_path)
        return escape(self.work_path)

    async def ls(self, path: str = "") -> str:
        target = self.resolve(path)
        entries = await self.remote.list(target)
        lines = []
        for entry in entries:
            style = ENTRY_STYLES.get(entry.type, "white")
            state = "open" if entry.open else "closed"
            lines.append(f"  [{style}]{escape(entry.path)}[/{style}] [dim]({escape(entry.type)}, {state})[/dim]")
        if not lines:
            lines.append("  [dim](empty)[/dim]")
        return f"[bold]Listing {escape(target)}[/bold]\n" + "\n".join(lines)

    async def stat(self, path: str = "") -> str:
        target = self.resolve(path)
        info = await self.remote.info(target)
        return f"[bold]Stat {escape(target)}[/bold]\n{escape(json.dumps(info, indent=2))}"

    async def open(self, path: str, options: Optional[Dict[str, Any]] = None) -> str:
        target = self.resolve(path)
        await self.remote.open(target, options)
        return f"[bold]Opened {escape(target)}[/bold]"

    async def read(self, path: str, options: Optional[Dict[str, Any]] = None) -> str:
        target = self.resolve(path)
        text = await self.remote.read(target, options)
        return f"[bold]File {escape(target)}[/bold]\n{escape(text)}"

    async def cat(self, path: str) -> str:
        return await self.read(path, {})

    async def write(self, path: str, content: str, options: Optional[Dict[str, Any]] = None) -> str:
        target = self.resolve(path)
        await self.remote.write(target, content, options)
        return f"[bold]Wrote {escape(target)}[/bold]"

    async def rm(self, path: str, options: Optional[Dict[str, Any]] = None) -> str:
        target = self.resolve(path)
        await self.remote.delete(target, options)
        return f"[bold]Deleted {escape(target)}[/bold]"

    def descriptors(self) -> List[CommandDescriptor]:
        """Commands provided by this handler-set, in help order."""
        return [
            CommandDescriptor("pwd", "Show the working path", self.pwd),
            CommandDescriptor("cd", "Change the working path", self.cd, ("path",)),
            CommandDescriptor("ls", "List a directory", self.ls, ("path",)),
            CommandDescriptor("stat", "Show resource metadata", self.stat, ("path",)),
            CommandDescriptor("open", "Open a resource", self.open, ("path",), 1, None),
            CommandDescriptor("read", "Read a file", self.read, ("path",), 1, None),
            CommandDescriptor("cat", "Print a file", self.cat, ("path",), 1),
            CommandDescriptor("write", "Write content to a file", self.write, ("path", "content"), 2, None),
            CommandDescriptor("rm", "Delete a resource", self.rm, ("path",), 1, None),
        ]


def build_registry(commands: FileCommands) -> CommandRegistry:
    """Register the handler-set's commands plus help, then freeze."""
    registry = CommandRegistry()
    for descriptor in commands.descriptors():
        registry.register(descriptor)
    registry.register(help_descriptor(registry))
    return registry.freeze()

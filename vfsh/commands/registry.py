"""Command registry and dispatcher."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from rich.markup import escape

from vfsh.command_parser import ParsedCommand
from vfsh.errors import CommandUsageError

logger = logging.getLogger(__name__)

HELP_COMMAND = "help"


@dataclass(frozen=True)
class CommandDescriptor:
    """Declares a command: its handler and the arguments it reads.

    Positional arguments are bound to the handler by the names in
    ``arguments``; the first ``required`` of them must be supplied. Surplus
    positionals go to the keyword named by ``rest`` when it is set. Options
    reach the handler as an ``options`` keyword holding only the declared
    keys, or every key when ``options`` is ``None``.
    """
    name: str
    summary: str
    handler: Callable[..., Any]
    arguments: Tuple[str, ...] = ()
    required: int = 0
    options: Optional[Tuple[str, ...]] = ()
    rest: Optional[str] = None

    @property
    def usage(self) -> str:
        parts = [self.name]
        for index, argument in enumerate(self.arguments):
            parts.append(f"<{argument}>" if index < self.required else f"[{argument}]")
        if self.rest:
            parts.append(f"[{self.rest}...]")
        if self.options is None:
            parts.append("[--option value ...]")
        else:
            parts.extend(f"[--{key} value]" for key in self.options)
        return " ".join(parts)

    def bind(self, positionals: Sequence[str], options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Map parsed arguments onto handler keywords.

        Args:
            positionals: Positional arguments after the command name
            options: Parsed option map

        Returns:
            Keyword arguments for the handler

        Raises:
            CommandUsageError: If required arguments are missing or too many were given
        """
        if len(positionals) < self.required:
            missing = ", ".join(self.arguments[len(positionals):self.required])
            raise CommandUsageError(f"{self.name}: missing {missing}", self.usage)
        if len(positionals) > len(self.arguments) and not self.rest:
            raise CommandUsageError(
                f"{self.name}: expected at most {len(self.arguments)} argument(s), got {len(positionals)}",
                self.usage,
            )

        kwargs: Dict[str, Any] = dict(zip(self.arguments, positionals))
        if self.rest:
            kwargs[self.rest] = list(positionals[len(self.arguments):])

        if self.options is None:
            kwargs["options"] = dict(options)
        else:
            ignored = [key for key in options if key not in self.options]
            if ignored:
                logger.debug("%s ignores options: %s", self.name, ", ".join(ignored))
            if self.options:
                kwargs["options"] = {key: value for key, value in options.items() if key in self.options}
        return kwargs


class CommandRegistry:
    """Maps command names to descriptors, with a fallback help command."""

    def __init__(self, fallback: str = HELP_COMMAND):
        self._descriptors: Dict[str, CommandDescriptor] = {}
        self._fallback = fallback
        self._frozen = False

    def register(self, descriptor: CommandDescriptor) -> "CommandRegistry":
        """Add a command; only allowed before the registry is frozen."""
        if self._frozen:
            raise RuntimeError("Command registry is frozen")
        if descriptor.name in self._descriptors:
            raise ValueError(f"Command already registered: {descriptor.name}")
        self._descriptors[descriptor.name] = descriptor
        return self

    def freeze(self) -> "CommandRegistry":
        if self._fallback not in self._descriptors:
            raise ValueError(f"Fallback command not registered: {self._fallback}")
        self._frozen = True
        return self

    def get(self, name: str) -> Optional[CommandDescriptor]:
        return self._descriptors.get(name)

    @property
    def fallback(self) -> CommandDescriptor:
        return self._descriptors[self._fallback]

    @property
    def names(self) -> List[str]:
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)


class HelpCommand:
    """Lists registered commands; also receives unknown command names."""

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def __call__(self, command: Optional[str] = None, args: Iterable[str] = ()) -> str:
        if command:
            descriptor = self.registry.get(command)
            if descriptor is not None:
                return (
                    f"[bold]{escape(descriptor.usage)}[/bold]\n"
                    f"  {escape(descriptor.summary)}"
                )
            result = f"command [bold]{escape(command)}[/bold] not found.\n"
        else:
            result = ""

        width = max((len(name) for name in self.registry.names), default=0)
        lines = [
            f"  [cyan]{escape(descriptor.name.ljust(width))}[/cyan]  {escape(descriptor.summary)}"
            for descriptor in self.registry
        ]
        return result + "I know commands:\n" + "\n".join(lines)


def help_descriptor(registry: CommandRegistry) -> CommandDescriptor:
    """Build the fallback help command for a registry."""
    return CommandDescriptor(
        name=HELP_COMMAND,
        summary="List commands, or show usage for one command",
        handler=HelpCommand(registry),
        arguments=("command",),
        rest="args",
    )


async def dispatch(registry: CommandRegistry, command: ParsedCommand) -> str:
    """
    Run a parsed command through the registry.

    Unknown names go to the fallback help command with the attempted name
    as its first argument. Handler errors are not caught here.

    Args:
        registry: Registry to look the command up in
        command: Parsed command

    Returns:
        Render-ready markup produced by the handler
    """
    descriptor = registry.get(command.name)
    positionals = list(command.positionals)
    if descriptor is None:
        logger.debug("Unknown command %r, falling back to %s", command.name, registry.fallback.name)
        descriptor = registry.fallback
        positionals = [command.name, *positionals]

    kwargs = descriptor.bind(positionals, command.options)
    logger.debug("Dispatching %s with %s", descriptor.name, kwargs)
    result = descriptor.handler(**kwargs)
    if inspect.isawaitable(result):
        result = await result
    return "" if result is None else str(result)

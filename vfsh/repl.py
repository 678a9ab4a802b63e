"""Interactive REPL for the remote filesystem shell."""

import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.document import Document
from prompt_toolkit.filters import has_completions
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.patch_stdout import patch_stdout

from vfsh.commands.handlers import FileCommands
from vfsh.config.manager import ShellConfig
from vfsh.formatter import Formatter
from vfsh.history import HistoryNavigator
from vfsh.shell import Shell, SubmissionQueue

logger = logging.getLogger(__name__)

EXIT_WORDS = ("exit", "quit")


def history_key_bindings(history: HistoryNavigator) -> KeyBindings:
    """
    Key bindings that browse the shell history.

    Up and Down move the history cursor unless the completion menu is open.
    Reaching live input leaves whatever the user was typing untouched.
    Escape-Enter records the current line without running it.

    Args:
        history: Navigator shared with the shell

    Returns:
        KeyBindings for the prompt session
    """
    bindings = KeyBindings()

    def show(buffer, entry):
        if entry is not None:
            buffer.document = Document(entry, cursor_position=len(entry))

    @bindings.add("up", filter=~has_completions)
    def _previous(event):
        show(event.current_buffer, history.previous())

    @bindings.add("down", filter=~has_completions)
    def _next(event):
        show(event.current_buffer, history.next())

    @bindings.add("escape", "enter")
    def _record(event):
        buffer = event.current_buffer
        history.append(buffer.text)
        buffer.reset()

    return bindings


class REPL:
    """Interactive Read-Eval-Print Loop over a shell."""

    def __init__(self, shell: Shell, commands: FileCommands, formatter: Formatter, config: ShellConfig):
        """Initialize REPL."""
        self.shell = shell
        self.commands = commands
        self.formatter = formatter
        self.config = config
        self.queue = SubmissionQueue(shell, formatter.print_result, ordered=config.ordered)

        completer = WordCompleter(shell.registry.names + list(EXIT_WORDS), sentence=True)
        self.session_prompt = PromptSession(
            completer=completer,
            history=InMemoryHistory(),
            key_bindings=history_key_bindings(shell.history),
            multiline=False,
        )

    async def run(self) -> None:
        """Run the REPL until exit or end of input."""
        self.formatter.print_status(self.config.base_url, self.commands.work_path)
        self.queue.start()

        with patch_stdout():
            while True:
                try:
                    line = await self.session_prompt.prompt_async(self.config.prompt)
                except KeyboardInterrupt:
                    self.formatter.print_info("Interrupted. Type exit to quit.")
                    continue
                except EOFError:
                    break

                if not line.strip():
                    continue
                if line.strip().lower() in EXIT_WORDS:
                    break

                sequence = self.queue.submit(line)
                logger.debug("Submitted #%d: %s", sequence, line)

            await self.queue.close()

        self.formatter.console.print("\n[bold blue]Goodbye![/bold blue]")

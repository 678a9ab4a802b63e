"""Rich output formatting for vfsh."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from vfsh.shell import RenderResult


class Formatter:
    """Renders submitted lines and their results."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize formatter."""
        self.console = console or Console(emoji=False)

    def print_input(self, line: str) -> None:
        """Echo a submitted line."""
        self.console.print(f"[dim]>[/dim] {escape(line)}", emoji=False)

    def print_result(self, result: RenderResult) -> None:
        """Print a render result; errors are styled and never parsed as markup."""
        if result.error:
            self.print_error(result.markup)
        elif result.markup:
            self.console.print(result.markup, emoji=False)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}", emoji=False)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[bold green]✓[/bold green] {escape(message)}", emoji=False)

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[bold blue]Info:[/bold blue] {escape(message)}", emoji=False)

    def print_status(self, base_url: str, work_path: str) -> None:
        self.console.print("[bold blue]vfsh[/bold blue] - Type help for commands.", emoji=False)
        self.console.print(f"Remote: [green]{escape(base_url)}[/green]", emoji=False)
        self.console.print(f"Directory: {escape(work_path)}\n", emoji=False)

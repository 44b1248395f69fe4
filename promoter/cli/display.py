"""Console output for CLI commands, using rich."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class RunDisplay:
    """Plain, non-interactive console output."""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def status(self, message: str):
        self.console.print(f"[dim]→[/dim] {message}")

    def success(self, message: str):
        self.console.print(f"[green]{escape(message)}[/green]")

    def error(self, message: str):
        self.console.print(f"[red]{escape(message)}[/red]", highlight=False)

    def section(self, title: str):
        self.console.print()
        self.console.rule(f"[bold cyan]{title}[/bold cyan]")

    def summary(self, data: dict):
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="dim")
        table.add_column()
        for key, value in data.items():
            table.add_row(f"{key}:", escape(str(value)))
        self.console.print(table)

"""Global console instance for CLI output"""

from rich.console import Console


class MathRevealConsole(Console):
    """A slightly enriched console for mathreveal"""

    def error(self, message: str) -> None:
        """Print an error message."""
        self.print(f"[red]{message}[/red]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.print(f"[yellow]{message}[/yellow]")


console = MathRevealConsole()
consoleErr = MathRevealConsole(stderr=True)
consolePlain = MathRevealConsole(highlight=False)

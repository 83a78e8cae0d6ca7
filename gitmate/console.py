"""Terminal output for GitMate, rendered with rich."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from . import __author__, __version__


class GitMateConsole:
    """Human-readable output on stdout. Log records go to stderr separately."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def print_header(self, title: str, clear: bool = True) -> None:
        if clear:
            self.console.clear()

        body = Text()
        body.append(f"{title}\n", style="bold yellow")
        body.append(f"Version: {__version__}\n", style="red")
        body.append(f"Author: {__author__}", style="red")
        self.console.print(Panel(body, border_style="blue", expand=False))

        self.console.print(
            "This script will do the following: "
            "\n1. Fetch and update all remotes for this repository"
            "\n2. Fetch and merge this repository's main branches\n"
        )

    def print_current_branch(self, branch_name: str) -> None:
        self.console.print(f'You are currently on branch: "{branch_name}"\n')

    def print_section(self, title: str, output: str) -> None:
        """Print command output between two titled rules."""
        self.console.print()
        self.console.print(Rule(title, style="yellow"))
        self.console.print(Text(output.rstrip("\n")))
        self.console.print(Rule(title, style="yellow"))

    def print_message(self, message: str, style: Optional[str] = None) -> None:
        self.console.print(Text(message, style=style or ""))

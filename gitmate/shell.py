"""Shell command execution for GitMate."""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


@dataclass
class ShellResult:
    """Result of a shell command."""
    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def error_message(self) -> str:
        """Best single description of why the command failed."""
        text = self.stderr.strip() or self.stdout.strip()
        if text:
            return text
        return f"Command failed with exit code {self.returncode}: {self.command}"


class ShellExecutor:
    """Runs external commands in the repository directory.

    There is no timeout: a hanging command blocks the caller until it exits.
    """

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = cwd
        self.logger = logging.getLogger('gitmate.shell')

    def run(self, command: Union[str, List[str]]) -> ShellResult:
        """
        Run a command and capture its output.

        Args:
            command: Command string (split with shlex) or argument list

        Returns:
            ShellResult; a command that could not be started is reported as a
            failed result with returncode 127 instead of raising.
        """
        if isinstance(command, str):
            args = shlex.split(command)
            command_str = command
        else:
            args = list(command)
            command_str = shlex.join(args)

        self.logger.debug(f"Running command: {command_str}", extra={'operation': 'shell'})

        try:
            result = subprocess.run(
                args,
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                text=True
            )
        except (FileNotFoundError, PermissionError) as e:
            self.logger.debug(f"Could not start command '{command_str}': {e}")
            return ShellResult(command=command_str, returncode=127, stdout="", stderr=str(e))

        if result.returncode != 0:
            self.logger.debug(
                f"Command '{command_str}' exited with {result.returncode}: {result.stderr.strip()}"
            )

        return ShellResult(
            command=command_str,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr
        )

"""
External Command Runner

Executes shell commands for the simulator and SDK tooling.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import ExternalCommandError


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""
    command: str
    stdout: str
    stderr: str = ""
    returncode: int = 0


class CommandRunner:
    """
    Runs one shell command at a time and captures its output.

    There is no retry and no timeout. A non-zero exit status or a failure
    to start the process raises ExternalCommandError.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    async def run(self, command: str) -> CommandResult:
        """
        Execute a command and wait for it to finish.

        Args:
            command: Full shell command line

        Returns:
            CommandResult with decoded stdout and stderr
        """
        self.logger.debug("Running: %s", command)
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            out, err = await proc.communicate()
        except OSError as e:
            raise ExternalCommandError(command, str(e)) from e

        stdout = out.decode("utf-8", errors="replace")
        stderr = err.decode("utf-8", errors="replace")

        if proc.returncode != 0:
            message = stderr.strip() or stdout.strip() or f"exit status {proc.returncode}"
            self.logger.debug("Command failed (%s): %s", proc.returncode, message)
            raise ExternalCommandError(
                command,
                message,
                returncode=proc.returncode,
                stderr=stderr,
            )

        return CommandResult(
            command=command,
            stdout=stdout,
            stderr=stderr,
            returncode=proc.returncode,
        )

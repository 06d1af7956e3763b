"""
create_express_app.runner - External Command Execution
======================================================

The installer never calls subprocess directly. It talks to a
CommandRunner, which lets tests substitute a fake that records calls
and fails on demand without spawning npm or git.

    runner.run("npm", ["install", "mongoose"], cwd=project_path)

Runners raise CommandError when a program is missing or exits non-zero.
Commands run to completion with no timeout.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Outcome of a finished command.

    Attributes
    ----------
    command : str
        Program that was run.

    args : list[str]
        Arguments passed to the program.

    returncode : int
        Exit status.

    stdout, stderr : str
        Captured output.
    """

    command: str
    args: list[str] = field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def display(self) -> str:
        """The command line as it would be typed in a shell."""
        return shlex.join([self.command, *self.args])

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandError(RuntimeError):
    """
    Raised when an external command cannot be started or fails.

    Attributes
    ----------
    command_line : str
        The command as typed in a shell.

    result : CommandResult | None
        The finished command, or None if it never started.
    """

    def __init__(
        self,
        command_line: str,
        result: CommandResult | None = None,
        reason: str | None = None,
    ) -> None:
        self.command_line = command_line
        self.result = result

        if reason is None and result is not None:
            reason = f"exited with status {result.returncode}"
            detail = (result.stderr or result.stdout).strip()
            if detail:
                # Only the tail; npm error output runs to hundreds of lines
                tail = "\n".join(detail.splitlines()[-10:])
                reason = f"{reason}\n{tail}"

        super().__init__(f"Command '{command_line}' {reason or 'failed'}")


class CommandRunner(Protocol):
    """Anything that can run a program in a working directory."""

    def run(self, command: str, args: Sequence[str], cwd: Path) -> CommandResult: ...


class SubprocessRunner:
    """
    CommandRunner backed by ``subprocess.run``.

    Output is captured rather than streamed so it does not interleave
    with the console spinners. Undecodable bytes are replaced. Any
    OSError while starting the program is raised as CommandError.
    """

    def run(self, command: str, args: Sequence[str], cwd: Path) -> CommandResult:
        argv = [command, *args]
        logger.debug("Running %s in %s", shlex.join(argv), cwd)

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandError(
                shlex.join(argv),
                reason=f"could not be started: {command} was not found",
            ) from e
        except OSError as e:
            raise CommandError(
                shlex.join(argv),
                reason=f"could not be started: {e}",
            ) from e

        result = CommandResult(
            command=command,
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if not result.ok:
            logger.debug("%s exited with %d", result.display, result.returncode)
            raise CommandError(result.display, result)

        return result

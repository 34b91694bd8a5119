# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Shell execution of rendered action commands.

A rendered command is one shell string ('git checkout develop && git merge ...')
run in the working directory. A failed step is reported verbatim; there is no
retry and no rollback of steps that already ran.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from gitf.errors import ExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Captured output of a successful command."""

    stdout: str
    stderr: str


def execute(command: str, cwd: Path) -> ExecutionResult:
    """Run a command string through the shell.

    Args:
        command: The shell command to run.
        cwd: Working directory for the command.

    Returns:
        ExecutionResult with the captured output.

    Raises:
        ExecutionError: If the shell cannot be started or the command exits non-zero.
    """
    logger.debug("exec: %s", command)
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ExecutionError(command, -1, stderr=str(e)) from e

    if proc.returncode != 0:
        logger.error("Command failed (exit %d): %s", proc.returncode, command)
        raise ExecutionError(command, proc.returncode, proc.stdout, proc.stderr)

    return ExecutionResult(stdout=proc.stdout, stderr=proc.stderr)

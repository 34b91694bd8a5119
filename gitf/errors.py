# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Error kinds raised by the gitf workflow.

Everything raised on purpose derives from GitfError so the command-line
front-end can report it with a single handler.
"""

from __future__ import annotations


class GitfError(Exception):
    """Base class for workflow errors."""


class PreconditionError(GitfError):
    """The working directory is not usable (no repository, base branch or manifest)."""


class ValidationError(GitfError):
    """An action argument is missing, malformed or names a branch that does not exist."""


class ResolutionError(GitfError):
    """No tag qualifies and the manifest holds no usable version."""


class ExecutionError(GitfError):
    """A command exited non-zero.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    def __init__(self, command: str, returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(stderr.strip() or f"'{command}' failed (exit {returncode})")

# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Git wrapper for branch and tag queries.

References:
    - git-branch: https://git-scm.com/docs/git-branch
    - git-tag: https://git-scm.com/docs/git-tag
    - git-rev-parse: https://git-scm.com/docs/git-rev-parse
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gitf.errors import ExecutionError

logger = logging.getLogger(__name__)


class GitRepository:
    """Wrapper around the git executable for one working directory.

    Commands run with the working directory as cwd; a non-zero exit raises
    ExecutionError carrying git's stderr.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the repository wrapper.

        Args:
            path: Path to the working directory.
        """
        self.path = path

    def is_repository(self) -> bool:
        """Check if the working directory is inside a git work tree.

        References:
            - git rev-parse --is-inside-work-tree: https://git-scm.com/docs/git-rev-parse
        """
        try:
            return self._run(["rev-parse", "--is-inside-work-tree"]).strip() == "true"
        except ExecutionError:
            return False

    def list_branches(self) -> list[str]:
        """List local branch names.

        Returns:
            Branch names without the refs/heads/ prefix.
        """
        output = self._run(["branch", "--list", "--format=%(refname:short)"])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def branch_exists(self, branch_name: str) -> bool:
        """Check if a local branch exists.

        Args:
            branch_name: Name of the branch (e.g., 'release-1.2').
        """
        return branch_name in self.list_branches()

    def list_tags(self) -> list[str]:
        """List all tag names in the repository."""
        output = self._run(["tag", "--list"])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def checkout(self, branch_name: str) -> None:
        """Check out an existing branch.

        Raises:
            ExecutionError: If the checkout fails (unknown branch, local changes, ...).
        """
        logger.info("Checking out '%s'", branch_name)
        self._run(["checkout", branch_name])

    def create_branch(self, branch_name: str, start_point: str) -> None:
        """Create a branch from a start point and check it out."""
        logger.info("Creating branch '%s' from '%s'", branch_name, start_point)
        self._run(["checkout", "-b", branch_name, start_point])

    def _run(self, args: list[str]) -> str:
        """Run a git command in this repository and return its stdout."""
        cmd = ["git", *args]
        logger.debug("git %s", " ".join(args))
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self.path),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ExecutionError(" ".join(cmd), -1, stderr=str(e)) from e

        if proc.returncode != 0:
            raise ExecutionError(" ".join(cmd), proc.returncode, proc.stdout, proc.stderr)
        return proc.stdout

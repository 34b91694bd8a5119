# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Action dispatch for the feature/release/hotfix workflow.

Gitf is the programmatic handle. Each run() call goes through the same
sequence of fallible steps:

    look up action -> validate -> resolve version -> render
        -> checkout / write manifest -> execute

A failing step raises and the later steps never run.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from gitf.actions import ACTIONS, Action, ActionContext
from gitf.branch import DEVELOP_BRANCH
from gitf.errors import PreconditionError, ValidationError
from gitf.executor import execute
from gitf.git import GitRepository
from gitf.manifest import DEFAULT_MANIFEST, MISSING_MANIFEST_MESSAGE, Manifest
from gitf.tags import resolve_version
from gitf.version import Version

logger = logging.getLogger(__name__)

DEFAULT_BASE_BRANCH = "master"

MISSING_GIT_MESSAGE = 'Please run "git init" to create a repository.'
MISSING_BASE_MESSAGE = 'Please run "git add . && git commit -a".'

# ANSI: clear the screen and move the cursor home
CLEAR_SCREEN = "\x1b[2J\x1b[0;0H"


@dataclass
class ActionOutputs:
    """Outcome of one action run."""

    action: str
    command: str = ""
    version: str = ""
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False


class Gitf:
    """Feature/release/hotfix workflow for one working directory.

    Args:
        path: Working directory (default: current directory).
        clear_screen: Clear the terminal before each action runs.
        base_branch: Branch develop is created from when it is missing.
        manifest: Manifest file name, relative to path.
        dry_run: Render and log commands without checking out, writing or executing.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        clear_screen: bool = False,
        base_branch: str = DEFAULT_BASE_BRANCH,
        manifest: str = DEFAULT_MANIFEST,
        dry_run: bool = False,
    ) -> None:
        self.path = Path(path) if path is not None else Path.cwd()
        self.clear_screen = clear_screen
        self.base_branch = base_branch
        self.dry_run = dry_run
        self.repo = GitRepository(self.path)
        self.manifest = Manifest(self.path / manifest)
        self.context = ActionContext(repo=self.repo, manifest=self.manifest)
        self._ready = False

    def ensure_ready(self) -> None:
        """Check that the working directory can host the workflow.

        Creates develop from the base branch when it does not exist yet.
        run() calls this once per handle before the first action.

        Raises:
            PreconditionError: If the directory is not a git work tree or the
                base branch is missing.
        """
        if not self.repo.is_repository():
            raise PreconditionError(MISSING_GIT_MESSAGE)

        branches = self.repo.list_branches()
        if self.base_branch not in branches:
            raise PreconditionError(MISSING_BASE_MESSAGE)

        if DEVELOP_BRANCH not in branches:
            if self.dry_run:
                logger.info("[DRY-RUN] Would create '%s' from '%s'", DEVELOP_BRANCH, self.base_branch)
            else:
                logger.info("Branch '%s' is missing, creating it from '%s'", DEVELOP_BRANCH, self.base_branch)
                self.repo.create_branch(DEVELOP_BRANCH, self.base_branch)

        self._ready = True

    def get_last_version(self, release_line: str | None = None) -> Version:
        """Resolve the current version, optionally within one release line.

        Raises:
            ValidationError: If release_line is not X.Y.
            ResolutionError: If no tag qualifies and the manifest has no usable version.
        """
        return resolve_version(self.repo, self.manifest.version(), release_line)

    def read_manifest(self) -> dict:
        return self.manifest.read()

    def write_manifest(self, version: Version | str) -> None:
        self.manifest.write_version(str(version))

    def run(self, action_name: str, *args: str) -> ActionOutputs:
        """Run a workflow action.

        Args:
            action_name: One of the names in ACTIONS (e.g., 'create-feature').
            *args: Positional arguments of the action. Missing trailing
                arguments are passed on as empty strings.

        Returns:
            ActionOutputs with the rendered command and its captured output.

        Raises:
            KeyError: If the action name is unknown.
            PreconditionError: If the directory is not ready (see ensure_ready)
                or the action needs a manifest and there is none.
            ValidationError: If the arguments are rejected; nothing has run.
            ResolutionError: If no current version can be found; nothing has run.
            ExecutionError: If checkout or the command fails.
        """
        action = ACTIONS[action_name]
        padded = self._pad_arguments(action, args)

        if not self._ready:
            self.ensure_ready()

        if action.writes_manifest and not self.manifest.exists():
            raise PreconditionError(MISSING_MANIFEST_MESSAGE)

        action.validate(self.context, *padded)
        version = action.resolve(self.context, *padded)
        rendered = action.render(version, *padded)

        outputs = ActionOutputs(
            action=action.name,
            command=rendered.command,
            version=str(rendered.version) if rendered.version is not None else "",
            dry_run=self.dry_run,
        )

        if self.dry_run:
            if rendered.checkout:
                logger.info("[DRY-RUN] Would check out '%s'", rendered.checkout)
            if rendered.manifest_version:
                logger.info(
                    "[DRY-RUN] Would write version %s to %s", rendered.manifest_version, self.manifest.path.name
                )
            logger.info("[DRY-RUN] Would run: %s", rendered.command)
            return outputs

        if self.clear_screen:
            sys.stdout.write(CLEAR_SCREEN)
            sys.stdout.flush()

        if rendered.checkout:
            self.repo.checkout(rendered.checkout)
        if rendered.manifest_version:
            self.manifest.write_version(rendered.manifest_version)

        logger.info("Running %s: %s", action.name, rendered.command)
        result = execute(rendered.command, self.path)
        outputs.stdout = result.stdout
        outputs.stderr = result.stderr
        return outputs

    @staticmethod
    def _pad_arguments(action: Action, args: tuple[str, ...]) -> tuple[str, ...]:
        if len(args) > action.arity:
            raise ValidationError(f"{action.name} takes at most {action.arity} argument(s), got {len(args)}")
        for arg in args:
            if not isinstance(arg, str):
                raise ValidationError(f"{action.name} arguments must be strings, got {type(arg).__name__}")
        return tuple(args) + ("",) * (action.arity - len(args))

# Copyright (c) 2026 Mark Ferrell. MIT License.
"""The workflow actions and the git command sequence each one issues.

Every action is a fixed class with three steps run in order by the
dispatcher:

    validate  check argument shape and, where needed, that a branch exists
    resolve   find the version the action works from (tag history / manifest)
    render    build the shell command from the arguments and resolved version

render is pure. Steps that must happen before the command runs (checking out
a branch, writing the manifest) are returned alongside the command and carried
out by the dispatcher.

References:
    - git-checkout: https://git-scm.com/docs/git-checkout
    - git-merge: https://git-scm.com/docs/git-merge
    - git-filter-branch: https://git-scm.com/docs/git-filter-branch
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

from gitf.branch import (
    DEVELOP_BRANCH,
    feature_branch,
    hotfix_branch,
    parse_hotfix_version,
    release_branch,
    validate_ref_name,
)
from gitf.errors import ValidationError
from gitf.tags import first_release_candidate, resolve_version
from gitf.version import Version, validate_release_line

if TYPE_CHECKING:
    from gitf.git import GitRepository
    from gitf.manifest import Manifest

logger = logging.getLogger(__name__)

RELEASE_LEVELS = ("minor", "major")
DEFAULT_RELEASE_LEVEL = "minor"


@dataclass(frozen=True)
class ActionContext:
    """Repository state an action validates and resolves against."""

    repo: GitRepository
    manifest: Manifest


@dataclass(frozen=True)
class RenderedAction:
    """A rendered action, ready for execution.

    Attributes:
        command: Shell command string handed to the executor.
        checkout: Branch to check out before the manifest is written.
        manifest_version: Version to write into the manifest before running the command.
        version: The version the action produces, if any.
    """

    command: str
    checkout: str | None = None
    manifest_version: str | None = None
    version: Version | None = None


def _chain(*commands: str) -> str:
    return " && ".join(commands)


def _bump_commit(version: Version | str) -> str:
    return f"git commit -a -m {shlex.quote(f'bumped version number to {version}')}"


def _require_branch(ctx: ActionContext, branch_name: str) -> None:
    if not ctx.repo.branch_exists(branch_name):
        logger.warning("Branch '%s' does not exist", branch_name)
        raise ValidationError(f"{branch_name} branch does not exist")


class Action(ABC):
    """A workflow action.

    Subclasses declare their command-line surface as class attributes and
    implement validate/render; resolve is only overridden by actions that
    compute a version.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    arguments: ClassVar[tuple[str, ...]]
    optional_arguments: ClassVar[tuple[str, ...]] = ()
    examples: ClassVar[tuple[str, ...]]
    writes_manifest: ClassVar[bool] = False

    @property
    def arity(self) -> int:
        """Total number of positional arguments, optional ones included."""
        return len(self.arguments) + len(self.optional_arguments)

    @abstractmethod
    def validate(self, ctx: ActionContext, *args: str) -> None:
        """Raise ValidationError if the arguments cannot be acted on."""

    def resolve(self, ctx: ActionContext, *args: str) -> Version | None:
        return None

    @abstractmethod
    def render(self, version: Version | None, *args: str) -> RenderedAction:
        """Build the command for validated arguments and the resolved version."""


class CreateFeature(Action):
    """Create a feature branch from develop."""

    name = "create-feature"
    description = "Create a new feature branch from develop"
    arguments = ("name",)
    examples = ("$ gitf create-feature experiment",)

    def validate(self, ctx: ActionContext, *args: str) -> None:
        (name,) = args
        if not name:
            raise ValidationError("missing name")
        if not validate_ref_name(name):
            raise ValidationError(f"'{name}' is not a valid branch name")

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (name,) = args
        return RenderedAction(
            command=f"git checkout -b {shlex.quote(feature_branch(name))} {DEVELOP_BRANCH}",
        )


class IncorporateFeature(Action):
    """Merge a feature branch into develop and delete it."""

    name = "incorporate-feature"
    description = "Incorporate a finished feature on develop"
    arguments = ("name",)
    examples = ("$ gitf incorporate-feature experiment",)

    def validate(self, ctx: ActionContext, *args: str) -> None:
        (name,) = args
        if not name:
            raise ValidationError("missing name")
        _require_branch(ctx, feature_branch(name))

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (name,) = args
        branch = shlex.quote(feature_branch(name))
        return RenderedAction(
            command=_chain(
                f"git checkout {DEVELOP_BRANCH}",
                f"git merge --no-edit {branch}",
                f"git branch -d {branch}",
            ),
        )


class CreateRelease(Action):
    """Bump the version, tag the first release candidate and branch off develop."""

    name = "create-release"
    description = "Create a new release branch from develop"
    arguments = ()
    optional_arguments = ("level",)
    examples = (
        "$ gitf create-release minor",
        "$ gitf create-release major",
    )
    writes_manifest = True

    def validate(self, ctx: ActionContext, *args: str) -> None:
        # Any level is accepted; unknown levels fall back to minor
        return None

    def resolve(self, ctx: ActionContext, *args: str) -> Version | None:
        return resolve_version(ctx.repo, ctx.manifest.version())

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (level,) = args
        if level not in RELEASE_LEVELS:
            level = DEFAULT_RELEASE_LEVEL
        if version is None:
            raise ValueError("create-release needs the current version")

        candidate = first_release_candidate(version.increment(level))
        return RenderedAction(
            command=_chain(
                _bump_commit(candidate),
                f"git tag {candidate}",
                f"git checkout -b {release_branch(candidate.release_line)} {DEVELOP_BRANCH}",
            ),
            checkout=DEVELOP_BRANCH,
            manifest_version=str(candidate),
            version=candidate,
        )


class FinishRelease(Action):
    """Tag the final version of a release line and merge it back into develop."""

    name = "finish-release"
    description = "Merge a finished release with develop"
    arguments = ("version",)
    examples = ("$ gitf finish-release 1.0",)
    writes_manifest = True

    def validate(self, ctx: ActionContext, *args: str) -> None:
        (release_line,) = args
        if not release_line:
            raise ValidationError("missing version")
        if not validate_release_line(release_line):
            raise ValidationError(f"'{release_line}' is not a release line (expected X.Y)")
        _require_branch(ctx, release_branch(release_line))

    def resolve(self, ctx: ActionContext, *args: str) -> Version | None:
        (release_line,) = args
        return resolve_version(ctx.repo, ctx.manifest.version(), release_line)

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (release_line,) = args
        if version is None:
            raise ValueError("finish-release needs the current version")

        final = version.increment("patch")
        branch = release_branch(release_line)
        return RenderedAction(
            command=_chain(
                _bump_commit(final),
                f"git tag {final}",
                f"git checkout {DEVELOP_BRANCH}",
                f"git merge --no-edit {branch}",
            ),
            checkout=branch,
            manifest_version=str(final),
            version=final,
        )


class CreateHotfix(Action):
    """Branch a hotfix for the next patch of a release line."""

    name = "create-hotfix"
    description = "Create a hotfix branch for a release"
    arguments = ("release",)
    examples = ("$ gitf create-hotfix 1.0",)

    def validate(self, ctx: ActionContext, *args: str) -> None:
        (release_line,) = args
        if not release_line:
            raise ValidationError("missing release branch name")
        if not validate_release_line(release_line):
            raise ValidationError(f"'{release_line}' is not a release line (expected X.Y)")
        _require_branch(ctx, release_branch(release_line))

    def resolve(self, ctx: ActionContext, *args: str) -> Version | None:
        (release_line,) = args
        return resolve_version(ctx.repo, ctx.manifest.version(), release_line)

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (release_line,) = args
        if version is None:
            raise ValueError("create-hotfix needs the current version")

        patch = version.increment("patch")
        return RenderedAction(
            command=f"git checkout -b {hotfix_branch(patch)} {release_branch(release_line)}",
            version=patch,
        )


class FinishHotfix(Action):
    """Tag a hotfix, merge it into its release branch and delete it."""

    name = "finish-hotfix"
    description = "Merge a finished hotfix with its release branch"
    arguments = ("version",)
    examples = ("$ gitf finish-hotfix 1.0.1",)
    writes_manifest = True

    def validate(self, ctx: ActionContext, *args: str) -> None:
        (version,) = args
        if not version:
            raise ValidationError("missing hotfix branch name")
        if parse_hotfix_version(version) is None:
            raise ValidationError(f"'{version}' is not a hotfix version (expected X.Y.Z)")
        _require_branch(ctx, hotfix_branch(version))

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        (text,) = args
        hotfix = parse_hotfix_version(text)
        if hotfix is None:
            raise ValueError(f"'{text}' is not a hotfix version")

        branch = hotfix_branch(hotfix)
        return RenderedAction(
            command=_chain(
                _bump_commit(hotfix),
                f"git tag {hotfix}",
                f"git checkout {release_branch(hotfix.release_line)}",
                f"git merge --no-edit {branch}",
                f"git branch -d {branch}",
            ),
            checkout=branch,
            manifest_version=str(hotfix),
            version=hotfix,
        )


class RemovePath(Action):
    """Rewrite a branch's history without a path.

    Only argument presence is validated; an unknown branch fails at checkout.
    """

    name = "remove-path"
    description = "Remove a path from git history for specific branch"
    arguments = ("path", "branch")
    examples = ("$ gitf remove-path ./experiment master",)

    def validate(self, ctx: ActionContext, *args: str) -> None:
        path, branch = args
        if not path or not branch:
            raise ValidationError("missing path or branch")

    def render(self, version: Version | None, *args: str) -> RenderedAction:
        path, branch = args
        tree_filter = shlex.quote(f"rm -rf {shlex.quote(path)}")
        return RenderedAction(
            command=_chain(
                f"git checkout {shlex.quote(branch)}",
                f"git filter-branch --force --tree-filter {tree_filter} --prune-empty HEAD",
                'git for-each-ref --format="delete %(refname)" refs/original/ | git update-ref --stdin',
                "git gc",
            ),
        )


ACTIONS: Mapping[str, Action] = MappingProxyType(
    {
        action.name: action
        for action in (
            CreateFeature(),
            IncorporateFeature(),
            CreateRelease(),
            FinishRelease(),
            CreateHotfix(),
            FinishHotfix(),
            RemovePath(),
        )
    }
)

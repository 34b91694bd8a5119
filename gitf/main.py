# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Command-line entry point for gitf.

One subcommand per workflow action. Global options default to GITF_*
environment variables; command-line arguments take precedence.

Examples:
    $ gitf create-feature experiment
    $ gitf --dry-run create-release major
    $ GITF_PATH=../app gitf finish-hotfix 1.0.1
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field

from gitf.actions import ACTIONS
from gitf.branch import validate_ref_name
from gitf.errors import GitfError
from gitf.manifest import DEFAULT_MANIFEST
from gitf.workflow import DEFAULT_BASE_BRANCH, Gitf

logger = logging.getLogger(__name__)


@dataclass
class CliInputs:
    """Parsed command-line inputs."""

    action: str
    arguments: list[str] = field(default_factory=list)
    path: str = ""
    clear_screen: bool = False
    base_branch: str = DEFAULT_BASE_BRANCH
    manifest: str = DEFAULT_MANIFEST
    dry_run: bool = False
    debug: bool = False


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(
        prog="gitf",
        description="Feature/release/hotfix branching workflow on top of git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used as defaults when CLI args not provided):
  GITF_PATH              Working directory
  GITF_CLEAR_SCREEN      Clear the terminal before running (true/false)
  GITF_BASE_BRANCH       Branch develop is created from
  GITF_MANIFEST          Manifest file holding the version
  GITF_DRY_RUN           Print commands without running them (true/false)
  GITF_DEBUG             Enable debug logging (true/false)

Examples:
    $ gitf create-feature experiment
    $ gitf create-release --help
        """,
    )

    parser.add_argument(
        "--path",
        default=os.environ.get("GITF_PATH", ""),
        help="Working directory (default: from GITF_PATH or the current directory)",
    )
    parser.add_argument(
        "--clear-screen",
        action="store_true",
        default=_env_flag("GITF_CLEAR_SCREEN"),
        help="Clear the terminal before running the action",
    )
    parser.add_argument(
        "--base-branch",
        default=os.environ.get("GITF_BASE_BRANCH", DEFAULT_BASE_BRANCH),
        help=f"Branch develop is created from (default: {DEFAULT_BASE_BRANCH})",
    )
    parser.add_argument(
        "--manifest",
        default=os.environ.get("GITF_MANIFEST", DEFAULT_MANIFEST),
        help=f"Manifest file holding the version (default: {DEFAULT_MANIFEST})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("GITF_DRY_RUN"),
        help="Dry-run mode - print the commands instead of running them",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("GITF_DEBUG"),
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="action", metavar="<action>")
    subparsers.required = True

    for action in ACTIONS.values():
        examples = "\n".join(f"    {example}" for example in action.examples)
        sub = subparsers.add_parser(
            action.name,
            help=action.description,
            description=action.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"Examples:\n\n{examples}\n",
        )
        # Prefixed dests keep remove-path's <path> apart from --path
        for name in action.arguments:
            sub.add_argument(f"arg_{name}", metavar=name)
        for name in action.optional_arguments:
            sub.add_argument(f"arg_{name}", metavar=name, nargs="?", default="")

    return parser


def parse_inputs(args: list[str] | None = None) -> CliInputs:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (default: sys.argv[1:]).

    Returns:
        CliInputs with parsed values.
    """
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not validate_ref_name(parsed.base_branch):
        logger.error(
            "Invalid base-branch '%s': must be non-empty and not contain "
            "invalid git ref characters (.. ~ ^ : \\ space tab newline * ? [)",
            parsed.base_branch,
        )
        sys.exit(1)

    action = ACTIONS[parsed.action]
    arguments = [getattr(parsed, f"arg_{name}") for name in (*action.arguments, *action.optional_arguments)]

    return CliInputs(
        action=parsed.action,
        arguments=arguments,
        path=parsed.path,
        clear_screen=parsed.clear_screen,
        base_branch=parsed.base_branch,
        manifest=parsed.manifest,
        dry_run=parsed.dry_run,
        debug=parsed.debug,
    )


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def main(args: list[str] | None = None) -> None:
    """Main entry point for the command line."""
    inputs = parse_inputs(args)
    configure_logging(inputs.debug)

    gitf = Gitf(
        path=inputs.path or None,
        clear_screen=inputs.clear_screen,
        base_branch=inputs.base_branch,
        manifest=inputs.manifest,
        dry_run=inputs.dry_run,
    )
    logger.debug("Working directory: %s", gitf.path)

    try:
        gitf.ensure_ready()
    except GitfError as e:
        logger.error("%s", e)
        sys.exit(1)

    try:
        outputs = gitf.run(inputs.action, *inputs.arguments)
    except GitfError as e:
        logger.error("%s: %s", inputs.action, e)
        sys.exit(1)

    if outputs.stdout:
        sys.stdout.write(outputs.stdout)
    if outputs.version:
        logger.info("%s done (version %s)", outputs.action, outputs.version)
    else:
        logger.info("%s done", outputs.action)
    sys.exit(0)


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])

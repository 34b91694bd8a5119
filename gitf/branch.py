# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Branch naming and validation for the feature/release/hotfix workflow.

Branch names are a fixed role prefix followed by a suffix:

    feature-{name}      work in progress, branched from develop
    release-{X.Y}       one branch per release line
    hotfix-{X.Y.Z}      a patch on top of a release branch

References:
    - git-check-ref-format: https://git-scm.com/docs/git-check-ref-format
"""

from __future__ import annotations

import logging

from gitf.version import Version, parse_version

logger = logging.getLogger(__name__)

DEVELOP_BRANCH = "develop"
FEATURE_PREFIX = "feature-"
RELEASE_PREFIX = "release-"
HOTFIX_PREFIX = "hotfix-"

# Characters invalid in git refs (branch names and tags)
# See: https://git-scm.com/docs/git-check-ref-format
INVALID_REF_CHARS = ["..", "~", "^", ":", "\\", " ", "\t", "\n", "*", "?", "[", "@{"]


def validate_ref_name(name: str) -> bool:
    """Validate that a string can be used inside a git branch name.

    A valid name must be non-empty and must not contain characters that are
    invalid in git refs.

    Args:
        name: The name to validate.

    Returns:
        True if the name is valid, False otherwise.

    Examples:
        >>> validate_ref_name("experiment")
        True
        >>> validate_ref_name("")  # Empty - invalid
        False
        >>> validate_ref_name("bad..name")  # Contains '..' - invalid
        False

    References:
        - git-check-ref-format: https://git-scm.com/docs/git-check-ref-format
    """
    if not name:
        logger.warning("Empty name provided")
        return False

    for invalid_char in INVALID_REF_CHARS:
        if invalid_char in name:
            logger.warning(
                "Name '%s' contains invalid character %s",
                name,
                repr(invalid_char),
            )
            return False

    if name.startswith(("-", ".", "/")) or name.endswith((".", "/", ".lock")):
        logger.warning("Name '%s' is not a valid git ref component", name)
        return False

    return True


def feature_branch(name: str) -> str:
    """Return the feature branch name for a feature (e.g., 'feature-experiment')."""
    return f"{FEATURE_PREFIX}{name}"


def release_branch(release_line: str) -> str:
    """Return the release branch name for a release line (e.g., 'release-1.2')."""
    return f"{RELEASE_PREFIX}{release_line}"


def hotfix_branch(version: Version | str) -> str:
    """Return the hotfix branch name for a patch version (e.g., 'hotfix-1.2.1')."""
    return f"{HOTFIX_PREFIX}{version}"


def parse_hotfix_version(version: str) -> Version | None:
    """Parse the X.Y.Z version a hotfix branch is named after.

    Prerelease versions are not hotfix versions.

    Examples:
        >>> str(parse_hotfix_version("1.2.1"))
        '1.2.1'
        >>> parse_hotfix_version("1.2") is None
        True
        >>> parse_hotfix_version("1.2.1-rc.1") is None
        True
    """
    parsed = parse_version(version)
    if parsed is None or parsed.is_prerelease or parsed.build:
        return None
    return parsed

# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version resolution from tag history.

Tags are bare semantic versions ('1.2.0', '1.3.0-rc.1'). The current version
is the greatest tag, optionally restricted to one release line, falling back
to the version recorded in the manifest when no tag qualifies.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitf.errors import ResolutionError, ValidationError
from gitf.version import Version, parse_version, validate_release_line

if TYPE_CHECKING:
    from gitf.git import GitRepository

logger = logging.getLogger(__name__)

# Prerelease suffix of the first release candidate created for a release
FIRST_RC = "rc.1"


def _comparison_key(version: Version) -> tuple[Version, Version]:
    # Suffix-free version first so rc tags count toward their release,
    # full precedence second so '1.3.0' still beats '1.3.0-rc.1'
    return (version.finalize(), version)


def find_latest_tag(repo: GitRepository, release_line: str | None = None) -> Version | None:
    """Find the greatest version tag, optionally within one release line.

    Tags that are not valid semantic versions are ignored.

    Args:
        repo: GitRepository instance for fetching tags.
        release_line: Optional major.minor filter (e.g., '1.2').

    Returns:
        The greatest qualifying tag as a Version, or None if no tag qualifies.

    Examples:
        >>> # With tags 1.2.0, 1.3.0-rc.1, 1.3.0
        >>> str(find_latest_tag(repo))
        '1.3.0'
        >>> str(find_latest_tag(repo, "1.2"))
        '1.2.0'
    """
    latest: Version | None = None

    for tag in repo.list_tags():
        version = parse_version(tag)
        if version is None:
            continue
        if release_line and version.release_line != release_line:
            continue
        if latest is None or _comparison_key(version) > _comparison_key(latest):
            latest = version

    return latest


def resolve_version(
    repo: GitRepository,
    manifest_version: str | None,
    release_line: str | None = None,
) -> Version:
    """Resolve the current version of the project.

    Args:
        repo: GitRepository instance for fetching tags.
        manifest_version: The version recorded in the manifest, or None if
            there is no manifest.
        release_line: Optional major.minor filter (e.g., '1.2').

    Returns:
        The greatest qualifying tag, or the manifest version if none qualifies.

    Raises:
        ValidationError: If release_line is not a valid major.minor pair.
        ResolutionError: If no tag qualifies and the manifest has no valid version.
    """
    if release_line and not validate_release_line(release_line):
        raise ValidationError(f"'{release_line}' is not a release line (expected X.Y)")

    latest = find_latest_tag(repo, release_line)
    if latest is not None:
        logger.debug("Resolved version %s from tags (release line: %s)", latest, release_line or "any")
        return latest

    if manifest_version is None:
        raise ResolutionError("No version tag found and no manifest to fall back to")

    version = parse_version(manifest_version)
    if version is None:
        raise ResolutionError(f"Manifest version '{manifest_version}' is not a valid semantic version")

    logger.debug("No qualifying tag, using manifest version %s", version)
    return version


def first_release_candidate(version: Version) -> Version:
    """Return the first release candidate of a version (e.g., '0.2.0-rc.1').

    Examples:
        >>> str(first_release_candidate(Version.parse("0.2.0")))
        '0.2.0-rc.1'
    """
    return version.with_prerelease(FIRST_RC)


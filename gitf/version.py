# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Semantic version parsing, precedence and increment.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - Precedence rules: https://semver.org/#spec-item-11
    - npm semver increment: https://github.com/npm/node-semver#functions
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

Level = Literal["major", "minor", "patch"]

LEVELS: tuple[Level, ...] = ("major", "minor", "patch")

# SemVer 2.0.0 pattern: no leading zeros in numeric parts or numeric prerelease identifiers
SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

# Release line: X.Y where X and Y are non-negative integers without leading zeros
RELEASE_LINE_PATTERN = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)$")


def _identifier_key(identifier: str) -> tuple[int, int | str]:
    # Numeric identifiers sort below alphanumeric ones and compare as integers
    if identifier.isdigit():
        return (0, int(identifier))
    return (1, identifier)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Equality and ordering follow SemVer precedence, so build metadata is
    ignored when comparing.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        Args:
            text: The version to parse (e.g., '1.2.3', '1.3.0-rc.1').

        Returns:
            The parsed Version.

        Raises:
            ValueError: If the text is not a valid semantic version.

        Examples:
            >>> Version.parse("1.3.0-rc.1").prerelease
            ('rc', '1')
            >>> Version.parse("v1.2.3")
            Traceback (most recent call last):
            ...
            ValueError: 'v1.2.3' is not a valid semantic version
        """
        match = SEMVER_PATTERN.match(text)
        if not match:
            raise ValueError(f"'{text}' is not a valid semantic version")

        prerelease = tuple(match.group(4).split(".")) if match.group(4) else ()
        build = tuple(match.group(5).split(".")) if match.group(5) else ()
        return cls(
            major=int(match.group(1)),
            minor=int(match.group(2)),
            patch=int(match.group(3)),
            prerelease=prerelease,
            build=build,
        )

    @property
    def is_prerelease(self) -> bool:
        """True if the version carries a prerelease suffix (e.g., '-rc.1')."""
        return bool(self.prerelease)

    @property
    def release_line(self) -> str:
        """The major.minor pair shared by a family of patch releases."""
        return f"{self.major}.{self.minor}"

    def finalize(self) -> Version:
        """Return the version with prerelease and build metadata stripped."""
        return Version(self.major, self.minor, self.patch)

    def with_prerelease(self, prerelease: str) -> Version:
        """Return a copy of the version with the given prerelease suffix.

        Examples:
            >>> str(Version.parse("0.2.0").with_prerelease("rc.1"))
            '0.2.0-rc.1'
        """
        return Version(self.major, self.minor, self.patch, tuple(prerelease.split(".")))

    def increment(self, level: Level) -> Version:
        """Return the next version at the given level.

        A prerelease is promoted to its release when the release would
        already be the next version at that level, as npm semver does.

        Args:
            level: One of 'major', 'minor' or 'patch'.

        Returns:
            The next version, always greater than this one.

        Examples:
            >>> str(Version.parse("0.1.0").increment("minor"))
            '0.2.0'
            >>> str(Version.parse("0.2.0-rc.1").increment("patch"))
            '0.2.0'
            >>> str(Version.parse("0.2.0").increment("patch"))
            '0.2.1'
        """
        if level == "major":
            if self.is_prerelease and self.minor == 0 and self.patch == 0:
                return self.finalize()
            return Version(self.major + 1, 0, 0)
        if level == "minor":
            if self.is_prerelease and self.patch == 0:
                return self.finalize()
            return Version(self.major, self.minor + 1, 0)
        if level == "patch":
            if self.is_prerelease:
                return self.finalize()
            return Version(self.major, self.minor, self.patch + 1)
        raise ValueError(f"unexpected increment level: {level!r}")

    def _precedence_key(self) -> tuple:
        if self.prerelease:
            pre: tuple = (0, tuple(_identifier_key(i) for i in self.prerelease))
        else:
            pre = (1,)
        return (self.major, self.minor, self.patch, pre)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def parse_version(text: str) -> Version | None:
    """Parse a version string, returning None when it is not valid semver.

    Examples:
        >>> parse_version("1.2.0")
        Version(major=1, minor=2, patch=0, prerelease=(), build=())
        >>> parse_version("latest") is None
        True
    """
    try:
        return Version.parse(text)
    except ValueError:
        logger.debug("Ignoring '%s': not a valid semantic version", text)
        return None


def validate_release_line(release_line: str) -> bool:
    """Validate that a string is a release line (major.minor).

    Examples:
        >>> validate_release_line("1.2")
        True
        >>> validate_release_line("01.2")  # Leading zero - invalid
        False
        >>> validate_release_line("1.2.3")  # Has patch - invalid
        False
    """
    return bool(release_line) and RELEASE_LINE_PATTERN.match(release_line) is not None

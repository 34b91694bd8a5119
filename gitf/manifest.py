# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Manifest (package.json) version helpers.

References:
    - package.json version field: https://docs.npmjs.com/cli/configuring-npm/package-json#version
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gitf.errors import PreconditionError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "package.json"

MISSING_MANIFEST_MESSAGE = 'Please run "npm init" to create a npm package.'


class Manifest:
    """A JSON manifest whose 'version' field tracks the project version."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> dict[str, Any]:
        """Load the manifest contents.

        Raises:
            PreconditionError: If the manifest is missing or not a JSON object.
        """
        if not self.exists():
            raise PreconditionError(MISSING_MANIFEST_MESSAGE)

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise PreconditionError(f"{self.path.name} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise PreconditionError(f"{self.path.name} must contain a JSON object")
        return data

    def version(self) -> str | None:
        """Return the recorded version, or None if there is no manifest or no version."""
        if not self.exists():
            return None
        version = self.read().get("version")
        return version if isinstance(version, str) else None

    def write_version(self, version: str) -> None:
        """Rewrite the manifest in place with a new version.

        The file is pretty-printed with 4-space indentation and key order is kept.
        """
        data = self.read()
        data["version"] = version
        self.path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
        logger.info("Wrote version %s to %s", version, self.path.name)

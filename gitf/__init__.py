# Copyright (c) 2026 Mark Ferrell. MIT License.
"""gitf - feature/release/hotfix branching workflow on top of git."""

from gitf.errors import ExecutionError, GitfError, PreconditionError, ResolutionError, ValidationError
from gitf.version import Version
from gitf.workflow import ActionOutputs, Gitf

__all__ = [
    "ActionOutputs",
    "ExecutionError",
    "Gitf",
    "GitfError",
    "PreconditionError",
    "ResolutionError",
    "ValidationError",
    "Version",
]

"""Shared pytest fixtures for the test suite."""

import json
import shutil
import subprocess
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gitf.workflow import Gitf


def run_git(path: Path, *args: str) -> str:
    """Run a git command in a test repository and return its stdout."""
    proc = subprocess.run(["git", *args], cwd=path, check=True, capture_output=True, text=True)
    return proc.stdout


def write_manifest(path: Path, version: str = "0.1.0") -> Path:
    """Write a package.json holding the given version."""
    manifest = path / "package.json"
    manifest.write_text(json.dumps({"name": "tmp", "version": version}, indent=4) + "\n")
    return manifest


def read_manifest_version(path: Path) -> str:
    return json.loads((path / "package.json").read_text())["version"]


@pytest.fixture
def mock_repo() -> MagicMock:
    """Create a mock GitRepository instance for unit tests.

    Branches and tags are plain lists on the mock; branch_exists follows
    the branch list.
    """
    repo = MagicMock()
    repo.branches = ["master", "develop"]
    repo.list_branches.side_effect = lambda: list(repo.branches)
    repo.branch_exists.side_effect = lambda name: name in repo.branches
    repo.list_tags.return_value = []
    repo.is_repository.return_value = True
    return repo


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A directory holding a package.json at version 0.1.0 (no git)."""
    write_manifest(tmp_path)
    return tmp_path


@pytest.fixture
def mocked_gitf(project_dir: Path, mock_repo: MagicMock) -> Generator[Gitf, None, None]:
    """A Gitf handle whose git wrapper is mock_repo."""
    with patch("gitf.workflow.GitRepository", return_value=mock_repo):
        yield Gitf(path=project_dir)


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's configuration."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "user")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "user@domain.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "user")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "user@domain.com")
    monkeypatch.setenv("FILTER_BRANCH_SQUELCH_WARNING", "1")


@pytest.fixture
def git_project(tmp_path: Path, git_env: None) -> Path:
    """A git repository on master with one commit adding package.json at 0.1.0."""
    path = tmp_path / "repo"
    path.mkdir()
    run_git(path, "init")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/master")
    write_manifest(path)
    run_git(path, "add", "package.json")
    run_git(path, "commit", "-m", "message")
    return path


@pytest.fixture
def sample_tags() -> list[str]:
    """Sample tag data for testing."""
    return [
        "0.1.0",
        "1.2.0",
        "1.3.0-rc.1",
        "1.3.0",
        "latest",
        "v2.0.0",
    ]

"""Shared pytest fixtures for mdbook-build-annotations tests.

Fixtures are organized by category:
- Environment fixtures: isolate git discovery and MDBOOK_LOG
- Project fixtures: Cargo.toml workspaces and real git repositories
- Book fixtures: serialized books and preprocessor contexts
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest

from mdbook_build_annotations.utils.logging import LOGGER_NAME
from tests.fixtures import make_book, make_context


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep git from discovering repositories above the test directory.

    Also undoes logging setup from earlier CLI runs so caplog sees records.
    """
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.delenv("MDBOOK_LOG", raising=False)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Return a helper that writes Cargo.toml into a directory."""

    def _write(content: str, directory: Path | None = None) -> Path:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        manifest = directory / "Cargo.toml"
        manifest.write_text(content, encoding="utf-8")
        return directory

    return _write


@pytest.fixture
def crate_dir(write_manifest) -> Path:
    """Create a directory with a single-crate Cargo.toml."""
    return write_manifest('[package]\nname = "foo"\nversion = "1.0.0"\n')


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """Create a git repository with no commits."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    return repo


@pytest.fixture
def git_repo(empty_git_repo: Path) -> Path:
    """Create a git repository with a single commit."""
    _git(empty_git_repo, "commit", "-q", "--allow-empty", "-m", "initial")
    return empty_git_repo


@pytest.fixture
def head_commit(git_repo: Path) -> str:
    """Return the full commit id of HEAD in ``git_repo``."""
    return _git(git_repo, "rev-parse", "HEAD")


# =============================================================================
# Book Fixtures
# =============================================================================


@pytest.fixture
def book_data() -> dict[str, Any]:
    """Return a serialized book with two chapters and a separator."""
    return make_book()


@pytest.fixture
def context_factory(tmp_path: Path):
    """Return a helper building serialized contexts with preprocessor options."""

    def _make(**options: Any) -> dict[str, Any]:
        return make_context(root=tmp_path, **options)

    return _make

"""Git revision lookup.

Asks git for the commit HEAD points at and shortens it to the configured
number of characters. A missing repository, an unborn branch or a missing
``git`` executable all give None; none of them fail the build.
"""

import subprocess
from pathlib import Path

from mdbook_build_annotations.utils.logging import get_logger

_logger = get_logger()

GIT_TIMEOUT = 10


def _git(args: list[str], cwd: Path) -> str | None:
    """Run a git command and return its stripped stdout, or None on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=GIT_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        _logger.debug(f"git {' '.join(args)} failed: {e}")
        return None

    if result.returncode != 0:
        _logger.debug(f"git {' '.join(args)} exited {result.returncode}: {result.stderr.strip()}")
        return None
    return result.stdout.strip()


def truncate_revision(commit_id: str, commit_characters: int) -> str:
    """Keep the first ``commit_characters`` characters of a commit id.

    Ids already within the limit come back unchanged.
    """
    return commit_id[:commit_characters]


def determine_git_rev(git_dir: Path, commit_characters: int) -> str | None:
    """Find the current commit of the repository containing ``git_dir``.

    The repository may be rooted at ``git_dir`` or any parent of it.

    Args:
        git_dir: Directory inside the repository
        commit_characters: Number of characters of the commit id to keep

    Returns:
        Truncated commit id, or None if there is no usable repository
    """
    _logger.debug(f"looking for git repository in {git_dir.resolve()}")

    if not git_dir.is_dir() or _git(["rev-parse", "--git-dir"], git_dir) is None:
        _logger.error("Failed to open git repository, can't annotate it!")
        return None

    commit_id = _git(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"], git_dir)
    if not commit_id:
        _logger.debug("HEAD does not point at a commit")
        return None

    return truncate_revision(commit_id, commit_characters)

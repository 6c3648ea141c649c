import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def _run_git(repo_dir: Path, *args: str) -> str | None:
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_dir), *args],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        logger.warning("git executable not found on PATH")
        return None
    if result.returncode != 0:
        logger.debug("git %s failed in %s: %s", " ".join(args), repo_dir, result.stderr.strip())
        return None
    output = result.stdout.strip()
    return output or None


def get_git_repo_root(start_dir: Path) -> Path | None:
    root = _run_git(start_dir, "rev-parse", "--show-toplevel")
    if root is None:
        return None
    return Path(root)


def truncate_revision(revision: str, commit_characters: int) -> str:
    return revision[:commit_characters]


def get_git_revision(repo_dir: Path, commit_characters: int) -> str | None:
    """Return the HEAD commit id of the repository containing *repo_dir*.

    The id is cut to *commit_characters* characters. ``None`` when *repo_dir*
    is not inside a repository or the repository has no commits yet.
    """
    logger.debug("Looking for git repository in %s", repo_dir.resolve())
    if get_git_repo_root(repo_dir) is None:
        logger.warning("No git repository found at %s, can't annotate the commit", repo_dir)
        return None
    commit_id = _run_git(repo_dir, "rev-parse", "--verify", "--quiet", "HEAD^{commit}")
    if commit_id is None:
        logger.warning("Repository at %s has no commit checked out", repo_dir)
        return None
    return truncate_revision(commit_id, commit_characters)

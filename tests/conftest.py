"""Shared fixtures and helpers for tests."""

import json
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

_REPO_ROOT = Path(__file__).parent.parent

_GIT_IDENTITY = ["-c", "user.name=Test Author", "-c", "user.email=author@example.com"]


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Git helpers
# ---------------------------------------------------------------------------


def run_git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(
        ["git", *_GIT_IDENTITY, *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def init_repo(path: Path, commit: bool = True) -> str | None:
    """Initialise a repository at *path*; return the HEAD id if a commit was made."""
    run_git(["init"], path)
    if not commit:
        return None
    (path / "README.md").write_text("# sample\n", encoding="utf-8")
    run_git(["add", "README.md"], path)
    run_git(["commit", "-m", "initial"], path)
    return run_git(["rev-parse", "HEAD"], path)


@pytest.fixture
def git_run() -> Callable[[list[str], Path], str]:
    return run_git


@pytest.fixture
def git_repo(tmp_path: Path) -> tuple[Path, str]:
    """A repository with a single commit; returns (path, HEAD id)."""
    head = init_repo(tmp_path)
    assert head is not None
    return tmp_path, head


# ---------------------------------------------------------------------------
# Book project layout: <project>/pyproject.toml and <project>/book
# ---------------------------------------------------------------------------


PYPROJECT = """\
[project]
name = "mybook"
version = "1.2.0"
"""


@pytest.fixture
def book_project(tmp_path: Path) -> tuple[Path, str]:
    """A committed project with a book directory; returns (book root, HEAD id)."""
    project = tmp_path / "project"
    book_root = project / "book"
    book_root.mkdir(parents=True)
    (project / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
    head = init_repo(project)
    assert head is not None
    return book_root, head


def chapter(name: str, content: str | None = "", sub_items: list[Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": name,
        "number": None,
        "sub_items": sub_items or [],
        "path": f"{name.lower()}.md",
        "source_path": f"{name.lower()}.md",
        "parent_names": [],
    }
    if content is not None:
        body["content"] = content
    return {"Chapter": body}


def sample_book() -> dict[str, Any]:
    return {
        "sections": [
            chapter("Intro", "# Intro\n"),
            "Separator",
            {"PartTitle": "Guide"},
            chapter(
                "Usage",
                "# Usage\n",
                sub_items=[chapter("Install", "## Install\n"), chapter("Configure", "## Configure\n")],
            ),
        ],
        "__non_exhaustive": None,
    }


def envelope(root: Path, settings: dict[str, Any] | None = None, book: dict[str, Any] | None = None) -> str:
    config: dict[str, Any] = {"book": {"src": "src"}}
    if settings is not None:
        config["preprocessor"] = {"build-annotations": settings}
    context = {
        "root": str(root),
        "config": config,
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }
    return json.dumps([context, book if book is not None else sample_book()], ensure_ascii=False)


@pytest.fixture
def make_envelope() -> Callable[..., str]:
    return envelope


@pytest.fixture
def make_book() -> Callable[[], dict[str, Any]]:
    return sample_book


@pytest.fixture
def make_chapter() -> Callable[..., dict[str, Any]]:
    return chapter

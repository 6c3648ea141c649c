"""Package manifest discovery and parsing.

Python projects describe themselves in ``pyproject.toml`` (PEP 621 ``[project]``
or ``[tool.poetry]``), Rust projects in ``Cargo.toml`` (``[package]`` or, for
virtual workspaces, ``[workspace.package]`` / ``[workspace]``).
"""

import logging
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from mdbook_build_annotations.models import PackageManifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAMES = ("pyproject.toml", "Cargo.toml")


def _iter_parents(start_dir: Path) -> Iterator[Path]:
    current = start_dir.resolve()
    yield current
    yield from current.parents


def find_manifest(start_dir: Path) -> Path | None:
    for directory in _iter_parents(start_dir):
        for filename in MANIFEST_FILENAMES:
            candidate = directory / filename
            try:
                found = candidate.is_file()
            except OSError as exc:
                logger.warning("Could not inspect %s: %s", candidate, exc)
                continue
            if found:
                return candidate
    return None


def _package_tables(data: dict[str, Any]) -> list[dict[str, Any]]:
    workspace = data.get("workspace")
    tool = data.get("tool")
    candidates = [
        data.get("project"),
        tool.get("poetry") if isinstance(tool, dict) else None,
        data.get("package"),
        workspace.get("package") if isinstance(workspace, dict) else None,
        workspace,
    ]
    return [table for table in candidates if isinstance(table, dict)]


def _first_string(tables: list[dict[str, Any]], key: str) -> str | None:
    # Cargo's `version.workspace = true` is a table, not a value
    for table in tables:
        value = table.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_manifest(path: Path, text: str) -> PackageManifest:
    data = tomllib.loads(text)
    tables = _package_tables(data)
    return PackageManifest(
        path=path,
        name=_first_string(tables, "name"),
        version=_first_string(tables, "version"),
    )


def read_manifest(path: Path) -> PackageManifest | None:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None
    try:
        return parse_manifest(path, text)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Could not parse %s: %s", path, exc)
        return None


def load_nearest_manifest(start_dir: Path) -> PackageManifest | None:
    path = find_manifest(start_dir)
    if path is None:
        logger.warning("No %s found in %s or any parent directory", " or ".join(MANIFEST_FILENAMES), start_dir)
        return None
    logger.debug("Using manifest %s", path)
    return read_manifest(path)

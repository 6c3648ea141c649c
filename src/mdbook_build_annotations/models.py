from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnnotationConfig(BaseModel):
    """The ``[preprocessor.build-annotations]`` table of ``book.toml``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    package_name: bool = True
    package_version: bool = True
    git_commit: bool = True
    commit_characters: int = Field(default=10, ge=1)
    workspace_dir: Path = Path("..")
    git_dir: Path | None = None

    def resolve_workspace_dir(self, book_root: Path) -> Path:
        return book_root / self.workspace_dir

    def resolve_git_dir(self, book_root: Path) -> Path:
        if self.git_dir is None:
            return self.resolve_workspace_dir(book_root)
        return book_root / self.git_dir


class PreprocessorContext(BaseModel):
    """First element of the envelope mdBook writes to a preprocessor's stdin."""

    model_config = ConfigDict(extra="allow")

    root: Path
    config: dict[str, Any] = Field(default_factory=dict)
    renderer: str = "html"
    mdbook_version: str = ""

    def preprocessor_table(self, name: str) -> dict[str, Any]:
        preprocessors = self.config.get("preprocessor") or {}
        table = preprocessors.get(name) if isinstance(preprocessors, dict) else None
        return table if isinstance(table, dict) else {}


@dataclass(frozen=True)
class PackageManifest:
    path: Path
    name: str | None
    version: str | None


@dataclass(frozen=True)
class BuildIdentity:
    package_name: str | None = None
    package_version: str | None = None
    revision: str | None = None

import logging
from pathlib import Path

from mdbook_build_annotations.core.git import get_git_revision
from mdbook_build_annotations.core.manifest import load_nearest_manifest
from mdbook_build_annotations.models import AnnotationConfig, BuildIdentity

logger = logging.getLogger(__name__)


def resolve_build_identity(config: AnnotationConfig, book_root: Path) -> BuildIdentity:
    """Collect name, version and revision for the book at *book_root*.

    Lookups disabled in *config* are skipped. Anything that cannot be found
    ends up as ``None`` rather than an error.
    """
    name: str | None = None
    version: str | None = None
    revision: str | None = None

    if config.package_name or config.package_version:
        manifest = load_nearest_manifest(config.resolve_workspace_dir(book_root))
        if manifest is not None:
            name = manifest.name if config.package_name else None
            version = manifest.version if config.package_version else None

    if config.git_commit:
        revision = get_git_revision(config.resolve_git_dir(book_root), config.commit_characters)

    identity = BuildIdentity(package_name=name, package_version=version, revision=revision)
    logger.debug(
        "Package: %s v%s Git commit: %s",
        identity.package_name or "unknown",
        identity.package_version or "unknown",
        identity.revision or "unknown",
    )
    return identity

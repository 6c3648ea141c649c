import logging
from html import escape

from mdbook_build_annotations.models import AnnotationConfig, BuildIdentity

logger = logging.getLogger(__name__)

FOOTER_ID = "build-annotations"


def _line(kind: str, text: str) -> str:
    return f'<span class="{FOOTER_ID}-{kind}">{escape(text)}</span>'


def render_lines(identity: BuildIdentity, config: AnnotationConfig) -> list[str]:
    lines: list[str] = []
    if config.package_name:
        if identity.package_name:
            lines.append(_line("name", identity.package_name))
        else:
            logger.warning("Package name not found, skipping it in annotation")
    if config.package_version:
        if identity.package_version:
            lines.append(_line("version", f"v{identity.package_version}"))
        else:
            logger.warning("Package version not found, skipping it in annotation")
    if config.git_commit:
        if identity.revision:
            lines.append(_line("commit", f"@{identity.revision}"))
        else:
            logger.warning("Git commit not found, skipping it in annotation")
    return lines


def render_fragment(identity: BuildIdentity, config: AnnotationConfig) -> str:
    """Footer markup for *identity*, or ``""`` when there is nothing to show."""
    lines = render_lines(identity, config)
    if not lines:
        return ""
    body = "\n".join(lines)
    return f'\n\n<footer id="{FOOTER_ID}">\n{body}\n</footer>\n'

from mdbook_build_annotations.core.book import annotate_book, count_items
from mdbook_build_annotations.core.errors import AnnotationError, ConfigurationError
from mdbook_build_annotations.core.git import get_git_revision
from mdbook_build_annotations.core.identity import resolve_build_identity
from mdbook_build_annotations.core.manifest import load_nearest_manifest
from mdbook_build_annotations.core.protocol import handle_preprocessing, preprocess, supports_renderer
from mdbook_build_annotations.core.render import FOOTER_ID, render_fragment

__all__ = [
    "FOOTER_ID",
    "AnnotationError",
    "ConfigurationError",
    "annotate_book",
    "count_items",
    "get_git_revision",
    "handle_preprocessing",
    "load_nearest_manifest",
    "preprocess",
    "render_fragment",
    "resolve_build_identity",
    "supports_renderer",
]

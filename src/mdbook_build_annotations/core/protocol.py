"""mdBook preprocessor protocol.

mdBook runs ``<command> supports <renderer>`` first and looks only at the exit
code. If that succeeds it runs ``<command>`` again, writes ``[context, book]``
as JSON to stdin and expects the processed book as JSON on stdout.
"""

import json
import logging
from typing import Any, BinaryIO, TextIO

from pydantic import ValidationError

from mdbook_build_annotations import PREPROCESSOR_NAME
from mdbook_build_annotations.core.book import annotate_book, book_items_key, count_items
from mdbook_build_annotations.core.errors import ConfigurationError
from mdbook_build_annotations.core.identity import resolve_build_identity
from mdbook_build_annotations.core.render import render_fragment
from mdbook_build_annotations.models import AnnotationConfig, PreprocessorContext

logger = logging.getLogger(__name__)

# Renderers whose output cannot carry a raw HTML footer.
UNSUPPORTED_RENDERERS = frozenset({"man", "latex"})

TESTED_MDBOOK_SERIES = ("0.4.", "0.5.")


def supports_renderer(renderer: str) -> bool:
    return renderer not in UNSUPPORTED_RENDERERS


def parse_envelope(raw: str | bytes) -> tuple[PreprocessorContext, dict[str, Any]]:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Input is not valid UTF-8 JSON: {exc}") from exc
    if not isinstance(payload, list) or len(payload) != 2:
        raise ConfigurationError("Expected a JSON array of [context, book]")

    raw_context, book = payload
    try:
        context = PreprocessorContext.model_validate(raw_context)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid preprocessor context: {exc}") from exc
    if not isinstance(book, dict) or book_items_key(book) is None:
        raise ConfigurationError("Book has no 'sections' or 'items' list")
    return context, book


def load_config(context: PreprocessorContext) -> AnnotationConfig:
    try:
        return AnnotationConfig.model_validate(context.preprocessor_table(PREPROCESSOR_NAME))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [preprocessor.{PREPROCESSOR_NAME}] configuration: {exc}") from exc


def check_mdbook_version(context: PreprocessorContext) -> None:
    if not context.mdbook_version.startswith(TESTED_MDBOOK_SERIES):
        logger.warning(
            "The %s preprocessor was tested against mdbook %s, but we're being called from version %s",
            PREPROCESSOR_NAME,
            " / ".join(f"{series}x" for series in TESTED_MDBOOK_SERIES),
            context.mdbook_version or "unknown",
        )


def preprocess(context: PreprocessorContext, book: dict[str, Any]) -> dict[str, Any]:
    config = load_config(context)
    logger.debug("Config: %r", config)

    identity = resolve_build_identity(config, context.root)
    fragment = render_fragment(identity, config)
    if not fragment:
        logger.error("No annotation data found, not adding footer")
        return book

    annotated = annotate_book(book, fragment)
    logger.debug("Annotated %d chapter(s)", count_items(annotated)["Chapter"])
    return annotated


def handle_preprocessing(stdin: BinaryIO, stdout: TextIO) -> None:
    # mdBook writes UTF-8 regardless of the console encoding
    context, book = parse_envelope(stdin.read())
    check_mdbook_version(context)
    processed = preprocess(context, book)
    stdout.write(json.dumps(processed))
    stdout.flush()

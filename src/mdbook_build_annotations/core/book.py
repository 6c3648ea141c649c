"""Walking and rewriting mdBook's JSON book.

A book holds its items under ``sections`` (mdBook 0.4) or ``items``
(mdBook 0.5). Each item is ``{"Chapter": {...}}``, ``"Separator"`` or
``{"PartTitle": "..."}``. Chapters nest further items under ``sub_items``.
"""

import logging
from collections import Counter
from typing import Any

logger = logging.getLogger(__name__)

BOOK_ITEM_KEYS = ("sections", "items")

CHAPTER = "Chapter"
SEPARATOR = "Separator"
PART_TITLE = "PartTitle"


def book_items_key(book: dict[str, Any]) -> str | None:
    for key in BOOK_ITEM_KEYS:
        if isinstance(book.get(key), list):
            return key
    return None


def item_kind(item: Any) -> str:
    if item == SEPARATOR:
        return SEPARATOR
    if isinstance(item, dict) and len(item) == 1:
        (kind,) = item
        if kind in (CHAPTER, SEPARATOR, PART_TITLE):
            return kind
    return "unknown"


def _annotate_chapter(chapter: dict[str, Any], fragment: str) -> dict[str, Any]:
    annotated = dict(chapter)
    content = chapter.get("content")
    if isinstance(content, str):
        annotated["content"] = content + fragment
    else:
        logger.debug("Chapter %r has no content, creating it", chapter.get("name"))
        annotated["content"] = fragment
    sub_items = chapter.get("sub_items")
    if isinstance(sub_items, list):
        annotated["sub_items"] = annotate_items(sub_items, fragment)
    return annotated


def annotate_item(item: Any, fragment: str) -> Any:
    if item_kind(item) == CHAPTER and isinstance(item[CHAPTER], dict):
        return {CHAPTER: _annotate_chapter(item[CHAPTER], fragment)}
    return item


def annotate_items(items: list[Any], fragment: str) -> list[Any]:
    return [annotate_item(item, fragment) for item in items]


def annotate_book(book: dict[str, Any], fragment: str) -> dict[str, Any]:
    """Return a copy of *book* with *fragment* appended to every chapter.

    The input is left untouched; separators, part titles and unknown items
    are carried over as they are.
    """
    key = book_items_key(book)
    if key is None:
        return dict(book)
    annotated = dict(book)
    annotated[key] = annotate_items(book[key], fragment)
    return annotated


def _count(items: list[Any], counts: Counter[str]) -> None:
    for item in items:
        kind = item_kind(item)
        counts[kind] += 1
        if kind == CHAPTER and isinstance(item[CHAPTER], dict):
            sub_items = item[CHAPTER].get("sub_items")
            if isinstance(sub_items, list):
                _count(sub_items, counts)


def count_items(book: dict[str, Any]) -> Counter[str]:
    counts: Counter[str] = Counter()
    key = book_items_key(book)
    if key is not None:
        _count(book[key], counts)
    return counts

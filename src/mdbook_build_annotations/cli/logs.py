import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_ENV_VAR = "MDBOOK_LOG"

_OFF = logging.CRITICAL + 10


def _level_from_env(value: str | None) -> int:
    """Pick the log level from ``MDBOOK_LOG``.

    Only bare level names are honoured (``debug``, ``warn``, ``off``...);
    ``target=level`` directives meant for mdBook itself are skipped.
    """
    if not value:
        return logging.INFO
    for directive in value.split(","):
        name = directive.strip().upper()
        if not name or "=" in name:
            continue
        if name == "OFF":
            return _OFF
        if name == "WARN":
            name = "WARNING"
        if name == "TRACE":
            name = "DEBUG"
        level = logging.getLevelName(name)
        if isinstance(level, int):
            return level
    return logging.INFO


def init_logger() -> None:
    # stdout carries the book, so logs go to stderr
    log_env = os.environ.get(LOG_ENV_VAR)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=log_env is not None,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=_level_from_env(log_env),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

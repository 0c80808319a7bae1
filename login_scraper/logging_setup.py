"""
Logging configuration for the login scraper.

Console output goes through ``colorlog`` with level colours; known
``[CATEGORY]`` tags inside messages get their own ANSI highlight.
"""

import logging
from pathlib import Path

import colorlog

log = logging.getLogger("login-scraper")

_CONSOLE_FMT = "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s"
_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}

_ANSI_RESET = "\033[0m"
_CATEGORY_STYLES: dict[str, str] = {
    "[HTTP]":   "\033[90m",
    "[LOGIN]":  "\033[1;35m",
    "[FETCH]":  "\033[36m",
    "[PARSE]":  "\033[1;32m",
    "[SERVER]": "\033[34m",
    "[ERR]":    "\033[1;31m",
}


def _apply_category_styles(msg: str) -> str:
    """Inject ANSI colours for known ``[CATEGORY]`` tags in *msg*."""
    for tag, style in _CATEGORY_STYLES.items():
        if tag in msg:
            msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
    return msg


class _CategoryFormatter(colorlog.ColoredFormatter):
    """``colorlog.ColoredFormatter`` that also highlights ``[CATEGORY]`` tags."""

    def format(self, record: logging.LogRecord) -> str:
        return _apply_category_styles(super().format(record))


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure the module-level logger.

    Parameters
    ----------
    debug : bool
        Enable DEBUG-level output (default is INFO).
    log_file : str | None
        If given, also write log messages to this file path.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(_CategoryFormatter(
        _CONSOLE_FMT, datefmt="%H:%M:%S", log_colors=_LOG_COLORS,
    ))
    log.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)          # always capture full detail
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())

"""
Template Editor Logging Configuration

Package logger with secret masking, a debug mode and an optional log file.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Optional

from template_editor.editor.ui import mask_secrets


DEBUG_MODE = os.environ.get("TEMPLATE_EDITOR_DEBUG", "").lower() in ("1", "true", "yes")

ROOT_LOGGER = "template_editor"

PLAIN_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"


class SecretMaskingFormatter(logging.Formatter):
    """Masks bearer tokens and key=value secrets after formatting."""

    def format(self, record: logging.LogRecord) -> str:
        return mask_secrets(super().format(record))


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(SecretMaskingFormatter(fmt))
    return handler


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Configure the ``template_editor`` logger. Replaces earlier handlers.

    Args:
        level: Console level; DEBUG when TEMPLATE_EDITOR_DEBUG is set, else WARNING
        log_file: Also write every record (DEBUG and up) to this file
        quiet: No console handler

    Returns:
        The package logger
    """
    # the interactive screen owns stdout; only warnings go to stderr by default
    if level is None:
        level = logging.DEBUG if DEBUG_MODE else logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if log_file else level)

    if not quiet:
        logger.addHandler(_handler(
            logging.StreamHandler(sys.stderr),
            level,
            DEBUG_FORMAT if DEBUG_MODE else PLAIN_FORMAT
        ))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file), logging.DEBUG, FILE_FORMAT))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under the package namespace; ``"save"`` becomes ``template_editor.save``."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

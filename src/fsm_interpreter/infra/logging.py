"""Logging setup for the interpreter and its console driver."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from fsm_interpreter.config.models import LoggingConfig

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers held at WARNING unless ``LoggingConfig.loggers`` says otherwise.
QUIET_LOGGERS = ("statemachine",)


def configure_logging(config: LoggingConfig) -> List[logging.Handler]:
    """Route log records to a rotating file, to stderr, or to both.

    The root level filters records from every ``fsm.*`` and ``app.*`` logger;
    entries in ``config.loggers`` override it per logger, so
    ``{"fsm.engine": "DEBUG"}`` traces each outcome while the rest of the
    application stays at ``config.level``. Returns the installed handlers.
    """
    handlers = _build_handlers(config)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.captureWarnings(True)
    logging.basicConfig(level=_level(config.level), handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    for name, level in config.loggers.items():
        logging.getLogger(name).setLevel(_level(level))
    return handlers


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    log_path = config.resolved_path()
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    if config.console:
        # stdout carries driver output
        handlers.append(logging.StreamHandler(sys.stderr))

    if not handlers:
        handlers.append(logging.NullHandler())
    return handlers


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)

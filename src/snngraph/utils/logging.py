from __future__ import annotations

import logging

PACKAGE_LOGGER = "snngraph"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger. Output is left to the application's handlers."""
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def configure_logging(handler: logging.Handler | None = None, *, level: int = logging.INFO) -> None:
    """Route package logs to handler, by default a timestamped stderr stream."""
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

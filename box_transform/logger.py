"""Package logger for box_transform.

The core stays quiet by default (WARNING). Set BOX_TRANSFORM_LOG_LEVEL=debug to
see every move/resize frame, and BOX_TRANSFORM_LOG_CATS=transformer,helpers to
limit output to those modules.
"""

import logging
import os
import sys


def setup_logger(level: int = logging.WARNING, name: str = "box_transform") -> logging.Logger:
    """Create or update the ``box_transform`` logger.

    The env overrides are read on every call, so a host application that sets
    them after import still changes what the transformer and helpers emit.
    The base logger keeps exactly one stderr handler; repeated calls update
    its formatter and category filter.
    """
    logger = logging.getLogger(name)

    # Resolve level from env (override default)
    env_level = (os.getenv("BOX_TRANSFORM_LOG_LEVEL") or "").strip().lower()
    if env_level:
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }
        level = level_map.get(env_level, level)
    logger.setLevel(level)

    # Ensure there is exactly one stderr StreamHandler.
    stream_handler: logging.StreamHandler | None = None
    for h in list(logger.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr:
            stream_handler = h

    if stream_handler is None:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(stream_handler)

    # Formatter (idempotent)
    fmt = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    stream_handler.setFormatter(fmt)

    # Clear previous filters and apply a new one if cats provided
    stream_handler.filters.clear()
    cats = (os.getenv("BOX_TRANSFORM_LOG_CATS") or "").strip()
    if cats:
        allowed = {c.strip() for c in cats.split(",") if c.strip()}

        class _CategoryFilter(logging.Filter):
            def filter(self, record: logging.LogRecord) -> bool:
                # record.name like: box_transform.transformer, box_transform.helpers
                parts = (record.name or "").split(".")
                suffix = parts[-1] if parts else record.name
                return suffix in allowed

        stream_handler.addFilter(_CategoryFilter())

    # Do not propagate beyond the package logger
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = setup_logger()
    return base if not name else base.getChild(name)

"""Structured logging for clipnorm.

Library modules log through the standard ``logging`` module with a
snake_case event name and an ``extra`` mapping. ``setup_json_logging``
routes those records into loguru, which renders one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from types import FrameType

from loguru import logger as loguru_logger

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping ``extra`` fields as bound context."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: int | str = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the frame that called logging, not the logging module itself.
        frame: FrameType | None = sys._getframe(1)
        depth = 1
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        loguru_logger.bind(**context).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_json_logging(
    level: str = "INFO",
    log_file: str | None = None,
    *,
    rotation: str = "20 MB",
    retention: str = "14 days",
) -> None:
    """Send all logging to stderr as JSON, and optionally to a rotating file.

    stdout is left untouched so the CLI can print results there.
    """
    level = level.upper()
    loguru_logger.remove()
    loguru_logger.add(sys.stderr, level=level, serialize=True, diagnose=False)
    if log_file:
        loguru_logger.add(
            log_file,
            level=level,
            serialize=True,
            rotation=rotation,
            retention=retention,
            enqueue=True,
            diagnose=False,
        )

    root = logging.getLogger()
    root.handlers[:] = [InterceptHandler()]
    root.setLevel(getattr(logging, level, logging.INFO))
    logging.getLogger(__name__).debug(
        "logging_configured", extra={"level": level, "log_file": log_file}
    )


def truncate_log_content(content: str | None, max_length: int = 200) -> str | None:
    """Shorten *content* for a log preview, preferring a word boundary.

    Returns the input unchanged when it already fits.
    """
    if not content or len(content) <= max_length:
        return content

    marker = "... [truncated]"
    if max_length <= len(marker) + 5:
        return content[:max_length] + "..."

    head = content[: max_length - len(marker)]
    cut = head.rfind(" ")
    # Only back up to a space when it does not throw away most of the preview.
    if cut > len(head) // 2:
        head = head[:cut]
    return head.rstrip() + marker


__all__ = [
    "InterceptHandler",
    "setup_json_logging",
    "truncate_log_content",
]

"""
Logger wrappers.

ContextLogger binds key/value pairs (file paths, run ids) once and attaches
them to every message as ``extra`` fields.
"""

import logging
from typing import Any


class ContextLogger:
    """
    Logger wrapper that stamps bound context onto every record.

    Usage:
        log = ContextLogger(__name__, run_id="a1b2")
        log.info("Loaded document", rows=1200)
        # record carries run_id and rows
    """

    def __init__(self, name: str, **context):
        self.logger = logging.getLogger(name)
        self.context = context

    def _log(self, level: int, msg: str, *args, exc_info=None, **kwargs) -> None:
        self.logger.log(
            level,
            msg,
            *args,
            exc_info=exc_info,
            extra={**self.context, **kwargs},
        )

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, exc_info=None, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def bind(self, **context) -> None:
        """Add or overwrite bound context."""
        self.context.update(context)

    def get_context(self) -> dict[str, Any]:
        return self.context.copy()

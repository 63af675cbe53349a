"""Logging setup for the terminal front-end.

Log output goes to stderr so the transcript printed on stdout stays readable.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO
from uuid import uuid4

LOGGER = logging.getLogger(__name__)

_RESERVED_KEYS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName", "session_id"}

_HANDLER_NAME = "ecobot-stderr"


class JsonFormatter(logging.Formatter):
    """Render log records as JSON with contextual metadata."""

    def __init__(self, *, session_id: str | None = None) -> None:
        super().__init__()
        self._session_id = session_id

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS
        }
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, "session_id", None) or self._session_id,
            "context": context,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text
        return json.dumps(payload, default=str)


def configure_logging(
    *,
    level: int = logging.WARNING,
    json_output: bool = False,
    stream: TextIO | None = None,
    session_id: str | None = None,
) -> logging.Handler:
    """Attach a single stderr handler to the ``ecobot`` logger.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging verbosity level.
        json_output: Emit JSON lines via :class:`JsonFormatter`.
        stream: Target stream; ``sys.stderr`` when omitted.
        session_id: Identifier stamped on JSON records; random when omitted.

    Returns:
        The installed handler.
    """

    logger = logging.getLogger("ecobot")
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if json_output:
        handler.setFormatter(JsonFormatter(session_id=session_id or str(uuid4())))
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
    logger.addHandler(handler)
    logger.setLevel(level)
    LOGGER.debug("Logging configured", extra={"json_output": json_output})
    return handler

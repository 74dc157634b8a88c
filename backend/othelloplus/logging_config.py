"""Logging configuration for the Othello Plus service."""

from __future__ import annotations

import json
import logging
import sys


class JsonFormatter(logging.Formatter):
    """One JSON object per record; the message is escaped by ``json.dumps``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Configure the root logger once.

    Args:
        level: The logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Emit one JSON object per line instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if format_json:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)

    logging.root.setLevel(log_level)
    if not any(getattr(existing, "_othelloplus", False) for existing in logging.root.handlers):
        handler._othelloplus = True  # type: ignore[attr-defined]
        logging.root.addHandler(handler)


__all__ = ["JsonFormatter", "setup_logging"]

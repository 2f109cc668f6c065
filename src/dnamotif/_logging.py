"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/_logging.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import logging
import sys

from rich.logging import RichHandler

from ._console import console


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        return json.dumps(payload)


def setup_console_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure root logger for CLI. Library modules log via logging.getLogger(__name__)."""
    root = logging.getLogger()
    for h in list(root.handlers):  # idempotent re-init
        root.removeHandler(h)
    root.setLevel(level.upper())

    if json_logs:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            rich_tracebacks=False,
            markup=False,
        )
    root.addHandler(handler)

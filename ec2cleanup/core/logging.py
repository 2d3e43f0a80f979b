"""
Logging setup for ec2-cleanup.

Progress and counts go out at INFO, per-item delete failures at WARNING
and fatal aborts at ERROR. The console handler is Rich; ``--log-file``
adds a plain-text copy of the same records.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Chatty at INFO; only their warnings are worth showing
QUIET_LOGGERS = ("boto3", "botocore", "urllib3")


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Route all records through a Rich console handler, plus a file if asked.

    Root handlers are replaced on every call.

    Parameters
    ----------
    level : str or int, default="INFO"
        Threshold for both handlers.
    log_file : str, optional
        Also append records to this file.
    rich_tracebacks : bool, default=True
        Render exception tracebacks with Rich.
    console : Console, optional
        Console to write to; stderr when omitted.
    """
    threshold = _resolve_level(level)
    handlers: list[logging.Handler] = [
        # AWS error texts and resource names may contain square brackets
        RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=rich_tracebacks,
            markup=False,
        )
    ]
    handlers[0].setFormatter(logging.Formatter(CONSOLE_FORMAT))

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(threshold)
    for handler in handlers:
        handler.setLevel(threshold)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug(f"Logging at {logging.getLevelName(threshold)}, file={log_file}")

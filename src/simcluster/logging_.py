"""Logging utilities.

Standard `logging`, one line per record:
`<time> <LEVEL> <logger> | <message>`.

- Console handler always
- File handler at `<log_dir>/<run_id>.log` (default `<out_dir>/logs`) when a directory is given

Library modules only create named loggers (`simcluster.*`); handlers are
installed here, by the CLI.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(out_dir: Optional[str] = None, run_id: str = "simcluster", log_dir: Optional[str] = None, level: str = "INFO") -> Optional[str]:
    """
    Setup logging configuration.

    Args:
        out_dir: Run output directory (logs go to out_dir/logs unless log_dir is set)
        run_id: Run identifier, used as the log file name
        log_dir: Explicit log directory
        level: Root log level name

    Returns:
        Path of the log file, or None when only console logging is configured.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_dir is None and out_dir is None:
        return None
    if log_dir is None:
        log_dir = os.path.join(out_dir, "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"{run_id}.log")

    # File
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)
    return log_path

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger with a stream handler and an optional file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)

    # Clear existing handlers to avoid duplicates on repeated setup.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if logfile:
        Path(logfile).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logfile, encoding="utf-8")
        fh.setLevel(log_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # googleapiclient is chatty at INFO (discovery, retries).
    logging.getLogger("googleapiclient").setLevel(max(log_level, logging.WARNING))

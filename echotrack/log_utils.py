from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE = "echotrack.log"


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: Optional[Path] = None) -> None:
    """
    Configure the root logger with a rotating file under <data dir>/logs and
    a console handler. Safe to call more than once.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if log_dir is None:
        from .db import data_dir
        log_dir = data_dir() / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"WARNING: Could not create log directory {log_dir}: {e}")
        log_dir = None

    if log_dir is not None:
        path = os.path.abspath(str(log_dir / LOG_FILE))
        if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == path for h in root.handlers):
            fh = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3)
            fh.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
            fh.setLevel(level)
            root.addHandler(fh)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        ch.setLevel(level)
        root.addHandler(ch)

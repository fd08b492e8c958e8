"""Logging utilities.

We use Python's standard `logging` module on the root logger:
- console handler always
- `<log_dir>/datadefender.log` when a log directory is given

Calling setup_logging() again replaces the handlers it installed earlier and
leaves any other handler alone.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
DATEFMT = "%Y-%m-%dT%H:%M:%S"
LOG_FILE = "datadefender.log"

_HANDLER_MARK = "_datadefender_handler"

def setup_logging(level: int = logging.INFO, log_dir: Optional[str] = None) -> None:
    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _HANDLER_MARK, False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    handlers = [logging.StreamHandler()]
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_dir, LOG_FILE), encoding="utf-8"))

    for h in handlers:
        h.setFormatter(fmt)
        setattr(h, _HANDLER_MARK, True)
        root.addHandler(h)

def set_log_level(level: int) -> None:
    logging.getLogger().setLevel(level)

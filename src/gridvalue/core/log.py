from __future__ import annotations

import logging
from typing import Optional

FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger ("gridvalue") with a console handler and an
    optional file handler. Repeated calls only update the level.
    """
    log = logging.getLogger("gridvalue")
    lvl = getattr(logging, level.upper(), logging.INFO)
    log.setLevel(lvl)
    # Avoid adding multiple handlers on repeated runs
    if not log.handlers:
        fmt = logging.Formatter(FORMAT)
        # Console
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        log.addHandler(ch)
        # File
        if log_file:
            fh = logging.FileHandler(log_file)
            fh.setFormatter(fmt)
            log.addHandler(fh)
    for h in log.handlers:
        h.setLevel(lvl)
    return log

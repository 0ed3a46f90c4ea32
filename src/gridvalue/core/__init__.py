# Shared utilities. Explicit re-exports for a clean public API.

from .io import (
    ensure_dir as ensure_dir,
    load_yaml as load_yaml,
    save_yaml as save_yaml,
)
from .log import setup_logging as setup_logging
from .timers import Timer as Timer, timed as timed

__all__ = [
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "setup_logging",
    "Timer",
    "timed",
]

"""
Logging Module - Progress-Aware Logging System

Keeps console logging from tearing through a progress line while the
watcher is repainting it. File logging is never suppressed.

Usage:
    from rangeprogress.logging import LoggingManager

    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)

    with manager.progress_mode():
        # INFO/DEBUG held back, warnings buffered, errors shown at once
        pass
"""

from rangeprogress.logging.manager import LoggingManager, setup_logging
from rangeprogress.logging.handlers import ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'ProgressAwareConsoleHandler',
    'setup_logging',
]

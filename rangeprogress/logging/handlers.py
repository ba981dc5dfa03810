"""
Progress-Aware Console Handler

Logging handler that keeps console output from tearing through a progress
line that is being repainted in place.
"""

import logging
import sys
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rangeprogress.logging.manager import LoggingManager


class ProgressAwareConsoleHandler(logging.StreamHandler):
    """
    Console handler that respects progress mode.

    When progress mode is active:
    - ERROR messages are displayed immediately via the manager
    - WARNING messages are buffered for later display
    - INFO/DEBUG messages are suppressed

    When progress mode is inactive it behaves like a plain StreamHandler.
    """

    def __init__(self, stream=None, logging_manager: Optional['LoggingManager'] = None) -> None:
        super().__init__(stream or sys.stdout)
        self._logging_manager = logging_manager
        self._progress_mode = False

    def set_progress_mode(self, enabled: bool) -> None:
        """Enable or disable progress mode."""
        self._progress_mode = enabled

    @property
    def progress_mode(self) -> bool:
        return self._progress_mode

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if not self._progress_mode:
                super().emit(record)
                return

            if record.levelno >= logging.ERROR:
                if self._logging_manager:
                    self._logging_manager.display_critical_error(record)
                else:
                    sys.stderr.write(f"{self.format(record)}\n")
                    sys.stderr.flush()

            elif record.levelno >= logging.WARNING:
                if self._logging_manager:
                    self._logging_manager.buffer_warning(record)

            # INFO and DEBUG still reach the file handler
        except Exception:
            self.handleError(record)

"""
Text Progress Renderer

Draws the tracker as a single console line, repainted in place:

    Progress: [##############--------------] - 50%
"""

import sys
from threading import RLock
from typing import Optional, TextIO

from rangeprogress.config import get_config
from rangeprogress.core.bar import render_bar
from rangeprogress.core.tracker import TrackerSnapshot
from rangeprogress.display.base import ProgressRenderer


class TextProgressRenderer(ProgressRenderer):
    """
    Plain text renderer for any stream.

    Each repaint blanks a fixed-width region with a carriage return before
    printing the new line, so shorter lines never leave stale characters.
    """

    def __init__(self, file: Optional[TextIO] = None, width: Optional[int] = None) -> None:
        """
        Initialize text renderer.

        Args:
            file: Output stream (defaults to stdout)
            width: Bar width including brackets (default from config)
        """
        config = get_config()
        self.file = file or sys.stdout
        self.width = width if width is not None else config.default_width
        self._clear_line = "\r" + " " * (self.width + config.clear_padding)
        self._lock = RLock()
        self._is_started = False

    def is_available(self) -> bool:
        return True

    def format_line(self, snapshot: TrackerSnapshot) -> str:
        """Format the progress line for a snapshot."""
        return f"Progress: {render_bar(snapshot.value, self.width)} - {snapshot.percentage}%"

    def start(self) -> None:
        with self._lock:
            if self._is_started:
                return
            self.file.write("\n")
            self._is_started = True

    def stop(self) -> None:
        with self._lock:
            if not self._is_started:
                return
            self.file.write("\n")
            self.file.flush()
            self._is_started = False

    def update(self, snapshot: TrackerSnapshot) -> None:
        with self._lock:
            self.file.write(self._clear_line)
            self.file.write("\r" + self.format_line(snapshot))
            self.file.flush()

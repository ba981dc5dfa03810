"""
tqdm Progress Renderer

Provides progress display using tqdm for broader compatibility.
"""

import sys
from threading import RLock
from typing import Optional, TextIO

from tqdm import tqdm

from rangeprogress.core.tracker import TrackerSnapshot
from rangeprogress.display.base import ProgressRenderer


class TqdmProgressRenderer(ProgressRenderer):
    """
    tqdm-based progress renderer.

    Features:
    - Single 0-100 bar on the true (global) value
    - Compatible with most terminal environments
    """

    def __init__(
        self,
        file: Optional[TextIO] = None,
        description: str = "Progress",
        disable_on_non_tty: bool = True,
    ) -> None:
        """
        Initialize tqdm progress renderer.

        Args:
            file: Output stream (defaults to stderr)
            description: Label shown before the bar
            disable_on_non_tty: Disable progress when not in TTY environment
        """
        self.file = file or sys.stderr
        self.description = description
        self.disable_on_non_tty = disable_on_non_tty
        self._lock = RLock()
        self._pbar: Optional[tqdm] = None

    def is_available(self) -> bool:
        return True

    def start(self) -> None:
        """Start tqdm progress display."""
        with self._lock:
            if self._pbar is not None:
                return

            is_tty = self.file.isatty() if hasattr(self.file, 'isatty') else False
            self._pbar = tqdm(
                desc=self.description,
                total=100,
                file=self.file,
                disable=self.disable_on_non_tty and not is_tty,
                ascii=True,
                unit='%',
                dynamic_ncols=True,
            )

    def stop(self) -> None:
        """Stop tqdm progress display."""
        with self._lock:
            if self._pbar is None:
                return
            self._pbar.close()
            self._pbar = None

    def update(self, snapshot: TrackerSnapshot) -> None:
        """Advance the bar to the snapshot's percentage."""
        with self._lock:
            if self._pbar is None:
                return

            # tqdm only moves forward through update(); set n for overshoot and rewinds
            self._pbar.n = snapshot.percentage
            if snapshot.depth > 1:
                self._pbar.set_postfix_str(f"frame {snapshot.depth - 1}: {snapshot.local * 100:.0f}%", refresh=False)
            else:
                self._pbar.set_postfix_str("", refresh=False)
            self._pbar.refresh()

"""
Rich Progress Renderer

Displays the tracker as a Rich progress bar with frame information.
"""

import logging
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.progress import (
    Progress, TaskID, BarColumn, TextColumn,
    TimeElapsedColumn, TimeRemainingColumn, SpinnerColumn
)

from rangeprogress.config import get_config
from rangeprogress.core.tracker import TrackerSnapshot
from rangeprogress.display.base import ProgressRenderer

logger = logging.getLogger(__name__)


class RichProgressRenderer(ProgressRenderer):
    """
    Rich-based progress renderer.

    Features:
    - Overall progress bar on the true (global) value
    - Active frame and its local progress in the description
    - Elapsed and remaining time
    """

    def __init__(self, console: Optional[Console] = None, description: str = "Progress") -> None:
        """
        Initialize Rich progress renderer.

        Args:
            console: Optional Rich console instance
            description: Label shown before the bar
        """
        self.console = console or Console(stderr=True)
        self.description = description
        self._lock = RLock()
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def is_available(self) -> bool:
        """Check if the console can redraw in place."""
        return self.console.is_terminal

    def start(self) -> None:
        """Start the Rich progress display."""
        config = get_config()

        with self._lock:
            if self._progress is not None:
                return

            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                TimeElapsedColumn(),
                TimeRemainingColumn(),
                console=self.console,
                refresh_per_second=config.rich_refresh_rate,
            )
            self._task_id = self._progress.add_task(self.description, total=100)
            self._progress.start()

    def stop(self) -> None:
        """Stop the Rich progress display."""
        with self._lock:
            if self._progress is not None:
                self._progress.stop()
                self._progress = None
                self._task_id = None

    def update(self, snapshot: TrackerSnapshot) -> None:
        """Move the bar to the snapshot's percentage."""
        with self._lock:
            if self._progress is None or self._task_id is None:
                return

            self._progress.update(
                self._task_id,
                completed=snapshot.percentage,
                description=self._get_description(snapshot),
            )

    def _get_description(self, snapshot: TrackerSnapshot) -> str:
        """Get formatted description for the current frame."""
        if snapshot.done:
            return f"[green]{self.description}[/green]"
        if snapshot.depth <= 1:
            return f"[blue]{self.description}[/blue]"

        return (
            f"[blue]{self.description}[/blue] "
            f"[dim]frame {snapshot.depth - 1} "
            f"[{snapshot.lower_bound:.2f}-{snapshot.upper_bound:.2f}] "
            f"{snapshot.local * 100:.0f}%[/dim]"
        )


def is_rich_available() -> bool:
    """Check if Rich can drive a live display on stderr."""
    return Console(stderr=True).is_terminal

"""
Progress Watcher Module

Polls a tracker that other threads are driving and repaints a renderer
whenever the displayed percentage changes.
"""

import logging
import time
from dataclasses import replace
from threading import Event
from typing import Optional, TYPE_CHECKING

from rangeprogress.config import get_config
from rangeprogress.core.tracker import RangeTracker, TrackerSnapshot
from rangeprogress.display.base import ProgressRenderer
from rangeprogress.display.text_renderer import TextProgressRenderer

if TYPE_CHECKING:
    from rangeprogress.logging import LoggingManager

logger = logging.getLogger(__name__)


class ProgressWatcher:
    """
    Cooperative, cancellable "wait until done" loop.

    The watcher checks the tracker every ``interval`` seconds, waiting on the
    cancel event between checks so that cancel() wakes it immediately. The
    renderer is only repainted when the rounded percentage changes.
    """

    def __init__(
        self,
        tracker: RangeTracker,
        renderer: Optional[ProgressRenderer] = None,
        interval: Optional[float] = None,
        cancel_event: Optional[Event] = None,
        logging_manager: Optional["LoggingManager"] = None,
    ) -> None:
        """
        Initialize progress watcher.

        Args:
            tracker: Tracker to watch
            renderer: Display to repaint (defaults to a text renderer on stdout)
            interval: Seconds between checks (default from config)
            cancel_event: Event that stops the watch when set
            logging_manager: LoggingManager switched to progress mode while watching
        """
        self.tracker = tracker
        self.renderer = renderer or TextProgressRenderer()
        self.interval = interval if interval is not None else get_config().poll_interval
        self.cancel_event = cancel_event or Event()
        self._logging_manager = logging_manager
        self.repaint_count = 0

    def cancel(self) -> None:
        """Stop the watch loop from any thread."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def watch(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the tracker is done, the watch is cancelled, or timeout elapses.

        Args:
            timeout: Optional limit in seconds

        Returns:
            True if the tracker completed, False otherwise
        """
        deadline = time.monotonic() + timeout if timeout is not None else None

        if self._logging_manager:
            self._logging_manager.enable_progress_mode()
        try:
            self.renderer.start()
            try:
                return self._run(deadline)
            finally:
                self.renderer.stop()
        finally:
            if self._logging_manager:
                self._logging_manager.disable_progress_mode()

    def _run(self, deadline: Optional[float]) -> bool:
        snapshot = self.tracker.snapshot()
        self._repaint(snapshot)
        shown = snapshot.percentage

        while not self.tracker.is_done():
            if self.cancelled:
                logger.debug("Progress watch cancelled")
                return False
            if deadline is not None and time.monotonic() >= deadline:
                logger.debug("Progress watch timed out")
                return False

            snapshot = self.tracker.snapshot()
            if snapshot.percentage != shown:
                shown = snapshot.percentage
                self._repaint(snapshot)

            self.cancel_event.wait(self.interval)

        # Completion is always shown as 100%, also when done through the tolerance
        self._repaint(replace(self.tracker.snapshot(), percentage=100, done=True))
        logger.debug("Progress watch finished")
        return True

    def _repaint(self, snapshot: TrackerSnapshot) -> None:
        try:
            self.renderer.update(snapshot)
            self.repaint_count += 1
        except Exception as e:
            # Rendering errors must not stop the watch
            logger.warning(f"Renderer update failed: {e}")

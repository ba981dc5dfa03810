"""
Core Range Tracker Module

Tracks the completion of a task made of nested sub-tasks.

Each sub-task reports progress in its own local [0, 1] frame. The tracker keeps
a stack of absolute ranges and translates local values into a single global
(true) value:

    tracker = RangeTracker()
    tracker.push_range(0.0, 0.5)   # task A covers the first half
    tracker.push_range(0.0, 0.4)   # A1 covers 0.0-0.4 of A
    tracker.set(0.5)               # halfway through A1 -> true value 0.1
    tracker.pop_range()            # back to A
    tracker.pop_range()            # back to the whole task

A loop whose body reports its own progress:

    for i in range(n):
        with tracker.frame(i / n, (i + 1) / n):
            step(tracker)
"""

import logging
import math
import warnings
from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from typing import Iterator, List, Optional, Tuple

from rangeprogress import config
from rangeprogress.core.bar import render_bar
from rangeprogress.exceptions import InvalidArgumentError, RangeUnderflowError

logger = logging.getLogger(__name__)

BASE_FRAME: Tuple[float, float] = (0.0, 1.0)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Consistent view of a tracker, read in a single critical section."""
    value: float
    local: float
    lower_bound: float
    upper_bound: float
    depth: int
    percentage: int
    done: bool


class RangeTracker:
    """
    Range-conscious progress tracker.

    Thread-safe: every mutating and reading operation runs under one lock, so
    no caller observes a half-updated range. There is no transaction spanning
    several calls; a reader between another thread's push_range() and its
    first set() sees the current true value translated into the new frame.
    """

    def __init__(self, initial: float = 0.0, tolerance: Optional[float] = None) -> None:
        """
        Initialize a tracker.

        Args:
            initial: Initial true progress
            tolerance: Per-tracker epsilon for is_done(); None follows the
                process-wide tolerance
        """
        if tolerance is not None and tolerance > config.get_config().max_tolerance:
            raise InvalidArgumentError(f"Tolerance {tolerance} is greater than the allowed maximum")

        self._lock = RLock()
        self._tolerance = tolerance
        self._value = 0.0
        self._lower_bound, self._upper_bound = BASE_FRAME
        self._frames: List[Tuple[float, float]] = []

        self.set(initial)
        self.push_range(*BASE_FRAME)

    def _true_value(self, local: float) -> float:
        return self._lower_bound + (self._upper_bound - self._lower_bound) * local

    def _local_value(self, true_value: float) -> float:
        return (true_value - self._lower_bound) / (self._upper_bound - self._lower_bound)

    def _percentage(self) -> int:
        # Half-up, so 12.5 -> 13
        return math.floor(self._value * 100 + 0.5)

    def set(self, value: float) -> None:
        """
        Range-consciously set the progress.

        For example, if the range is 0.5 to 0.7, set(0.25) sets the true
        value to 0.55. Values outside [0, 1] are not clamped.

        Raises:
            InvalidArgumentError: If value is NaN or infinite
        """
        if not math.isfinite(value):
            raise InvalidArgumentError(f"Progress must be a finite number (got {value})")
        with self._lock:
            self._value = self._true_value(value)

    def get(self) -> float:
        """Get the range-conscious progress."""
        with self._lock:
            return self._local_value(self._value)

    def get_true(self) -> float:
        """Get the true progress, regardless of the active range."""
        with self._lock:
            return self._value

    def set_done_unsafe(self) -> None:
        """
        Set the true progress to 1.0.

        This ignores the active range entirely. Prefer set(1.0) at the top
        level, or popping back to the base frame first.
        """
        warnings.warn(
            "set_done_unsafe() bypasses range translation; use set(1.0) instead",
            DeprecationWarning,
            stacklevel=2,
        )
        with self._lock:
            logger.warning(f"Forcing progress to done at depth {len(self._frames)}")
            self._value = 1.0

    @property
    def tolerance_override(self) -> Optional[float]:
        """Per-tracker tolerance, or None when following the global one."""
        return self._tolerance

    def is_done(self) -> bool:
        """Check whether the true progress has reached 1 - tolerance."""
        epsilon = self._tolerance if self._tolerance is not None else config.tolerance()
        with self._lock:
            return self._value >= 1.0 - epsilon

    def push_range(self, lower_bound: float, upper_bound: float) -> None:
        """
        Push the tracker into a new range, expressed in the current range.

        For example, push_range(0.8, 0.9) followed by set(0.25) makes get()
        return 0.25 and get_true() return 0.825.

        Raises:
            InvalidArgumentError: If a bound is outside [0, 1] or
                lower_bound >= upper_bound
        """
        _check_bounds(lower_bound, upper_bound)

        with self._lock:
            self._frames.append((self._lower_bound, self._upper_bound))
            new_lower = self._true_value(lower_bound)
            new_upper = self._true_value(upper_bound)
            self._lower_bound, self._upper_bound = new_lower, new_upper
            logger.debug(
                f"Pushed range ({lower_bound}, {upper_bound}) -> "
                f"[{new_lower}, {new_upper}] at depth {len(self._frames)}"
            )

    def pop_range(self) -> None:
        """
        Return the tracker to the previous range.

        Raises:
            RangeUnderflowError: If only the base frame remains
        """
        with self._lock:
            if len(self._frames) <= 1:
                raise RangeUnderflowError("Cannot pop the base frame; push_range/pop_range calls are unbalanced")
            self._lower_bound, self._upper_bound = self._frames.pop()
            logger.debug(
                f"Popped range, restored [{self._lower_bound}, {self._upper_bound}] "
                f"at depth {len(self._frames)}"
            )

    @contextmanager
    def frame(self, lower_bound: float, upper_bound: float) -> Iterator["RangeTracker"]:
        """
        Context manager running a sub-task within a range.

        Usage:
            with tracker.frame(0.2, 0.6):
                tracker.set(0.5)  # true value 0.4
            # previous range restored, also on error
        """
        self.push_range(lower_bound, upper_bound)
        try:
            yield self
        finally:
            self.pop_range()

    @property
    def bounds(self) -> Tuple[float, float]:
        """Active absolute (lower_bound, upper_bound)."""
        with self._lock:
            return self._lower_bound, self._upper_bound

    @property
    def depth(self) -> int:
        """Number of frames on the stack; 1 means only the base frame."""
        with self._lock:
            return len(self._frames)

    def percentage(self) -> int:
        """Get the true progress as a rounded integer percentage."""
        with self._lock:
            return self._percentage()

    def render(self, width: Optional[int] = None) -> str:
        """
        Get the drawing of the progress bar.

        Args:
            width: Total width of the drawing (default 30)
        """
        with self._lock:
            value = self._value
        return render_bar(value, width)

    def snapshot(self) -> TrackerSnapshot:
        """Read the whole tracker state at once."""
        epsilon = self._tolerance if self._tolerance is not None else config.tolerance()
        with self._lock:
            return TrackerSnapshot(
                value=self._value,
                local=self._local_value(self._value),
                lower_bound=self._lower_bound,
                upper_bound=self._upper_bound,
                depth=len(self._frames),
                percentage=self._percentage(),
                done=self._value >= 1.0 - epsilon,
            )

    def wait_until_done(self, renderer=None, interval: Optional[float] = None, cancel_event=None) -> bool:
        """
        Block, drawing the progress, until another thread finishes the task.

        Returns:
            True if the tracker completed, False if the wait was cancelled
        """
        from rangeprogress.display.watcher import ProgressWatcher

        watcher = ProgressWatcher(self, renderer=renderer, interval=interval, cancel_event=cancel_event)
        return watcher.watch()

    @staticmethod
    def tolerance() -> float:
        """Get the tolerance of every tracker."""
        return config.tolerance()

    @staticmethod
    def set_tolerance(value: float) -> None:
        """Set the tolerance of every tracker."""
        config.set_tolerance(value)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        lower, upper = self.bounds
        return f"RangeTracker(value={self.get_true()!r}, range=[{lower!r}, {upper!r}], depth={self.depth})"


def _check_bounds(lower_bound: float, upper_bound: float) -> None:
    for bound in (lower_bound, upper_bound):
        if not math.isfinite(bound) or bound < 0 or bound > 1:
            raise InvalidArgumentError(f"Bounds must be from 0 to 1 only (got {lower_bound}, {upper_bound})")
    if lower_bound >= upper_bound:
        raise InvalidArgumentError(
            f"Lower bound can't be greater than or equal to the upper bound "
            f"(got {lower_bound}, {upper_bound})"
        )

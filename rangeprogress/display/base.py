"""
Progress Renderer Base Module

Defines the renderer interface used by the progress watcher.
"""

from abc import ABC, abstractmethod
from enum import Enum

from rangeprogress.core.tracker import TrackerSnapshot


class DisplayMode(Enum):
    """Progress display modes."""
    AUTO = "auto"      # Automatically choose best renderer
    RICH = "rich"      # Rich progress bar
    TQDM = "tqdm"      # tqdm progress bar
    TEXT = "text"      # Plain "Progress: [###---] - 50%" line
    OFF = "off"        # Disable progress display


class ProgressRenderer(ABC):
    """Abstract base class for progress renderers."""

    @abstractmethod
    def start(self) -> None:
        """Start the progress display."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the progress display."""
        pass

    @abstractmethod
    def update(self, snapshot: TrackerSnapshot) -> None:
        """Repaint the display for a new tracker state."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this renderer is available in the current environment."""
        pass

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

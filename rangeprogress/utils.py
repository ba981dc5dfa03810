"""
Progress Utilities

Helper functions for choosing a renderer and wiring up a watcher.
"""

import logging
import sys
from threading import Event
from typing import Optional, TYPE_CHECKING

from rangeprogress.core.tracker import RangeTracker
from rangeprogress.display.base import DisplayMode, ProgressRenderer
from rangeprogress.display.rich_renderer import RichProgressRenderer, is_rich_available
from rangeprogress.display.text_renderer import TextProgressRenderer
from rangeprogress.display.tqdm_renderer import TqdmProgressRenderer
from rangeprogress.display.watcher import ProgressWatcher

if TYPE_CHECKING:
    from rangeprogress.logging import LoggingManager

logger = logging.getLogger(__name__)


def parse_display_mode(mode_str: str) -> DisplayMode:
    """
    Convert a mode string to a DisplayMode, falling back to AUTO.

    Args:
        mode_str: "auto", "rich", "tqdm", "text" or "off"
    """
    try:
        return DisplayMode(mode_str.strip().lower())
    except ValueError:
        logger.warning(f"Invalid progress mode '{mode_str}', using 'auto'")
        return DisplayMode.AUTO


def select_renderer(mode: DisplayMode = DisplayMode.AUTO) -> Optional[ProgressRenderer]:
    """
    Instantiate the renderer for a display mode.

    AUTO prefers Rich when stderr is a terminal, then tqdm when stderr is a
    terminal, then the plain text renderer.

    Returns:
        ProgressRenderer instance, or None for DisplayMode.OFF
    """
    if mode == DisplayMode.OFF:
        return None
    if mode == DisplayMode.RICH:
        return RichProgressRenderer()
    if mode == DisplayMode.TQDM:
        return TqdmProgressRenderer()
    if mode == DisplayMode.TEXT:
        return TextProgressRenderer()

    if is_rich_available():
        renderer: ProgressRenderer = RichProgressRenderer()
    elif sys.stderr.isatty():
        renderer = TqdmProgressRenderer()
    else:
        renderer = TextProgressRenderer()
    logger.debug(f"Auto-selected renderer: {type(renderer).__name__}")
    return renderer


def create_watcher(
    tracker: RangeTracker,
    mode_str: str = "auto",
    cancel_event: Optional[Event] = None,
    logging_manager: Optional["LoggingManager"] = None,
) -> Optional[ProgressWatcher]:
    """
    Setup a watcher for a tracker with automatic renderer selection.

    Returns:
        Configured ProgressWatcher, or None when the display is off
    """
    renderer = select_renderer(parse_display_mode(mode_str))
    if renderer is None:
        logger.info("Progress display: disabled")
        return None

    logger.info(f"Progress display: {type(renderer).__name__}")
    return ProgressWatcher(
        tracker,
        renderer=renderer,
        cancel_event=cancel_event,
        logging_manager=logging_manager,
    )


def log_section_header(title: str, width: int = 70) -> None:
    """Log a section header framed by separator lines."""
    separator = "=" * width
    logger.info(separator)
    logger.info(title)
    logger.info(separator)

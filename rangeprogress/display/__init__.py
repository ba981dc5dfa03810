"""
Progress Display Components

Contains renderers for different output formats and the polling watcher.
"""

from rangeprogress.display.base import DisplayMode, ProgressRenderer
from rangeprogress.display.text_renderer import TextProgressRenderer
from rangeprogress.display.rich_renderer import RichProgressRenderer, is_rich_available
from rangeprogress.display.tqdm_renderer import TqdmProgressRenderer
from rangeprogress.display.watcher import ProgressWatcher

__all__ = [
    'DisplayMode',
    'ProgressRenderer',
    'TextProgressRenderer',
    'RichProgressRenderer',
    'TqdmProgressRenderer',
    'ProgressWatcher',
    'is_rich_available',
]

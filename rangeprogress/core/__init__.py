"""
Core Range Tracking Components

Contains the range tracker and the bar drawing helper.
"""

from rangeprogress.core.bar import render_bar
from rangeprogress.core.tracker import RangeTracker, TrackerSnapshot

__all__ = [
    'RangeTracker',
    'TrackerSnapshot',
    'render_bar',
]

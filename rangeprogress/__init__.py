"""Range Progress Package"""

# Expose key components at package level for convenience

# Exceptions (centralized)
from rangeprogress.exceptions import ProgressError, InvalidArgumentError, RangeUnderflowError

# Configuration
from rangeprogress.config import (
    ProgressConfig,
    get_config,
    set_config,
    update_config,
    reset_config,
    tolerance,
    set_tolerance,
)

# Core
from rangeprogress.core import RangeTracker, TrackerSnapshot, render_bar

# Display
from rangeprogress.display import (
    DisplayMode,
    ProgressRenderer,
    ProgressWatcher,
    RichProgressRenderer,
    TextProgressRenderer,
    TqdmProgressRenderer,
)

# Utils
from rangeprogress.utils import create_watcher, select_renderer

__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "ProgressError",
    "InvalidArgumentError",
    "RangeUnderflowError",
    # Configuration
    "ProgressConfig",
    "get_config",
    "set_config",
    "update_config",
    "reset_config",
    "tolerance",
    "set_tolerance",
    # Core
    "RangeTracker",
    "TrackerSnapshot",
    "render_bar",
    # Display
    "DisplayMode",
    "ProgressRenderer",
    "ProgressWatcher",
    "RichProgressRenderer",
    "TextProgressRenderer",
    "TqdmProgressRenderer",
    # Utils
    "create_watcher",
    "select_renderer",
]

"""
Progress Configuration Module

Process-wide configuration for range trackers and progress displays.

The tolerance used for "done" detection is shared by every tracker that was
not constructed with an explicit override. Set it once at startup; concurrent
writers follow last-writer-wins semantics under the configuration lock.
"""

import logging
from dataclasses import dataclass, fields, replace
from threading import RLock

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass
class ProgressConfig:
    """Configuration settings for range tracking and display."""

    # Done detection
    tolerance: float = 1e-12  # value >= 1 - tolerance counts as done
    max_tolerance: float = 0.1  # Sanity guard for set_tolerance()

    # Rendering
    default_width: int = 30  # Total bar width including brackets
    clear_padding: int = 20  # Extra columns blanked by the text renderer

    # Watcher
    poll_interval: float = 0.05  # Seconds between completion checks
    rich_refresh_rate: int = 8  # Rich renderer refresh rate (Hz)


# Global configuration instance
_config = ProgressConfig()
_config_lock = RLock()


def get_config() -> ProgressConfig:
    """Get the current global progress configuration."""
    with _config_lock:
        return _config


def set_config(config: ProgressConfig) -> None:
    """Set the global progress configuration."""
    global _config
    _check_tolerance(config.tolerance, config.max_tolerance)
    _check_width(config.default_width)
    with _config_lock:
        _config = config


def update_config(**kwargs) -> None:
    """Update specific configuration values."""
    global _config
    known = {f.name for f in fields(ProgressConfig)}
    with _config_lock:
        for key in kwargs:
            if key not in known:
                raise ValueError(f"Unknown configuration option: {key}")
        candidate = replace(_config, **kwargs)
        _check_tolerance(candidate.tolerance, candidate.max_tolerance)
        _check_width(candidate.default_width)
        _config = candidate


def reset_config() -> None:
    """Restore the default configuration."""
    set_config(ProgressConfig())


def tolerance() -> float:
    """Get the tolerance shared by every tracker."""
    return get_config().tolerance


def set_tolerance(value: float) -> None:
    """
    Set the tolerance shared by every tracker.

    Args:
        value: New epsilon; a tracker whose value reaches 1 - epsilon is done

    Raises:
        InvalidArgumentError: If the value exceeds the configured guard (0.1)
    """
    global _config
    with _config_lock:
        _check_tolerance(value, _config.max_tolerance)
        _config = replace(_config, tolerance=value)
    logger.debug(f"Tolerance set to {value}")


def _check_tolerance(value: float, limit: float) -> None:
    if value > limit:
        raise InvalidArgumentError(
            f"Tolerance is supposed to be a positive number very close to zero, "
            f"so that progress exceeding 1 - tolerance is considered done. "
            f"Got {value}, which is greater than {limit}; this is most likely "
            f"a misconfiguration."
        )


def _check_width(width: int) -> None:
    if width <= 2:
        raise InvalidArgumentError(
            f"Default width must be greater than 2 to leave room for \"[\" and \"]\" (got {width})"
        )

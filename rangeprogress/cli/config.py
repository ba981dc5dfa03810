"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration for the
demo runner.
"""

import os
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from rangeprogress.display.base import DisplayMode

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid {name} value '{raw}', using default {default}")
        return default


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name} value '{raw}', using default {default}")
        return default
    if value < minimum:
        logger.warning(f"{name} must be at least {minimum}, got {value}. Using default {default}.")
        return default
    return value


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and load environment configuration.

    Environment variables (optionally from a .env file) provide defaults;
    command-line flags override them.

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - log_file: Path
            - console_log_level: int
    """
    load_dotenv()

    env_mode = os.getenv('PROGRESS_MODE', 'auto')
    env_log_file = os.getenv('LOG_FILE', './logs/rangeprogress.log')
    env_tolerance = _env_float('PROGRESS_TOLERANCE', 1e-12)
    env_width = _env_int('PROGRESS_WIDTH', 30, minimum=3)
    env_interval = _env_float('POLL_INTERVAL', 0.05)

    modes = [mode.value for mode in DisplayMode]
    if env_mode not in modes:
        logger.warning(f"Invalid PROGRESS_MODE value '{env_mode}', using default 'auto'")
        env_mode = 'auto'

    parser = argparse.ArgumentParser(
        description='Run a nested demo workload and display its global progress'
    )
    parser.add_argument(
        '--progress',
        type=str,
        choices=modes,
        default=env_mode,
        help=f'Progress display mode (default: {env_mode})'
    )
    parser.add_argument(
        '--steps',
        type=int,
        default=5,
        help='Number of top-level sub-tasks in the demo workload (default: 5)'
    )
    parser.add_argument(
        '--delay',
        type=float,
        default=0.05,
        help='Seconds each innermost unit of work takes (default: 0.05)'
    )
    parser.add_argument(
        '--width',
        type=int,
        default=env_width,
        help=f'Bar width for the text display (default: {env_width})'
    )
    parser.add_argument(
        '--tolerance',
        type=float,
        default=env_tolerance,
        help=f'Done-detection tolerance shared by all trackers (default: {env_tolerance})'
    )
    parser.add_argument(
        '--interval',
        type=float,
        default=env_interval,
        help=f'Seconds between progress checks (default: {env_interval})'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log workflow steps to the console'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log every frame push and pop to the console'
    )

    args = parser.parse_args(argv)

    if args.steps < 1:
        parser.error(f"--steps must be at least 1, got {args.steps}")
    if args.width < 3:
        parser.error(f"--width must be at least 3, got {args.width}")

    args.log_file = Path(env_log_file)
    if args.debug:
        args.console_log_level = logging.DEBUG
    elif args.verbose:
        args.console_log_level = logging.INFO
    else:
        args.console_log_level = logging.WARNING

    return args

#!/usr/bin/env python3
"""
Range Progress - Demo Entry Point

Runs a nested workload on a worker thread while the main thread watches the
shared tracker:
1. Each top-level step owns an equal slice of the whole task
2. Every step runs a "prepare" and a "process" sub-task in its own frame
3. The sub-tasks only report local progress; the display shows the global value
"""

import sys
import logging
import threading
import time

from rangeprogress import RangeTracker, ProgressError, set_tolerance, update_config
from rangeprogress.cli.config import parse_arguments
from rangeprogress.logging import LoggingManager
from rangeprogress.utils import create_watcher, log_section_header

logger = logging.getLogger(__name__)


def run_unit_of_work(tracker: RangeTracker, units: int, delay: float) -> None:
    """Sub-task that only knows about its own [0, 1] frame."""
    for i in range(units):
        time.sleep(delay)
        tracker.set((i + 1) / units)


def run_workload(tracker: RangeTracker, steps: int, delay: float) -> None:
    """Top-level task split into equal steps, each with two weighted sub-tasks."""
    for step in range(steps):
        with tracker.frame(step / steps, (step + 1) / steps):
            logger.info(f"Step {step + 1}/{steps} started")
            with tracker.frame(0.0, 0.2):
                run_unit_of_work(tracker, units=2, delay=delay)
            with tracker.frame(0.2, 1.0):
                run_unit_of_work(tracker, units=8, delay=delay)
    tracker.set(1.0)


def main():
    """
    Main entry point - parse config, start the workload and watch it.

    Returns:
        Exit code: 0 for success, 2 for fatal errors, 130 when interrupted
    """
    args = parse_arguments()

    logging_manager = LoggingManager.get_instance()
    logging_manager.setup(args.log_file, console_level=args.console_log_level)

    cancel_event = threading.Event()
    try:
        set_tolerance(args.tolerance)
        update_config(default_width=args.width, poll_interval=args.interval)

        log_section_header("RANGE PROGRESS DEMO")

        tracker = RangeTracker()
        worker = threading.Thread(
            target=run_workload,
            args=(tracker, args.steps, args.delay),
            name="workload",
            daemon=True,
        )
        worker.start()

        watcher = create_watcher(
            tracker,
            args.progress,
            cancel_event=cancel_event,
            logging_manager=logging_manager,
        )
        if watcher is not None:
            watcher.watch()
        worker.join()

        logger.info(f"Workload complete: {tracker.percentage()}%")
        return 0

    except ProgressError as e:
        logger.error(f"Invalid progress configuration: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2

    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2

    except KeyboardInterrupt:
        cancel_event.set()
        logger.warning("\nInterrupted by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT

    finally:
        logging_manager.cleanup()


if __name__ == '__main__':
    sys.exit(main())

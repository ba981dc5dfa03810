"""
Logging Manager - Core Handler Management

LoggingManager class that provides console handler control, warning buffering
and progress mode coordination for the progress watcher.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from rangeprogress.logging.handlers import ProgressAwareConsoleHandler

logger = logging.getLogger(__name__)


class LoggingManager:
    """
    Thread-safe logging manager with dynamic console handler control.

    While a progress display is active, console output is held back so it does
    not interfere with the repainted progress line; file logging is unaffected.
    """

    _global_lock = RLock()
    _instance: Optional['LoggingManager'] = None

    def __init__(self, stream: Optional[TextIO] = None, max_buffered_messages: int = 50) -> None:
        """
        Initialize logging manager.

        Args:
            stream: Console stream (default: sys.stdout)
            max_buffered_messages: Warnings kept while in progress mode
        """
        self._lock = RLock()
        self._stream = stream
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []

        # Progress mode state
        self._progress_mode_active = False
        self._progress_mode_count = 0  # Nested enable calls

        self._buffered_warnings: List[Tuple[float, str, Dict[str, Any]]] = []
        self._max_buffered_messages = max_buffered_messages

        self._rich_console: Optional[Console] = None

    @classmethod
    def get_instance(cls) -> 'LoggingManager':
        """Get or create singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    @property
    def console_handler(self) -> Optional[ProgressAwareConsoleHandler]:
        return self._console_handler

    def setup(self, log_file: Optional[Path] = None, console_level: int = logging.WARNING) -> None:
        """
        Configure logging to console and, optionally, to a file.

        Args:
            log_file: Path to the log file (None disables file logging)
            console_level: Logging level for console output
                          - WARNING: Only errors and warnings (minimal output)
                          - INFO: Main workflow steps (--verbose)
                          - DEBUG: Every frame push and pop (--debug)
        """
        with self._lock:
            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)
            self._original_handlers = root_logger.handlers.copy()
            root_logger.handlers.clear()

            if log_file is not None:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._file_handler = logging.FileHandler(log_file)
                self._file_handler.setLevel(logging.DEBUG)
                self._file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
                root_logger.addHandler(self._file_handler)

            self._console_handler = ProgressAwareConsoleHandler(
                stream=self._stream or sys.stdout,
                logging_manager=self
            )
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(logging.Formatter(
                '%(levelname)s - %(message)s' if console_level >= logging.INFO
                else '%(message)s'
            ))
            root_logger.addHandler(self._console_handler)

            logger.debug("Logging manager setup complete")

    def enable_progress_mode(self) -> None:
        """Suppress console logging; nested calls are reference counted."""
        with self._lock:
            self._progress_mode_count += 1

            if not self._progress_mode_active:
                self._progress_mode_active = True
                if self._console_handler:
                    self._console_handler.set_progress_mode(True)
                self._buffered_warnings.clear()
                logger.debug("Progress mode enabled - console logging suppressed")

    def disable_progress_mode(self) -> None:
        """Restore console logging once every enable call has been matched."""
        with self._lock:
            if self._progress_mode_count > 0:
                self._progress_mode_count -= 1

            if self._progress_mode_count == 0 and self._progress_mode_active:
                self._progress_mode_active = False
                if self._console_handler:
                    self._console_handler.set_progress_mode(False)
                self._display_buffered_warnings()
                logger.debug("Progress mode disabled - console logging restored")

    @contextmanager
    def progress_mode(self) -> Iterator[None]:
        """
        Context manager for progress mode with guaranteed cleanup.

        Usage:
            with logging_manager.progress_mode():
                watcher.watch()
        """
        self.enable_progress_mode()
        try:
            yield
        finally:
            self.disable_progress_mode()

    def is_progress_mode_active(self) -> bool:
        with self._lock:
            return self._progress_mode_active

    @property
    def buffered_warnings(self) -> List[str]:
        """Formatted warnings waiting for progress mode to end."""
        with self._lock:
            return [message for _, message, _ in self._buffered_warnings]

    def buffer_warning(self, record: logging.LogRecord) -> None:
        """Buffer a warning emitted during progress mode."""
        with self._lock:
            if len(self._buffered_warnings) >= self._max_buffered_messages:
                self._buffered_warnings.pop(0)

            formatted = self._console_handler.format(record) if self._console_handler else record.getMessage()
            self._buffered_warnings.append((
                time.time(),
                formatted,
                {'level': record.levelno, 'name': record.name}
            ))

    def display_critical_error(self, record: logging.LogRecord) -> None:
        """Show an error immediately as a Rich panel on stderr."""
        if self._rich_console is None:
            self._rich_console = Console(stderr=True)

        error_text = Text()
        error_text.append("ERROR", style="bold red")
        if record.name:
            error_text.append(f" ({record.name})", style="dim red")
        error_text.append(f": {record.getMessage()}", style="red")
        error_text.append(f"\nLocation: {record.funcName}() line {record.lineno}", style="dim")

        # Start on a fresh line; the progress line has no trailing newline
        self._rich_console.print()
        self._rich_console.print(Panel(
            error_text,
            title="Critical Error",
            border_style="red",
            padding=(0, 1),
            expand=False,
        ))

    def _display_buffered_warnings(self) -> None:
        if not self._buffered_warnings:
            return

        stream = self._stream or sys.stdout
        try:
            stream.write(f"\n{len(self._buffered_warnings)} warning(s) occurred during progress:\n")
            stream.write("-" * 60 + "\n")
            now = time.time()
            for timestamp, message, _ in self._buffered_warnings:
                stream.write(f"[{now - timestamp:.1f}s ago] {message}\n")
            stream.write("-" * 60 + "\n")
            stream.flush()
        finally:
            self._buffered_warnings.clear()

    def cleanup(self) -> None:
        """Restore the original root handlers and close the file handler."""
        with self._lock:
            self._progress_mode_active = False
            self._progress_mode_count = 0
            self._display_buffered_warnings()

            root_logger = logging.getLogger()
            root_logger.handlers.clear()
            root_logger.handlers.extend(self._original_handlers)

            if self._file_handler:
                self._file_handler.close()
                self._file_handler = None
            self._console_handler = None


def setup_logging(log_file: Optional[Path] = None, console_level: int = logging.WARNING) -> LoggingManager:
    """
    Setup logging with progress-aware management.

    Args:
        log_file: Path to the log file
        console_level: Console logging level

    Returns:
        LoggingManager instance for advanced control
    """
    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)
    return manager

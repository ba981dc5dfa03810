"""
Tests for display/ - renderers and the polling watcher.
"""

import io
import threading
import time

import pytest
from rich.console import Console

from rangeprogress import config
from rangeprogress.core.tracker import RangeTracker
from rangeprogress.display.base import DisplayMode, ProgressRenderer
from rangeprogress.display.rich_renderer import RichProgressRenderer
from rangeprogress.display.text_renderer import TextProgressRenderer
from rangeprogress.display.tqdm_renderer import TqdmProgressRenderer
from rangeprogress.display.watcher import ProgressWatcher
from rangeprogress.logging import LoggingManager
from rangeprogress.utils import create_watcher, parse_display_mode, select_renderer


class RecordingRenderer(ProgressRenderer):
    """Renderer that records every snapshot it is asked to paint."""

    def __init__(self):
        self.snapshots = []
        self.started = False
        self.stopped = False

    def is_available(self):
        return True

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def update(self, snapshot):
        self.snapshots.append(snapshot)

    @property
    def percentages(self):
        return [s.percentage for s in self.snapshots]


class FailingRenderer(RecordingRenderer):
    def update(self, snapshot):
        raise RuntimeError("terminal went away")


class TestTextRenderer:
    """Tests for TextProgressRenderer."""

    def test_format_line(self, text_renderer):
        snapshot = RangeTracker(0.5).snapshot()

        assert text_renderer.format_line(snapshot) == "Progress: [#####-----] - 50%"

    def test_update_clears_then_prints(self, text_renderer, stream):
        text_renderer.start()
        text_renderer.update(RangeTracker(0.5).snapshot())
        text_renderer.stop()

        output = stream.getvalue()
        clear = "\r" + " " * (12 + 20)
        assert output == "\n" + clear + "\rProgress: [#####-----] - 50%" + "\n"

    def test_start_and_stop_are_idempotent(self, text_renderer, stream):
        text_renderer.start()
        text_renderer.start()
        text_renderer.stop()
        text_renderer.stop()

        assert stream.getvalue() == "\n\n"

    def test_explicit_width_is_kept(self, stream):
        renderer = TextProgressRenderer(file=stream, width=0)

        assert renderer.width == 0

    def test_default_width_from_config(self, stream):
        renderer = TextProgressRenderer(file=stream)

        assert renderer.width == 30


class TestRichRenderer:
    """Tests for RichProgressRenderer with an in-memory console."""

    def test_update_moves_task(self):
        console = Console(file=io.StringIO(), force_terminal=False)
        renderer = RichProgressRenderer(console=console)
        tracker = RangeTracker()

        with renderer:
            with tracker.frame(0.0, 0.5):
                tracker.set(0.5)
                renderer.update(tracker.snapshot())
                task = renderer._progress.tasks[0]
                assert task.completed == 25
                assert "frame 1" in task.description

        assert renderer._progress is None

    def test_update_before_start_is_ignored(self):
        renderer = RichProgressRenderer(console=Console(file=io.StringIO()))

        renderer.update(RangeTracker(0.5).snapshot())

    def test_not_available_without_terminal(self):
        renderer = RichProgressRenderer(console=Console(file=io.StringIO(), force_terminal=False))

        assert not renderer.is_available()


class TestTqdmRenderer:
    """Tests for TqdmProgressRenderer."""

    def test_update_sets_position(self, stream):
        renderer = TqdmProgressRenderer(file=stream, disable_on_non_tty=False)
        tracker = RangeTracker()

        renderer.start()
        tracker.set(0.42)
        renderer.update(tracker.snapshot())
        assert renderer._pbar.n == 42

        tracker.set(0.1)
        renderer.update(tracker.snapshot())
        assert renderer._pbar.n == 10
        renderer.stop()

        assert "Progress" in stream.getvalue()
        assert renderer._pbar is None

    def test_disabled_on_non_tty(self, stream):
        renderer = TqdmProgressRenderer(file=stream)

        with renderer:
            renderer.update(RangeTracker(0.5).snapshot())

        assert stream.getvalue() == ""


class TestProgressWatcher:
    """Tests for the polling watch loop."""

    def test_already_done_paints_start_and_final(self):
        renderer = RecordingRenderer()
        watcher = ProgressWatcher(RangeTracker(1.0), renderer=renderer, interval=0.001)

        assert watcher.watch() is True
        assert renderer.started and renderer.stopped
        assert renderer.percentages == [100, 100]

    def test_done_through_tolerance_paints_full_percentage(self, stream):
        config.set_tolerance(0.1)
        renderer = TextProgressRenderer(file=stream, width=12)
        watcher = ProgressWatcher(RangeTracker(0.95), renderer=renderer, interval=0.001)

        assert watcher.watch() is True

        output = stream.getvalue().rstrip("\n")
        assert "- 95%" in output
        assert output.endswith("Progress: [##########] - 100%")

    def test_repaints_only_on_percentage_change(self):
        tracker = RangeTracker()
        renderer = RecordingRenderer()
        watcher = ProgressWatcher(tracker, renderer=renderer, interval=0.001)

        def work():
            for value in (0.001, 0.002, 0.5, 0.501, 0.502, 1.0):
                time.sleep(0.02)
                tracker.set(value)

        worker = threading.Thread(target=work)
        worker.start()
        assert watcher.watch(timeout=5.0) is True
        worker.join()

        percentages = renderer.percentages
        assert percentages[0] == 0
        assert percentages[-1] == 100
        # Consecutive paints during the loop always differ
        loop_paints = percentages[:-1]
        assert all(a != b for a, b in zip(loop_paints, loop_paints[1:]))
        assert set(percentages) <= {0, 50, 100}

    def test_cancel_stops_watch(self):
        tracker = RangeTracker()
        renderer = RecordingRenderer()
        watcher = ProgressWatcher(tracker, renderer=renderer, interval=10.0)

        timer = threading.Timer(0.05, watcher.cancel)
        timer.start()
        started = time.monotonic()
        result = watcher.watch()
        timer.join()

        assert result is False
        assert watcher.cancelled
        assert renderer.stopped
        assert time.monotonic() - started < 5.0

    def test_external_cancel_event(self):
        cancel_event = threading.Event()
        cancel_event.set()
        watcher = ProgressWatcher(RangeTracker(), renderer=RecordingRenderer(), cancel_event=cancel_event)

        assert watcher.watch() is False

    def test_timeout(self):
        watcher = ProgressWatcher(RangeTracker(), renderer=RecordingRenderer(), interval=0.01)

        assert watcher.watch(timeout=0.05) is False

    def test_renderer_errors_do_not_stop_watch(self):
        renderer = FailingRenderer()
        watcher = ProgressWatcher(RangeTracker(1.0), renderer=renderer)

        assert watcher.watch() is True
        assert watcher.repaint_count == 0
        assert renderer.stopped

    def test_logging_manager_progress_mode(self):
        manager = LoggingManager(stream=io.StringIO())
        seen = []

        class ModeRenderer(RecordingRenderer):
            def update(self, snapshot):
                seen.append(manager.is_progress_mode_active())

        watcher = ProgressWatcher(RangeTracker(1.0), renderer=ModeRenderer(), logging_manager=manager)
        watcher.watch()

        assert seen == [True, True]
        assert not manager.is_progress_mode_active()

    def test_default_renderer_is_text(self):
        watcher = ProgressWatcher(RangeTracker())

        assert isinstance(watcher.renderer, TextProgressRenderer)

    def test_wait_until_done(self, text_renderer, stream):
        tracker = RangeTracker()
        timer = threading.Timer(0.05, tracker.set, args=(1.0,))
        timer.start()

        assert tracker.wait_until_done(renderer=text_renderer, interval=0.005) is True
        timer.join()
        assert stream.getvalue().rstrip("\n").endswith("Progress: [##########] - 100%")


class TestRendererSelection:
    """Tests for utils.select_renderer() and friends."""

    @pytest.mark.parametrize("mode,cls", [
        (DisplayMode.RICH, RichProgressRenderer),
        (DisplayMode.TQDM, TqdmProgressRenderer),
        (DisplayMode.TEXT, TextProgressRenderer),
    ])
    def test_explicit_modes(self, mode, cls):
        assert isinstance(select_renderer(mode), cls)

    def test_off_mode(self):
        assert select_renderer(DisplayMode.OFF) is None
        assert create_watcher(RangeTracker(), "off") is None

    def test_auto_returns_a_renderer(self):
        assert isinstance(select_renderer(DisplayMode.AUTO), ProgressRenderer)

    def test_parse_display_mode(self):
        assert parse_display_mode(" TEXT ") == DisplayMode.TEXT
        assert parse_display_mode("fancy") == DisplayMode.AUTO

    def test_create_watcher(self):
        tracker = RangeTracker()
        watcher = create_watcher(tracker, "text")

        assert watcher.tracker is tracker
        assert isinstance(watcher.renderer, TextProgressRenderer)

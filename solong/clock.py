"""Background timers: the render tick and the once-a-second frame counter."""

from __future__ import annotations

import threading
from collections.abc import Callable


def _print_fps(frames: int) -> None:
    print(f"\r{frames} FPS    ", end="", flush=True)


class FrameClock:
    """Raises a render tick ``fps`` times a second and reports frames per second."""

    def __init__(self, fps: int = 60, report: Callable[[int], None] | None = None) -> None:
        self.fps = fps
        self._report = report or _print_fps
        self._lock = threading.Lock()
        self._frames = 0
        self._tick = False
        self._stopping = threading.Event()
        self._threads: list[threading.Thread] = []

    @property
    def fps(self) -> int:
        """Render ticks per second; may be changed while running."""
        return self._fps

    @fps.setter
    def fps(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f"fps must be positive: {value}")
        self._fps = value

    @property
    def running(self) -> bool:
        """True while the timer threads are active."""
        return bool(self._threads)

    def start(self) -> None:
        """Start both timer threads; does nothing if already running."""
        if self._threads:
            return
        self._stopping.clear()
        self._threads = [
            threading.Thread(target=self._count_loop, name="fps-counter", daemon=True),
            threading.Thread(target=self._render_loop, name="render-tick", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def stop(self) -> None:
        """Stop the timer threads and wait for them to finish."""
        self._stopping.set()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()
        self._threads = []

    def take_render_tick(self) -> bool:
        """True once per pending render tick, clearing it."""
        with self._lock:
            pending, self._tick = self._tick, False
        return pending

    def note_frame(self) -> None:
        """Count one rendered frame towards the next report."""
        with self._lock:
            self._frames += 1

    def _count_loop(self) -> None:
        while not self._stopping.wait(1.0):
            with self._lock:
                frames, self._frames = self._frames, 0
            self._report(frames)

    def _render_loop(self) -> None:
        while not self._stopping.wait(1.0 / self._fps):
            with self._lock:
                self._tick = True

    def __enter__(self) -> FrameClock:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
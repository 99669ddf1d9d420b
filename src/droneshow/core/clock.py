"""Playback clock for the preview.

The clock is a cooperative tick: it registers one fixed interval on an
explicit scheduler (the Textual app in the TUI) and cancels it on pause.
No threads are involved; every tick runs on the scheduler's event loop.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from droneshow.model_manager import ObserverManager
from droneshow.models import FlightSequence
from droneshow.protocols import PlaybackEvent, PlaybackObserver

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 50


class TimerHandle(Protocol):
    """Handle returned by a scheduler registration."""

    def stop(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can call back on a fixed interval (e.g. textual.app.App)."""

    def set_interval(self, interval: float, callback: Callable[[], object]) -> TimerHandle: ...


class PlaybackClock:
    """
    Elapsed-time source for previewing a sequence.

    Each tick advances elapsed time by `tick_ms`, wrapping at the loaded
    sequence's duration. With no sequence (or a zero-duration one) the
    time simply accumulates; the interpolator then shows its default pose.
    """

    def __init__(self, tick_ms: int = DEFAULT_TICK_MS):
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self.tick_ms = tick_ms
        self.elapsed_ms = 0
        self.sequence: FlightSequence | None = None
        self._timer: TimerHandle | None = None
        self._observers = ObserverManager[PlaybackObserver](observer_type_name="playback")

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: PlaybackObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: PlaybackObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: PlaybackEvent) -> None:
        self._observers.notify("on_playback_event", event, self.elapsed_ms)

    # =================================================================
    # State
    # =================================================================

    @property
    def is_playing(self) -> bool:
        return self._timer is not None

    @property
    def duration_ms(self) -> int:
        return self.sequence.duration if self.sequence is not None else 0

    def load(self, sequence: FlightSequence | None) -> None:
        """Play a different sequence from the start (keeps playing if running)."""
        self.sequence = sequence
        self.elapsed_ms = 0
        logger.debug(f"Playback loaded {sequence.name if sequence else None!r}")
        self._notify(PlaybackEvent.SEQUENCE_LOADED)

    # =================================================================
    # Transport
    # =================================================================

    def play(self, scheduler: Scheduler) -> None:
        """Register the tick with a scheduler (no-op if already playing)."""
        if self._timer is not None:
            return
        self._timer = scheduler.set_interval(self.tick_ms / 1000, self.tick)
        logger.info("Playback started")
        self._notify(PlaybackEvent.STARTED)

    def pause(self) -> None:
        """Cancel the scheduled tick, keeping the elapsed time."""
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None
        logger.info(f"Playback paused at {self.elapsed_ms}ms")
        self._notify(PlaybackEvent.PAUSED)

    def toggle(self, scheduler: Scheduler) -> bool:
        """Play if paused, pause if playing. Returns the new playing state."""
        if self.is_playing:
            self.pause()
        else:
            self.play(scheduler)
        return self.is_playing

    def reset(self) -> None:
        """Return to the start without changing the playing state."""
        self.elapsed_ms = 0
        self._notify(PlaybackEvent.RESET)

    def stop(self) -> None:
        """Pause and rewind."""
        self.pause()
        self.reset()

    def seek(self, t_ms: int) -> None:
        """Jump to a position (wrapped into the sequence period)."""
        duration = self.duration_ms
        self.elapsed_ms = t_ms % duration if duration > 0 else max(0, t_ms)
        self._notify(PlaybackEvent.TICK)

    def tick(self) -> None:
        """Advance one tick. Called by the scheduler."""
        duration = self.duration_ms
        if duration > 0:
            self.elapsed_ms = (self.elapsed_ms + self.tick_ms) % duration
        else:
            self.elapsed_ms += self.tick_ms
        self._notify(PlaybackEvent.TICK)

"""Tests for PlaybackClock."""

from unittest.mock import Mock

import pytest

from droneshow.core import PlaybackClock
from droneshow.models import FlightSequence
from droneshow.protocols import PlaybackEvent


class FakeTimer:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeScheduler:
    """Records interval registrations instead of running them."""

    def __init__(self):
        self.registrations = []

    def set_interval(self, interval, callback):
        timer = FakeTimer()
        self.registrations.append((interval, callback, timer))
        return timer


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def clock(three_point_sequence):
    clock = PlaybackClock(tick_ms=1000)
    clock.load(three_point_sequence)
    return clock


@pytest.mark.unit
class TestTransport:
    """Test play/pause/reset."""

    def test_play_registers_one_interval(self, clock, scheduler):
        clock.play(scheduler)
        clock.play(scheduler)

        assert clock.is_playing
        assert len(scheduler.registrations) == 1
        interval, callback, _ = scheduler.registrations[0]
        assert interval == 1.0
        assert callback == clock.tick

    def test_default_tick_is_50ms(self, scheduler):
        clock = PlaybackClock()
        clock.play(scheduler)
        assert scheduler.registrations[0][0] == 0.05

    def test_pause_stops_timer_and_keeps_time(self, clock, scheduler):
        clock.play(scheduler)
        clock.tick()
        clock.pause()

        assert not clock.is_playing
        assert scheduler.registrations[0][2].stopped
        assert clock.elapsed_ms == 1000

    def test_toggle(self, clock, scheduler):
        assert clock.toggle(scheduler) is True
        assert clock.toggle(scheduler) is False

    def test_reset_keeps_playing(self, clock, scheduler):
        clock.play(scheduler)
        clock.tick()
        clock.reset()
        assert clock.elapsed_ms == 0
        assert clock.is_playing

    def test_stop(self, clock, scheduler):
        clock.play(scheduler)
        clock.tick()
        clock.stop()
        assert clock.elapsed_ms == 0
        assert not clock.is_playing

    def test_invalid_tick(self):
        with pytest.raises(ValueError):
            PlaybackClock(tick_ms=0)


@pytest.mark.unit
class TestElapsedTime:
    """Test how elapsed time advances."""

    def test_wraps_at_duration(self, clock):
        elapsed = []
        for _ in range(4):
            clock.tick()
            elapsed.append(clock.elapsed_ms)
        assert elapsed == [1000, 2000, 0, 1000]

    def test_accumulates_without_sequence(self):
        clock = PlaybackClock(tick_ms=50)
        for _ in range(3):
            clock.tick()
        assert clock.elapsed_ms == 150
        assert clock.duration_ms == 0

    def test_accumulates_for_empty_sequence(self):
        clock = PlaybackClock(tick_ms=50)
        clock.load(FlightSequence())
        clock.tick()
        clock.tick()
        assert clock.elapsed_ms == 100

    def test_load_rewinds(self, clock, three_point_sequence):
        clock.tick()
        clock.load(three_point_sequence)
        assert clock.elapsed_ms == 0

    def test_seek_wraps(self, clock):
        clock.seek(4500)
        assert clock.elapsed_ms == 1500


@pytest.mark.unit
class TestPlaybackEvents:
    """Test observer notifications."""

    def test_events_in_order(self, clock, scheduler):
        observer = Mock()
        clock.register_observer(observer)

        clock.play(scheduler)
        clock.tick()
        clock.reset()
        clock.pause()

        events = [c.args for c in observer.on_playback_event.call_args_list]
        assert events == [
            (PlaybackEvent.STARTED, 0),
            (PlaybackEvent.TICK, 1000),
            (PlaybackEvent.RESET, 0),
            (PlaybackEvent.PAUSED, 0),
        ]

    def test_failing_observer_does_not_stop_clock(self, clock):
        broken = Mock()
        broken.on_playback_event.side_effect = RuntimeError("boom")
        healthy = Mock()
        clock.register_observer(broken)
        clock.register_observer(healthy)

        clock.tick()

        assert clock.elapsed_ms == 1000
        healthy.on_playback_event.assert_called_once_with(PlaybackEvent.TICK, 1000)

    def test_unregister(self, clock):
        observer = Mock()
        clock.register_observer(observer)
        clock.unregister_observer(observer)
        clock.tick()
        observer.on_playback_event.assert_not_called()

"""Procedural flight patterns.

Every generator is a pure function of its geometric parameters and the
flight/LED settings. The result is a complete FlightSequence meant to be
loaded into the editor as a preview; nothing here touches the library.
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime

from droneshow.models import (
    CanvasGeometry,
    FlightSequence,
    FlightSettings,
    LedSettings,
    PatternType,
    Waypoint,
    hsl_to_rgb,
)

logger = logging.getLogger(__name__)

FORMATION_SPACING_MS = 4000
FORMATION_STAGGER_MS = 200

# Offsets from the canvas centre, in pixels
FORMATIONS: dict[str, tuple[tuple[float, float], ...]] = {
    "diamond": ((0, -30), (30, 0), (0, 30), (-30, 0)),
    "line": ((-45, 0), (-15, 0), (15, 0), (45, 0)),
    "v": ((0, -15), (-20, 0), (20, 0), (-35, 15)),
}


def _identity(pattern: PatternType, now: datetime | None) -> tuple[str, str]:
    """Preview id and display name for a generated sequence."""
    now = now or datetime.now()
    stamp = int(now.timestamp() * 1000)
    return f"{pattern.value}-preview-{stamp}", f"{pattern.label} {now:%H:%M:%S}"


def _settings(
    flight: FlightSettings | None, led: LedSettings | None, geometry: CanvasGeometry | None
) -> tuple[FlightSettings, LedSettings, CanvasGeometry]:
    return flight or FlightSettings(), led or LedSettings(), geometry or CanvasGeometry()


def generate_circle(
    flight: FlightSettings | None = None,
    led: LedSettings | None = None,
    geometry: CanvasGeometry | None = None,
    *,
    count: int = 12,
    radius: float = 60,
    altitude: float = 15,
    interval_ms: int = 1000,
    now: datetime | None = None,
) -> FlightSequence:
    """Level circle with the hue going once around the color wheel."""
    flight, led, geometry = _settings(flight, led, geometry)
    cx, cy = geometry.center

    points = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        points.append(
            Waypoint(
                x=cx + math.cos(angle) * radius,
                y=cy + math.sin(angle) * radius,
                z=altitude,
                color=hsl_to_rgb(360 * i / count, 70, 50),
                brightness=led.brightness_fraction,
                timestamp=i * interval_ms,
                speed=flight.max_speed,
                transition_duration=led.transition_speed,
            )
        )

    sequence_id, name = _identity(PatternType.CIRCLE, now)
    return FlightSequence(id=sequence_id, name=name, points=points, duration=count * interval_ms)


def generate_figure8(
    flight: FlightSettings | None = None,
    led: LedSettings | None = None,
    geometry: CanvasGeometry | None = None,
    *,
    count: int = 20,
    width: float = 70,
    height: float = 50,
    altitude: float = 18,
    interval_ms: int = 800,
    now: datetime | None = None,
) -> FlightSequence:
    """Lemniscate traced twice over, bobbing 3 m around the base altitude."""
    flight, led, geometry = _settings(flight, led, geometry)
    cx, cy = geometry.center

    points = []
    for i in range(count):
        t = 4 * math.pi * i / count
        points.append(
            Waypoint(
                x=cx + math.sin(t) * width,
                y=cy + math.sin(2 * t) * height,
                z=altitude + math.sin(t) * 3,
                color=hsl_to_rgb((720 * i / count) % 360, 80, 60),
                brightness=led.brightness_fraction,
                timestamp=i * interval_ms,
                speed=flight.max_speed,
                transition_duration=led.transition_speed,
            )
        )

    sequence_id, name = _identity(PatternType.FIGURE8, now)
    return FlightSequence(id=sequence_id, name=name, points=points, duration=count * interval_ms)


def generate_spiral(
    flight: FlightSettings | None = None,
    led: LedSettings | None = None,
    geometry: CanvasGeometry | None = None,
    *,
    count: int = 24,
    max_radius: float = 80,
    base_altitude: float = 5,
    climb: float = 25,
    interval_ms: int = 600,
    now: datetime | None = None,
) -> FlightSequence:
    """Three outward turns while climbing; blue fades to red, brightening and speeding up."""
    flight, led, geometry = _settings(flight, led, geometry)
    cx, cy = geometry.center

    points = []
    for i in range(count):
        p = i / count
        angle = 6 * math.pi * p
        points.append(
            Waypoint(
                x=cx + math.cos(angle) * p * max_radius,
                y=cy + math.sin(angle) * p * max_radius,
                z=base_altitude + p * climb,
                color=hsl_to_rgb(240 - 240 * p, 90, 55),
                brightness=led.brightness_fraction * (0.7 + 0.3 * p),
                timestamp=i * interval_ms,
                speed=flight.max_speed * (0.5 + 0.5 * p),
                transition_duration=led.transition_speed,
            )
        )

    sequence_id, name = _identity(PatternType.SPIRAL, now)
    return FlightSequence(id=sequence_id, name=name, points=points, duration=count * interval_ms)


def generate_formation(
    flight: FlightSettings | None = None,
    led: LedSettings | None = None,
    geometry: CanvasGeometry | None = None,
    *,
    formations: tuple[str, ...] = ("diamond", "line", "v"),
    base_altitude: float = 20,
    altitude_step: float = 8,
    duration_ms: int | None = None,
    now: datetime | None = None,
) -> FlightSequence:
    """
    Diamond, line and V shapes flown one after another, each higher than the last.

    Args:
        formations: Names from FORMATIONS, flown in order
        duration_ms: Override the derived duration (one 4 s slot per
            formation). 14000 reproduces the legacy web designer.
    """
    flight, led, geometry = _settings(flight, led, geometry)
    cx, cy = geometry.center

    points = []
    for f, formation in enumerate(formations):
        for k, (dx, dy) in enumerate(FORMATIONS[formation]):
            points.append(
                Waypoint(
                    x=cx + dx,
                    y=cy + dy,
                    z=base_altitude + f * altitude_step,
                    color=hsl_to_rgb((120 * f + 60 * k) % 360, 75, 50),
                    brightness=led.brightness_fraction,
                    timestamp=f * FORMATION_SPACING_MS + k * FORMATION_STAGGER_MS,
                    speed=flight.max_speed,
                    transition_duration=led.transition_speed,
                )
            )

    if duration_ms is None:
        duration_ms = len(formations) * FORMATION_SPACING_MS

    sequence_id, name = _identity(PatternType.FORMATION, now)
    return FlightSequence(id=sequence_id, name=name, points=points, duration=duration_ms)


PATTERN_GENERATORS: dict[PatternType, Callable[..., FlightSequence]] = {
    PatternType.CIRCLE: generate_circle,
    PatternType.FIGURE8: generate_figure8,
    PatternType.SPIRAL: generate_spiral,
    PatternType.FORMATION: generate_formation,
}


def generate_pattern(
    pattern: PatternType | str,
    flight: FlightSettings | None = None,
    led: LedSettings | None = None,
    geometry: CanvasGeometry | None = None,
    **kwargs,
) -> FlightSequence:
    """
    Generate any pattern by type.

    Args:
        pattern: Pattern type (or its string value, e.g. "figure8")
        flight: Flight settings (max speed)
        led: LED settings (brightness, transition speed)
        geometry: Canvas geometry (pattern centre)
        **kwargs: Generator-specific parameters

    Raises:
        ValueError: If the pattern type is unknown
    """
    pattern = PatternType(pattern)
    sequence = PATTERN_GENERATORS[pattern](flight, led, geometry, **kwargs)
    logger.info(f"Generated {pattern.value} pattern with {sequence.point_count} waypoints")
    return sequence

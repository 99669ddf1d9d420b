"""Flight and LED settings consulted by the pattern generators."""

from pydantic import BaseModel, Field


class FlightSettings(BaseModel):
    """Flight envelope settings."""

    max_altitude: int = Field(default=50, ge=10, le=100, description="Maximum altitude (m)")
    max_speed: float = Field(default=10, ge=1, le=25, description="Maximum speed (m/s)")
    safety_radius: int = Field(default=50, ge=20, le=200, description="Safety radius (m)")
    smooth_path: bool = Field(default=True, description="Smooth generated paths")
    auto_optimize: bool = Field(default=False, description="Optimize waypoint order automatically")
    battery_monitoring: bool = Field(default=True, description="Monitor battery during flight")


class LedSettings(BaseModel):
    """LED behaviour settings."""

    brightness: int = Field(default=80, ge=0, le=100, description="LED brightness (percent)")
    transition_speed: int = Field(
        default=500, ge=100, le=2000, description="LED color transition time (ms)"
    )
    strobe_mode: bool = Field(default=False, description="Strobe LEDs")

    @property
    def brightness_fraction(self) -> float:
        """Brightness as a 0.0-1.0 fraction, the waypoint representation."""
        return self.brightness / 100

"""Waypoint model: one timed, colored, positioned point of a flight."""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from .color import Color, parse_color


class Waypoint(BaseModel):
    """A point in the flight with its LED state.

    `x` and `y` are top-down canvas pixels; `z` is altitude in meters.
    Waypoints are frozen: edits replace the draft list holding them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    x: float = Field(description="Horizontal canvas X (pixels)")
    y: float = Field(description="Horizontal canvas Y (pixels)")
    z: float = Field(ge=0.0, description="Altitude (meters)")
    color: Color = Field(description="LED color")
    brightness: float = Field(default=0.8, ge=0.0, le=1.0, description="LED brightness (0.0-1.0)")
    timestamp: int = Field(ge=0, description="Position along the sequence timeline (ms)")
    speed: float | None = Field(default=None, description="Advisory speed (m/s)")
    transition_duration: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("transition_duration", "transitionDuration"),
        description="Advisory LED transition time (ms)",
    )

    @field_validator("color", mode="before")
    @classmethod
    def parse_color_string(cls, v: Any) -> Any:
        """Accept hex and hsl() strings as well as channel mappings."""
        if isinstance(v, str):
            return parse_color(v)
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        """Accept integral floats (JSON written by the web designer)."""
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @field_serializer("color")
    def serialize_color(self, color: Color) -> str:
        """Serialize color as '#RRGGBB'."""
        return color.to_hex()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rgb(self) -> dict[str, int]:
        """Channel view of `color`."""
        return self.color.to_rgb_dict()

    @property
    def color_hex(self) -> str:
        """String view of `color`."""
        return self.color.to_hex()

    @property
    def position(self) -> tuple[float, float, float]:
        """Get (x, y, z) as tuple."""
        return (self.x, self.y, self.z)

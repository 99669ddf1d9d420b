"""Color model for drone LEDs."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HSL_PATTERN = re.compile(
    r"^hsla?\(\s*(-?[\d.]+)(?:deg)?\s*[, ]\s*([\d.]+)%\s*[, ]\s*([\d.]+)%\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def _clamp_channel(value: float) -> int:
    return max(0, min(255, _round_half_up(value * 255)))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> "Color":
    """Convert cylindrical HSL coordinates to an 8-bit RGB color.

    Args:
        hue: Hue in degrees, expected in [0, 360)
        saturation: Saturation in percent (0-100)
        lightness: Lightness in percent (0-100)

    Returns:
        Color: The equivalent RGB color

    Hues outside [0, 360) fall into no sextant and produce a gray of the
    given lightness. Callers computing hue with modulo arithmetic must wrap
    negative results themselves.

    Example:
        >>> hsl_to_rgb(120, 100, 50).to_rgb_tuple()
        (0, 255, 0)
    """
    s = saturation / 100
    l = lightness / 100

    c = (1 - abs(2 * l - 1)) * s
    sector = hue / 60
    x = c * (1 - abs((sector % 2) - 1))
    m = l - c / 2

    if 0 <= sector < 1:
        r, g, b = c, x, 0.0
    elif 1 <= sector < 2:
        r, g, b = x, c, 0.0
    elif 2 <= sector < 3:
        r, g, b = 0.0, c, x
    elif 3 <= sector < 4:
        r, g, b = 0.0, x, c
    elif 4 <= sector < 5:
        r, g, b = x, 0.0, c
    elif 5 <= sector < 6:
        r, g, b = c, 0.0, x
    else:
        r, g, b = 0.0, 0.0, 0.0

    return Color(r=_clamp_channel(r + m), g=_clamp_channel(g + m), b=_clamp_channel(b + m))


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    This is the single color value carried by every waypoint. The hex string
    and channel dictionary used by renderers and exporters are views derived
    from it, so the two can never disagree.

    The model is frozen to ensure hashability, which is required for
    counting distinct colors in a sequence.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @field_validator("r", "g", "b")
    @classmethod
    def validate_rgb(cls, v: int) -> int:
        """Ensure RGB values are in valid range."""
        if not 0 <= v <= 255:
            raise ValueError("RGB values must be between 0 and 255")
        return v

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hsl(cls, hue: float, saturation: float, lightness: float) -> "Color":
        """Create a color from HSL coordinates (see hsl_to_rgb)."""
        return hsl_to_rgb(hue, saturation, lightness)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Create a color from a '#RRGGBB' or '#RGB' string.

        Raises:
            ValueError: If the string is not a valid hex color
        """
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            return cls(r=int(text[0:2], 16), g=int(text[2:4], 16), b=int(text[4:6], 16))
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {value!r}") from e

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_rgb_dict(self) -> dict[str, int]:
        """Convert to the {'r', 'g', 'b'} channel mapping used by exporters."""
        return {"r": self.r, "g": self.g, "b": self.b}

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Returns:
            str: Hex color string in format '#RRGGBB'

        Example:
            >>> color = Color(r=255, g=0, b=0)
            >>> color.to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def parse_color(value: str) -> Color:
    """Parse a hex or CSS hsl() color string.

    Saved data from the web designer stored both `"#ff0000"` and
    `"hsl(120, 70%, 50%)"` strings, so both are accepted.

    Args:
        value: '#RGB', '#RRGGBB' or 'hsl(h, s%, l%)'

    Returns:
        Color: Parsed color

    Raises:
        ValueError: If the string is not a supported color format
    """
    text = value.strip()
    if text.startswith("#"):
        return Color.from_hex(text)

    match = _HSL_PATTERN.match(text)
    if match:
        hue, saturation, lightness = (float(part) for part in match.groups())
        return hsl_to_rgb(hue % 360, saturation, lightness)

    raise ValueError(f"Unsupported color format: {value!r} (use '#RRGGBB' or 'hsl(h, s%, l%)')")

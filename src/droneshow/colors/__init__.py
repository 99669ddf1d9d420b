"""Color Management - named LED colors and hue helpers.

All colors in the application are 8-bit RGB `Color` objects. Strings only
appear at the edges: user input on the CLI, legacy saved data from the web
designer, and exported files.

## Usage

```python
from droneshow.colors import COLORS, parse_color, wrap_hue

red = COLORS.RED
teal = parse_color("hsl(180, 70%, 50%)")
hue = wrap_hue(240 - 400)  # 200.0
```
"""

from droneshow.models.color import Color, hsl_to_rgb, parse_color


class COLORS:
    """Named colors used as defaults across the application."""

    RED = Color(r=255, g=0, b=0)
    GREEN = Color(r=0, g=255, b=0)
    BLUE = Color(r=0, g=0, b=255)
    YELLOW = Color(r=255, g=255, b=0)
    CYAN = Color(r=0, g=255, b=255)
    MAGENTA = Color(r=255, g=0, b=255)
    WHITE = Color(r=255, g=255, b=255)
    OFF = Color.off()


def wrap_hue(hue: float) -> float:
    """Wrap any hue into [0, 360) before handing it to hsl_to_rgb."""
    return hue % 360


__all__ = ["COLORS", "hsl_to_rgb", "parse_color", "wrap_hue"]

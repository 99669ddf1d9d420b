"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, field_validator

from droneshow.model_manager.persistence import PydanticPersistence

from .color import Color, parse_color
from .settings import FlightSettings, LedSettings

DEFAULT_HOME = Path.home() / ".droneshow"
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.json"


class CanvasGeometry(BaseModel):
    """Drawing canvas dimensions and the pixel-to-world scale factors."""

    width: int = Field(default=400, gt=0, description="Canvas width (pixels)")
    height: int = Field(default=300, gt=0, description="Canvas height (pixels)")
    pixels_per_meter: float = Field(
        default=3.0, gt=0, description="Front view vertical pixels per meter of altitude"
    )
    horizontal_scale: float = Field(
        default=20.0, gt=0, description="Canvas pixels per world unit on the horizontal axes"
    )
    vertical_scale: float = Field(
        default=10.0, gt=0, description="Meters of altitude per world unit"
    )

    @property
    def center(self) -> tuple[float, float]:
        """Canvas center in pixels."""
        return (self.width / 2, self.height / 2)


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Paths
    data_dir: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "data",
        description="Directory holding the sequence store",
    )
    export_dir: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "exports",
        description="Default directory for exported flight files",
    )
    storage_key: str = Field(
        default="drone-sequences", description="Key under which the sequence library is stored"
    )

    # Drawing
    canvas: CanvasGeometry = Field(
        default_factory=CanvasGeometry, description="Drawing canvas geometry"
    )
    default_altitude: float = Field(
        default=20.0, ge=1, le=100, description="Altitude used for top view clicks (m)"
    )
    draw_color: Color = Field(
        default_factory=lambda: Color(r=255, g=0, b=0),
        description="LED color for hand-drawn waypoints",
    )
    freehand_interval_ms: int = Field(
        default=1000, gt=0, description="Timestamp spacing between hand-drawn waypoints (ms)"
    )

    # Playback
    playback_tick_ms: int = Field(default=50, gt=0, description="Preview clock tick (ms)")

    # Pattern generator settings
    flight: FlightSettings = Field(default_factory=FlightSettings, description="Flight settings")
    led: LedSettings = Field(default_factory=LedSettings, description="LED settings")

    @field_validator("draw_color", mode="before")
    @classmethod
    def parse_draw_color(cls, v):
        """Allow the draw color to be given as a hex or hsl() string."""
        if isinstance(v, str):
            return parse_color(v)
        return v

    @field_serializer("data_dir", "export_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @field_serializer("draw_color")
    def serialize_color(self, color: Color) -> str:
        return color.to_hex()

    def ensure_directories(self) -> None:
        """Create data directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.droneshow/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        config = PydanticPersistence.load_json_or_default(path, cls)

        config.ensure_directories()
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)

"""YAML schema validation and config loading.

Provides centralized validation for configuration and input files using pydantic:
    - Paint config (paint.v1.yaml): surface size/DPR, background, brush, palette, logging
    - Event log (events.v1.yaml): recorded pointer events in device space

All loaders fail fast with actionable messages (offending file, key and value).

Units:
    - Surface size and pointer positions: device (CSS) units
    - Surface origin: buffer pixels
    - Brush radius: buffer pixels
    - Colors: palette name, "#RRGGBB[AA]" or [R, G, B(, A)] with 0-255 channels

Usage:
    from src.utils import validators

    cfg = validators.load_paint_config("configs/paint.v1.yaml")
    log = validators.load_event_log("configs/examples/zigzag.events.v1.yaml")
"""

from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .color import Color, build_palette

ColorValue = Union[str, List[int]]


# ============================================================================
# PAINT CONFIG V1
# ============================================================================

class SurfaceConfig(BaseModel):
    """Display surface the buffer is sized from."""
    width: float = Field(..., gt=0.0, description="Surface width in device units")
    height: float = Field(..., gt=0.0, description="Surface height in device units")
    device_pixel_ratio: float = Field(1.0, gt=0.0, description="Buffer pixels per device unit")
    origin: Tuple[float, float] = Field(
        (0.0, 0.0), description="Surface origin offset in buffer pixels"
    )


class BrushConfig(BaseModel):
    """Initial brush of a drawing session."""
    radius: int = Field(8, ge=0, description="Disc radius in buffer pixels")
    color: ColorValue = Field("red", description="Palette name, hex or RGBA list")
    interpolate: bool = Field(
        True, description="Stamp discs along segments; False draws single pixels"
    )


class RotateConfig(BaseModel):
    """Log file rotation (size-based or timed)."""
    mode: Literal["size", "time"] = "size"
    max_bytes: int = Field(10_000_000, gt=0, description="Size mode: bytes before rollover")
    backup_count: int = Field(5, ge=0, description="Rotated files to keep")
    when: str = Field("D", description="Time mode: rollover unit (S, M, H, D, midnight)")
    interval: int = Field(1, gt=0, description="Time mode: units between rollovers")


class LoggingConfig(BaseModel):
    """Arguments forwarded to logging_config.setup_logging()."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None
    format: Literal["human", "json"] = "human"
    color: bool = True
    rotate: Optional[RotateConfig] = None
    tz: Literal["UTC", "local"] = "UTC"


class PaintConfigV1(BaseModel):
    """Paint surface configuration (paint.v1.yaml schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("paint.v1", alias="schema", description="Schema version")
    surface: SurfaceConfig
    background: ColorValue = Field("transparent", description="Initial buffer fill")
    brush: BrushConfig = Field(default_factory=BrushConfig)
    palette: Dict[str, ColorValue] = Field(
        default_factory=dict, description="Extra named colors"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "paint.v1":
            raise ValueError(f"Expected schema 'paint.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_colors(self) -> 'PaintConfigV1':
        """Resolve every color once so bad values fail at load time."""
        palette = build_palette(self.palette)
        Color.parse(self.background, palette)
        Color.parse(self.brush.color, palette)
        return self

    def resolved_palette(self) -> Dict[str, Color]:
        return build_palette(self.palette)

    def resolve_color(self, value: ColorValue) -> Color:
        return Color.parse(value, self.resolved_palette())


# ============================================================================
# EVENT LOG V1
# ============================================================================

class PointerEvent(BaseModel):
    """One recorded pointer event (device-space position)."""
    type: Literal["press", "move", "release"]
    x: Optional[float] = Field(None, description="Device x; required for press/move")
    y: Optional[float] = Field(None, description="Device y; required for press/move")
    color: Optional[ColorValue] = Field(None, description="Switch brush color before the event")
    radius: Optional[int] = Field(None, ge=0, description="Switch brush radius before the event")

    @model_validator(mode='after')
    def validate_position(self) -> 'PointerEvent':
        if self.type in ("press", "move") and (self.x is None or self.y is None):
            raise ValueError(f"'{self.type}' event requires both x and y")
        return self


class EventLogV1(BaseModel):
    """Recorded pointer session (events.v1.yaml schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("events.v1", alias="schema", description="Schema version")
    events: List[PointerEvent] = Field(..., description="Events in dispatch order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "events.v1":
            raise ValueError(f"Expected schema 'events.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_paint_config(path: Union[str, Path]) -> PaintConfigV1:
    """Load and validate paint config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to paint.v1.yaml file

    Returns
    -------
    PaintConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Paint config not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
        return PaintConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Paint config validation failed at {path}: {e}") from e


def load_event_log(path: Union[str, Path]) -> EventLogV1:
    """Load and validate a recorded event log from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to events.v1.yaml file

    Returns
    -------
    EventLogV1
        Validated event log

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message including event index)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Event log not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
        return EventLogV1(**data)
    except Exception as e:
        raise ValueError(f"Event log validation failed at {path}: {e}") from e

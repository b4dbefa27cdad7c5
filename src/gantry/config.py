"""Configuration models and YAML loader for Gantry.

A single configuration file (gantry_config.yaml) carries the scale constants,
navigation padding, arrow style, grid thresholds and the density profile.
Every section is optional; missing sections fall back to the defaults below.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError

# Scale constants (zoom is a multiplier applied to the fixed base)
BASE_PIXELS_PER_DAY = 25.0
MIN_ZOOM = 0.05  # ~3 years on a desktop viewport
MAX_ZOOM = 3.0  # at least one week on a desktop viewport
ZOOM_STEP_FACTOR = 1.2

DEFAULT_CONFIG_FILENAME = "gantry_config.yaml"


class WeekStart(str, Enum):
    """First day of the week for week tiers and weekly grid lines."""

    MONDAY = "monday"
    SUNDAY = "sunday"


class WeekNumbering(str, Enum):
    """Week numbering system used for week tier labels."""

    ISO = "iso"  # ISO 8601: week 1 contains the first Thursday
    US = "us"  # week 1 contains January 1st, weeks start on Sunday


class LabelPosition(str, Enum):
    """Where task labels are drawn relative to the bar."""

    BEFORE = "before"
    INSIDE = "inside"
    AFTER = "after"
    NONE = "none"


class DensityProfile(BaseModel):
    """Row and bar sizing supplied by the host application.

    Unknown keys are kept so callers can carry their own sizing values
    (cell padding, icon sizes, ...) through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    row_height: float = 36
    task_bar_height: float = 26
    task_bar_offset: float = 5
    font_size_bar: float = 12


DENSITY_PRESETS: dict[str, DensityProfile] = {
    "compact": DensityProfile(
        row_height=28, task_bar_height=20, task_bar_offset=4, font_size_bar=11
    ),
    "normal": DensityProfile(
        row_height=36, task_bar_height=26, task_bar_offset=5, font_size_bar=12
    ),
    "comfortable": DensityProfile(
        row_height=44, task_bar_height=32, task_bar_offset=6, font_size_bar=13
    ),
}


class ScaleConfig(BaseModel):
    """Configuration for the timeline scale and zoom stepping."""

    model_config = ConfigDict(frozen=True)

    base_pixels_per_day: float = BASE_PIXELS_PER_DAY
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_step_factor: float = ZOOM_STEP_FACTOR
    week_start: WeekStart = WeekStart.MONDAY
    week_numbering: WeekNumbering = WeekNumbering.ISO

    def model_post_init(self, __context: Any) -> None:
        """Validate configuration after initialization."""
        if self.base_pixels_per_day <= 0:
            raise ValueError("scale.base_pixels_per_day must be positive")
        if not 0 < self.min_zoom < self.max_zoom:
            raise ValueError(
                f"scale zoom bounds must satisfy 0 < min_zoom < max_zoom "
                f"(got {self.min_zoom}, {self.max_zoom})"
            )
        if self.zoom_step_factor <= 1:
            raise ValueError("scale.zoom_step_factor must be greater than 1")

    def clamp_zoom(self, zoom: float) -> float:
        """Clamp a zoom value to the configured bounds."""
        return max(self.min_zoom, min(self.max_zoom, zoom))


class NavigationConfig(BaseModel):
    """Padding and extension amounts used by the navigation controller."""

    model_config = ConfigDict(frozen=True)

    range_padding_days: int = 7  # padding around the task span on first layout / fit
    empty_past_days: int = 7  # window before today when there are no tasks
    empty_future_days: int = 30  # window after today when there are no tasks
    extend_days: int = 30  # infinite-scroll step
    zoom_range_padding_days: int = 2  # padding around an explicit zoom window


class ArrowStyle(BaseModel):
    """Geometry constants for dependency arrows."""

    model_config = ConfigDict(frozen=True)

    horizontal_segment: float = 15  # stub length out of / into a task
    corner_radius: float = 8
    elbow_gap_padding: float = 0  # raise to switch to the S-route earlier
    arrowhead_size: float = 8
    same_row_tolerance: float = 2  # vertical delta treated as "same row"
    base_row_height: float = 44  # row height the corner radius is tuned for

    @property
    def min_elbow_gap(self) -> float:
        """Smallest horizontal gap that fits a standard elbow."""
        return self.horizontal_segment * 2 + self.corner_radius * 2 + self.elbow_gap_padding


class GridConfig(BaseModel):
    """Adaptive grid interval thresholds (pixels per day)."""

    model_config = ConfigDict(frozen=True)

    monthly_below: float = 2.0
    weekly_below: float = 5.0
    show_weekends: bool = True


class GantryConfig(BaseModel):
    """Top-level configuration."""

    scale: ScaleConfig = ScaleConfig()
    navigation: NavigationConfig = NavigationConfig()
    arrows: ArrowStyle = ArrowStyle()
    grid: GridConfig = GridConfig()
    density: str | DensityProfile = "normal"
    label_position: LabelPosition = LabelPosition.AFTER
    header_height: float = Field(default=0.0, ge=0)

    def density_profile(self) -> DensityProfile:
        """Resolve the configured density to a profile."""
        return resolve_density(self.density)


def resolve_density(density: str | DensityProfile | dict[str, Any] | None) -> DensityProfile:
    """Resolve a preset name, mapping or profile to a DensityProfile.

    Raises:
        ConfigError: If a preset name is unknown
    """
    if density is None:
        return DENSITY_PRESETS["normal"]
    if isinstance(density, DensityProfile):
        return density
    if isinstance(density, dict):
        return DensityProfile.model_validate(density)
    try:
        return DENSITY_PRESETS[density]
    except KeyError:
        valid = ", ".join(sorted(DENSITY_PRESETS))
        raise ConfigError(f"Unknown density '{density}'. Valid values: {valid}") from None


def load_config(config_path: Path | str) -> GantryConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to gantry_config.yaml

    Returns:
        Parsed GantryConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e

    if not data:
        raise ConfigError("Empty configuration file")
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping at the root level")

    try:
        config = GantryConfig.model_validate(data)
        # Fail early on unknown preset names
        config.density_profile()
    except (PydanticValidationError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return config


def discover_config(start_dir: Path | None = None) -> GantryConfig:
    """Find a config file next to the input or in the current directory.

    Falls back to the default configuration when no file exists.
    """
    candidates: list[Path] = []
    if start_dir is not None:
        candidates.append(start_dir / DEFAULT_CONFIG_FILENAME)
    candidates.append(Path(DEFAULT_CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_config(candidate)
    return GantryConfig()

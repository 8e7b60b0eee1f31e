"""
Global Configuration and Defaults.

This module centralizes the default physics constants, interaction timings
and dataset file names. Projects may override the tunable values with an
optional ``.techgraph/config.yaml``:

    layout:
      link_distance: 120
      charge_strength: -250
    interaction:
      search_debounce_ms: 200
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import FatalLoadError

# --- Dataset files ---
DATA_FILE = "techdata.json"
LINKS_FILE = "techlinks.json"
META_FILE = "config.json"
SETTINGS_PATH = Path(".techgraph/config.yaml")

# --- Viewport ---
# Used whenever the render surface has not reported a size
DEFAULT_WIDTH = 900.0
DEFAULT_HEIGHT = 600.0

# --- Physics ---
NODE_RADIUS = 24.0
LINK_DISTANCE = 100.0
LINK_FACTOR = 0.3
CHARGE_STRENGTH = -300.0
COLLISION_RADIUS = 40.0
CENTER_STRENGTH = 1.0
ALPHA_START = 1.0
ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4
DRAG_ALPHA_TARGET = 0.3
TICK_INTERVAL_MS = 16.0
MAX_TICKS = 2000

# --- Interaction ---
SEARCH_DEBOUNCE_MS = 300.0
RESIZE_DEBOUNCE_MS = 250.0


class LayoutSettings(BaseModel):
    link_distance: float = Field(default=LINK_DISTANCE, gt=0)
    link_factor: float = Field(default=LINK_FACTOR, ge=0)
    charge_strength: float = Field(default=CHARGE_STRENGTH, le=0)
    collision_radius: float = Field(default=COLLISION_RADIUS, ge=0)
    center_strength: float = Field(default=CENTER_STRENGTH, ge=0, le=1)
    alpha_min: float = Field(default=ALPHA_MIN, gt=0, lt=1)
    alpha_decay: float = Field(default=ALPHA_DECAY, gt=0, lt=1)
    velocity_decay: float = Field(default=VELOCITY_DECAY, ge=0, le=1)
    drag_alpha_target: float = Field(default=DRAG_ALPHA_TARGET, ge=0, le=1)
    tick_interval_ms: float = Field(default=TICK_INTERVAL_MS, gt=0)
    seed: int = 0

    model_config = ConfigDict(frozen=True, extra='ignore')


class InteractionSettings(BaseModel):
    search_debounce_ms: float = Field(default=SEARCH_DEBOUNCE_MS, ge=0)
    resize_debounce_ms: float = Field(default=RESIZE_DEBOUNCE_MS, ge=0)

    model_config = ConfigDict(frozen=True, extra='ignore')


class Settings(BaseModel):
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    interaction: InteractionSettings = Field(default_factory=InteractionSettings)

    model_config = ConfigDict(frozen=True, extra='ignore')


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from YAML, falling back to defaults when the file is absent.

    Raises:
        FatalLoadError: If the file exists but is not valid YAML or holds
            out-of-range values.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise FatalLoadError(f"Invalid settings file: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise FatalLoadError("Settings file must contain a mapping", str(path))

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise FatalLoadError(f"Invalid settings: {e}", str(path)) from e

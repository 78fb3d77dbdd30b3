"""Configuration management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class SimulationSettings(BaseSettings):
    """Simulation settings, fixed once the session is built."""

    # Grid
    cols: int = Field(default=256, ge=1, description="Longitude cells (periodic axis)")
    rows: int = Field(default=128, ge=3, description="Colatitude cells, boundary rows included")

    # Wave propagation
    damping: float = Field(default=0.985, gt=0.0, lt=1.0, description="Per-step decay factor")

    # Impulses
    impulse_strength: float = Field(default=400.0, description="Value written at the impulse centre")
    neighbor_falloff_point: float = Field(default=0.7, description="Neighbour factor for taps")
    neighbor_falloff_path: float = Field(default=0.6, description="Neighbour factor for drag strokes")

    # Interaction
    drawable_radius_multiplier: float = Field(
        default=1.5, gt=0.0, description="Draw when closer than this many radii to the centre"
    )
    sphere_radius_fraction: float = Field(
        default=0.3, gt=0.0, description="Sphere radius as a fraction of the short viewport side"
    )
    rotation_sensitivity: float = Field(default=0.01, description="Radians of rotation per dragged pixel")

    # Rendering hand-off
    display_clamp: float = Field(default=400.0, gt=0.0, description="Heights are clamped to +/- this for display")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "plain"] = Field(default="json", description="Logging format")

    class Config:
        env_prefix = "WAVESPHERE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        frozen = True


settings = SimulationSettings()

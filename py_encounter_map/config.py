"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Map generation settings pulled from environment variables."""

    # Terrain
    sea_level: float = Field(default=2.0, description="Elevation at or below which a location is sea")
    unit_divisor: float = Field(default=20.0, gt=0, description="Map unit is min(width, height) / unit_divisor")

    # Mesh construction
    key_precision: int = Field(default=6, ge=0, description="Decimals kept when keying vertex and site positions")

    # Range placement
    range_max_scans: int = Field(default=1000, gt=0, description="Full scans allowed before a range gives up")
    range_accept_probability: float = Field(
        default=0.1, gt=0, le=1, description="Chance that a sample inside the range ellipse receives a feature"
    )

    # Randomness
    default_seed: Optional[int] = Field(default=None, description="Seed used when a map is created without one")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    class Config:
        env_prefix = "ENCOUNTER_MAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

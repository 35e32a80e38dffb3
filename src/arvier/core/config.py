"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.
"""
import logging
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings

from arvier.core.constants import (
    DEFAULT_INITIAL_SOIL_WATER_FRACTION,
    DEFAULT_PASTURE_HARVEST_GDD,
    DEFAULT_SOIL_WATER_MAX_MM,
    GDD_DECIMALS,
    KC_DECIMALS,
    OPEN_METEO_ARCHIVE_URL,
    WATER_DECIMALS,
)


class SimulationSettings(BaseSettings):
    """Agronomic assumptions used by the daily simulation"""

    # Soil water bucket
    soil_water_max_mm: float = Field(
        DEFAULT_SOIL_WATER_MAX_MM, gt=0,
        description="Bucket capacity; water above it is lost as runoff"
    )
    initial_soil_water_fraction: float = Field(
        DEFAULT_INITIAL_SOIL_WATER_FRACTION, ge=0, le=1,
        description="Starting soil water as a fraction of capacity"
    )

    # Pasture cycling
    pasture_harvest_gdd: float = Field(
        DEFAULT_PASTURE_HARVEST_GDD, gt=0,
        description="Cycle degree-days at which a pasture is cut/grazed"
    )

    # Output rounding
    gdd_decimals: int = Field(GDD_DECIMALS, ge=0)
    water_decimals: int = Field(WATER_DECIMALS, ge=0)
    kc_decimals: int = Field(KC_DECIMALS, ge=0)

    model_config = ConfigDict(env_prefix="ARVIER_SIMULATION_", case_sensitive=False)

    @property
    def initial_soil_water_mm(self) -> float:
        """Soil water at the start of a run"""
        return self.initial_soil_water_fraction * self.soil_water_max_mm


class WeatherSourceConfig(BaseSettings):
    """Configuration for the Open-Meteo archive source"""

    archive_url: str = Field(OPEN_METEO_ARCHIVE_URL)
    timezone: str = Field("Europe/Rome", description="Timezone for daily aggregation")
    timeout_seconds: int = Field(30, gt=0)

    # Archive data lags real time by a couple of days
    archive_lag_days: int = Field(2, ge=0)
    available_years: int = Field(10, gt=0, description="Years offered for historical runs")

    model_config = ConfigDict(env_prefix="ARVIER_WEATHER_", case_sensitive=False)


class LoggingConfig(BaseSettings):
    """Logging configuration"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = ConfigDict(env_prefix="ARVIER_LOGGING_", case_sensitive=False)


class ArvierConfig(BaseSettings):
    """Main configuration for the Arvier system"""

    project_name: str = "arvier"
    environment: Literal["development", "staging", "production"] = "development"

    # Component configurations
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    weather: WeatherSourceConfig = Field(default_factory=WeatherSourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Crops
    default_crop: str = Field("apple", description="Crop used when none is given")
    crop_catalog_path: Optional[Path] = Field(
        None, description="YAML file with additional crop definitions"
    )

    model_config = ConfigDict(
        env_prefix="ARVIER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_config(self):
        """Cross-field validation"""
        if self.crop_catalog_path is not None and not self.crop_catalog_path.exists():
            raise ValueError(f"Crop catalogue not found: {self.crop_catalog_path}")
        return self

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "ArvierConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)


# Global configuration instance
_config: Optional[ArvierConfig] = None


def get_config(config_path: Optional[Path] = None) -> ArvierConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and config_path.exists():
            _config = ArvierConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = ArvierConfig()

    return _config


def set_config(config: Optional[ArvierConfig]):
    """Set configuration (useful for testing)"""
    global _config
    _config = config


def configure_logging(logging_config: Optional[LoggingConfig] = None):
    """Apply logging settings to the root logger"""
    logging_config = logging_config or get_config().logging
    logging.basicConfig(
        level=getattr(logging, logging_config.log_level),
        format=logging_config.log_format,
    )

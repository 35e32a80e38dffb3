"""
Arvier Data Package.

Provides input contracts and the weather data source.
"""

from arvier.data.contracts import (
    PhaseThreshold,
    CropConfig,
    DailyWeatherRecord,
    IrrigationEvent,
)

__all__ = [
    "PhaseThreshold",
    "CropConfig",
    "DailyWeatherRecord",
    "IrrigationEvent",
]

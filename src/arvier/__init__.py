"""
Arvier: GDD-driven crop water demand and irrigation simulation.
"""
from arvier.crops import CROP_SETTINGS, get_crop_config
from arvier.data.contracts import (
    CropConfig,
    DailyWeatherRecord,
    IrrigationEvent,
    PhaseThreshold,
)
from arvier.simulation.engine import (
    DailyCalculation,
    SimulationResult,
    SimulationSummary,
    run_simulation,
)

__version__ = "0.1.0"

__all__ = [
    "CROP_SETTINGS",
    "get_crop_config",
    "CropConfig",
    "DailyWeatherRecord",
    "IrrigationEvent",
    "PhaseThreshold",
    "DailyCalculation",
    "SimulationResult",
    "SimulationSummary",
    "run_simulation",
]

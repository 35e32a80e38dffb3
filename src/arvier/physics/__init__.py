"""Agronomic calculations for the daily simulation."""
from arvier.physics.phenology import (
    calculate_daily_gdd,
    resolve_phase,
)
from arvier.physics.crop_coefficient import (
    interpolate_kc,
    calculate_etc,
)
from arvier.physics.water_balance import (
    BucketFluxes,
    update_soil_water,
    moisture_percent,
)

__all__ = [
    "calculate_daily_gdd",
    "resolve_phase",
    "interpolate_kc",
    "calculate_etc",
    "BucketFluxes",
    "update_soil_water",
    "moisture_percent",
]

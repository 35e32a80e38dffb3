"""
Single-bucket soil water balance.

The root zone is a bucket of fixed capacity. Each day:
1. Precipitation and irrigation are added
2. Storage above capacity is lost as runoff (never carried forward)
3. Crop evapotranspiration is withdrawn
4. Demand the bucket cannot meet is reported as net water deficit and
   storage is floored at zero
"""
from dataclasses import dataclass
from typing import Tuple

from arvier.core.types import Millimetres


@dataclass
class BucketFluxes:
    """Water fluxes for one day (all in mm)"""
    precipitation: Millimetres = 0.0
    irrigation: Millimetres = 0.0
    runoff: Millimetres = 0.0
    evapotranspiration: Millimetres = 0.0
    net_water_deficit: Millimetres = 0.0  # ETc not covered by storage

    @property
    def total_input(self) -> Millimetres:
        """Total water input"""
        return self.precipitation + self.irrigation

    @property
    def actual_et(self) -> Millimetres:
        """Evapotranspiration actually drawn from storage"""
        return self.evapotranspiration - self.net_water_deficit


def update_soil_water(
    soil_water: Millimetres,
    precipitation: Millimetres,
    irrigation: Millimetres,
    etc: Millimetres,
    soil_water_max: Millimetres
) -> Tuple[Millimetres, BucketFluxes]:
    """
    Advance the bucket by one day.

    Args:
        soil_water: Storage at the start of the day (mm)
        precipitation: Rainfall (mm)
        irrigation: Applied irrigation (mm)
        etc: Crop evapotranspiration demand (mm)
        soil_water_max: Bucket capacity (mm)

    Returns:
        Tuple of (storage at end of day, fluxes)
    """
    fluxes = BucketFluxes(
        precipitation=precipitation,
        irrigation=irrigation,
        evapotranspiration=etc,
    )

    storage = soil_water + fluxes.total_input
    if storage > soil_water_max:
        fluxes.runoff = storage - soil_water_max
        storage = soil_water_max

    storage -= etc
    if storage < 0:
        fluxes.net_water_deficit = -storage
        storage = 0.0

    return storage, fluxes


def moisture_percent(soil_water: Millimetres, soil_water_max: Millimetres) -> float:
    """Soil water as a percentage of bucket capacity"""
    return soil_water / soil_water_max * 100

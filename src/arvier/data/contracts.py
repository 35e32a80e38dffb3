"""
Data contracts and schemas for the Arvier system.
Ensures data consistency and provides validation.
"""
from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from arvier.core.types import (
    CropCoefficient, DegreeDays, Millimetres, PhaseName, TemperatureC
)


class PhaseThreshold(BaseModel):
    """Degree-day value at which a named phenological phase begins"""
    name: PhaseName
    gdd: DegreeDays

    model_config = ConfigDict(frozen=True)


class CropConfig(BaseModel):
    """
    Crop parameters for GDD-driven phenology and water demand.

    The Kc curve breakpoints are taken from the phase thresholds:
    the first threshold ends the development ramp, the second ends the
    mid-season plateau and the last one ends the late-season decline.
    """
    # Base temperature for GDD accumulation (°C)
    base_temp: TemperatureC

    # FAO-56 style crop coefficients
    kc_initial: CropCoefficient
    kc_peak: CropCoefficient
    kc_end: CropCoefficient

    # Growth phase thresholds ordered by GDD (stored as a tuple)
    phase_thresholds: Tuple[PhaseThreshold, ...] = ()

    # Repeating growth-and-harvest cycles (pasture)
    multi_cycle: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("phase_thresholds")
    @classmethod
    def validate_threshold_order(cls, v):
        """Thresholds must be strictly ascending by GDD"""
        for previous, current in zip(v, v[1:]):
            if current.gdd <= previous.gdd:
                raise ValueError(
                    f"phase thresholds must be strictly ascending by gdd: "
                    f"'{current.name}' ({current.gdd}) follows "
                    f"'{previous.name}' ({previous.gdd})"
                )
        return v

    @property
    def phase_names(self) -> List[PhaseName]:
        return [threshold.name for threshold in self.phase_thresholds]


class DailyWeatherRecord(BaseModel):
    """One day of weather forcing for the simulation"""
    date: date
    temp_max: TemperatureC
    temp_min: TemperatureC
    precipitation_mm: Millimetres = 0.0
    et0_mm: Millimetres = 0.0  # reference evapotranspiration, computed upstream

    # Carried from the weather source, unused by the simulation
    temp_mean: Optional[TemperatureC] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("precipitation_mm", "et0_mm", mode="before")
    @classmethod
    def missing_as_zero(cls, v):
        """Missing precipitation/ET0 values count as zero"""
        return 0.0 if v is None else v


class IrrigationEvent(BaseModel):
    """Water applied to the field on a given day"""
    date: date
    amount_mm: Millimetres

    model_config = ConfigDict(frozen=True)

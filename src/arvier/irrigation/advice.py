"""
Irrigation advice and soil moisture status for display.

Turns simulation output into the traffic-light style recommendation shown
to growers.
"""
from dataclasses import dataclass

import numpy as np

from arvier.core.constants import ADVICE_THRESHOLDS, SOIL_MOISTURE_BANDS
from arvier.core.types import (
    CropCoefficient, IrrigationUrgency, Millimetres, PhaseName, SoilMoistureLevel
)


@dataclass(frozen=True)
class IrrigationAdvice:
    """Recommendation derived from the water deficit"""
    urgency: IrrigationUrgency
    deficit_mm: Millimetres
    phase: PhaseName
    days_with_deficit: int

    @property
    def needs_water(self) -> bool:
        return self.urgency in (IrrigationUrgency.SOON, IrrigationUrgency.NOW)


def assess_irrigation_need(
    water_deficit: Millimetres,
    kc: CropCoefficient,
    current_phase: PhaseName,
    days_with_deficit: int
) -> IrrigationAdvice:
    """
    Classify how urgently the crop needs water.

    A large deficit matters most when the crop is near peak demand (high Kc).

    Args:
        water_deficit: Accumulated deficit (mm)
        kc: Current crop coefficient
        current_phase: Current phenological phase
        days_with_deficit: Number of days the bucket could not meet demand

    Returns:
        IrrigationAdvice
    """
    t = ADVICE_THRESHOLDS

    if water_deficit > t["now_deficit_mm"] and kc >= t["now_min_kc"]:
        urgency = IrrigationUrgency.NOW
    elif (water_deficit > t["soon_deficit_mm"]
          or (water_deficit > t["soon_partial_deficit_mm"] and kc >= t["soon_min_kc"])):
        urgency = IrrigationUrgency.SOON
    elif water_deficit > t["watch_deficit_mm"] or days_with_deficit > t["watch_deficit_days"]:
        urgency = IrrigationUrgency.WATCH
    else:
        urgency = IrrigationUrgency.OK

    return IrrigationAdvice(
        urgency=urgency,
        deficit_mm=water_deficit,
        phase=current_phase,
        days_with_deficit=days_with_deficit,
    )


def soil_moisture_status(moisture_percent: float) -> SoilMoistureLevel:
    """Qualitative band for a soil moisture percentage (clamped to 0-100)"""
    moisture = float(np.clip(moisture_percent, 0.0, 100.0))

    if moisture >= SOIL_MOISTURE_BANDS["good"]:
        return SoilMoistureLevel.GOOD
    if moisture >= SOIL_MOISTURE_BANDS["moderate"]:
        return SoilMoistureLevel.MODERATE
    if moisture >= SOIL_MOISTURE_BANDS["low"]:
        return SoilMoistureLevel.LOW
    return SoilMoistureLevel.CRITICAL

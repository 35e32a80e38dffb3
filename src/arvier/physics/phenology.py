"""
Thermal-time phenology: growing degree days and phase detection.

Growing Degree Days (GDD) act as a biological clock in place of calendar
time:
    GDD = max(0, (Tmax + Tmin)/2 - Tbase)

A phenological phase begins once accumulated GDD reaches its threshold.
"""
from typing import Sequence

import numpy as np

from arvier.core.constants import DORMANT_PHASE
from arvier.core.types import DegreeDays, PhaseName, TemperatureC
from arvier.data.contracts import PhaseThreshold


def calculate_daily_gdd(
    temp_max: TemperatureC,
    temp_min: TemperatureC,
    base_temp: TemperatureC
) -> DegreeDays:
    """
    Calculate Growing Degree Days for one day (averaging method).

    NaN temperatures propagate as NaN; callers validate their inputs.

    Args:
        temp_max: Maximum daily temperature (°C)
        temp_min: Minimum daily temperature (°C)
        base_temp: Crop base temperature (°C)

    Returns:
        GDD for the day
    """
    avg_temp = (temp_max + temp_min) / 2
    # np.maximum propagates NaN where the builtin max() would not
    return float(np.maximum(0.0, avg_temp - base_temp))


def resolve_phase(
    cumulative_gdd: DegreeDays,
    phase_thresholds: Sequence[PhaseThreshold]
) -> PhaseName:
    """
    Determine the current growth phase from accumulated GDD.

    Returns the name of the last threshold reached in a linear scan, or
    ``DORMANT_PHASE`` when none has been reached. Thresholds must already
    be sorted ascending; they are not re-sorted here.
    """
    current_phase = DORMANT_PHASE

    for threshold in phase_thresholds:
        if cumulative_gdd >= threshold.gdd:
            current_phase = threshold.name

    return current_phase

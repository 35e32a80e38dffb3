"""
Daily season simulation.

Folds a weather series through the phenology, crop coefficient and soil
water calculations in a single pass, producing one record per day plus a
season summary. No I/O: identical inputs always give identical outputs.
"""
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from arvier.core.config import SimulationSettings
from arvier.core.constants import DORMANT_PHASE
from arvier.core.types import (
    CropCoefficient, Date, DegreeDays, Millimetres, PhaseName
)
from arvier.data.contracts import CropConfig, DailyWeatherRecord, IrrigationEvent
from arvier.irrigation.ledger import build_irrigation_ledger
from arvier.physics.crop_coefficient import calculate_etc, interpolate_kc
from arvier.physics.phenology import calculate_daily_gdd, resolve_phase
from arvier.physics.water_balance import update_soil_water

logger = logging.getLogger(__name__)


def round_half_up(value: float, decimals: int) -> float:
    """Round to ``decimals`` places with halves going up (NaN passes through)"""
    scale = 10 ** decimals
    return float(np.floor(value * scale + 0.5) / scale)


@dataclass
class DailyCalculation:
    """Simulation output for one day (rounded for display)"""
    date: Date
    gdd_daily: DegreeDays
    gdd_cumulative: DegreeDays
    gdd_cycle: DegreeDays
    current_phase: PhaseName
    kc: CropCoefficient
    et0: Millimetres
    etc: Millimetres
    precipitation: Millimetres
    water_deficit: Millimetres  # ETc - precipitation, ignoring soil storage
    irrigation_applied: Millimetres
    soil_water: Millimetres
    net_water_deficit: Millimetres  # ETc the bucket could not supply


@dataclass
class SimulationSummary:
    """Season totals"""
    total_gdd: DegreeDays = 0.0
    total_etc: Millimetres = 0.0
    total_precipitation: Millimetres = 0.0
    total_water_deficit: Millimetres = 0.0
    total_irrigation: Millimetres = 0.0
    net_water_deficit: Millimetres = 0.0
    peak_phase_reached: PhaseName = DORMANT_PHASE  # phase on the last day
    days_with_deficit: int = 0


@dataclass
class SimulationResult:
    """Daily records and summary of one run"""
    daily: List[DailyCalculation] = field(default_factory=list)
    summary: SimulationSummary = field(default_factory=SimulationSummary)

    @property
    def latest(self) -> Optional[DailyCalculation]:
        """Most recent day, if any"""
        return self.daily[-1] if self.daily else None

    def to_dataframe(self) -> pd.DataFrame:
        """Daily records as a DataFrame indexed by date"""
        columns = [f.name for f in fields(DailyCalculation)]
        df = pd.DataFrame([asdict(day) for day in self.daily], columns=columns)
        df["date"] = pd.to_datetime(df["date"])
        return df.set_index("date")


@dataclass
class _SeasonState:
    """Running accumulators, owned by a single run"""
    cumulative_gdd: DegreeDays = 0.0
    cycle_gdd: DegreeDays = 0.0
    soil_water: Millimetres = 0.0
    total_etc: Millimetres = 0.0
    total_precipitation: Millimetres = 0.0
    total_water_deficit: Millimetres = 0.0
    total_irrigation: Millimetres = 0.0
    total_net_water_deficit: Millimetres = 0.0
    days_with_deficit: int = 0
    last_phase: PhaseName = DORMANT_PHASE


def run_simulation(
    weather: Sequence[DailyWeatherRecord],
    crop: CropConfig,
    irrigation_events: Optional[Iterable[IrrigationEvent]] = None,
    is_pasture: bool = False,
    settings: Optional[SimulationSettings] = None
) -> SimulationResult:
    """
    Run the daily simulation over a weather series.

    Args:
        weather: Daily records in ascending date order (one per day)
        crop: Crop parameters; thresholds must be sorted ascending
        irrigation_events: Water applied by the grower
        is_pasture: Treat the crop as repeating growth/harvest cycles,
            driving phase and Kc from the cycle GDD
        settings: Agronomic assumptions (bucket size, starting moisture,
            harvest threshold, rounding)

    Returns:
        SimulationResult with one DailyCalculation per weather record
    """
    settings = settings or SimulationSettings()
    ledger = build_irrigation_ledger(irrigation_events)

    state = _SeasonState(soil_water=settings.initial_soil_water_mm)
    daily: List[DailyCalculation] = []

    logger.info(
        f"Running simulation for {len(weather)} days "
        f"(pasture cycles: {is_pasture}, irrigation days: {len(ledger)})"
    )

    for day in weather:
        if np.isnan(day.temp_max) or np.isnan(day.temp_min):
            logger.warning(f"Missing temperature on {day.date}; GDD will be NaN")

        # Thermal time
        gdd_daily = calculate_daily_gdd(day.temp_max, day.temp_min, crop.base_temp)
        state.cumulative_gdd += gdd_daily
        state.cycle_gdd += gdd_daily

        # The excess carries into the next growth flush
        if is_pasture and state.cycle_gdd >= settings.pasture_harvest_gdd:
            state.cycle_gdd -= settings.pasture_harvest_gdd
            logger.debug(f"Pasture cycle completed on {day.date}")

        phenology_gdd = state.cycle_gdd if is_pasture else state.cumulative_gdd

        current_phase = resolve_phase(phenology_gdd, crop.phase_thresholds)
        kc = interpolate_kc(phenology_gdd, crop)
        state.last_phase = current_phase

        # Water demand
        etc = calculate_etc(day.et0_mm, kc)
        water_deficit = max(0.0, etc - day.precipitation_mm)
        irrigation_applied = ledger.get(day.date, 0.0)

        state.soil_water, fluxes = update_soil_water(
            state.soil_water,
            precipitation=day.precipitation_mm,
            irrigation=irrigation_applied,
            etc=etc,
            soil_water_max=settings.soil_water_max_mm,
        )
        net_water_deficit = fluxes.net_water_deficit

        # Totals
        state.total_etc += etc
        state.total_precipitation += day.precipitation_mm
        state.total_water_deficit += water_deficit
        state.total_irrigation += irrigation_applied
        state.total_net_water_deficit += net_water_deficit
        if net_water_deficit > 0:
            state.days_with_deficit += 1

        logger.debug(
            f"{day.date}: GDD={state.cumulative_gdd:.1f} phase={current_phase} "
            f"Kc={kc:.2f} ETc={etc:.2f} soil={state.soil_water:.1f} "
            f"runoff={fluxes.runoff:.1f}"
        )

        daily.append(DailyCalculation(
            date=day.date,
            gdd_daily=round_half_up(gdd_daily, settings.gdd_decimals),
            gdd_cumulative=round_half_up(state.cumulative_gdd, settings.gdd_decimals),
            gdd_cycle=round_half_up(state.cycle_gdd, settings.gdd_decimals),
            current_phase=current_phase,
            kc=round_half_up(kc, settings.kc_decimals),
            et0=day.et0_mm,
            etc=round_half_up(etc, settings.water_decimals),
            precipitation=day.precipitation_mm,
            water_deficit=round_half_up(water_deficit, settings.water_decimals),
            irrigation_applied=round_half_up(irrigation_applied, settings.water_decimals),
            soil_water=round_half_up(state.soil_water, settings.water_decimals),
            net_water_deficit=round_half_up(net_water_deficit, settings.water_decimals),
        ))

    # Season totals are reported in whole units
    summary = SimulationSummary(
        total_gdd=round_half_up(state.cumulative_gdd, 0),
        total_etc=round_half_up(state.total_etc, 0),
        total_precipitation=round_half_up(state.total_precipitation, 0),
        total_water_deficit=round_half_up(state.total_water_deficit, 0),
        total_irrigation=round_half_up(state.total_irrigation, 0),
        net_water_deficit=round_half_up(state.total_net_water_deficit, 0),
        peak_phase_reached=state.last_phase,
        days_with_deficit=state.days_with_deficit,
    )

    logger.info(
        f"Simulation complete: GDD={summary.total_gdd:.0f}, "
        f"ETc={summary.total_etc:.0f}mm, net deficit={summary.net_water_deficit:.0f}mm "
        f"over {summary.days_with_deficit} days"
    )

    return SimulationResult(daily=daily, summary=summary)

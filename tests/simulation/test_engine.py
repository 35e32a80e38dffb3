"""
Tests for the daily season simulation.
Covers a short spring run, soil water bookkeeping, pasture cycles
and edge cases.
"""
import math
from datetime import date, timedelta

import pandas as pd
import pytest

from arvier.core.config import SimulationSettings
from arvier.crops import get_crop_config
from arvier.data.contracts import CropConfig, IrrigationEvent
from arvier.simulation.engine import SimulationSummary, round_half_up, run_simulation


class TestSpringRun:
    """Three spring days for an apple orchard starting at 70 mm soil water"""

    @pytest.fixture
    def result(self, apple_crop, make_weather):
        weather = make_weather([
            (15, 5, 0, 3),
            (18, 8, 0, 4),
            (20, 10, 10, 5),
        ])
        return run_simulation(weather, apple_crop)

    def test_cumulative_gdd(self, result):
        """Daily GDD accumulates"""
        assert [d.gdd_daily for d in result.daily] == [5.5, 8.5, 10.5]
        assert [d.gdd_cumulative for d in result.daily] == [5.5, 14.0, 24.5]

    def test_kc_on_development_ramp(self, result):
        """Kc climbs along the development ramp"""
        assert [d.kc for d in result.daily] == [0.41, 0.42, 0.44]

    def test_water_sequence(self, result):
        """ETc, deficit and storage day by day"""
        assert [d.etc for d in result.daily] == [1.2, 1.7, 2.2]
        assert [d.water_deficit for d in result.daily] == [1.2, 1.7, 0.0]
        assert [d.soil_water for d in result.daily] == [68.8, 67.1, 74.9]
        assert [d.net_water_deficit for d in result.daily] == [0.0, 0.0, 0.0]

    def test_inputs_pass_through_unrounded(self, result):
        """ET0 and rain are reported as given"""
        assert [d.et0 for d in result.daily] == [3, 4, 5]
        assert [d.precipitation for d in result.daily] == [0, 0, 10]

    def test_phase_and_summary(self, result):
        """Season totals before bloom"""
        assert all(d.current_phase == "Dormant" for d in result.daily)
        summary = result.summary
        assert summary.peak_phase_reached == "Dormant"
        assert summary.total_etc == pytest.approx(5.0)
        assert summary.total_precipitation == pytest.approx(10.0)
        assert summary.total_water_deficit == pytest.approx(3.0)
        assert summary.total_irrigation == 0.0
        assert summary.days_with_deficit == 0

    def test_dates_preserved(self, result):
        """Each record keeps its weather date"""
        assert [d.date for d in result.daily] == [
            date(2024, 4, 1), date(2024, 4, 2), date(2024, 4, 3)
        ]


class TestSoilWater:

    def test_overflow_capped_at_capacity(self, flat_crop, make_weather):
        """Rain above capacity runs off"""
        weather = make_weather([(10, 10, 50, 5)])
        day = run_simulation(weather, flat_crop).daily[0]
        assert day.soil_water == 95.0
        assert day.net_water_deficit == 0.0

    def test_runoff_not_carried_forward(self, flat_crop, make_weather):
        """Runoff is lost, not stored"""
        weather = make_weather([(10, 10, 80, 0), (10, 10, 0, 10)])
        daily = run_simulation(weather, flat_crop).daily
        assert daily[0].soil_water == 100.0
        assert daily[1].soil_water == 90.0

    def test_deficit_when_bucket_empties(self, flat_crop, make_weather):
        """Unmet ETc is counted as net deficit"""
        settings = SimulationSettings(soil_water_max_mm=10, initial_soil_water_fraction=0.5)
        weather = make_weather([(10, 10, 0, 8), (10, 10, 0, 4), (10, 10, 6, 2)])
        result = run_simulation(weather, flat_crop, settings=settings)

        assert [d.soil_water for d in result.daily] == [0.0, 0.0, 4.0]
        assert [d.net_water_deficit for d in result.daily] == [3.0, 4.0, 0.0]
        assert result.summary.days_with_deficit == 2
        assert result.summary.net_water_deficit == pytest.approx(7.0)

    def test_custom_initial_fraction(self, flat_crop, make_weather):
        """Starting storage follows the settings"""
        settings = SimulationSettings(soil_water_max_mm=200, initial_soil_water_fraction=0.25)
        result = run_simulation(make_weather([(10, 10, 0, 0)]), flat_crop, settings=settings)
        assert result.daily[0].soil_water == 50.0

    def test_irrigation_applied_on_its_day(self, flat_crop, make_weather):
        """Same-day events are summed and applied once"""
        weather = make_weather([(10, 10, 0, 5)] * 3)
        events = [
            IrrigationEvent(date=date(2024, 4, 2), amount_mm=15),
            IrrigationEvent(date=date(2024, 4, 2), amount_mm=5),
            IrrigationEvent(date=date(2024, 6, 1), amount_mm=30),  # outside the series
        ]
        result = run_simulation(weather, flat_crop, irrigation_events=events)

        assert [d.irrigation_applied for d in result.daily] == [0.0, 20.0, 0.0]
        assert [d.soil_water for d in result.daily] == [65.0, 80.0, 75.0]
        assert result.summary.total_irrigation == pytest.approx(20.0)

    def test_water_deficit_ignores_irrigation(self, flat_crop, make_weather):
        """The theoretical deficit only compares ETc with rainfall"""
        weather = make_weather([(10, 10, 2, 6)])
        events = [IrrigationEvent(date=date(2024, 4, 1), amount_mm=50)]
        day = run_simulation(weather, flat_crop, irrigation_events=events).daily[0]
        assert day.water_deficit == 4.0
        assert day.net_water_deficit == 0.0


class TestPastureCycle:

    @pytest.fixture
    def pasture(self):
        return get_crop_config("pasture")

    @pytest.fixture
    def weather(self, make_weather):
        # 79 days at 10 GDD reach 790, then a 25 GDD day crosses 800
        return make_weather([(10, 10, 0, 2)] * 79 + [(30, 20, 0, 2)])

    def test_excess_carries_into_next_cycle(self, pasture, weather):
        """GDD past the harvest threshold starts the next cycle"""
        daily = run_simulation(weather, pasture, is_pasture=True).daily
        assert daily[-2].gdd_cycle == 790.0
        assert daily[-1].gdd_cycle == 15.0
        assert daily[-1].gdd_cumulative == 815.0

    def test_phase_and_kc_follow_cycle(self, pasture, weather):
        """Phase and Kc restart with the cycle"""
        daily = run_simulation(weather, pasture, is_pasture=True).daily
        assert daily[-2].current_phase == "Growth"
        assert daily[-1].current_phase == "Dormant"
        assert daily[-1].kc == pytest.approx(0.54, abs=0.005)

    def test_without_pasture_flag_cycle_tracks_cumulative(self, pasture, weather):
        """Without cycles the cycle GDD equals the total"""
        daily = run_simulation(weather, pasture, is_pasture=False).daily
        assert daily[-1].gdd_cycle == daily[-1].gdd_cumulative == 815.0
        assert daily[-1].current_phase == "Harvest"

    def test_custom_harvest_threshold(self, pasture, make_weather):
        """The harvest threshold comes from the settings"""
        settings = SimulationSettings(pasture_harvest_gdd=100)
        weather = make_weather([(10, 10, 0, 0)] * 12)
        daily = run_simulation(weather, pasture, is_pasture=True, settings=settings).daily
        assert [d.gdd_cycle for d in daily][9:] == [0.0, 10.0, 20.0]
        assert daily[-1].gdd_cumulative == 120.0


class TestInvariants:

    def test_empty_series(self, apple_crop):
        """No weather gives an empty result"""
        result = run_simulation([], apple_crop)
        assert result.daily == []
        assert result.summary == SimulationSummary()
        assert result.summary.peak_phase_reached == "Dormant"
        assert result.latest is None

    def test_idempotent(self, apple_crop, make_weather):
        """Identical inputs give identical results"""
        weather = make_weather([(25, 12, i % 4, 4.5) for i in range(120)])
        events = [IrrigationEvent(date=date(2024, 5, 1), amount_mm=25)]
        first = run_simulation(weather, apple_crop, irrigation_events=events)
        second = run_simulation(weather, apple_crop, irrigation_events=events)
        assert first == second
        assert repr(first.daily) == repr(second.daily)

    def test_cumulative_gdd_non_decreasing(self, apple_crop, make_weather):
        """Cumulative GDD never decreases"""
        weather = make_weather([(5 + (i % 20), i % 7, 0, 3) for i in range(200)])
        cumulative = [d.gdd_cumulative for d in run_simulation(weather, apple_crop).daily]
        assert all(b >= a for a, b in zip(cumulative, cumulative[1:]))

    def test_phase_progression_over_season(self, apple_crop, make_weather):
        """Phases advance as GDD crosses thresholds"""
        weather = make_weather([(30, 19, 0, 5)] * 120)  # 20 GDD per day
        result = run_simulation(weather, apple_crop)
        phases = [d.current_phase for d in result.daily]
        assert phases[16] == "Dormant"    # 340 GDD
        assert phases[17] == "Bloom"      # 360 GDD
        assert phases[39] == "Expansion"  # 800 GDD
        assert result.summary.peak_phase_reached == "Expansion"

    def test_input_not_mutated(self, apple_crop, make_weather):
        """Weather and events are left untouched"""
        weather = make_weather([(20, 10, 1, 3)] * 5)
        events = [IrrigationEvent(date=date(2024, 4, 3), amount_mm=10)]
        snapshot = [w.model_dump() for w in weather], list(events)
        run_simulation(weather, apple_crop, irrigation_events=events)
        assert ([w.model_dump() for w in weather], events) == snapshot


class TestDataFrameExport:

    def test_to_dataframe(self, apple_crop, make_weather):
        """Records export to a date-indexed DataFrame"""
        weather = make_weather([(20, 10, 0, 4)] * 3)
        df = run_simulation(weather, apple_crop).to_dataframe()

        assert len(df) == 3
        assert isinstance(df.index, pd.DatetimeIndex)
        assert df.index[0] == pd.Timestamp("2024-04-01")
        assert {"gdd_cumulative", "kc", "soil_water", "net_water_deficit"} <= set(df.columns)
        assert df["gdd_cumulative"].iloc[-1] == pytest.approx(31.5)

    def test_empty_dataframe_has_columns(self, apple_crop):
        """An empty run still has all columns"""
        df = run_simulation([], apple_crop).to_dataframe()
        assert df.empty
        assert "soil_water" in df.columns


class TestRounding:

    def test_half_gdd_rounds_up(self, make_weather):
        """A 0.25 degree-day day is reported as 0.3"""
        crop = CropConfig(base_temp=10.0, kc_initial=1.0, kc_peak=1.0, kc_end=1.0)
        day = run_simulation(make_weather([(15, 5.5, 0, 0)]), crop).daily[0]
        assert day.gdd_daily == 0.3
        assert day.gdd_cumulative == 0.3

    def test_half_totals_round_up(self, flat_crop, make_weather):
        """Season totals at exactly .5 round to the next whole unit"""
        weather = make_weather([(10, 10, 0.5, 0.5), (10, 10, 2.0, 2.0)])
        summary = run_simulation(weather, flat_crop).summary
        assert summary.total_etc == 3.0
        assert summary.total_precipitation == 3.0

    @pytest.mark.parametrize(
        "value, decimals, expected",
        [(0.25, 1, 0.3), (2.5, 0, 3.0), (3.5, 0, 4.0), (0.125, 2, 0.13), (-2.5, 0, -2.0)],
    )
    def test_round_half_up(self, value, decimals, expected):
        """Halves go up rather than to the even digit"""
        assert round_half_up(value, decimals) == pytest.approx(expected)

    def test_round_half_up_keeps_nan(self):
        """Missing values stay missing"""
        assert math.isnan(round_half_up(float("nan"), 1))

"""Shared fixtures for the Arvier test suite."""
from datetime import date, timedelta

import pytest

from arvier.core.config import set_config
from arvier.data.contracts import CropConfig, DailyWeatherRecord


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts without a cached global configuration"""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def apple_crop():
    """Apple orchard parameters, same as the built-in catalogue"""
    return CropConfig(
        base_temp=4.5,
        kc_initial=0.40,
        kc_peak=1.00,
        kc_end=0.70,
        phase_thresholds=[
            {"name": "Bloom", "gdd": 350},
            {"name": "Expansion", "gdd": 800},
            {"name": "Maturity", "gdd": 2500},
        ],
    )


@pytest.fixture
def flat_crop():
    """Crop with a constant Kc of 1.0 so that ETc equals ET0"""
    return CropConfig(base_temp=0.0, kc_initial=1.0, kc_peak=1.0, kc_end=1.0)


@pytest.fixture
def make_weather():
    """Build records from (temp_max, temp_min, precipitation, et0) tuples"""
    def _make(days, start=date(2024, 4, 1)):
        return [
            DailyWeatherRecord(
                date=start + timedelta(days=i),
                temp_max=t_max,
                temp_min=t_min,
                precipitation_mm=precip,
                et0_mm=et0,
            )
            for i, (t_max, t_min, precip, et0) in enumerate(days)
        ]
    return _make

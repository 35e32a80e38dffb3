"""
Agronomic default values and system-wide constants.
"""
from typing import Dict, Final, List

# Phase reported before the first threshold is reached
DORMANT_PHASE: Final[str] = "Dormant"

# Soil water bucket
DEFAULT_SOIL_WATER_MAX_MM: Final[float] = 100.0  # field capacity of the bucket
DEFAULT_INITIAL_SOIL_WATER_FRACTION: Final[float] = 0.7  # assumed starting moisture

# Pasture grazing/cutting cycle
DEFAULT_PASTURE_HARVEST_GDD: Final[float] = 800.0

# Output precision (decimal places)
GDD_DECIMALS: Final[int] = 1
WATER_DECIMALS: Final[int] = 1
KC_DECIMALS: Final[int] = 2

# Irrigation advice thresholds (mm of accumulated deficit)
ADVICE_THRESHOLDS: Final[Dict[str, float]] = {
    "now_deficit_mm": 30.0,
    "now_min_kc": 0.7,
    "soon_deficit_mm": 20.0,
    "soon_partial_deficit_mm": 10.0,
    "soon_min_kc": 0.6,
    "watch_deficit_mm": 10.0,
    "watch_deficit_days": 5,
}

# Soil moisture display bands (% of bucket capacity, lower bounds)
SOIL_MOISTURE_BANDS: Final[Dict[str, float]] = {
    "good": 60.0,
    "moderate": 35.0,
    "low": 15.0,
}

# Open-Meteo archive
OPEN_METEO_ARCHIVE_URL: Final[str] = "https://archive-api.open-meteo.com/v1/archive"
OPEN_METEO_DAILY_VARIABLES: Final[List[str]] = [
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "precipitation_sum",
    "et0_fao_evapotranspiration",
]

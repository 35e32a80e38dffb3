"""
Arvier Data Sources Package.

Weather data is an external input to the simulation; these sources
fetch or load it and hand back validated ``DailyWeatherRecord`` lists.

Usage:
------
>>> from arvier.data.sources import OpenMeteoArchiveSource
>>> source = OpenMeteoArchiveSource()
>>> series = source.fetch_season(45.70, 7.03)
>>> series.elevation_m
"""

from arvier.data.sources.base import (
    WeatherSeries,
    WeatherSource,
)
from arvier.data.sources.weather import (
    OpenMeteoArchiveSource,
    weather_from_dataframe,
    load_weather_csv,
)

__all__ = [
    "WeatherSeries",
    "WeatherSource",
    "OpenMeteoArchiveSource",
    "weather_from_dataframe",
    "load_weather_csv",
]

"""
Concrete weather data source implementations.
Currently supports the Open-Meteo historical archive, plus loading
weather from tabular files.
"""
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
import requests
from pydantic import ValidationError

from arvier.core.config import WeatherSourceConfig, get_config
from arvier.core.constants import OPEN_METEO_DAILY_VARIABLES
from arvier.core.exceptions import (
    DataSourceError, DataValidationError, ErrorContext, handle_exception
)
from arvier.data.contracts import DailyWeatherRecord
from arvier.data.sources.base import WeatherSeries, WeatherSource


class OpenMeteoArchiveSource(WeatherSource):
    """
    Weather data source using the Open-Meteo historical archive.

    Archive data is available from 1940 until a couple of days ago.
    """

    def __init__(
        self,
        config: Optional[WeatherSourceConfig] = None,
        session: Optional[requests.Session] = None
    ):
        super().__init__("open_meteo")
        self.config = config or get_config().weather
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'Arvier-Irrigation/1.0'
        })

    def fetch_range(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date
    ) -> WeatherSeries:
        """Fetch daily weather for an inclusive date range"""
        errors = self.validate_request(start_date, end_date)
        if errors:
            raise DataSourceError(
                "; ".join(errors),
                ErrorContext(component=self.name, operation="fetch_range"),
            )

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "daily": ",".join(OPEN_METEO_DAILY_VARIABLES),
            "timezone": self.config.timezone,
        }
        data = self._get(params)

        return WeatherSeries(
            records=self._parse_daily_response(data),
            elevation_m=data.get("elevation"),
            source=self.name,
        )

    def fetch_year(self, latitude: float, longitude: float, year: int) -> WeatherSeries:
        """Fetch a full calendar year"""
        return self.fetch_range(latitude, longitude, date(year, 1, 1), date(year, 12, 31))

    def fetch_recent(
        self,
        latitude: float,
        longitude: float,
        days: int = 30,
        today: Optional[date] = None
    ) -> WeatherSeries:
        """Fetch the last ``days`` days available in the archive"""
        end_date = self._latest_archive_date(today)
        start_date = end_date - timedelta(days=days)
        return self.fetch_range(latitude, longitude, start_date, end_date)

    def fetch_season(
        self,
        latitude: float,
        longitude: float,
        season_start: Optional[date] = None,
        today: Optional[date] = None
    ) -> WeatherSeries:
        """
        Fetch weather from the start of the season to the latest archive day.

        The season starts on January 1st of the current year unless given.
        A season start in the future is moved back one year.
        """
        today = today or date.today()
        season_start = season_start or date(today.year, 1, 1)

        if season_start > today:
            season_start = _previous_year(season_start)

        end_date = self._latest_archive_date(today)
        return self.fetch_range(latitude, longitude, season_start, end_date)

    def fetch_grid_elevation(self, latitude: float, longitude: float) -> float:
        """
        Elevation of the weather grid cell for the coordinates.

        This is the elevation of the model grid point, not the terrain.
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": "temperature_2m_max",
            "start_date": "2024-01-01",
            "end_date": "2024-01-01",
            "timezone": self.config.timezone,
        }
        data = self._get(params)

        if data.get("elevation") is None:
            raise DataSourceError(
                "No elevation in response",
                ErrorContext(component=self.name, operation="fetch_grid_elevation"),
            )
        return float(data["elevation"])

    def available_years(self, today: Optional[date] = None) -> List[int]:
        """Complete years offered for historical runs, newest first"""
        current_year = (today or date.today()).year
        return [current_year - offset for offset in range(1, self.config.available_years + 1)]

    def _latest_archive_date(self, today: Optional[date] = None) -> date:
        return (today or date.today()) - timedelta(days=self.config.archive_lag_days)

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        self.logger.info(f"Fetching archive weather: {params}")

        try:
            response = self.session.get(
                self.config.archive_url, params=params, timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            raise DataSourceError(
                f"Open-Meteo API error: {e}",
                ErrorContext(component=self.name, operation="get"),
            ) from e
        except ValueError as e:
            raise DataSourceError(
                f"Open-Meteo returned invalid JSON: {e}",
                ErrorContext(component=self.name, operation="get"),
            ) from e

    def _parse_daily_response(self, data: Dict[str, Any]) -> List[DailyWeatherRecord]:
        """Parse Open-Meteo API response into DailyWeatherRecord objects"""
        daily_data = data.get("daily", {})

        if not daily_data:
            raise DataSourceError(
                "No daily data in response",
                ErrorContext(component=self.name, operation="parse"),
            )

        dates = daily_data.get("time", [])

        def value_at(api_field: str, i: int) -> Optional[float]:
            values = daily_data.get(api_field) or []
            return values[i] if i < len(values) else None

        def temperature_at(api_field: str, i: int) -> float:
            value = value_at(api_field, i)
            return float("nan") if value is None else value

        records = []
        for i, date_str in enumerate(dates):
            if value_at("temperature_2m_max", i) is None or value_at("temperature_2m_min", i) is None:
                self.logger.warning(f"Missing temperature for {date_str}")
            try:
                records.append(DailyWeatherRecord(
                    date=date_str,
                    temp_max=temperature_at("temperature_2m_max", i),
                    temp_min=temperature_at("temperature_2m_min", i),
                    temp_mean=value_at("temperature_2m_mean", i),
                    precipitation_mm=value_at("precipitation_sum", i),
                    et0_mm=value_at("et0_fao_evapotranspiration", i),
                ))
            except ValidationError as e:
                raise DataValidationError(
                    f"Malformed weather record: {e}",
                    ErrorContext(date=str(date_str), component=self.name, operation="parse"),
                ) from e

        return records


def _previous_year(day: date) -> date:
    """Same calendar day one year earlier; Feb 29 rolls over to Mar 1"""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return date(day.year - 1, 3, 1)


# Accepted column names when loading weather from files
WEATHER_COLUMN_ALIASES = {
    "temperature_2m_max": "temp_max",
    "temperature_2m_min": "temp_min",
    "temperature_2m_mean": "temp_mean",
    "precipitation_sum": "precipitation_mm",
    "precipitation": "precipitation_mm",
    "time": "date",
    "et0_fao_evapotranspiration": "et0_mm",
    "et0": "et0_mm",
}


def weather_from_dataframe(df: pd.DataFrame) -> List[DailyWeatherRecord]:
    """
    Convert a DataFrame of daily weather into records sorted by date.

    Requires ``date``, ``temp_max`` and ``temp_min`` columns (Open-Meteo
    names are accepted too). Missing precipitation/ET0 become zero.
    """
    if df.index.name in ("date", "time"):
        df = df.reset_index()
    df = df.rename(columns=WEATHER_COLUMN_ALIASES)

    missing = [col for col in ("date", "temp_max", "temp_min") if col not in df.columns]
    if missing:
        raise DataValidationError(f"Missing required weather columns: {missing}")

    fields = ["date", "temp_max", "temp_min", "precipitation_mm", "et0_mm", "temp_mean"]
    df = df[[col for col in fields if col in df.columns]].copy()
    try:
        df["date"] = pd.to_datetime(df["date"]).dt.date
    except ValueError as e:
        raise handle_exception(
            e, ErrorContext(component="weather_file", operation="parse_dates")
        ) from e
    df = df.sort_values("date")

    for col in ("precipitation_mm", "et0_mm"):
        if col in df.columns:
            df[col] = df[col].fillna(0.0)

    try:
        return [DailyWeatherRecord(**row) for row in df.to_dict(orient="records")]
    except ValidationError as e:
        raise DataValidationError(f"Malformed weather data: {e}") from e


def load_weather_csv(csv_path: Union[str, Path]) -> List[DailyWeatherRecord]:
    """Load daily weather from a CSV file"""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise DataSourceError(f"Weather file not found: {csv_path}")
    try:
        df = pd.read_csv(csv_path)
    except ValueError as e:
        raise handle_exception(
            e, ErrorContext(component="weather_file", operation="read_csv")
        ) from e
    return weather_from_dataframe(df)

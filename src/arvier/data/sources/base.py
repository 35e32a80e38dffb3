"""
Abstract base class for weather sources.
Provides a unified interface for daily weather retrieval.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
import logging

from arvier.data.contracts import DailyWeatherRecord


@dataclass
class WeatherSeries:
    """Daily weather for one location"""
    records: List[DailyWeatherRecord] = field(default_factory=list)
    elevation_m: Optional[float] = None  # elevation of the weather grid cell
    source: str = "unknown"

    def __len__(self) -> int:
        return len(self.records)

    @property
    def start_date(self) -> Optional[date]:
        return self.records[0].date if self.records else None

    @property
    def end_date(self) -> Optional[date]:
        return self.records[-1].date if self.records else None


class WeatherSource(ABC):
    """
    Abstract base class for all weather sources.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"arvier.data.{name}")

    @abstractmethod
    def fetch_range(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: date
    ) -> WeatherSeries:
        """
        Fetch daily weather for a location and inclusive date range.
        Must be implemented by concrete sources.
        """
        pass

    def validate_request(self, start_date: date, end_date: date) -> List[str]:
        """Validate a fetch request. Returns list of errors or empty list if valid."""
        errors = []

        if start_date > end_date:
            errors.append("start_date must be <= end_date")

        max_days = self._get_max_date_range_days()
        days_diff = (end_date - start_date).days
        if days_diff > max_days:
            errors.append(f"Date range exceeds maximum of {max_days} days")

        return errors

    def _get_max_date_range_days(self) -> int:
        """Maximum date range allowed by this source"""
        return 366

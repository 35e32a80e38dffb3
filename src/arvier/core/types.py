"""
Type definitions and type aliases for the Arvier system.
"""
from datetime import date
from enum import Enum
from typing import Dict

from typing_extensions import TypeAlias


# Type aliases for clarity
CropName: TypeAlias = str
PhaseName: TypeAlias = str
Date: TypeAlias = date
DegreeDays: TypeAlias = float  # °C·day
TemperatureC: TypeAlias = float
Millimetres: TypeAlias = float
CropCoefficient: TypeAlias = float  # dimensionless

# Date-keyed cumulative irrigation amounts
IrrigationLedger: TypeAlias = Dict[Date, Millimetres]


class IrrigationUrgency(str, Enum):
    """How soon the field needs water"""
    OK = "ok"
    WATCH = "watch"
    SOON = "soon"
    NOW = "now"


class SoilMoistureLevel(str, Enum):
    """Qualitative soil moisture bands for display"""
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"
    CRITICAL = "critical"

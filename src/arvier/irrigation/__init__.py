"""Irrigation bookkeeping and advice."""
from arvier.irrigation.ledger import build_irrigation_ledger
from arvier.irrigation.advice import (
    IrrigationAdvice,
    assess_irrigation_need,
    soil_moisture_status,
)

__all__ = [
    "build_irrigation_ledger",
    "IrrigationAdvice",
    "assess_irrigation_need",
    "soil_moisture_status",
]

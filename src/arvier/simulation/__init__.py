"""Season simulation driver."""
from arvier.simulation.engine import (
    DailyCalculation,
    SimulationSummary,
    SimulationResult,
    round_half_up,
    run_simulation,
)

__all__ = [
    "DailyCalculation",
    "SimulationSummary",
    "SimulationResult",
    "round_half_up",
    "run_simulation",
]

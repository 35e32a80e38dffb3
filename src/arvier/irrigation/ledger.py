"""Date-keyed aggregation of irrigation events."""
import logging
from collections import defaultdict
from typing import Iterable, Optional

from arvier.core.types import IrrigationLedger
from arvier.data.contracts import IrrigationEvent

logger = logging.getLogger(__name__)


def build_irrigation_ledger(events: Optional[Iterable[IrrigationEvent]]) -> IrrigationLedger:
    """
    Sum irrigation amounts per calendar day.

    Input order does not matter. Amounts are summed as given: a
    non-positive entry is logged but still reduces that day's total.
    """
    ledger = defaultdict(float)

    for event in events or ():
        if event.amount_mm <= 0:
            logger.warning(
                f"Non-positive irrigation amount {event.amount_mm} mm on {event.date}"
            )
        ledger[event.date] += event.amount_mm

    return dict(ledger)

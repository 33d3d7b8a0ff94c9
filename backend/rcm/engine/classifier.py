"""
Utilization classification.
"""

import enum
from decimal import Decimal
from typing import Union


class UtilizationStatus(str, enum.Enum):
    """Ordinal utilization bands, lowest first."""
    AVAILABLE = "AVAILABLE"
    UNDERUTILIZED = "UNDERUTILIZED"
    AVERAGE = "AVERAGE"
    OPTIMAL = "OPTIMAL"
    OVERUTILIZED = "OVERUTILIZED"


# Inclusive lower bounds, checked from the highest band down
_THRESHOLDS = (
    (Decimal("100"), UtilizationStatus.OVERUTILIZED),
    (Decimal("80"), UtilizationStatus.OPTIMAL),
    (Decimal("60"), UtilizationStatus.AVERAGE),
    (Decimal("40"), UtilizationStatus.UNDERUTILIZED),
)


def classify(utilization_percent: Union[Decimal, int, float]) -> UtilizationStatus:
    """Map a utilization percentage to its band. Anything below 40, negatives included, is AVAILABLE."""
    for lower_bound, status in _THRESHOLDS:
        if utilization_percent >= lower_bound:
            return status
    return UtilizationStatus.AVAILABLE

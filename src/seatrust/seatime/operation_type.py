"""
Operation type classification for vessel types.
"""

from enum import Enum
from typing import Optional


class OperationType(str, Enum):
    """Where a vessel operates."""

    SEA = "sea"
    RIVER = "river"


# Closed set of vessel type codes that operate on inland waterways
RIVER_VESSEL_TYPES = frozenset({
    "river_vessel",
    "river_barge",
    "river_tanker",
    "river_pusher",
    "river_passenger",
    "river_cargo",
    "river_ferry",
    "inland_waterway",
})


def classify_operation_type(vessel_type: Optional[str]) -> OperationType:
    """
    Map a vessel type to its operation type.

    Unknown and missing vessel types count as sea operation.
    """
    if vessel_type and vessel_type.strip().lower() in RIVER_VESSEL_TYPES:
        return OperationType.RIVER
    return OperationType.SEA

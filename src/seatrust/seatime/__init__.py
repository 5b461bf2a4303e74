"""
Sea-time intelligence.

Reconstructs a candidate's verified sea service from overlapping
contract records:
- Operation type classification (sea / river)
- Overlap correction with an independent union cross-check
- Database-backed ledger rebuild and summary
"""

from seatrust.seatime.operation_type import (
    OperationType,
    RIVER_VESSEL_TYPES,
    classify_operation_type,
)
from seatrust.seatime.overlap import (
    ContractInterval,
    CorrectedEntry,
    OverlapCorrector,
    span_days,
)
from seatrust.seatime.calculator import SeaTimeCalculator, build_summary

__all__ = [
    # Classification
    "OperationType",
    "RIVER_VESSEL_TYPES",
    "classify_operation_type",
    # Overlap correction
    "ContractInterval",
    "CorrectedEntry",
    "OverlapCorrector",
    "span_days",
    # Ledger
    "SeaTimeCalculator",
    "build_summary",
]

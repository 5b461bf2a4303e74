"""
Overlap correction for contract intervals.

Contracts of one candidate may overlap (duplicated imports, handover
periods, data entry errors). Sea time must count every calendar day at
most once, while still attributing each day to exactly one contract so
that per-rank and per-vessel breakdowns stay meaningful.

Two independent calculations are provided:
- correct(): single forward sweep that attributes days in chronological
  order. A later contract never reclaims days owned by an earlier one.
- merged_total_days(): plain union of all intervals.

The sum of calculated_days from correct() always equals
merged_total_days() for the same input.

Day counts are inclusive: a contract from 1 Jan to 1 Jan is one day.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, Optional
from uuid import UUID

from seatrust.seatime.operation_type import OperationType, classify_operation_type

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def span_days(start: date, end: date) -> int:
    """Inclusive number of days from start to end."""
    return (end - start).days + 1


@dataclass(frozen=True)
class ContractInterval:
    """The slice of a contract the corrector works on."""

    start_date: Optional[date]
    end_date: Optional[date] = None
    vessel_type: Optional[str] = None
    rank_code: Optional[str] = None
    vessel_id: Optional[UUID] = None
    contract_id: Optional[UUID] = None

    @classmethod
    def from_contract(cls, contract: Any) -> "ContractInterval":
        """Build from any object with contract attributes (ORM row, test double)."""
        return cls(
            start_date=contract.start_date,
            end_date=contract.end_date,
            vessel_type=getattr(contract, "vessel_type", None),
            rank_code=getattr(contract, "rank_code", None),
            vessel_id=getattr(contract, "vessel_id", None),
            contract_id=getattr(contract, "id", None),
        )


@dataclass
class CorrectedEntry:
    """Attributable days for one valid contract."""

    contract_id: Optional[UUID]
    vessel_id: Optional[UUID]
    rank_code: Optional[str]
    vessel_type: Optional[str]
    operation_type: OperationType
    original_start: date
    original_end: Optional[date]  # None for open contracts
    effective_start: date
    effective_end: date
    raw_days: int
    calculated_days: int
    overlap_deducted: int

    @property
    def fully_overlapped(self) -> bool:
        return self.calculated_days == 0 and self.raw_days > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "contract_id": str(self.contract_id) if self.contract_id else None,
            "vessel_id": str(self.vessel_id) if self.vessel_id else None,
            "rank_code": self.rank_code,
            "vessel_type": self.vessel_type,
            "operation_type": self.operation_type.value,
            "original_start": self.original_start.isoformat(),
            "original_end": self.original_end.isoformat() if self.original_end else None,
            "effective_start": self.effective_start.isoformat(),
            "effective_end": self.effective_end.isoformat(),
            "raw_days": self.raw_days,
            "calculated_days": self.calculated_days,
            "overlap_deducted": self.overlap_deducted,
        }


class OverlapCorrector:
    """
    Remove double-counted days from a candidate's contract intervals.

    Stateless apart from the reference date used to close open contracts.
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _resolve(self, interval: ContractInterval) -> Optional[tuple[date, date]]:
        """Return (start, end) for a valid interval, None if it must be skipped."""
        start = interval.start_date
        if start is None:
            return None
        end = interval.end_date or self.today
        if start > end or span_days(start, end) <= 0:
            return None
        return start, end

    @staticmethod
    def _ordered(intervals: Iterable[ContractInterval]) -> list[ContractInterval]:
        # Stable: equal start dates keep input order
        dated = [i for i in intervals if i.start_date is not None]
        return sorted(dated, key=lambda i: i.start_date)

    def correct(self, intervals: Iterable[ContractInterval]) -> list[CorrectedEntry]:
        """
        Attribute each calendar day to the earliest-starting contract covering it.

        Args:
            intervals: Contract intervals, ideally ascending by start date

        Returns:
            One corrected entry per valid interval, in chronological order
        """
        entries: list[CorrectedEntry] = []
        covered_up_to: Optional[date] = None

        for interval in self._ordered(intervals):
            resolved = self._resolve(interval)
            if resolved is None:
                logger.debug(
                    f"Skipping invalid interval {interval.contract_id}: "
                    f"{interval.start_date} -> {interval.end_date}"
                )
                continue
            start, end = resolved
            raw_days = span_days(start, end)

            if covered_up_to is not None and start <= covered_up_to:
                effective_start = covered_up_to + ONE_DAY
                if effective_start > end:
                    # Fully subsumed by earlier coverage
                    calculated_days = 0
                    effective_start = start
                    effective_end = start
                else:
                    calculated_days = span_days(effective_start, end)
                    effective_end = end
                overlap_deducted = raw_days - calculated_days
            else:
                effective_start = start
                effective_end = end
                calculated_days = raw_days
                overlap_deducted = 0

            covered_up_to = end if covered_up_to is None else max(covered_up_to, end)

            entries.append(CorrectedEntry(
                contract_id=interval.contract_id,
                vessel_id=interval.vessel_id,
                rank_code=interval.rank_code,
                vessel_type=interval.vessel_type,
                operation_type=classify_operation_type(interval.vessel_type),
                original_start=start,
                original_end=interval.end_date,
                effective_start=effective_start,
                effective_end=effective_end,
                raw_days=raw_days,
                calculated_days=calculated_days,
                overlap_deducted=overlap_deducted,
            ))

        return entries

    def merged_total_days(self, intervals: Iterable[ContractInterval]) -> int:
        """
        Day count of the union of all valid intervals.

        Overlapping and touching ranges are merged before summing.
        """
        ranges = sorted(
            r for r in (self._resolve(i) for i in intervals) if r is not None
        )
        if not ranges:
            return 0

        total = 0
        current_start, current_end = ranges[0]
        for start, end in ranges[1:]:
            if start <= current_end + ONE_DAY:
                current_end = max(current_end, end)
            else:
                total += span_days(current_start, current_end)
                current_start, current_end = start, end
        total += span_days(current_start, current_end)

        return total

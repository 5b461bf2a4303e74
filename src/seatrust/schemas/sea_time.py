"""
Sea-time summary schema.

Stored under the "sea_time" key of a candidate's trust profile detail
document. Day counts are inclusive of both contract start and end dates.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _zero_operation_days() -> dict[str, int]:
    return {"sea": 0, "river": 0}


def _largest_first(values: dict) -> dict:
    # Ties by key so the order does not depend on storage
    return dict(sorted(values.items(), key=lambda item: (-item[1], item[0])))


class SeaTimeSummary(BaseModel):
    """Rolled-up sea-time ledger for one candidate."""

    model_config = ConfigDict(extra="ignore")

    total_contracts: int = 0
    total_raw_days: int = 0
    total_sea_days: int = 0  # Attributable days after overlap correction
    merged_total_days: int = 0  # Independent union total (cross-check)
    overlap_days: int = 0

    rank_days: dict[str, int] = Field(default_factory=dict)
    rank_experience_pct: dict[str, float] = Field(default_factory=dict)
    vessel_type_days: dict[str, int] = Field(default_factory=dict)
    vessel_experience_pct: dict[str, float] = Field(default_factory=dict)
    operation_type_days: dict[str, int] = Field(default_factory=_zero_operation_days)

    sea_days: int = 0
    river_days: int = 0

    batch_id: Optional[str] = None
    computed_at: Optional[datetime] = None

    @field_validator(
        "rank_days", "rank_experience_pct", "vessel_type_days", "vessel_experience_pct"
    )
    @classmethod
    def order_largest_first(cls, v: dict) -> dict:
        """Breakdowns are ordered by days, largest first.

        Re-applied on every load because JSONB does not keep key order.
        """
        return _largest_first(v)

    @property
    def is_consistent(self) -> bool:
        """Attributable days must equal the union of all raw intervals."""
        return self.total_sea_days == self.merged_total_days

    @classmethod
    def empty(cls, computed_at: Optional[datetime] = None) -> "SeaTimeSummary":
        return cls(computed_at=computed_at)

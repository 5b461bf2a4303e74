"""
Sea-time ledger ORM model.

One row per contract per computation batch. A candidate's rows are always
replaced as a whole; they are never updated in place.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from seatrust.models.base import TrustBase as Base


class SeaTimeLog(Base):
    """Corrected sea-time entry for one contract."""

    __tablename__ = "sea_time_logs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    candidate_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("pool_candidates.id"), nullable=False
    )
    contract_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("candidate_contracts.id")
    )
    vessel_id: Mapped[Optional[UUID]] = mapped_column(Uuid)
    rank_code: Mapped[Optional[str]] = mapped_column(String(32))

    original_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    original_end_date: Mapped[Optional[date]] = mapped_column(Date)
    effective_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    effective_end_date: Mapped[date] = mapped_column(Date, nullable=False)

    vessel_type: Mapped[Optional[str]] = mapped_column(String(64))
    operation_type: Mapped[str] = mapped_column(String(16), nullable=False)

    raw_days: Mapped[int] = mapped_column(Integer, nullable=False)
    calculated_days: Mapped[int] = mapped_column(Integer, nullable=False)
    overlap_deducted_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    computation_batch_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    computed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_sea_time_logs_candidate", "candidate_id"),
        Index("idx_sea_time_logs_batch", "computation_batch_id"),
    )

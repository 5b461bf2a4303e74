"""
Trust profile and trust event ORM models.

The trust profile is the per-candidate aggregate of derived indicators.
Sub-computations keep their results in namespaced keys of detail_json;
access goes through the typed schemas in seatrust.schemas so that no
caller touches the raw document.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from seatrust.models.base import JSONDocument, TrustBase as Base
from seatrust.schemas import CompliancePack, RankStcwDetail, SeaTimeSummary

SEA_TIME_KEY = "sea_time"
COMPLIANCE_PACK_KEY = "compliance_pack"
RANK_STCW_KEY = "rank_stcw"


class CandidateTrustProfile(Base):
    """
    Trust profile for one candidate.

    Created lazily on first computation, updated in place afterwards.
    """

    __tablename__ = "candidate_trust_profiles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    candidate_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("pool_candidates.id"), nullable=False, unique=True
    )

    # Scalar risk indicators (written by upstream analyzers)
    consistency_score: Mapped[Optional[float]] = mapped_column(Float)  # 0-100
    confidence_level: Mapped[str] = mapped_column(String(16), default="low")
    stability_index: Mapped[Optional[float]] = mapped_column(Float)
    risk_score: Mapped[Optional[float]] = mapped_column(Float)  # 0-1
    risk_tier: Mapped[Optional[str]] = mapped_column(String(16))
    rank_anomaly_flag: Mapped[bool] = mapped_column(Boolean, default=False)

    detail_json: Mapped[dict] = mapped_column(JSONDocument, default=dict)

    # Mirrored from the sub-records for the pending scans
    sea_time_computed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    compliance_score: Mapped[Optional[int]] = mapped_column(Integer)
    compliance_status: Mapped[Optional[str]] = mapped_column(String(32))
    compliance_computed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    computed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        Index("idx_trust_profiles_compliance_status", "compliance_status"),
        Index("idx_trust_profiles_sea_time_computed", "sea_time_computed_at"),
    )

    def _read(self, key: str) -> Optional[dict[str, Any]]:
        return (self.detail_json or {}).get(key)

    def _merge(self, key: str, value: BaseModel) -> None:
        # Reassign so the JSON column is flagged dirty
        self.detail_json = {
            **(self.detail_json or {}),
            key: value.model_dump(mode="json"),
        }

    @property
    def sea_time(self) -> Optional[SeaTimeSummary]:
        raw = self._read(SEA_TIME_KEY)
        return SeaTimeSummary.model_validate(raw) if raw is not None else None

    @property
    def compliance_pack(self) -> Optional[CompliancePack]:
        raw = self._read(COMPLIANCE_PACK_KEY)
        return CompliancePack.model_validate(raw) if raw is not None else None

    @property
    def rank_stcw(self) -> Optional[RankStcwDetail]:
        raw = self._read(RANK_STCW_KEY)
        return RankStcwDetail.model_validate(raw) if raw is not None else None

    def store_sea_time(self, summary: SeaTimeSummary) -> None:
        self._merge(SEA_TIME_KEY, summary)
        self.sea_time_computed_at = summary.computed_at or datetime.utcnow()

    def store_compliance_pack(self, pack: CompliancePack) -> None:
        """Store the pack and mirror its headline fields."""
        self._merge(COMPLIANCE_PACK_KEY, pack)
        self.compliance_score = pack.score
        self.compliance_status = pack.status
        self.compliance_computed_at = pack.computed_at


class TrustEventType(str, Enum):
    """Audit event types emitted by the engine."""

    SEA_TIME_COMPUTED = "sea_time_computed"
    COMPLIANCE_COMPUTED = "compliance_computed"


class TrustEvent(Base):
    """
    Append-only audit record.

    Written once, never updated or deleted by the engine.
    """

    __tablename__ = "trust_events"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    candidate_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("pool_candidates.id"), nullable=False
    )
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    payload_json: Mapped[dict] = mapped_column(JSONDocument, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    __table_args__ = (
        Index("idx_trust_events_candidate_type", "candidate_id", "event_type"),
    )

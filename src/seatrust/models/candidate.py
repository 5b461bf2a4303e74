"""
Candidate and contract ORM models.

These records are owned by upstream subsystems (candidate pool, contract
import, vessel tracking). The trust engine only reads them.
"""

import enum
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from seatrust.models.base import JSONDocument, TrustBase as Base


class Candidate(Base):
    """A crew member in the candidate pool."""

    __tablename__ = "pool_candidates"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    country_code: Mapped[Optional[str]] = mapped_column(String(2))
    seafarer: Mapped[bool] = mapped_column(Boolean, default=True)
    status: Mapped[str] = mapped_column(String(32), default="in_pool")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    contracts: Mapped[list["CandidateContract"]] = relationship(
        "CandidateContract", back_populates="candidate"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CandidateContract(Base):
    """
    One employment period aboard a vessel.

    Immutable source-of-truth record. end_date NULL means the contract is
    still open.
    """

    __tablename__ = "candidate_contracts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    candidate_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("pool_candidates.id"), nullable=False
    )

    vessel_id: Mapped[Optional[UUID]] = mapped_column(Uuid)
    vessel_name: Mapped[Optional[str]] = mapped_column(String(255))
    vessel_type: Mapped[Optional[str]] = mapped_column(String(64))
    company_name: Mapped[Optional[str]] = mapped_column(String(255))
    rank_code: Mapped[Optional[str]] = mapped_column(String(32))

    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    candidate: Mapped["Candidate"] = relationship("Candidate", back_populates="contracts")
    verifications: Mapped[list["TrackingVerification"]] = relationship(
        "TrackingVerification", back_populates="contract"
    )

    __table_args__ = (
        Index("idx_contracts_candidate_start", "candidate_id", "start_date"),
    )


class VerificationStatus(str, enum.Enum):
    """Outcome of a vessel-tracking check for one contract."""

    PENDING = "pending"
    VERIFIED = "verified"
    ANOMALY = "anomaly"
    FAILED = "failed"
    NOT_APPLICABLE = "not_applicable"


class TrackingVerification(Base):
    """
    Vessel-tracking verification of a contract.

    Append-only: a re-check inserts a new row, the latest one counts.
    A check that scored the contract carries a confidence whatever its
    status; a low score is stored as failed with its confidence, an
    errored run as failed without one.
    """

    __tablename__ = "contract_tracking_verifications"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    contract_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("candidate_contracts.id"), nullable=False
    )
    status: Mapped[VerificationStatus] = mapped_column(
        Enum(
            VerificationStatus,
            name="verification_status_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    confidence_score: Mapped[Optional[float]] = mapped_column(Float)  # 0-1
    provider: Mapped[Optional[str]] = mapped_column(String(64))
    anomalies: Mapped[list] = mapped_column(JSONDocument, default=list)
    failure_reason: Mapped[Optional[str]] = mapped_column(Text)
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    contract: Mapped["CandidateContract"] = relationship(
        "CandidateContract", back_populates="verifications"
    )

    __table_args__ = (
        Index("idx_tracking_contract_created", "contract_id", "created_at"),
    )

    @property
    def is_completed(self) -> bool:
        return self.confidence_score is not None

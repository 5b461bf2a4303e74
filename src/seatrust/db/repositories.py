"""
Database repositories for the trust engine.

Provides async data access for candidates, contracts, tracking
verifications, the sea-time ledger, trust profiles and trust events.
Repositories flush but never commit; the calling service owns the
transaction.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from seatrust.models import (
    Candidate,
    CandidateContract,
    CandidateTrustProfile,
    SeaTimeLog,
    TrackingVerification,
    TrustEvent,
    TrustEventType,
)

logger = logging.getLogger(__name__)


class CandidateRepository:
    """Repository for Candidate lookups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, candidate_id: UUID) -> Optional[Candidate]:
        """Get candidate by ID."""
        result = await self.session.execute(
            select(Candidate).where(Candidate.id == candidate_id)
        )
        return result.scalar_one_or_none()


class ContractRepository:
    """Repository for CandidateContract reads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_with_start_date(self, candidate_id: UUID) -> list[CandidateContract]:
        """
        Contracts with a known start date, ascending.

        Ties on start date keep creation order so the same contract always
        absorbs the shared days.
        """
        result = await self.session.execute(
            select(CandidateContract)
            .where(
                CandidateContract.candidate_id == candidate_id,
                CandidateContract.start_date.is_not(None),
            )
            .order_by(
                CandidateContract.start_date,
                CandidateContract.created_at,
                CandidateContract.id,
            )
        )
        return list(result.scalars().all())

    async def list_candidate_ids_with_contracts(self, limit: Optional[int] = None) -> list[UUID]:
        """Distinct candidates that have at least one dated contract, by id."""
        stmt = (
            select(CandidateContract.candidate_id)
            .where(CandidateContract.start_date.is_not(None))
            .distinct()
            .order_by(CandidateContract.candidate_id)
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class TrackingVerificationRepository:
    """Repository for vessel-tracking verification reads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def latest_confidences(self, candidate_id: UUID) -> list[float]:
        """
        Confidence of the latest verification per contract.

        Contracts whose latest check has no confidence (pending, errored,
        not applicable) contribute nothing.
        """
        result = await self.session.execute(
            select(TrackingVerification)
            .join(CandidateContract, TrackingVerification.contract_id == CandidateContract.id)
            .where(CandidateContract.candidate_id == candidate_id)
            .order_by(TrackingVerification.contract_id, TrackingVerification.created_at)
        )

        latest: dict[UUID, TrackingVerification] = {}
        for verification in result.scalars().all():
            latest[verification.contract_id] = verification

        return [float(v.confidence_score) for v in latest.values() if v.is_completed]


class SeaTimeLogRepository:
    """Repository for the sea-time ledger."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete_for_candidate(self, candidate_id: UUID) -> None:
        await self.session.execute(
            delete(SeaTimeLog).where(SeaTimeLog.candidate_id == candidate_id)
        )

    async def replace_for_candidate(
        self,
        candidate_id: UUID,
        logs: Iterable[SeaTimeLog],
    ) -> int:
        """Delete every ledger row for the candidate, then insert the new batch."""
        await self.delete_for_candidate(candidate_id)
        new_logs = list(logs)
        self.session.add_all(new_logs)
        await self.session.flush()
        return len(new_logs)

    async def list_for_candidate(self, candidate_id: UUID) -> list[SeaTimeLog]:
        result = await self.session.execute(
            select(SeaTimeLog)
            .where(SeaTimeLog.candidate_id == candidate_id)
            .order_by(SeaTimeLog.original_start_date, SeaTimeLog.effective_start_date)
        )
        return list(result.scalars().all())


class TrustProfileRepository:
    """Repository for CandidateTrustProfile."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_candidate(self, candidate_id: UUID) -> Optional[CandidateTrustProfile]:
        result = await self.session.execute(
            select(CandidateTrustProfile).where(
                CandidateTrustProfile.candidate_id == candidate_id
            )
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, candidate_id: UUID) -> CandidateTrustProfile:
        """Get the profile, creating it with neutral defaults if absent."""
        profile = await self.get_by_candidate(candidate_id)
        if profile is not None:
            return profile

        profile = CandidateTrustProfile(
            candidate_id=candidate_id,
            consistency_score=None,
            confidence_level="low",
            rank_anomaly_flag=False,
            detail_json={},
            computed_at=datetime.utcnow(),
        )
        self.session.add(profile)
        await self.session.flush()
        logger.debug(f"Created trust profile for candidate {candidate_id}")
        return profile

    async def list_candidate_ids_pending_sea_time(self, limit: Optional[int] = None) -> list[UUID]:
        """
        Candidates with a dated contract and no sea-time summary, by id.

        A candidate without a profile is pending too.
        """
        stmt = (
            select(CandidateContract.candidate_id)
            .outerjoin(
                CandidateTrustProfile,
                CandidateTrustProfile.candidate_id == CandidateContract.candidate_id,
            )
            .where(
                CandidateContract.start_date.is_not(None),
                CandidateTrustProfile.sea_time_computed_at.is_(None),
            )
            .distinct()
            .order_by(CandidateContract.candidate_id)
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_candidate_ids_with_baseline(
        self,
        only_pending: bool = True,
        limit: Optional[int] = None,
    ) -> list[UUID]:
        """Candidates with a consistency baseline, optionally without a compliance pack."""
        stmt = select(CandidateTrustProfile.candidate_id).where(
            CandidateTrustProfile.consistency_score.is_not(None)
        )
        if only_pending:
            stmt = stmt.where(CandidateTrustProfile.compliance_computed_at.is_(None))
        stmt = stmt.order_by(CandidateTrustProfile.created_at, CandidateTrustProfile.candidate_id)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class TrustEventRepository:
    """Repository for the append-only trust event log."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(
        self,
        candidate_id: UUID,
        event_type: TrustEventType,
        payload: dict[str, Any],
    ) -> TrustEvent:
        event = TrustEvent(
            candidate_id=candidate_id,
            event_type=TrustEventType(event_type).value,
            payload_json=payload,
            created_at=datetime.utcnow(),
        )
        self.session.add(event)
        await self.session.flush()
        return event

    async def list_for_candidate(
        self,
        candidate_id: UUID,
        event_type: Optional[TrustEventType] = None,
    ) -> list[TrustEvent]:
        stmt = select(TrustEvent).where(TrustEvent.candidate_id == candidate_id)
        if event_type:
            stmt = stmt.where(TrustEvent.event_type == TrustEventType(event_type).value)
        result = await self.session.execute(stmt.order_by(TrustEvent.id))
        return list(result.scalars().all())

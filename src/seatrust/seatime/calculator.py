"""
Sea-time ledger computation.

Rebuilds a candidate's sea-time ledger from scratch:
1. Load all dated contracts, ascending
2. Run overlap correction and the independent union check
3. Replace every prior ledger row with a new batch
4. Roll up totals, per-rank and per-vessel-type experience
5. Store the summary in the trust profile and emit an audit event

Everything happens in one transaction per candidate, so readers never
see a half-replaced ledger.
"""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from seatrust.config import FeatureFlags
from seatrust.db.repositories import (
    CandidateRepository,
    ContractRepository,
    SeaTimeLogRepository,
    TrustEventRepository,
    TrustProfileRepository,
)
from seatrust.models import SeaTimeLog, TrustEventType
from seatrust.outcome import Failed, Ok, Outcome, Unavailable, UnavailableReason
from seatrust.schemas import SeaTimeSummary
from seatrust.seatime.operation_type import OperationType
from seatrust.seatime.overlap import ContractInterval, CorrectedEntry, OverlapCorrector

logger = logging.getLogger(__name__)

UNKNOWN_BUCKET = "unknown"


def _percentages(days_by_key: dict[str, int], total: int) -> dict[str, float]:
    """Share of total per key, 1 decimal."""
    if total <= 0:
        return {}
    return {key: round(days / total * 100, 1) for key, days in days_by_key.items()}


def build_summary(
    corrected: list[CorrectedEntry],
    merged_total: int,
    batch_id: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> SeaTimeSummary:
    """Aggregate corrected entries into a sea-time summary."""
    total_raw = 0
    total_calculated = 0
    total_overlap = 0
    rank_days: dict[str, int] = defaultdict(int)
    vessel_type_days: dict[str, int] = defaultdict(int)
    operation_days = {OperationType.SEA.value: 0, OperationType.RIVER.value: 0}

    for entry in corrected:
        total_raw += entry.raw_days
        total_calculated += entry.calculated_days
        total_overlap += entry.overlap_deducted

        rank_days[entry.rank_code or UNKNOWN_BUCKET] += entry.calculated_days
        vessel_type_days[entry.vessel_type or UNKNOWN_BUCKET] += entry.calculated_days
        operation_days[entry.operation_type.value] += entry.calculated_days

    return SeaTimeSummary(
        total_contracts=len(corrected),
        total_raw_days=total_raw,
        total_sea_days=total_calculated,
        merged_total_days=merged_total,
        overlap_days=total_overlap,
        rank_days=dict(rank_days),
        rank_experience_pct=_percentages(rank_days, total_calculated),
        vessel_type_days=dict(vessel_type_days),
        vessel_experience_pct=_percentages(vessel_type_days, total_calculated),
        operation_type_days=operation_days,
        sea_days=operation_days[OperationType.SEA.value],
        river_days=operation_days[OperationType.RIVER.value],
        batch_id=batch_id,
        computed_at=computed_at,
    )


class SeaTimeCalculator:
    """
    Database-backed sea-time computation for one candidate at a time.

    Never raises: every outcome, including unexpected errors, is returned
    as an Outcome so batch jobs can keep going.
    """

    def __init__(
        self,
        session: AsyncSession,
        flags: FeatureFlags,
        today: Optional[date] = None,
    ):
        self.session = session
        self.flags = flags
        self.corrector = OverlapCorrector(today=today)
        self.candidates = CandidateRepository(session)
        self.contracts = ContractRepository(session)
        self.logs = SeaTimeLogRepository(session)
        self.profiles = TrustProfileRepository(session)
        self.events = TrustEventRepository(session)

    async def compute(self, candidate_id: UUID) -> Outcome[SeaTimeSummary]:
        """
        Rebuild the sea-time ledger and summary for a candidate.

        Returns:
            Ok(summary), Unavailable(reason) or Failed(error)
        """
        if not self.flags.sea_time_enabled:
            return Unavailable(UnavailableReason.FEATURE_DISABLED)

        try:
            outcome = await self._compute(candidate_id)
            await self.session.commit()
            return outcome
        except Exception as e:
            await self.session.rollback()
            logger.warning(f"Sea-time computation failed for candidate {candidate_id}: {e}")
            return Failed(e)

    async def _compute(self, candidate_id: UUID) -> Outcome[SeaTimeSummary]:
        candidate = await self.candidates.get_by_id(candidate_id)
        if candidate is None:
            return Unavailable(UnavailableReason.CANDIDATE_NOT_FOUND)

        contracts = await self.contracts.list_with_start_date(candidate_id)
        now = datetime.utcnow()

        if not contracts:
            await self.logs.delete_for_candidate(candidate_id)
            summary = SeaTimeSummary.empty(computed_at=now)
            await self._store_summary(candidate_id, summary)
            logger.debug(f"No dated contracts for candidate {candidate_id}")
            return Ok(summary)

        intervals = [ContractInterval.from_contract(c) for c in contracts]
        corrected = self.corrector.correct(intervals)
        merged_total = self.corrector.merged_total_days(intervals)

        batch_id = uuid4()
        await self.logs.replace_for_candidate(
            candidate_id,
            (self._to_log(candidate_id, entry, batch_id, now) for entry in corrected),
        )

        summary = build_summary(corrected, merged_total, batch_id=str(batch_id), computed_at=now)
        if not summary.is_consistent:
            logger.warning(
                f"Sea-time cross-check mismatch for candidate {candidate_id}: "
                f"attributed={summary.total_sea_days} union={summary.merged_total_days}"
            )

        await self._store_summary(candidate_id, summary)

        await self.events.append(
            candidate_id,
            TrustEventType.SEA_TIME_COMPUTED,
            {
                "batch_id": str(batch_id),
                "total_sea_days": summary.total_sea_days,
                "total_contracts": summary.total_contracts,
                "overlap_days": summary.overlap_days,
                "merged_total_days": summary.merged_total_days,
            },
        )

        logger.debug(
            f"Sea time for candidate {candidate_id}: {summary.total_sea_days} days "
            f"over {summary.total_contracts} contracts ({summary.overlap_days} overlap)"
        )
        return Ok(summary)

    async def _store_summary(self, candidate_id: UUID, summary: SeaTimeSummary) -> None:
        profile = await self.profiles.get_or_create(candidate_id)
        profile.store_sea_time(summary)
        await self.session.flush()

    @staticmethod
    def _to_log(
        candidate_id: UUID,
        entry: CorrectedEntry,
        batch_id: UUID,
        computed_at: datetime,
    ) -> SeaTimeLog:
        return SeaTimeLog(
            candidate_id=candidate_id,
            contract_id=entry.contract_id,
            vessel_id=entry.vessel_id,
            rank_code=entry.rank_code,
            original_start_date=entry.original_start,
            original_end_date=entry.original_end,
            effective_start_date=entry.effective_start,
            effective_end_date=entry.effective_end,
            vessel_type=entry.vessel_type,
            operation_type=entry.operation_type.value,
            raw_days=entry.raw_days,
            calculated_days=entry.calculated_days,
            overlap_deducted_days=entry.overlap_deducted,
            computation_batch_id=batch_id,
            computed_at=computed_at,
        )

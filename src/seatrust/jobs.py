"""
Batch jobs for scheduled recomputation.

Find candidates whose sea time or compliance pack has not been computed
yet (or every candidate with force=True) and process each one in its own
session. A failure for one candidate is counted and logged, never raised.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from seatrust.config import FeatureFlags
from seatrust.db.repositories import ContractRepository, TrustProfileRepository
from seatrust.engine import TrustEngine
from seatrust.outcome import Failed, Ok, Unavailable
from seatrust.seatime import SeaTimeCalculator

logger = logging.getLogger(__name__)


@dataclass
class BatchJobStats:
    """Statistics from a batch run."""

    job_type: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    candidates_found: int = 0
    computed: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False
    aborted: Optional[str] = None
    candidate_ids: list[UUID] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.computed + self.skipped + self.failed

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def record(self, candidate_id: UUID, outcome) -> None:
        if isinstance(outcome, Ok):
            self.computed += 1
        elif isinstance(outcome, Unavailable):
            self.skipped += 1
        elif isinstance(outcome, Failed):
            self.failed += 1
            self.errors.append(f"Candidate {candidate_id}: {outcome.message}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "job_type": self.job_type,
            "dry_run": self.dry_run,
            "aborted": self.aborted,
            "candidates_found": self.candidates_found,
            "computed": self.computed,
            "skipped": self.skipped,
            "failed": self.failed,
            "duration_seconds": self.duration_seconds,
            "errors": self.errors[:10],
        }


def _gate(
    enabled: bool,
    auto_compute: bool,
    candidate_ids: Optional[list[UUID]],
) -> Optional[str]:
    """Reason to abort a run, None if it may proceed.

    Explicit candidate lists only need the feature toggle; the pending scan
    also needs auto-compute.
    """
    if not enabled:
        return "feature disabled"
    if candidate_ids is None and not auto_compute:
        return "auto-compute disabled"
    return None


def _abort(stats: BatchJobStats, reason: str) -> BatchJobStats:
    stats.aborted = reason
    stats.completed_at = datetime.utcnow()
    logger.info(f"{stats.job_type} batch not run: {reason}")
    return stats


async def find_pending_sea_time_candidates(
    session: AsyncSession,
    force: bool = False,
    limit: Optional[int] = None,
) -> list[UUID]:
    """Candidates with dated contracts and, unless forced, no sea-time summary."""
    if force:
        return await ContractRepository(session).list_candidate_ids_with_contracts(limit)
    return await TrustProfileRepository(session).list_candidate_ids_pending_sea_time(limit)


async def find_pending_compliance_candidates(
    session: AsyncSession,
    force: bool = False,
    limit: Optional[int] = None,
) -> list[UUID]:
    """Candidates with a consistency baseline and, unless forced, no compliance pack."""
    return await TrustProfileRepository(session).list_candidate_ids_with_baseline(
        only_pending=not force, limit=limit
    )


async def run_sea_time_batch(
    session_factory: async_sessionmaker[AsyncSession],
    flags: FeatureFlags,
    candidate_ids: Optional[list[UUID]] = None,
    force: bool = False,
    limit: Optional[int] = None,
    dry_run: bool = False,
    today: Optional[date] = None,
) -> BatchJobStats:
    """
    Recompute sea time for pending (or the given) candidates.

    Args:
        session_factory: Async session factory, one session per candidate
        flags: Feature toggles
        candidate_ids: Explicit candidates; skips the pending lookup
        force: Include candidates that already have a summary
        limit: Maximum candidates to process
        dry_run: Only list the candidates
        today: Reference date for open-ended contracts

    Returns:
        Batch statistics
    """
    stats = BatchJobStats(job_type="sea_time", started_at=datetime.utcnow(), dry_run=dry_run)

    aborted = _gate(flags.sea_time_enabled, flags.sea_time_auto_compute, candidate_ids)
    if aborted:
        return _abort(stats, aborted)

    if candidate_ids is None:
        async with session_factory() as session:
            candidate_ids = await find_pending_sea_time_candidates(session, force, limit)
    stats.candidates_found = len(candidate_ids)
    stats.candidate_ids = list(candidate_ids)

    logger.info(f"Sea-time batch: {stats.candidates_found} candidate(s) to process")

    if not dry_run:
        for candidate_id in candidate_ids:
            async with session_factory() as session:
                outcome = await SeaTimeCalculator(session, flags, today=today).compute(candidate_id)
            stats.record(candidate_id, outcome)

    stats.completed_at = datetime.utcnow()
    logger.info(
        f"Sea-time batch complete: {stats.computed} computed, {stats.skipped} skipped, "
        f"{stats.failed} failed in {stats.duration_seconds:.1f}s"
    )
    return stats


async def run_compliance_batch(
    session_factory: async_sessionmaker[AsyncSession],
    flags: FeatureFlags,
    candidate_ids: Optional[list[UUID]] = None,
    force: bool = False,
    limit: Optional[int] = None,
    dry_run: bool = False,
) -> BatchJobStats:
    """Recompute compliance packs for pending (or the given) candidates."""
    stats = BatchJobStats(job_type="compliance", started_at=datetime.utcnow(), dry_run=dry_run)

    aborted = _gate(flags.compliance_enabled, flags.compliance_auto_compute, candidate_ids)
    if aborted:
        return _abort(stats, aborted)

    if candidate_ids is None:
        async with session_factory() as session:
            candidate_ids = await find_pending_compliance_candidates(session, force, limit)
    stats.candidates_found = len(candidate_ids)
    stats.candidate_ids = list(candidate_ids)

    logger.info(f"Compliance batch: {stats.candidates_found} candidate(s) to process")

    if not dry_run:
        for candidate_id in candidate_ids:
            async with session_factory() as session:
                outcome = await TrustEngine(session, flags).compute(candidate_id)
            stats.record(candidate_id, outcome)

    stats.completed_at = datetime.utcnow()
    logger.info(
        f"Compliance batch complete: {stats.computed} computed, {stats.skipped} skipped, "
        f"{stats.failed} failed in {stats.duration_seconds:.1f}s"
    )
    return stats

"""
Trust engine: compliance pack orchestration.

For one candidate:
1. Check the compliance toggle, the candidate, the trust profile and the
   background consistency baseline
2. Score the five sections (ComplianceScoreCalculator)
3. Resolve status and flags (ComplianceStatusResolver)
4. Derive recommendations (ComplianceRecommendationEngine)
5. Merge the compliance pack into the profile and append an audit event

Any exception is caught here, rolled back and returned as Failed so a
batch over many candidates is never interrupted by one of them.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from seatrust.compliance import (
    ComplianceInputs,
    ComplianceRecommendationEngine,
    ComplianceScoreCalculator,
    ComplianceScoreResult,
    ComplianceStatus,
    ComplianceStatusResolver,
    Recommendation,
    RiskIndicators,
    StatusResult,
)
from seatrust.config import FeatureFlags
from seatrust.db.repositories import (
    CandidateRepository,
    TrackingVerificationRepository,
    TrustEventRepository,
    TrustProfileRepository,
)
from seatrust.models import CandidateTrustProfile, TrustEventType
from seatrust.outcome import Failed, Ok, Outcome, Unavailable, UnavailableReason
from seatrust.schemas import (
    CompliancePack,
    FlagRecord,
    RecommendationRecord,
    SectionBreakdown,
)

logger = logging.getLogger(__name__)


@dataclass
class ComplianceResult:
    """Everything one compliance run produced."""

    candidate_id: UUID
    score: ComplianceScoreResult
    status: StatusResult
    recommendations: list[Recommendation] = field(default_factory=list)
    computed_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def compliance_status(self) -> ComplianceStatus:
        return self.status.status

    def to_pack(self) -> CompliancePack:
        """Snapshot for the trust profile."""
        return CompliancePack(
            score=self.score.score,
            status=self.status.status.value,
            section_scores={
                s.section.value: SectionBreakdown(
                    raw_score=s.raw_score,
                    effective_weight=s.effective_weight,
                    weighted_score=s.weighted_score,
                    available=s.available,
                )
                for s in self.score.sections
            },
            available_sections=self.score.available_count,
            flags=[FlagRecord(**f.to_dict()) for f in self.status.flags],
            recommendations=[RecommendationRecord(**r.to_dict()) for r in self.recommendations],
            computed_at=self.computed_at,
        )

    def audit_payload(self) -> dict[str, Any]:
        """Compact event payload; flag contents stay in the pack."""
        return {
            "score": self.score.score,
            "status": self.status.status.value,
            "available_sections": self.score.available_count,
            "flag_count": len(self.status.flags),
        }


def inputs_from_profile(
    profile: CandidateTrustProfile,
    tracking_confidences: list[float],
) -> ComplianceInputs:
    """Collect score inputs from the profile and tracking data."""
    rank_stcw = profile.rank_stcw
    return ComplianceInputs(
        consistency_score=profile.consistency_score,
        technical_ratio=rank_stcw.technical_score if rank_stcw else None,
        stability_index=profile.stability_index,
        risk_score=profile.risk_score,
        certification_ratio=rank_stcw.compliance_ratio if rank_stcw else None,
        tracking_confidences=list(tracking_confidences),
    )


def indicators_from_profile(profile: CandidateTrustProfile) -> RiskIndicators:
    """Collect status rule inputs from the profile."""
    rank_stcw = profile.rank_stcw
    return RiskIndicators(
        risk_tier=profile.risk_tier,
        consistency_score=profile.consistency_score,
        certification_ratio=rank_stcw.compliance_ratio if rank_stcw else None,
        rank_anomaly=bool(profile.rank_anomaly_flag),
        missing_cert_count=rank_stcw.missing_or_expired_count if rank_stcw else 0,
    )


class TrustEngine:
    """Compute and persist the compliance pack for a candidate."""

    def __init__(
        self,
        session: AsyncSession,
        flags: FeatureFlags,
        score_calculator: Optional[ComplianceScoreCalculator] = None,
        status_resolver: Optional[ComplianceStatusResolver] = None,
        recommendation_engine: Optional[ComplianceRecommendationEngine] = None,
    ):
        self.session = session
        self.flags = flags
        self.score_calculator = score_calculator or ComplianceScoreCalculator()
        self.status_resolver = status_resolver or ComplianceStatusResolver()
        self.recommendation_engine = recommendation_engine or ComplianceRecommendationEngine()
        self.candidates = CandidateRepository(session)
        self.profiles = TrustProfileRepository(session)
        self.tracking = TrackingVerificationRepository(session)
        self.events = TrustEventRepository(session)

    async def compute(self, candidate_id: UUID) -> Outcome[ComplianceResult]:
        """
        Compute the compliance pack for a candidate.

        Returns:
            Ok(result), Unavailable(reason) or Failed(error)
        """
        if not self.flags.compliance_enabled:
            return Unavailable(UnavailableReason.FEATURE_DISABLED)

        try:
            outcome = await self._compute(candidate_id)
            await self.session.commit()
            return outcome
        except Exception as e:
            await self.session.rollback()
            logger.warning(f"Compliance computation failed for candidate {candidate_id}: {e}")
            return Failed(e)

    async def _compute(self, candidate_id: UUID) -> Outcome[ComplianceResult]:
        candidate = await self.candidates.get_by_id(candidate_id)
        if candidate is None:
            return Unavailable(UnavailableReason.CANDIDATE_NOT_FOUND)

        profile = await self.profiles.get_by_candidate(candidate_id)
        if profile is None:
            return Unavailable(UnavailableReason.PROFILE_NOT_FOUND)

        if profile.consistency_score is None:
            return Unavailable(UnavailableReason.MISSING_BASELINE)

        confidences = await self.tracking.latest_confidences(candidate_id)
        score = self.score_calculator.calculate(inputs_from_profile(profile, confidences))
        if score is None:
            return Unavailable(UnavailableReason.INSUFFICIENT_SECTIONS)

        status = self.status_resolver.resolve(score.score, indicators_from_profile(profile))
        recommendations = self.recommendation_engine.recommend(score.sections)

        result = ComplianceResult(
            candidate_id=candidate_id,
            score=score,
            status=status,
            recommendations=recommendations,
            computed_at=datetime.utcnow(),
        )

        profile.store_compliance_pack(result.to_pack())
        await self.session.flush()

        await self.events.append(
            candidate_id,
            TrustEventType.COMPLIANCE_COMPUTED,
            result.audit_payload(),
        )

        logger.debug(
            f"Compliance for candidate {candidate_id}: score={score.score} "
            f"status={status.status.value} flags={len(status.flags)}"
        )
        return Ok(result)

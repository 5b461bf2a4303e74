"""
Remediation recommendations for weak compliance sections.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from seatrust.compliance.score import ComplianceSection, ComplianceSectionScore


@dataclass(frozen=True)
class Recommendation:
    """One remediation suggestion."""

    priority: int  # 1 (urgent) - 3
    section: ComplianceSection
    recommendation: str
    action: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "priority": self.priority,
            "section": self.section.value,
            "recommendation": self.recommendation,
            "action": self.action,
        }


# (recommendation, action) per section
SECTION_GUIDANCE: dict[ComplianceSection, tuple[str, str]] = {
    ComplianceSection.BACKGROUND_CONSISTENCY: (
        "Employment history shows inconsistencies across sources.",
        "Verify contract dates and employers with references or discharge book entries.",
    ),
    ComplianceSection.TECHNICAL_READINESS: (
        "Sea time or vessel experience is short of the rank requirement.",
        "Review rank-specific sea time and vessel type match before assignment.",
    ),
    ComplianceSection.CAREER_STABILITY: (
        "Career pattern shows frequent changes or elevated risk.",
        "Discuss contract completion history and reasons for early sign-offs.",
    ),
    ComplianceSection.CERTIFICATION_COMPLIANCE: (
        "Required STCW certificates are missing or expired.",
        "Request renewed or missing certificates before deployment.",
    ),
    ComplianceSection.TRACKING_VERIFICATION: (
        "Vessel tracking only partially confirms the declared contracts.",
        "Cross-check declared service with vessel tracking history or company records.",
    ),
}


class ComplianceRecommendationEngine:
    """
    Derive prioritised recommendations from the section breakdown.

    Only available sections scoring below REMEDIATION_BELOW are considered,
    weakest first, at most MAX_RECOMMENDATIONS.
    """

    REMEDIATION_BELOW = 70.0
    MAX_RECOMMENDATIONS = 5

    # Tracking is advisory and never reaches priority 1
    PRIORITY_FLOOR = {ComplianceSection.TRACKING_VERIFICATION: 2}

    def recommend(self, sections: Iterable[ComplianceSectionScore]) -> list[Recommendation]:
        weak = sorted(
            (
                s for s in sections
                if s.available and s.raw_score is not None and s.raw_score < self.REMEDIATION_BELOW
            ),
            key=lambda s: s.raw_score,
        )

        collected: list[Recommendation] = []
        for section_score in weak:
            guidance = SECTION_GUIDANCE.get(section_score.section)
            if guidance is None:
                continue

            recommendation, action = guidance
            collected.append(Recommendation(
                priority=self.priority_for(section_score),
                section=section_score.section,
                recommendation=recommendation,
                action=action,
            ))
            if len(collected) >= self.MAX_RECOMMENDATIONS:
                break

        return sorted(collected, key=lambda r: r.priority)

    def priority_for(self, section_score: ComplianceSectionScore) -> int:
        raw = section_score.raw_score or 0.0
        if raw < 30:
            priority = 1
        elif raw < 50:
            priority = 2
        else:
            priority = 3
        return max(priority, self.PRIORITY_FLOOR.get(section_score.section, 1))

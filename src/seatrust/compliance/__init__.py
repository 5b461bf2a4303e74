"""
Compliance pack computation.

Pure, database-free building blocks:
- Composite score with weight renormalisation for missing sections
- Status resolution with critical and warning flags
- Prioritised remediation recommendations
"""

from seatrust.compliance.score import (
    ComplianceInputs,
    ComplianceScoreCalculator,
    ComplianceScoreResult,
    ComplianceSection,
    ComplianceSectionScore,
)
from seatrust.compliance.status import (
    ComplianceFlag,
    ComplianceStatus,
    ComplianceStatusResolver,
    FlagSeverity,
    RiskIndicators,
    StatusResult,
)
from seatrust.compliance.recommendations import (
    ComplianceRecommendationEngine,
    Recommendation,
    SECTION_GUIDANCE,
)

__all__ = [
    # Score
    "ComplianceInputs",
    "ComplianceScoreCalculator",
    "ComplianceScoreResult",
    "ComplianceSection",
    "ComplianceSectionScore",
    # Status
    "ComplianceFlag",
    "ComplianceStatus",
    "ComplianceStatusResolver",
    "FlagSeverity",
    "RiskIndicators",
    "StatusResult",
    # Recommendations
    "ComplianceRecommendationEngine",
    "Recommendation",
    "SECTION_GUIDANCE",
]

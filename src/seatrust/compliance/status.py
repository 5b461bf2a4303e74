"""
Compliance status resolution.

Turns the composite score and the profile's risk indicators into a
tri-state status plus every flag that fired.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ComplianceStatus(str, Enum):
    """Tri-state compliance decision."""

    COMPLIANT = "compliant"
    NEEDS_REVIEW = "needs_review"
    NOT_COMPLIANT = "not_compliant"


class FlagSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


@dataclass(frozen=True)
class ComplianceFlag:
    """A single triggered rule."""

    code: str
    severity: FlagSeverity
    detail: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "severity": self.severity.value,
            "detail": self.detail,
        }


@dataclass
class RiskIndicators:
    """Profile-level indicators the status rules look at."""

    risk_tier: Optional[str] = None
    consistency_score: Optional[float] = None  # 0-100
    certification_ratio: Optional[float] = None  # 0-1
    rank_anomaly: bool = False
    missing_cert_count: int = 0  # Missing plus expired required certificates


@dataclass
class StatusResult:
    """Status decision with all triggered flags."""

    status: ComplianceStatus
    flags: list[ComplianceFlag] = field(default_factory=list)

    @property
    def critical_flags(self) -> list[ComplianceFlag]:
        return [f for f in self.flags if f.severity == FlagSeverity.CRITICAL]

    @property
    def warning_flags(self) -> list[ComplianceFlag]:
        return [f for f in self.flags if f.severity == FlagSeverity.WARNING]


class ComplianceStatusResolver:
    """
    Resolve compliance status.

    Decision order, first match wins:
    1. Any critical flag, or score below NOT_COMPLIANT_BELOW -> not compliant
    2. Any warning flag, or score below REVIEW_BELOW -> needs review
    3. Otherwise compliant
    """

    NOT_COMPLIANT_BELOW = 50
    REVIEW_BELOW = 70

    CONSISTENCY_CRITICAL_BELOW = 30.0
    CERTIFICATION_CRITICAL_BELOW = 0.30
    MISSING_CERT_WARNING_ABOVE = 2

    def resolve(self, score: int, indicators: RiskIndicators) -> StatusResult:
        """
        Resolve the status for a composite score.

        Args:
            score: Composite compliance score (0-100)
            indicators: Risk indicators from the trust profile

        Returns:
            Status and all flags, critical first
        """
        flags = self.critical_flags(indicators) + self.warning_flags(indicators)
        has_critical = any(f.severity == FlagSeverity.CRITICAL for f in flags)
        has_warning = any(f.severity == FlagSeverity.WARNING for f in flags)

        if has_critical or score < self.NOT_COMPLIANT_BELOW:
            status = ComplianceStatus.NOT_COMPLIANT
        elif has_warning or score < self.REVIEW_BELOW:
            status = ComplianceStatus.NEEDS_REVIEW
        else:
            status = ComplianceStatus.COMPLIANT

        return StatusResult(status=status, flags=flags)

    def critical_flags(self, indicators: RiskIndicators) -> list[ComplianceFlag]:
        flags = []

        if indicators.risk_tier == "critical":
            flags.append(ComplianceFlag(
                code="risk_tier_critical",
                severity=FlagSeverity.CRITICAL,
                detail="Candidate risk tier is critical",
            ))

        if (
            indicators.consistency_score is not None
            and indicators.consistency_score < self.CONSISTENCY_CRITICAL_BELOW
        ):
            flags.append(ComplianceFlag(
                code="low_background_consistency",
                severity=FlagSeverity.CRITICAL,
                detail=(
                    f"Background consistency score {indicators.consistency_score:.1f} "
                    f"is below {self.CONSISTENCY_CRITICAL_BELOW:.0f}"
                ),
            ))

        if (
            indicators.certification_ratio is not None
            and indicators.certification_ratio < self.CERTIFICATION_CRITICAL_BELOW
        ):
            flags.append(ComplianceFlag(
                code="low_certification_compliance",
                severity=FlagSeverity.CRITICAL,
                detail=(
                    f"Only {indicators.certification_ratio:.0%} of required "
                    f"certificates are held and valid"
                ),
            ))

        return flags

    def warning_flags(self, indicators: RiskIndicators) -> list[ComplianceFlag]:
        flags = []

        if indicators.risk_tier == "high":
            flags.append(ComplianceFlag(
                code="risk_tier_high",
                severity=FlagSeverity.WARNING,
                detail="Candidate risk tier is high",
            ))

        if indicators.rank_anomaly:
            flags.append(ComplianceFlag(
                code="rank_progression_anomaly",
                severity=FlagSeverity.WARNING,
                detail="Rank progression anomaly detected in contract history",
            ))

        if indicators.missing_cert_count > self.MISSING_CERT_WARNING_ABOVE:
            flags.append(ComplianceFlag(
                code="missing_certificates",
                severity=FlagSeverity.WARNING,
                detail=f"{indicators.missing_cert_count} required certificates missing or expired",
            ))

        return flags

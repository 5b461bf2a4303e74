"""
Composite compliance score.

Combines up to five independently sourced section scores (0-100 each)
into one integer score. Sections without data drop out and the weights
of the remaining sections are renormalised to sum to 1.0. With fewer
than two sections available no score is produced.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


class ComplianceSection(str, Enum):
    """The five compliance sections."""

    BACKGROUND_CONSISTENCY = "background_consistency"
    TECHNICAL_READINESS = "technical_readiness"
    CAREER_STABILITY = "career_stability"
    CERTIFICATION_COMPLIANCE = "certification_compliance"
    TRACKING_VERIFICATION = "tracking_verification"


@dataclass
class ComplianceInputs:
    """
    Domain inputs for the score, all optional.

    Scales: consistency 0-100, technical and certification ratios 0-1,
    stability index 0-10+, risk score 0-1, tracking confidences 0-1.
    """

    consistency_score: Optional[float] = None
    technical_ratio: Optional[float] = None
    stability_index: Optional[float] = None
    risk_score: Optional[float] = None
    certification_ratio: Optional[float] = None
    tracking_confidences: list[float] = field(default_factory=list)


@dataclass
class ComplianceSectionScore:
    """One section of the breakdown."""

    section: ComplianceSection
    raw_score: Optional[float]  # 0-100, 1 decimal, None if unavailable
    effective_weight: float  # 4 decimals
    weighted_score: float  # 2 decimals
    available: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "section": self.section.value,
            "raw_score": self.raw_score,
            "effective_weight": self.effective_weight,
            "weighted_score": self.weighted_score,
            "available": self.available,
        }


@dataclass
class ComplianceScoreResult:
    """Composite score with per-section breakdown."""

    score: int
    sections: list[ComplianceSectionScore]

    @property
    def available_count(self) -> int:
        return sum(1 for s in self.sections if s.available)

    def section(self, section: ComplianceSection) -> ComplianceSectionScore:
        for s in self.sections:
            if s.section == section:
                return s
        raise KeyError(section)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "available_sections": self.available_count,
            "sections": {s.section.value: s.to_dict() for s in self.sections},
        }


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ComplianceScoreCalculator:
    """
    Compute the composite compliance score.

    Base weights sum to 1.0. Unavailable sections get weight 0 and the
    rest are scaled by 1 / (sum of available base weights).
    """

    BASE_WEIGHTS: dict[ComplianceSection, float] = {
        ComplianceSection.BACKGROUND_CONSISTENCY: 0.25,
        ComplianceSection.TECHNICAL_READINESS: 0.25,
        ComplianceSection.CAREER_STABILITY: 0.20,
        ComplianceSection.CERTIFICATION_COMPLIANCE: 0.20,
        ComplianceSection.TRACKING_VERIFICATION: 0.10,
    }

    MIN_AVAILABLE_SECTIONS = 2

    # Career stability halves, each worth 0-50
    STABILITY_INDEX_CAP = 10.0
    STABILITY_HALF_MAX = 50.0
    STABILITY_HALF_NEUTRAL = 25.0

    def calculate(self, inputs: ComplianceInputs) -> Optional[ComplianceScoreResult]:
        """
        Compute the composite score.

        Returns:
            The score with breakdown, or None when fewer than
            MIN_AVAILABLE_SECTIONS sections have data
        """
        raw_scores = self.section_raw_scores(inputs)
        available = [s for s, raw in raw_scores.items() if raw is not None]

        if len(available) < self.MIN_AVAILABLE_SECTIONS:
            logger.debug(
                f"Only {len(available)} compliance section(s) available, "
                f"{self.MIN_AVAILABLE_SECTIONS} required"
            )
            return None

        weight_total = sum(self.BASE_WEIGHTS[s] for s in available)

        total = 0.0
        sections: list[ComplianceSectionScore] = []
        for section, raw in raw_scores.items():
            if raw is None:
                sections.append(ComplianceSectionScore(
                    section=section,
                    raw_score=None,
                    effective_weight=0.0,
                    weighted_score=0.0,
                    available=False,
                ))
                continue

            weight = self.BASE_WEIGHTS[section] / weight_total
            weighted = raw * weight
            total += weighted
            sections.append(ComplianceSectionScore(
                section=section,
                raw_score=round(raw, 1),
                effective_weight=round(weight, 4),
                weighted_score=round(weighted, 2),
                available=True,
            ))

        return ComplianceScoreResult(
            score=_round_half_up(_clamp(total)),
            sections=sections,
        )

    def section_raw_scores(
        self, inputs: ComplianceInputs
    ) -> dict[ComplianceSection, Optional[float]]:
        """Raw 0-100 score per section, None where the input is missing."""
        return {
            ComplianceSection.BACKGROUND_CONSISTENCY: self._consistency(inputs),
            ComplianceSection.TECHNICAL_READINESS: self._ratio(inputs.technical_ratio),
            ComplianceSection.CAREER_STABILITY: self._stability(inputs),
            ComplianceSection.CERTIFICATION_COMPLIANCE: self._ratio(inputs.certification_ratio),
            ComplianceSection.TRACKING_VERIFICATION: self._tracking(inputs.tracking_confidences),
        }

    @staticmethod
    def _consistency(inputs: ComplianceInputs) -> Optional[float]:
        if inputs.consistency_score is None:
            return None
        return _clamp(float(inputs.consistency_score))

    @staticmethod
    def _ratio(ratio: Optional[float]) -> Optional[float]:
        if ratio is None:
            return None
        return _clamp(float(ratio) * 100)

    def _stability(self, inputs: ComplianceInputs) -> Optional[float]:
        """
        Stability index half plus risk complement half.

        A missing half counts as the neutral midpoint; the section is only
        unavailable when both inputs are missing.
        """
        if inputs.stability_index is None and inputs.risk_score is None:
            return None

        if inputs.stability_index is not None:
            capped = _clamp(float(inputs.stability_index), 0.0, self.STABILITY_INDEX_CAP)
            stability_half = capped / self.STABILITY_INDEX_CAP * self.STABILITY_HALF_MAX
        else:
            stability_half = self.STABILITY_HALF_NEUTRAL

        if inputs.risk_score is not None:
            risk = _clamp(float(inputs.risk_score), 0.0, 1.0)
            risk_half = (1.0 - risk) * self.STABILITY_HALF_MAX
        else:
            risk_half = self.STABILITY_HALF_NEUTRAL

        return _clamp(stability_half + risk_half)

    @staticmethod
    def _tracking(confidences: Sequence[float]) -> Optional[float]:
        if not confidences:
            return None
        return _clamp(sum(confidences) / len(confidences) * 100)

"""
Tests for the composite compliance score.

Covers:
- Minimum section requirement
- Weight renormalisation for missing sections
- Career stability halves
- Tracking confidence averaging
- Clamping and rounding
"""

import pytest

from seatrust.compliance import ComplianceInputs, ComplianceSection


class TestAvailability:
    """Tests for the minimum number of sections."""

    def test_no_sections(self, score_calculator):
        assert score_calculator.calculate(ComplianceInputs()) is None

    def test_single_section(self, score_calculator):
        """One section is not enough for a composite score."""
        assert score_calculator.calculate(ComplianceInputs(consistency_score=90)) is None

    def test_two_sections(self, score_calculator):
        result = score_calculator.calculate(
            ComplianceInputs(consistency_score=80, certification_ratio=0.6)
        )

        assert result is not None
        assert result.available_count == 2
        # 80 * 0.25/0.45 + 60 * 0.20/0.45
        assert result.score == 71


class TestWeights:
    """Tests for base weights and renormalisation."""

    def test_base_weights_sum_to_one(self, score_calculator):
        assert sum(score_calculator.BASE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_available_weights_sum_to_one(self, score_calculator):
        result = score_calculator.calculate(ComplianceInputs(
            consistency_score=50,
            technical_ratio=0.5,
            tracking_confidences=[0.5],
        ))

        available = [s for s in result.sections if s.available]
        assert sum(s.effective_weight for s in available) == pytest.approx(1.0, abs=0.001)

    def test_unavailable_sections_have_zero_weight(self, score_calculator):
        result = score_calculator.calculate(
            ComplianceInputs(consistency_score=50, technical_ratio=0.5)
        )

        tracking = result.section(ComplianceSection.TRACKING_VERIFICATION)
        assert not tracking.available
        assert tracking.raw_score is None
        assert tracking.effective_weight == 0.0
        assert tracking.weighted_score == 0.0

    def test_breakdown_lists_all_five_sections(self, score_calculator):
        result = score_calculator.calculate(
            ComplianceInputs(consistency_score=50, technical_ratio=0.5)
        )

        assert [s.section for s in result.sections] == list(ComplianceSection)

    def test_three_section_scenario(self, score_calculator):
        """Consistency 20, technical 80, certification 90; stability and tracking absent."""
        result = score_calculator.calculate(ComplianceInputs(
            consistency_score=20,
            technical_ratio=0.8,
            certification_ratio=0.9,
        ))

        assert result.available_count == 3
        consistency = result.section(ComplianceSection.BACKGROUND_CONSISTENCY)
        technical = result.section(ComplianceSection.TECHNICAL_READINESS)
        certification = result.section(ComplianceSection.CERTIFICATION_COMPLIANCE)

        assert consistency.effective_weight == pytest.approx(0.3571)
        assert technical.effective_weight == pytest.approx(0.3571)
        assert certification.effective_weight == pytest.approx(0.2857)
        # (20 * 0.25 + 80 * 0.25 + 90 * 0.20) / 0.70 = 61.43
        assert result.score == 61

    def test_all_sections_at_seventy(self, score_calculator):
        result = score_calculator.calculate(ComplianceInputs(
            consistency_score=70,
            technical_ratio=0.7,
            stability_index=7,
            risk_score=0.3,
            certification_ratio=0.7,
            tracking_confidences=[0.7],
        ))

        assert result.available_count == 5
        assert result.score == 70
        for section in result.sections:
            assert section.raw_score == pytest.approx(70.0)


class TestCareerStability:
    """Tests for the stability/risk halves."""

    def raw(self, score_calculator, **kwargs):
        scores = score_calculator.section_raw_scores(ComplianceInputs(**kwargs))
        return scores[ComplianceSection.CAREER_STABILITY]

    def test_both_inputs(self, score_calculator):
        assert self.raw(score_calculator, stability_index=5, risk_score=0.2) == pytest.approx(65.0)

    def test_stability_index_capped_at_ten(self, score_calculator):
        assert self.raw(score_calculator, stability_index=15, risk_score=0.0) == pytest.approx(100.0)

    def test_missing_risk_is_neutral(self, score_calculator):
        assert self.raw(score_calculator, stability_index=10) == pytest.approx(75.0)

    def test_missing_stability_is_neutral(self, score_calculator):
        assert self.raw(score_calculator, risk_score=0.2) == pytest.approx(65.0)

    def test_both_missing_is_unavailable(self, score_calculator):
        assert self.raw(score_calculator) is None


class TestTracking:
    """Tests for tracking verification averaging."""

    def test_average_confidence(self, score_calculator):
        scores = score_calculator.section_raw_scores(
            ComplianceInputs(tracking_confidences=[0.9, 0.7])
        )
        assert scores[ComplianceSection.TRACKING_VERIFICATION] == pytest.approx(80.0)

    def test_no_verifications_is_unavailable(self, score_calculator):
        scores = score_calculator.section_raw_scores(ComplianceInputs(tracking_confidences=[]))
        assert scores[ComplianceSection.TRACKING_VERIFICATION] is None


class TestBounds:
    """Tests for clamping and rounding."""

    def test_raw_scores_clamped(self, score_calculator):
        result = score_calculator.calculate(ComplianceInputs(
            consistency_score=130,
            technical_ratio=-0.5,
        ))

        assert result.section(ComplianceSection.BACKGROUND_CONSISTENCY).raw_score == 100.0
        assert result.section(ComplianceSection.TECHNICAL_READINESS).raw_score == 0.0
        assert result.score == 50

    def test_half_rounds_up(self, score_calculator):
        # 61 * 0.5 + 60 * 0.5 = 60.5
        result = score_calculator.calculate(
            ComplianceInputs(consistency_score=61, technical_ratio=0.6)
        )
        assert result.score == 61

    @pytest.mark.parametrize("consistency,ratio", [(0, 0.0), (100, 1.0), (33.3, 0.123)])
    def test_score_is_integer_in_range(self, score_calculator, consistency, ratio):
        result = score_calculator.calculate(
            ComplianceInputs(consistency_score=consistency, certification_ratio=ratio)
        )

        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100

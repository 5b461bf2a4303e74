"""
Unit tests for the sea-time summary roll-up.
"""

from datetime import date, datetime

import pytest

from seatrust.schemas import SeaTimeSummary
from seatrust.seatime import ContractInterval, build_summary


class TestBuildSummary:
    """Tests for per-rank, per-vessel and per-operation aggregation."""

    @pytest.fixture
    def intervals(self):
        return [
            ContractInterval(
                start_date=date(2023, 1, 1),
                end_date=date(2023, 3, 1),
                rank_code="MASTER",
                vessel_type="bulk_carrier",
            ),
            ContractInterval(
                start_date=date(2023, 2, 1),
                end_date=date(2023, 4, 1),
                rank_code="CO",
                vessel_type="river_barge",
            ),
        ]

    def test_totals(self, corrector, intervals):
        corrected = corrector.correct(intervals)
        summary = build_summary(corrected, corrector.merged_total_days(intervals))

        assert summary.total_contracts == 2
        assert summary.total_raw_days == 120
        assert summary.total_sea_days == 91
        assert summary.merged_total_days == 91
        assert summary.overlap_days == 29
        assert summary.is_consistent

    def test_breakdowns_use_attributed_days(self, corrector, intervals):
        summary = build_summary(corrector.correct(intervals), 91)

        assert summary.rank_days == {"MASTER": 60, "CO": 31}
        assert list(summary.rank_days) == ["MASTER", "CO"]
        assert summary.vessel_type_days == {"bulk_carrier": 60, "river_barge": 31}
        assert list(summary.vessel_type_days) == ["bulk_carrier", "river_barge"]
        assert summary.operation_type_days == {"sea": 60, "river": 31}
        assert summary.sea_days == 60
        assert summary.river_days == 31

    def test_breakdowns_largest_first(self, corrector):
        """Breakdowns are ordered by days, not by contract chronology."""
        corrected = corrector.correct([
            ContractInterval(
                start_date=date(2023, 1, 1),
                end_date=date(2023, 1, 10),
                rank_code="AB",
                vessel_type="tanker",
            ),
            ContractInterval(
                start_date=date(2023, 2, 1),
                end_date=date(2023, 4, 30),
                rank_code="MASTER",
                vessel_type="bulk_carrier",
            ),
        ])

        summary = build_summary(corrected, 99)

        assert list(summary.rank_days) == ["MASTER", "AB"]
        assert list(summary.rank_experience_pct) == ["MASTER", "AB"]
        assert list(summary.vessel_type_days) == ["bulk_carrier", "tanker"]
        assert list(summary.vessel_experience_pct) == ["bulk_carrier", "tanker"]

    def test_order_restored_after_storage(self):
        """Stored documents may come back with keys re-sorted (JSONB)."""
        stored = {
            "rank_days": {"AB": 10, "CO": 31, "MASTER": 60},
            "rank_experience_pct": {"AB": 9.9, "CO": 30.7, "MASTER": 59.4},
            "vessel_type_days": {"tanker": 10, "bulk_carrier": 91},
            "vessel_experience_pct": {"tanker": 9.9, "bulk_carrier": 90.1},
        }

        summary = SeaTimeSummary.model_validate(stored)

        assert list(summary.rank_days) == ["MASTER", "CO", "AB"]
        assert list(summary.rank_experience_pct) == ["MASTER", "CO", "AB"]
        assert list(summary.vessel_type_days) == ["bulk_carrier", "tanker"]
        assert list(summary.vessel_experience_pct) == ["bulk_carrier", "tanker"]

    def test_equal_days_ordered_by_key(self):
        summary = SeaTimeSummary(rank_days={"OS": 20, "AB": 20, "CO": 40})

        assert list(summary.rank_days) == ["CO", "AB", "OS"]

    def test_percentages_sum_to_100(self, corrector, intervals):
        """Percentages have one decimal and sum to 100 within rounding."""
        summary = build_summary(corrector.correct(intervals), 91)

        assert summary.rank_experience_pct == {"MASTER": 65.9, "CO": 34.1}
        assert list(summary.rank_experience_pct) == ["MASTER", "CO"]
        assert sum(summary.rank_experience_pct.values()) == pytest.approx(100.0, abs=0.2)
        assert sum(summary.vessel_experience_pct.values()) == pytest.approx(100.0, abs=0.2)

    def test_missing_rank_and_vessel_type_bucketed_as_unknown(self, corrector):
        corrected = corrector.correct([
            ContractInterval(start_date=date(2023, 1, 1), end_date=date(2023, 1, 10)),
        ])

        summary = build_summary(corrected, 10)

        assert summary.rank_days == {"unknown": 10}
        assert summary.vessel_type_days == {"unknown": 10}
        assert summary.rank_experience_pct == {"unknown": 100.0}

    def test_no_entries(self):
        """Zero total gives empty percentage maps and zero operation days."""
        computed_at = datetime(2024, 1, 1, 12, 0)
        summary = build_summary([], 0, batch_id="b-1", computed_at=computed_at)

        assert summary.total_sea_days == 0
        assert summary.rank_experience_pct == {}
        assert summary.vessel_experience_pct == {}
        assert summary.operation_type_days == {"sea": 0, "river": 0}
        assert summary.batch_id == "b-1"
        assert summary.computed_at == computed_at

    def test_empty_summary_matches_no_entries(self):
        assert SeaTimeSummary.empty() == build_summary([], 0)

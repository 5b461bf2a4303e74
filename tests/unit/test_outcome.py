"""
Unit tests for tagged computation outcomes.
"""

from seatrust.outcome import Failed, Ok, Unavailable, UnavailableReason


class TestOutcome:
    """Tests for Ok / Unavailable / Failed."""

    def test_ok(self):
        outcome = Ok({"total": 10})

        assert outcome.is_ok
        assert outcome.data == {"total": 10}

    def test_unavailable(self):
        outcome = Unavailable(UnavailableReason.MISSING_BASELINE)

        assert not outcome.is_ok
        assert outcome.reason.value == "missing_baseline"

    def test_failed_message(self):
        assert Failed(RuntimeError("db gone")).message == "db gone"

    def test_failed_message_falls_back_to_type(self):
        assert Failed(TimeoutError()).message == "TimeoutError"

    def test_outcomes_distinguishable_by_type(self):
        outcomes = [
            Ok(1),
            Unavailable(UnavailableReason.FEATURE_DISABLED),
            Failed(ValueError("x")),
        ]

        kinds = []
        for outcome in outcomes:
            if isinstance(outcome, Ok):
                kinds.append(f"ok:{outcome.data}")
            elif isinstance(outcome, Unavailable):
                kinds.append(f"unavailable:{outcome.reason.value}")
            elif isinstance(outcome, Failed):
                kinds.append("failed")

        assert kinds == ["ok:1", "unavailable:feature_disabled", "failed"]

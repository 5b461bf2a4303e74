"""
Tests for the seatrust command line entry point.
"""

from uuid import uuid4

import pytest

from seatrust.cli import build_parser, main


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    """Point the CLI at a fresh SQLite file with every toggle on."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    for name in (
        "SEA_TIME_ENABLED",
        "SEA_TIME_AUTO_COMPUTE",
        "COMPLIANCE_ENABLED",
        "COMPLIANCE_AUTO_COMPUTE",
    ):
        monkeypatch.setenv(name, "true")
    return monkeypatch


class TestParser:
    """Tests for argument parsing."""

    def test_sea_time_options(self):
        candidate_id = uuid4()
        args = build_parser().parse_args([
            "sea-time", "--candidate", str(candidate_id), "--dry-run", "--limit", "5",
        ])

        assert args.command == "sea-time"
        assert args.candidates == [candidate_id]
        assert args.dry_run
        assert args.limit == 5
        assert not args.force

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_invalid_candidate_id(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compliance", "--candidate", "not-a-uuid"])


class TestMain:
    """Tests for end-to-end command runs."""

    def test_init_db_then_batches(self, cli_env, capsys):
        assert main(["init-db"]) == 0
        assert main(["sea-time"]) == 0
        assert main(["compliance", "--force"]) == 0

        output = capsys.readouterr().out
        assert "SEA_TIME BATCH" in output
        assert "COMPLIANCE BATCH" in output
        assert "Candidates found: 0" in output

    def test_disabled_toggle_exits_cleanly(self, cli_env, capsys):
        cli_env.setenv("SEA_TIME_ENABLED", "false")
        main(["init-db"])

        assert main(["sea-time"]) == 0
        assert "Not run: feature disabled" in capsys.readouterr().out

    def test_auto_compute_off_exits_cleanly(self, cli_env, capsys):
        cli_env.setenv("COMPLIANCE_AUTO_COMPUTE", "false")
        main(["init-db"])

        assert main(["compliance"]) == 0
        assert "Not run: auto-compute disabled" in capsys.readouterr().out

    def test_dry_run_with_unknown_candidate(self, cli_env, capsys):
        candidate_id = uuid4()
        main(["init-db"])

        assert main(["sea-time", "--candidate", str(candidate_id), "--dry-run"]) == 0
        assert str(candidate_id) in capsys.readouterr().out

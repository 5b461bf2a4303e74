"""
Command line entry point.

Usage:
    seatrust sea-time [--candidate ID ...] [--dry-run] [--force] [--limit N]
    seatrust compliance [--candidate ID ...] [--dry-run] [--force] [--limit N]
    seatrust init-db

Settings come from the environment (see seatrust.config). A run that is
skipped because a toggle is off exits with status 0.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence
from uuid import UUID

from seatrust.config import FeatureFlags, Settings
from seatrust.db.session import create_engine_from_settings, create_session_factory, init_schema
from seatrust.jobs import BatchJobStats, run_compliance_batch, run_sea_time_batch

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seatrust",
        description="Sea-time ledger and compliance pack computation",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("sea-time", "Recompute sea-time ledgers"),
        ("compliance", "Recompute compliance packs"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--candidate",
            type=UUID,
            action="append",
            dest="candidates",
            help="Candidate id to process (repeatable); skips the pending scan",
        )
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="List the candidates that would be processed",
        )
        sub.add_argument(
            "--force",
            action="store_true",
            help="Include candidates that were already computed",
        )
        sub.add_argument(
            "--limit",
            type=int,
            help="Maximum candidates to process (default: BATCH_SIZE)",
        )

    subparsers.add_parser("init-db", help="Create database tables")
    return parser


def print_stats(stats: BatchJobStats) -> None:
    print("\n" + "=" * 50)
    print(f"{stats.job_type.upper()} BATCH")
    print("=" * 50)
    if stats.aborted:
        print(f"Not run: {stats.aborted}")
        return
    print(f"Candidates found: {stats.candidates_found}")
    if stats.dry_run:
        for candidate_id in stats.candidate_ids:
            print(f"  {candidate_id}")
        return
    print(f"Computed:         {stats.computed}")
    print(f"Skipped:          {stats.skipped}")
    print(f"Failed:           {stats.failed}")
    if stats.duration_seconds is not None:
        print(f"Duration:         {stats.duration_seconds:.1f}s")
    for error in stats.errors[:10]:
        print(f"  {error}")
    print("=" * 50)


async def run(args: argparse.Namespace, source: Settings) -> int:
    engine = create_engine_from_settings(source)
    logger.debug(f"Running {args.command} against {engine.url.render_as_string(hide_password=True)}")
    try:
        if args.command == "init-db":
            await init_schema(engine)
            return 0

        flags = FeatureFlags.from_settings(source)
        session_factory = create_session_factory(engine)
        limit = args.limit or source.batch_size

        if args.command == "sea-time":
            stats = await run_sea_time_batch(
                session_factory,
                flags,
                candidate_ids=args.candidates,
                force=args.force,
                limit=limit,
                dry_run=args.dry_run,
            )
        else:
            stats = await run_compliance_batch(
                session_factory,
                flags,
                candidate_ids=args.candidates,
                force=args.force,
                limit=limit,
                dry_run=args.dry_run,
            )

        print_stats(stats)
        return 1 if stats.failed else 0
    finally:
        await engine.dispose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    source = Settings()

    logging.basicConfig(
        level=getattr(logging, source.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    return asyncio.run(run(args, source))


if __name__ == "__main__":
    sys.exit(main())

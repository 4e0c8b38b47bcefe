"""Run one workflow scheduler tick from a shell or system cron.

Usage:
    python -m scripts.run_workflow_scheduler [--at 2025-06-02T09:00:00+00:00]
--at evaluates triggers as if now were the given instant (useful for replays).
Requires Postgres (DATABASE_URL) with migrations applied.
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime

import app.infrastructure.persistence.database as database
from app.core.config import get_settings
from app.infrastructure.services.workflow_scheduler import build_scheduler_runner
from app.shared.context import reset_request_id, set_request_id
from app.shared.telemetry.logging import setup_logging
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_run_id


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one workflow scheduler tick.")
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        default=None,
        help="ISO-8601 instant to evaluate triggers at (default: now; naive = UTC)",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Run the tick in one transaction; print the summary as JSON."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        return 1

    now = ensure_utc(args.at) if args.at else utc_now()
    token = set_request_id(generate_run_id("cli"))
    try:
        async with database.session_scope() as session:
            result = await build_scheduler_runner(session, settings).run(now)
    finally:
        reset_request_id(token)
        await database.dispose_engine()

    if result is None:
        print("Workflow scheduler already running; tick skipped")
        return 0
    print(json.dumps(result.to_summary(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

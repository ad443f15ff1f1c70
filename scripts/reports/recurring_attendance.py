"""Print a recurring attendance report (or a ministry's monthly trend) as JSON.

Reads members and check-ins from the database configured in the env file;
nothing is written.

Usage examples:
  # This month's report for one ministry
  ENV_FILE=.env python scripts/reports/recurring_attendance.py --scope ministry \
      --ministry "Service Ministry"

  # Whole community, second quarter of 2024
  ENV_FILE=.env python scripts/reports/recurring_attendance.py --scope community \
      --period quarterly --quarter Q2 --year 2024

  # One member over an explicit window
  ENV_FILE=.env python scripts/reports/recurring_attendance.py --scope individual \
      --member-id CFC-00042 --start-date 2024-01-01 --end-date 2024-03-31

  # Monthly CW/WSC trend for a ministry
  ENV_FILE=.env python scripts/reports/recurring_attendance.py --trend \
      --ministry "Post-LSS Group (PLSG)" --year 2024
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv


def _load_env_file() -> None:
    project_root = Path(__file__).resolve().parents[2]
    env_file = os.environ.get("ENV_FILE", ".env")
    env_path = (project_root / env_file).resolve()
    if not env_path.exists():
        if os.environ.get("DATABASE_URL"):
            print(
                f"Env file not found at {env_path}; using existing environment vars.",
                file=sys.stderr,
            )
            return
        raise FileNotFoundError(f"Env file not found: {env_path}")
    load_dotenv(env_path, override=True)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--scope", default="ministry")
    parser.add_argument("--period", default="monthly")
    parser.add_argument("--month", type=int)
    parser.add_argument("--quarter")
    parser.add_argument("--year", type=int)
    parser.add_argument("--start-date", type=date.fromisoformat)
    parser.add_argument("--end-date", type=date.fromisoformat)
    parser.add_argument("--member-id")
    parser.add_argument("--ministry")
    parser.add_argument("--apostolate")
    parser.add_argument(
        "--trend",
        action="store_true",
        help="Print the monthly CW/WSC trend for --ministry instead of a report",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> str:
    from libs.db.session import session_scope
    from services.reports_service.repository import SqlAttendanceRepository
    from services.reports_service.schemas import (
        MonthlyTrendPoint,
        RecurringReportRequest,
    )
    from services.reports_service.services import (
        generate_monthly_trend,
        generate_recurring_report,
    )
    from pydantic import TypeAdapter

    async with session_scope() as session:
        repository = SqlAttendanceRepository(session)

        if args.trend:
            points = await generate_monthly_trend(repository, args.ministry or "", args.year)
            adapter = TypeAdapter(list[MonthlyTrendPoint])
            return adapter.dump_json(points, indent=2).decode()

        request = RecurringReportRequest(
            scope=args.scope,
            period=args.period,
            month=args.month,
            quarter=args.quarter,
            year=args.year,
            start_date=args.start_date,
            end_date=args.end_date,
            member_id=args.member_id,
            ministry=args.ministry,
            apostolate=args.apostolate,
        )
        report = await generate_recurring_report(repository, request)
        return report.model_dump_json(indent=2)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _load_env_file()

    from services.reports_service.errors import AnalyticsError

    try:
        output = asyncio.run(_run(args))
    except AnalyticsError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

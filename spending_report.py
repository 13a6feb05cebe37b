#!/usr/bin/env python3
"""
Government Spending Report

Fetches spending records from a running spending API and prints the same
figures the dashboard draws: department totals for the selected filters and
each department's spending over time.  Falls back to the built-in sample
data when the API cannot be reached.

Usage:
    python spending_report.py
    python spending_report.py --year 2023
    python spending_report.py --department Defense
    python spending_report.py --api-url http://dashboard.internal:8000
    python spending_report.py --year 2022 --json
"""

import argparse
import json
import logging
import sys

from dashboard.client import SpendingClient
from dashboard.state import DashboardSession
from utils.records import DashboardView


def format_amount(value: float) -> str:
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


def print_report(view: DashboardView, year: str, department: str,
                 used_fallback: bool) -> None:
    print("=" * 65)
    print("  GOVERNMENT SPENDING REPORT")
    print("=" * 65)
    if used_fallback:
        print("\n  (API unavailable: showing built-in sample data)")

    print(f"\n  Year:       {year or 'All'}")
    print(f"  Department: {department or 'All'}")

    print("\n  Spending by Department")
    print("  " + "-" * 40)
    if not view.pie_chart:
        print("  No data available for the selected filters.")
    else:
        width = max(len(s.label) for s in view.pie_chart)
        for s in view.pie_chart:
            print(f"  {s.label:<{width}}  {format_amount(s.value):>12}")
        print(f"  {'Total':<{width}}  {format_amount(view.pie_total):>12}")

    print("\n  Spending Over Time")
    print("  " + "-" * 40)
    for s in view.time_series:
        points = ", ".join(f"{p.year}: {format_amount(p.amount)}" for p in s.data)
        print(f"  {s.department}: {points or '(no data)'}")
    print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print government spending totals and time series.",
    )
    parser.add_argument("--year", default="", help="Filter by year (e.g. 2023)")
    parser.add_argument("--department", default="", help="Filter by department name")
    parser.add_argument(
        "--api-url", default=None,
        help="Spending API base URL (default: SPENDING_API_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Request timeout in seconds (default: SPENDING_API_TIMEOUT or 10)",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log fetch details")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    session = DashboardSession()
    with SpendingClient(args.api_url, timeout=args.timeout) as client:
        session.load(client.fetch)
    session.select(year=args.year.strip(), department=args.department.strip())
    state = session.state
    view = session.view()
    session.close()

    if args.json:
        out = {
            "selection": {"year": state.selection.year,
                          "department": state.selection.department},
            "used_fallback": state.used_fallback,
            **view.to_dict(),
        }
        print(json.dumps(out, indent=2))
    else:
        print_report(view, state.selection.year, state.selection.department,
                     state.used_fallback)
    return 0


if __name__ == "__main__":
    sys.exit(main())

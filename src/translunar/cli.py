# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for translunar transfer planning.

Usage:
    # Closest-approach report for the built-in mission windows (CSV to stdout)
    translunar
    translunar --mission CY3 --export-csv cy3.csv

    # Custom window, quicker search, 8 worker threads
    translunar --start 2024-01-01 --end 2024-03-31 --fast --workers 8

    # List lunar equator crossings only
    translunar --crossings --start 2023-07-01 --end 2023-09-30

    # Optimise a single LOI epoch
    translunar --loi 2023-08-05T11:25:58Z --inclination 21.5 --omega 178

    # Use astronomy-engine instead of the analytical ephemeris
    translunar --mission CY3 --ephemeris astronomy
"""
import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, time, timezone

from translunar.adapters.csv_exporter import CsvTransferReportExporter, write_report_csv
from translunar.domain.equator_crossing import find_equator_crossings
from translunar.domain.lunar_ephemeris import AnalyticLunarEphemeris
from translunar.domain.mission_profile import (
    MISSION_WINDOWS,
    MissionWindow,
    closest_allowed_inclination,
    closest_allowed_omega,
)
from translunar.domain.orbital_mechanics import format_period
from translunar.domain.transfer_optimization import (
    DEFAULT_SETTINGS,
    FAST_SETTINGS,
    plan_transfer,
)
from translunar.domain.transfer_report import build_report, format_report_epoch
from translunar.ports.ephemeris import EphemerisProvider


def parse_epoch(text: str, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO-8601 date or datetime as UTC.

    A bare date maps to 00:00:00, or 23:59:59 when `end_of_day` is set.
    """
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date/time {text!r}: expected ISO-8601") from e

    if "T" not in value and " " not in value and end_of_day:
        parsed = datetime.combine(parsed.date(), time(23, 59, 59))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def make_provider(name: str) -> EphemerisProvider:
    """Ephemeris provider by name: 'analytic' or 'astronomy'."""
    if name == "astronomy":
        try:
            from translunar.adapters.astronomy_ephemeris import AstronomyEngineEphemeris
        except ImportError:
            print(
                "The astronomy ephemeris requires the astronomy-engine package.\n"
                "Install with: pip install translunar[ephemeris]",
                file=sys.stderr,
            )
            sys.exit(1)
        return AstronomyEngineEphemeris()
    return AnalyticLunarEphemeris()


def _run_crossings(provider: EphemerisProvider, start: datetime, end: datetime) -> None:
    events = find_equator_crossings(provider, start, end)
    print(f"{len(events)} lunar equator crossings between "
          f"{format_report_epoch(start)} and {format_report_epoch(end)}:")
    for ev in events:
        print(f"  {ev.epoch.isoformat()}  {ev.direction.value}")


def _run_single(args, provider: EphemerisProvider, settings, executor) -> None:
    loi = parse_epoch(args.loi)
    plan = plan_transfer(loi, args.omega, args.inclination, provider, settings, executor)
    sol = plan.solution
    print(f"LOI:             {loi.isoformat()}")
    print(f"TLI:             {plan.tli_epoch.isoformat()}")
    print(f"Time of flight:  {format_period(plan.time_of_flight_s)}")
    print(f"RAAN:            {sol.raan_deg:.3f} deg")
    print(f"Apogee altitude: {sol.apogee_alt_km:.1f} km")
    print(f"Closest approach:{sol.distance_km:>10.1f} km")
    print(f"True anomaly:    {sol.true_anomaly_deg:.2f} deg")


def _report_windows(args) -> list[MissionWindow]:
    if args.start or args.end:
        if not (args.start and args.end):
            raise ValueError("--start and --end must be given together")
        return [MissionWindow(
            name=args.name,
            start=parse_epoch(args.start),
            end=parse_epoch(args.end, end_of_day=True),
        )]
    if args.mission == "all":
        # CY3 first, as in the historical report
        return [MISSION_WINDOWS["CY3"], MISSION_WINDOWS["CY2"]]
    return [MISSION_WINDOWS[args.mission]]


def main():
    parser = argparse.ArgumentParser(
        description="Plan Earth-to-Moon transfers: LOI windows and RAAN/apogee optimisation"
    )
    parser.add_argument(
        '--mission', choices=sorted(MISSION_WINDOWS) + ['all'], default='all',
        help="Built-in mission window for the report (default: all)"
    )
    parser.add_argument('--start', help="Custom window start (ISO date or datetime, UTC)")
    parser.add_argument('--end', help="Custom window end (ISO date or datetime, UTC)")
    parser.add_argument(
        '--name', default='CUSTOM',
        help="Mission label for a custom --start/--end window (default: CUSTOM)"
    )
    parser.add_argument(
        '--crossings', action='store_true', default=False,
        help="Only list lunar equator crossings in the window"
    )
    parser.add_argument('--loi', help="Optimise a single LOI epoch (ISO datetime, UTC)")

    orbit_group = parser.add_argument_group('transfer orbit')
    orbit_group.add_argument(
        '--inclination', type=float, default=21.5,
        help="Transfer orbit inclination in degrees (default: 21.5)"
    )
    orbit_group.add_argument(
        '--omega', type=float, default=178.0,
        help="Argument of periapsis in degrees (default: 178)"
    )
    orbit_group.add_argument(
        '--perigee', type=float, default=DEFAULT_SETTINGS.perigee_alt_km,
        help="Perigee altitude in km (default: 180)"
    )
    orbit_group.add_argument(
        '--snap-to-allowed', action='store_true', default=False,
        help="Snap inclination/omega to the launch vehicle's admissible values"
    )

    search_group = parser.add_argument_group('search')
    search_group.add_argument(
        '--fast', action='store_true', default=False,
        help="Reduced search (40 iterations, 5 km tolerance, 24 seeds)"
    )
    search_group.add_argument(
        '--workers', type=int, default=1,
        help="Worker threads for the multi-start search (default: 1)"
    )
    search_group.add_argument(
        '--ephemeris', choices=['analytic', 'astronomy'], default='analytic',
        help="Lunar ephemeris source (default: analytic)"
    )

    parser.add_argument(
        '--export-csv',
        help="Write the report to a CSV file instead of stdout"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log progress to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.workers < 1:
        parser.error("--workers must be >= 1")

    if args.snap_to_allowed:
        inc = closest_allowed_inclination(args.inclination)
        omega = closest_allowed_omega(args.omega, inc)
        if (inc, omega) != (args.inclination, args.omega):
            print(f"Snapped to inclination {inc} deg, omega {omega} deg", file=sys.stderr)
        args.inclination, args.omega = inc, omega

    settings = FAST_SETTINGS if args.fast else DEFAULT_SETTINGS
    settings = replace(settings, perigee_alt_km=args.perigee)
    provider = make_provider(args.ephemeris)
    executor = ThreadPoolExecutor(max_workers=args.workers) if args.workers > 1 else None

    try:
        if args.loi:
            _run_single(args, provider, settings, executor)
            return

        windows = _report_windows(args)

        if args.crossings:
            for window in windows:
                _run_crossings(provider, window.start, window.end)
            return

        rows = []
        for window in windows:
            rows.extend(build_report(
                window, provider,
                inclination_deg=args.inclination,
                omega_deg=args.omega,
                settings=settings,
                executor=executor,
            ))

        if args.export_csv:
            n = CsvTransferReportExporter().export(rows, args.export_csv)
            print(f"Exported {n} transfer solutions to {args.export_csv}")
        else:
            write_report_csv(rows, sys.stdout)

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if executor is not None:
            executor.shutdown()


if __name__ == '__main__':
    main()

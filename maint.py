#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance tracking and service advice.

Commands:
  status     - Show what maintenance is urgent, approaching, or OK
  history    - View service records
  log        - Add a new service record
  update-km  - Update current odometer reading
  intervals  - List the maintenance intervals in use
  advice     - Get typical service intervals for an area (AI or offline)
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Iterable, List, Optional

from carservice import (
    Recommendation,
    ServiceArea,
    ServiceInterval,
    ServiceRecord,
    ServiceStatus,
    Vehicle,
    get_interval,
    load_vehicle,
    save_current_km,
    save_service_record,
)
from carservice.advisory import AdvisoryError, AdvisoryResult, AdvisoryService, StaticAdvisoryProvider
from carservice.config import ConfigError, build_provider, load_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format odometer reading for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"{cost:,.2f}" if cost is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_last_done(record: Optional[ServiceRecord]) -> str:
    """Format a record as 'date @ km'."""
    if record is None or (record.date is None and record.km is None):
        return "-"
    parts = []
    if record.date:
        parts.append(record.date)
    if record.km is not None:
        parts.append(f"{record.km:,.0f} km")
    return " @ ".join(parts)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


# =============================================================================
# Status command
# =============================================================================


def make_status_table(
    items: List[Recommendation], vehicle: Vehicle, catalog: Iterable[ServiceInterval]
) -> List[List[str]]:
    """Convert recommendations to table rows."""
    catalog = list(catalog)
    rows = []
    for item in items:
        interval = get_interval(item.area, catalog)
        rows.append(
            [
                item.title,
                interval.describe() if interval else "-",
                format_last_done(vehicle.get_last_service(item.area)),
                item.description,
            ]
        )
    return rows


def cmd_status(args, config):
    """Show what maintenance is urgent, approaching, or OK."""
    vehicle = load_vehicle(args.vehicle_file)
    analysis = vehicle.analyze(catalog=config.intervals)

    print(f"Vehicle: {analysis.title}")
    print(f"Current odometer: {analysis.current_km:,.0f} km (as of {vehicle.as_of_date})")
    print(f"Service records: {len(vehicle.records)}")
    print()

    headers = ["Area", "Interval", "Last Done", "Assessment"]
    sections = [
        ("DO NOW:", analysis.do_now),
        ("CHECK SOON:", analysis.check_soon),
        ("OK:", [i for i in analysis.items if i.status is ServiceStatus.OK]),
    ]
    for heading, items in sections:
        if items:
            print(heading)
            print(tabulate(make_status_table(items, vehicle, config.intervals), headers=headers, tablefmt="simple"))
            print()

    unknown = [i for i in analysis.items if i.status is ServiceStatus.UNKNOWN]
    if unknown:
        print("UNKNOWN (no history or no fixed interval):")
        for item in unknown:
            print(f"  {item.title}: {item.description}")
            print(f"    Now: {item.next_action_hint}")
            print(f"    Soon: {item.deferred_check_hint}")
        print()

    for item in analysis.do_now + analysis.check_soon:
        print(f"{item.title}: {item.next_action_hint}")

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[ServiceRecord]) -> List[List[str]]:
    """Convert service records to table rows."""
    rows = []
    for record in records:
        rows.append(
            [
                record.date or "-",
                format_km(record.km),
                record.area.display_name,
                format_cost(record.cost),
                truncate(record.notes),
            ]
        )
    return rows


def cmd_history(args, config):
    """View service records."""
    vehicle = load_vehicle(args.vehicle_file)
    records = vehicle.get_records_sorted(sort_by=args.sort, reverse=not args.asc)

    if args.area:
        area = ServiceArea.parse(args.area)
        records = [r for r in records if r.area is area]

    if args.since:
        records = [r for r in records if r.date and r.date >= args.since]

    total_cost = sum(r.cost for r in records if r.cost is not None)

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Current odometer: {vehicle.current_km:,.0f} km (as of {vehicle.as_of_date})")
    print(f"Total records: {len(vehicle.records)}")
    if args.area or args.since:
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {total_cost:,.2f}")
    print()

    if not records:
        print("No service records found.")
        return 0

    headers = ["Date", "Km", "Area", "Cost", "Notes"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args, config):
    """Add a new service record."""
    record = ServiceRecord(
        area=ServiceArea.parse(args.area),
        date=args.date or date.today().isoformat(),
        km=args.km,
        notes=args.notes,
        cost=args.cost,
    )

    print(f"Adding service record to {args.vehicle_file}:")
    print(f"  Area:  {record.area.display_name}")
    print(f"  Date:  {record.date}")
    if record.km is not None:
        print(f"  Km:    {record.km:,.0f}")
    if record.notes:
        print(f"  Notes: {record.notes}")
    if record.cost:
        print(f"  Cost:  {record.cost:.2f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_service_record(args.vehicle_file, record)
    print("Record saved.")
    return 0


# =============================================================================
# Update km command
# =============================================================================


def cmd_update_km(args, config):
    """Update current odometer reading."""
    vehicle = load_vehicle(args.vehicle_file)

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Current odometer: {vehicle.current_km:,.0f} km")
    print(f"New odometer:     {args.km:,.0f} km")
    print()

    if args.km < vehicle.current_km:
        print("Warning: new reading is lower than the current one")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_current_km(args.vehicle_file, args.km, args.date)
    print("Odometer updated.")
    return 0


# =============================================================================
# Intervals command
# =============================================================================


def make_intervals_table(catalog: Iterable[ServiceInterval]) -> List[List[str]]:
    """Convert interval definitions to table rows."""
    rows = []
    for interval in catalog:
        lead = []
        if interval.every_km is not None and interval.approaching_km:
            lead.append(f"{interval.approaching_km:,} km")
        if interval.every_months is not None and interval.approaching_months:
            lead.append(f"{interval.approaching_months} mo")
        rows.append(
            [
                interval.area.display_name,
                interval.area.slug,
                interval.describe() if interval.has_fixed_interval else "wear-based",
                " / ".join(lead) if lead else "-",
            ]
        )
    return rows


def cmd_intervals(args, config):
    """List the maintenance intervals in use."""
    headers = ["Area", "Key", "Every", "Warn Before"]
    print(tabulate(make_intervals_table(config.intervals), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Advice command
# =============================================================================


def format_advice(result: AdvisoryResult) -> List[str]:
    """Render an advisory result as printable lines."""
    lines = [result.summary, ""]
    lines.extend(result.key_intervals)
    if result.sources:
        lines.append("")
        lines.append("Sources:")
        lines.extend(f"  {s.title}: {s.url}" for s in result.sources)
    if result.safety_note:
        lines.append("")
        lines.append(result.safety_note)
    return lines


def cmd_advice(args, config):
    """Get typical service intervals for an area."""
    vehicle = load_vehicle(args.vehicle_file)
    if vehicle.vehicle_id is None and not args.offline and config.ai_enabled:
        print("Error: vehicle file needs an 'id' to cache AI advice (or use --offline)")
        return 1

    provider = StaticAdvisoryProvider() if args.offline else build_provider(config)
    car = vehicle.car
    try:
        with AdvisoryService(provider) as service:
            result = service.get_advice(
                vehicle.vehicle_id or 0, car.brand, car.model, car.year, car.fuel_type, args.area
            )
    except AdvisoryError as e:
        print(f"Error: advice unavailable: {e}")
        print("Use the 'status' command for rules-based guidance.")
        return 1

    print("\n".join(format_advice(result)))
    return 0


# =============================================================================
# Main
# =============================================================================


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance tracker and service advisor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/corolla.yaml status
  %(prog)s vehicles/corolla.yaml history --area engine_oil
  %(prog)s vehicles/corolla.yaml history --since 2024-01-01
  %(prog)s vehicles/corolla.yaml log engine_oil --km 118000 --cost 320
  %(prog)s vehicles/corolla.yaml update-km 121500
  %(prog)s vehicles/corolla.yaml intervals
  %(prog)s vehicles/corolla.yaml advice brake_fluid
  %(prog)s vehicles/corolla.yaml advice engine_oil --offline
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration YAML (default: $CARSERVICE_CONFIG or ./carservice.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show what maintenance is urgent, approaching, or OK")

    history_parser = subparsers.add_parser("history", help="View service records")
    history_parser.add_argument(
        "--area",
        type=str,
        help="Show only one area (e.g., 'engine_oil', 'brake_fluid')",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "km", "area"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    log_parser = subparsers.add_parser("log", help="Add a new service record")
    log_parser.add_argument("area", type=str, help="Area key (e.g., 'engine_oil')")
    log_parser.add_argument("--date", type=str, help="Service date in YYYY-MM-DD format (default: today)")
    log_parser.add_argument("--km", type=float, help="Odometer reading at time of service")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument("--dry-run", action="store_true", help="Show what would be added without saving")

    update_km_parser = subparsers.add_parser("update-km", help="Update current odometer reading")
    update_km_parser.add_argument("km", type=float, help="Current odometer reading")
    update_km_parser.add_argument("--date", type=str, help="Date of the reading (YYYY-MM-DD)")
    update_km_parser.add_argument("--dry-run", action="store_true", help="Show what would be updated without saving")

    subparsers.add_parser("intervals", help="List the maintenance intervals in use")

    advice_parser = subparsers.add_parser("advice", help="Get typical service intervals for an area")
    advice_parser.add_argument("area", type=str, help="Area key (e.g., 'engine_oil')")
    advice_parser.add_argument(
        "--offline",
        action="store_true",
        help="Use built-in rule-of-thumb advice instead of the AI provider",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    handlers = {
        "status": cmd_status,
        "history": cmd_history,
        "log": cmd_log,
        "update-km": cmd_update_km,
        "intervals": cmd_intervals,
        "advice": cmd_advice,
    }
    try:
        return handlers[args.command](args, config)
    except ValueError as e:
        # Unknown area names and malformed dates
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

#!/usr/bin/env python3
"""
Endurance Analytics CLI.

Training load, efficiency and race planning over JSON exports.

Usage:
    endurance load --workouts workouts.json --days 14
    endurance zones --max-hr 190 --rest-hr 50
    endurance efficiency --workouts workouts.json --as-of 2026-06-01
    endurance decoupling --samples session.json
    endurance plan --workouts workouts.json --distance 70.3 --goal pr
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Type

from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import get_settings
from .data.qualification_standards import CHAMPIONSHIP_LABELS, get_reference_standards
from .exceptions import EnduranceAnalyticsError, ThresholdValidationError
from .metrics.decoupling import calculate_decoupling, decoupling_color, decoupling_label
from .metrics.efficiency import ef_series, ef_trend
from .metrics.fitness import calculate_load_series, describe_form
from .metrics.load import LoadThresholds
from .metrics.threshold import estimate_lactate_thresholds
from .metrics.units import format_pace, format_time
from .models.race_plan import (
    AthleteClassification,
    CourseProfile,
    GoalType,
    RaceConditions,
    RaceDistance,
    RacePlan,
    WaterType,
    WindCondition,
)
from .models.records import ManualLog, SessionMetric, Sport, Workout, parse_records
from .services.race_plan_service import get_race_plan_service

console = Console()
logger = logging.getLogger(__name__)


def format_tsb_rich(tsb: float) -> Text:
    """Format TSB with rich colors."""
    status = describe_form(tsb)
    if tsb > 0:
        color = "green"
    elif tsb > -25:
        color = "yellow"
    else:
        color = "red"
    return Text(f"{tsb:+.1f} ({status.title()})", style=color)


def load_records(path: str, model: Type[BaseModel]) -> List[BaseModel]:
    """Read a JSON list of record dicts and validate it into models."""
    file_path = Path(path)
    if not file_path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        sys.exit(1)
    with open(file_path, encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        console.print(f"[red]{path} must contain a JSON list of records[/red]")
        sys.exit(1)
    return parse_records(model, rows)


def _reference_thresholds() -> LoadThresholds:
    settings = get_settings()
    return LoadThresholds(
        ftp_watts=settings.reference_ftp_watts,
        run_threshold_pace_sec_per_km=settings.reference_run_threshold_pace_sec_per_km,
        css_sec_per_100m=settings.reference_css_sec_per_100m,
    )


def cmd_load(args):
    """Show CTL/ATL/TSB for the most recent days."""
    settings = get_settings()
    workouts = load_records(args.workouts, Workout)

    series = calculate_load_series(
        workouts,
        _reference_thresholds(),
        ctl_time_constant=settings.ctl_time_constant,
        atl_time_constant=settings.atl_time_constant,
        end_date=args.as_of,
    )
    if not series:
        console.print("[yellow]No workouts found.[/yellow]")
        return

    table = Table(title="Training Load", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("TSS", justify="right")
    table.add_column("CTL", justify="right", style="green")
    table.add_column("ATL", justify="right", style="red")
    table.add_column("TSB", justify="right")

    for point in series[-args.days:]:
        table.add_row(
            point.date.isoformat(),
            f"{point.daily_tss:.0f}",
            f"{point.ctl:.1f}",
            f"{point.atl:.1f}",
            format_tsb_rich(point.tsb),
        )

    console.print()
    console.print(table)
    console.print()


def cmd_zones(args):
    """Show lactate thresholds and the heart rate zone table."""
    settings = get_settings()
    try:
        estimate = estimate_lactate_thresholds(
            args.max_hr,
            args.rest_hr,
            lt1_fraction=settings.lt1_hrr_fraction,
            lt2_fraction=settings.lt2_hrr_fraction,
            zone1_fraction=settings.zone1_ceiling_fraction,
            zone4_fraction=settings.zone4_ceiling_fraction,
        )
    except ThresholdValidationError as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(1)

    console.print()
    console.print(Panel(
        f"LT1 (aerobic): [bold]{estimate.lt1}[/bold] bpm\n"
        f"LT2 (anaerobic): [bold]{estimate.lt2}[/bold] bpm",
        title="Lactate Thresholds",
    ))

    table = Table(title="Heart Rate Zones", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Name")
    table.add_column("Range", style="green")
    table.add_column("Description")
    for zone in estimate.zones:
        table.add_row(
            str(zone.zone),
            Text(zone.name, style=zone.color),
            f"{zone.min_hr}-{zone.max_hr} bpm",
            zone.description,
        )
    console.print(table)
    console.print()


def cmd_efficiency(args):
    """Show EF trend per sport."""
    settings = get_settings()
    workouts = load_records(args.workouts, Workout)
    as_of = args.as_of or date.today()

    table = Table(
        title=f"Efficiency Factor ({settings.efficiency_trend_window_days}-day windows)",
        box=box.ROUNDED,
    )
    table.add_column("Sport", style="cyan")
    table.add_column("Sessions", justify="right")
    table.add_column("Latest EF", justify="right")
    table.add_column("Trend", justify="right")

    for sport in (Sport.SWIM, Sport.BIKE, Sport.RUN):
        points = ef_series(workouts, sport=sport)
        trend = ef_trend(
            workouts,
            as_of=as_of,
            window_days=settings.efficiency_trend_window_days,
            sport=sport,
        )
        if trend is None:
            trend_text = Text("-", style="dim")
        else:
            trend_text = Text(f"{trend:+.1f}%", style="green" if trend >= 0 else "red")
        table.add_row(
            sport.value,
            str(len(points)),
            f"{points[-1][1]:.2f}" if points else "-",
            trend_text,
        )

    console.print()
    console.print(table)
    console.print()


def cmd_decoupling(args):
    """Show aerobic decoupling for one session."""
    samples = load_records(args.samples, SessionMetric)
    pct = calculate_decoupling(samples)

    console.print()
    if pct is None:
        console.print("[yellow]Not enough samples to calculate decoupling (need 10+).[/yellow]")
        console.print()
        return

    color = decoupling_color(pct)
    console.print(f"Decoupling: [{color}]{pct:.1f}%[/{color}] ({decoupling_label(pct)})")
    console.print()


def _build_conditions(args):
    values = {
        "temp_high_c": args.temp_high,
        "humidity_pct": args.humidity,
        "altitude_m": args.altitude,
        "water_temp_c": args.water_temp,
    }
    if args.wetsuit is not None:
        values["wetsuit_legal"] = args.wetsuit == "yes"
    if args.water_type:
        values["water_type"] = WaterType(args.water_type)
    if args.wind:
        values["wind"] = WindCondition(args.wind)
    if args.course_profile:
        values["course_profile"] = CourseProfile(args.course_profile)

    if all(value is None for value in values.values()):
        return None
    return RaceConditions(**{k: v for k, v in values.items() if v is not None})


def print_plan_summary(plan: RacePlan):
    """Print a compact race plan summary."""
    pacing = plan.pacing_plan

    console.print()
    console.print(Panel(
        f"[bold]{plan.race_name}[/bold] - {plan.race_distance.value} ({plan.goal_type.value})",
        title="Race Plan",
    ))

    table = Table(title="Pacing", box=box.ROUNDED)
    table.add_column("Leg", style="cyan")
    table.add_column("Target")
    table.add_column("Split", justify="right")

    table.add_row("Swim", f"{format_pace(pacing.swim.target_pace_per_100m)}/100m",
                  format_time(pacing.swim.estimated_split_seconds))
    table.add_row("T1", "", format_time(pacing.transitions.t1_seconds))
    table.add_row("Bike", f"{pacing.bike.target_power_watts}W",
                  format_time(pacing.bike.estimated_split_seconds))
    table.add_row("T2", "", format_time(pacing.transitions.t2_seconds))
    table.add_row("Run", f"{format_pace(pacing.run.target_pace_sec_per_km)}/km",
                  format_time(pacing.run.estimated_split_seconds))
    console.print(table)

    estimate = pacing.total_estimate
    console.print(
        f"Finish: [green]{format_time(estimate.optimistic_seconds)}[/green] / "
        f"[bold]{format_time(estimate.realistic_seconds)}[/bold] / "
        f"[yellow]{format_time(estimate.conservative_seconds)}[/yellow]"
    )

    summary = plan.nutrition_plan.summary
    console.print(
        f"Fueling: {summary.total_carbs_grams}g carbs, {summary.total_fluid_ml}ml fluid, "
        f"{summary.total_sodium_mg}mg sodium"
    )

    readiness = plan.qualification_readiness
    if readiness is not None:
        label = CHAMPIONSHIP_LABELS.get(
            plan.qualification_target.championship if plan.qualification_target else "",
            "Qualification",
        )
        color = "green" if readiness.ready else "yellow"
        console.print()
        console.print(Panel(readiness.explanation, title=label, border_style=color))
    console.print()


def cmd_plan(args):
    """Generate a race plan from workout and log exports."""
    workouts = load_records(args.workouts, Workout)
    logs = load_records(args.logs, ManualLog) if args.logs else []

    classification = (
        AthleteClassification.PROFESSIONAL if args.pro else AthleteClassification.AGE_GROUPER
    )
    service = get_race_plan_service()
    plan = service.generate_full_race_plan(
        workouts,
        logs,
        distance=RaceDistance(args.distance),
        goal_type=GoalType(args.goal),
        race_name=args.name,
        conditions=_build_conditions(args),
        classification=classification,
        standards=get_reference_standards(),
        gender=args.gender,
        age_group=args.age_group,
        race_date=args.race_date,
        as_of=args.as_of,
    )

    if args.json:
        sys.stdout.write(plan.model_dump_json(indent=2) + "\n")
        return
    print_plan_summary(plan)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Endurance Analytics - training load and race planning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  endurance load --workouts workouts.json --days 14
  endurance zones --max-hr 190 --rest-hr 50
  endurance efficiency --workouts workouts.json
  endurance decoupling --samples session.json
  endurance plan --workouts workouts.json --logs logs.json --distance 140.6 \\
      --goal qualify_im_kona --gender male --age-group 40-44
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Load command
    load_p = subparsers.add_parser("load", help="Show CTL/ATL/TSB")
    load_p.add_argument("--workouts", required=True, help="Workouts JSON file")
    load_p.add_argument(
        "--days", "-d", type=int, default=14, help="Number of days to show"
    )
    load_p.add_argument(
        "--as-of", type=date.fromisoformat, help="Extend the series to this date (YYYY-MM-DD)"
    )

    # Zones command
    zones_p = subparsers.add_parser("zones", help="Show lactate thresholds and HR zones")
    zones_p.add_argument("--max-hr", type=int, required=True, help="Maximum heart rate")
    zones_p.add_argument("--rest-hr", type=int, required=True, help="Resting heart rate")

    # Efficiency command
    eff_p = subparsers.add_parser("efficiency", help="Show EF trends per sport")
    eff_p.add_argument("--workouts", required=True, help="Workouts JSON file")
    eff_p.add_argument("--as-of", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")

    # Decoupling command
    dec_p = subparsers.add_parser("decoupling", help="Show aerobic decoupling for a session")
    dec_p.add_argument("--samples", required=True, help="Session samples JSON file")

    # Plan command
    plan_p = subparsers.add_parser("plan", help="Generate a race plan")
    plan_p.add_argument("--workouts", required=True, help="Workouts JSON file")
    plan_p.add_argument("--logs", help="Manual logs JSON file")
    plan_p.add_argument(
        "--distance",
        required=True,
        choices=[d.value for d in RaceDistance if d != RaceDistance.CUSTOM],
        help="Race distance",
    )
    plan_p.add_argument(
        "--goal",
        default=GoalType.FINISH.value,
        choices=[g.value for g in GoalType],
        help="Race goal",
    )
    plan_p.add_argument("--name", default="Race", help="Race name")
    plan_p.add_argument("--pro", action="store_true", help="Professional athlete")
    plan_p.add_argument("--gender", choices=["male", "female"], help="Gender (qualification lookup)")
    plan_p.add_argument("--age-group", help="Age group, e.g. 40-44")
    plan_p.add_argument("--race-date", type=date.fromisoformat, help="Race date (YYYY-MM-DD)")
    plan_p.add_argument("--as-of", type=date.fromisoformat, help="Ignore data after this date")
    plan_p.add_argument("--temp-high", type=float, help="Expected high temperature (C)")
    plan_p.add_argument("--humidity", type=float, help="Expected humidity (%%)")
    plan_p.add_argument("--altitude", type=float, help="Course altitude (m)")
    plan_p.add_argument("--water-temp", type=float, help="Water temperature (C)")
    plan_p.add_argument("--wetsuit", choices=["yes", "no"], help="Wetsuit legal")
    plan_p.add_argument("--water-type", choices=[w.value for w in WaterType])
    plan_p.add_argument("--wind", choices=[w.value for w in WindCondition])
    plan_p.add_argument("--course-profile", choices=[c.value for c in CourseProfile])
    plan_p.add_argument("--json", action="store_true", help="Print the full plan as JSON")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Route to appropriate command
    try:
        if args.command == "load":
            cmd_load(args)
        elif args.command == "zones":
            cmd_zones(args)
        elif args.command == "efficiency":
            cmd_efficiency(args)
        elif args.command == "decoupling":
            cmd_decoupling(args)
        elif args.command == "plan":
            cmd_plan(args)
        else:
            parser.print_help()
    except EnduranceAnalyticsError as e:
        logger.debug("Command failed: %r", e)
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI entry point for the dater library."""

import argparse
import sys
from typing import Optional

from .config import settings
from .formatter import DateFormatter
from .utils.exceptions import DaterError
from .utils.logging import setup_logging


def _describe_diff(delta) -> str:
    """Render a relativedelta as '+1y 0m 1d 00:00:00'."""
    parts = [delta.years, delta.months, delta.days, delta.hours, delta.minutes, delta.seconds]
    sign = "-" if any(part < 0 for part in parts) else "+"
    years, months, days, hours, minutes, seconds = (abs(part) for part in parts)
    return f"{sign}{years}y {months}m {days}d {hours:02d}:{minutes:02d}:{seconds:02d}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dater",
        description="Dater - format, parse and compare dates",
    )
    parser.add_argument("--locale", type=str, help="Locale such as de_DE (overrides config)")
    parser.add_argument(
        "--timezone", type=str, help="Timezone such as Europe/Berlin (overrides config)"
    )
    parser.add_argument(
        "--profile", type=str, help="Formatter profile from the profiles file"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("date", "Format a date with an ICU pattern"),
        ("datetime", "Format a date and time with an ICU pattern"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("value", nargs="?", default="now", help="Date (default: now)")
        command.add_argument("--pattern", type=str, help="ICU pattern such as 'EEEE, dd. MMMM yyyy'")

    command = commands.add_parser("format", help="Format a date with a 'd.m.Y H:i' pattern")
    command.add_argument("value", nargs="?", default="now", help="Date (default: now)")
    command.add_argument("--pattern", type=str, default="d.m.Y H:i", help="Pattern such as 'Y-m-d'")

    command = commands.add_parser("in-past", help="Check if a date is in the past")
    command.add_argument("date", help="Date to check")
    command.add_argument("--current", default="now", help="Reference date (default: now)")
    command.add_argument(
        "--same-time-is-past", action="store_true", help="Count the same instant as past"
    )

    command = commands.add_parser("in-between", help="Check if a date is within a range")
    command.add_argument("date_from", help="Start of the range")
    command.add_argument("date_to", help="End of the range")
    command.add_argument("--current", default="now", help="Date to check (default: now)")
    command.add_argument("--yearly", action="store_true", help="Range recurs every year")

    command = commands.add_parser("diff", help="Difference between a date and now")
    command.add_argument("date", help="Target date")
    command.add_argument("--current", default="now", help="Reference date (default: now)")

    command = commands.add_parser("month", help="Convert between month names and numbers")
    command.add_argument("month", help="Month number (1-12) or name")
    command.add_argument("--pattern", default="MMMM", help="M, MM, MMM or MMMM")

    command = commands.add_parser("weekday", help="Convert between weekday names and numbers")
    command.add_argument("weekday", help="Weekday number (0-7) or name")
    command.add_argument("--pattern", default="EEEE", help="E, EE, EEE, EEEE or EEEEE")

    command = commands.add_parser("now", help="Show the current time")
    command.add_argument("--pattern", type=str, default="Y-m-d H:i:s T", help="Pattern")

    return parser


def _run(args: argparse.Namespace, formatter: DateFormatter) -> Optional[str]:
    """Execute one command and return its output line."""
    if args.command == "date":
        return formatter.date(args.value, pattern=args.pattern)
    if args.command == "datetime":
        return formatter.date_time(args.value, pattern=args.pattern)
    if args.command == "format":
        return formatter.format(args.value, pattern=args.pattern)
    if args.command == "in-past":
        result = formatter.in_past(args.date, args.current, args.same_time_is_past)
        return "yes" if result else "no"
    if args.command == "in-between":
        result = formatter.in_between(
            args.date_from, args.date_to, args.current, yearly=args.yearly
        )
        return "yes" if result else "no"
    if args.command == "diff":
        return _describe_diff(formatter.diff(args.date, args.current))
    if args.command == "month":
        if args.month.strip().isdigit():
            return formatter.to_month(args.month, pattern=args.pattern)
        number = formatter.to_month_number(args.month)
        return None if number is None else str(number)
    if args.command == "weekday":
        if args.weekday.strip().isdigit():
            return formatter.to_weekday(int(args.weekday), pattern=args.pattern)
        number = formatter.to_weekday_number(args.weekday)
        return None if number is None else str(number)
    if args.command == "now":
        return formatter.now().format(args.pattern)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = _build_parser().parse_args(argv)

    log_level = "DEBUG" if args.verbose else settings.log_level
    try:
        logger = setup_logging(level=log_level, log_file=settings.log_file)
    except DaterError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        formatter = DateFormatter.from_settings(settings, profile=args.profile)
    except DaterError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.locale:
        formatter = formatter.with_locale(args.locale)
    if args.timezone:
        formatter = formatter.with_timezone(args.timezone)

    output = _run(args, formatter)
    if output is None:
        logger.error("Invalid input")
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

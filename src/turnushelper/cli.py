"""Command-line interface for the turnushelper presence report tool."""

import argparse
import json
import logging
import sys
from datetime import date
from typing import Optional

from turnushelper.config import ReportConfig
from turnushelper.domain.errors import TurnusError
from turnushelper.logging_setup import configure_logging
from turnushelper.output.pdf_generator import PDFReportGenerator
from turnushelper.output.serializers import reports_to_dicts
from turnushelper.output.text_generator import TextReportGenerator
from turnushelper.scheduling.absences import AbsenceRegistry
from turnushelper.scheduling.runner import ReportRunner, today_utc
from turnushelper.storage.loader import load_schedules
from turnushelper.validation.validator import ReportValidator

logger = logging.getLogger(__name__)


def ask_for_days() -> int:
    """Prompt for the number of days to show."""
    try:
        answer = input("How many days do you want to see? ")
    except EOFError:
        raise ValueError("No number of days given")
    try:
        return int(answer.strip())
    except ValueError:
        raise ValueError(f"Not a number of days: {answer.strip()!r}")


def pause() -> None:
    """Wait for the user to press enter."""
    try:
        input("\nPress enter to continue...")
    except EOFError:
        pass


def run_report(
    config: ReportConfig,
    days: Optional[int],
    start_date: Optional[date] = None,
    output_format: str = "text",
    pdf_path: Optional[str] = None,
) -> None:
    """Load schedules and absences, then print reports for a range of days.

    Args:
        config: Paths and report settings.
        days: Number of days to show. Prompts when None.
        start_date: First day of the range. Defaults to today (UTC).
        output_format: "text" or "json".
        pdf_path: Also write the reports to this PDF file when given.
    """
    print("Reading input...")
    schedules = load_schedules(config.schedules_dir)
    registry = AbsenceRegistry.load(config.absences_path)
    logger.info("Loaded %d absences", len(registry))

    if days is None:
        days = ask_for_days()

    runner = ReportRunner(config=config)
    reports, stats = runner.build_reports_with_stats(
        schedules, registry, start_date or today_utc(), days
    )
    logger.debug("Report stats: %s", stats)

    result = ReportValidator().validate_all(reports, schedules)
    for warning in result.warnings:
        logger.info(warning)
    for error in result.errors:
        logger.error(str(error))

    if output_format == "json":
        print(json.dumps(reports_to_dicts(reports), indent=2, ensure_ascii=False))
    else:
        print(TextReportGenerator().generate_to_string(reports), end="")

    if pdf_path:
        PDFReportGenerator().generate(reports, pdf_path)
        logger.info("PDF written to %s", pdf_path)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turnus Helper - Rotation presence reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report                     Ask how many days to show
  %(prog)s report -n 7                Show the next 7 days
  %(prog)s report -n 7 -s             Same, without pausing at the end
  %(prog)s report -n 3 --format json  Print reports as JSON
  %(prog)s report -n 14 --pdf out.pdf Also write a PDF
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    report_parser = subparsers.add_parser("report", help="Print presence reports")
    report_parser.add_argument(
        "--number-of-days", "-n",
        type=int,
        dest="days",
        help="Number of future days to print (prompts if omitted)",
    )
    report_parser.add_argument(
        "--silent", "-s",
        action="store_true",
        help="Do not pause at the end of program execution",
    )
    report_parser.add_argument(
        "--schedules",
        type=str,
        help="Directory of schedule files (default: turnus)",
    )
    report_parser.add_argument(
        "--absences",
        type=str,
        help="Absence file (default: fri.yml)",
    )
    report_parser.add_argument(
        "--start",
        type=_parse_date,
        help="First date to report, YYYY-MM-DD (default: today, UTC)",
    )
    report_parser.add_argument(
        "--format", "-f",
        type=str,
        default="text",
        choices=["text", "json"],
        help="Output format (default: text)",
    )
    report_parser.add_argument(
        "--pdf",
        type=str,
        help="Also write the reports to a PDF file",
    )
    report_parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "report":
        parser.print_help()
        return 1

    exit_code = 0
    try:
        config = ReportConfig.from_env()
        if args.schedules:
            config.schedules_dir = args.schedules
        if args.absences:
            config.absences_path = args.absences
        if args.log_level:
            config.log_level = args.log_level
        configure_logging(config.log_level)

        run_report(config, args.days, args.start, args.format, args.pdf)
    except (TurnusError, ValueError) as e:
        logger.error("Report failed: %s", e)
        print(f"Failed: {e}")
        exit_code = 1

    if not args.silent:
        pause()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())

import argparse
import logging
import sys

from court_booking import run

# --- Logging Setup ---

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Configures logging to stderr with local time."""
    import time

    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    # Use local time instead of UTC for logging
    formatter.converter = time.localtime
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler],
    )


def _split_times(value: str):
    return [t.strip() for t in value.split(",") if t.strip()]


def parse_arguments(argv=None):
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(description="Check court availability and prepare a booking.")
    parser.add_argument("--court-id", type=int, required=True, help="Court to check.")
    parser.add_argument("--date", type=str, help="Date in YYYY-MM-DD format. Defaults to today.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--select", type=_split_times, default=[], help="Comma-separated slot start times, e.g. 08:00,09:00.")
    group.add_argument("--start", type=str, help="Start time of a contiguous booking, used with --duration.")
    parser.add_argument("--duration", type=int, help="Hours to book from --start. Only valid with --start. Defaults to 1.")
    parser.add_argument("--rate", type=float, default=0, help="Hourly rate of the court, used for the total price.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")
    args = parser.parse_args(argv)
    if args.duration is not None and not args.start:
        parser.error("--duration can only be used with --start")
    if args.duration is None:
        args.duration = 1
    return args


def main():
    args = parse_arguments()
    setup_logging(args.verbose)
    run.run(
        court_id=args.court_id,
        date=args.date,
        selected=args.select,
        start_time=args.start,
        duration=args.duration,
        hourly_rate=args.rate,
    )

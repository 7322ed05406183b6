#!/usr/bin/env python3
"""
dayplan - today's reminders, calendar and analytics from the terminal.
"""

import argparse
import logging
import sys

from dayplan.app import build_platform
from dayplan.core.config import load_config, get_default_config_path, get_log_dir
from dayplan.core.exceptions import DayplanError
from dayplan.core.models import AnalyticsPeriod
from dayplan.commands import ActCommand, CalendarCommand, AnalyticsCommand


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dayplan",
        description="Today's reminders, calendar and analytics on top of Apple EventKit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dayplan act                     # Today's incomplete reminders
  dayplan act --toggle <id>       # Toggle a reminder, then show the list
  dayplan calendar --date 2024-03-15
  dayplan analytics --period quarter
  dayplan tui                     # Home / Act / Calendar / Analytics / Settings
        """
    )

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {get_default_config_path()})',
        default=None
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    act_parser = subparsers.add_parser('act', help="List today's reminders")
    act_parser.add_argument(
        '--toggle',
        metavar='ID',
        help='Toggle completion of the reminder with this identifier'
    )
    act_parser.add_argument(
        '--ids',
        action='store_true',
        help='Show reminder identifiers'
    )

    calendar_parser = subparsers.add_parser('calendar', help="List a day's events")
    calendar_parser.add_argument(
        '--date',
        help='Date to show (YYYY-MM-DD, default: today)'
    )

    analytics_parser = subparsers.add_parser('analytics', help='Show the analytics chart')
    analytics_parser.add_argument(
        '--period',
        choices=[p.value for p in AnalyticsPeriod],
        help='Period to chart (default: from config)'
    )

    subparsers.add_parser('tui', help='Open the terminal UI')

    return parser


def attach_log_file() -> logging.FileHandler:
    """Copy dayplan's log records into logs/dayplan.log under the working directory."""
    handler = logging.FileHandler(get_log_dir() / "dayplan.log", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger("dayplan")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def main(argv=None):
    """Main entry point for dayplan."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)

        if args.verbose:
            handler = attach_log_file()
            print(f"Using config: {args.config or get_default_config_path()}")
            print(f"Logging to: {handler.baseFilename}")
            logging.getLogger(__name__).info(f"Running '{args.command}'")

        if args.command == 'act':
            cmd = ActCommand(config, build_platform(config), verbose=args.verbose)
            success = cmd.run(toggle_id=args.toggle, show_ids=args.ids)

        elif args.command == 'calendar':
            cmd = CalendarCommand(config, build_platform(config), verbose=args.verbose)
            success = cmd.run(date_str=args.date)

        elif args.command == 'analytics':
            cmd = AnalyticsCommand(config, verbose=args.verbose)
            success = cmd.run(period_str=args.period)

        elif args.command == 'tui':
            from dayplan.tui import run_tui
            success = run_tui(build_platform(config), config, config_path=args.config)

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except DayplanError as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())

"""CLI entry point for pomolog."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import Config, ConfigError, parse_date
from .store import StoreError


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(message)s",
        level=level,
        stream=sys.stderr,
    )


def _handle_start(args: argparse.Namespace, config: Config) -> int:
    """Handle start command."""
    from .engine import CountdownEngine
    from .schedule import build_schedule
    from .session import SessionOrchestrator
    from .status import FileStatusSink
    from .store import RecordStore
    from .terminal import ConsolePrompter, TerminalKeys

    try:
        config.log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log directory {config.log_dir}: {e}")
        return 1

    engine = CountdownEngine(
        keys=TerminalKeys(),
        status=FileStatusSink(config.status_file),
        tick_interval=config.tick_interval,
    )
    orchestrator = SessionOrchestrator(
        engine=engine,
        store=RecordStore(config.log_dir),
        prompter=ConsolePrompter(),
    )

    try:
        report = orchestrator.run(
            build_schedule(config),
            project=args.project or "",
            deep_work=config.deep_work,
        )
    except StoreError as e:
        print(f"Session log error: {e}")
        return 1

    print(report.message())
    return 0


def _handle_analyze(args: argparse.Namespace, config: Config) -> int:
    """Handle analyze command."""
    from .analyzer import LogAnalyzer
    from .formatter import format_public_summary, format_totals, write_summary_csv

    start_date = parse_date(args.start_date) if args.start_date else None
    end_date = parse_date(args.end_date) if args.end_date else None
    if start_date and end_date and start_date > end_date:
        raise ConfigError(f"Start date {start_date} is after end date {end_date}")

    analyzer = LogAnalyzer(config.log_dir, start_date=start_date, end_date=end_date)
    print(f"Analyzing pomodoro logs from {config.log_dir}...")

    if not analyzer.log_files():
        print("No log files found for the specified date range.")
        return 0

    if args.public_summary:
        output_path = config.analyzer.public_output
        content = format_public_summary(analyzer.public_summary())
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            print(f"Cannot write {output_path}: {e}")
            return 1
        print(f"Public summary written to {output_path}")
        print("You can safely share this file without revealing task details.")
        return 0

    summaries = analyzer.summarize()
    output_path = config.analyzer.output_file
    try:
        write_summary_csv(summaries, output_path)
    except OSError as e:
        print(f"Cannot write {output_path}: {e}")
        return 1
    print(f"Analysis complete! Summary written to {output_path}")
    print(format_totals(summaries))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pomolog",
        description="Terminal pomodoro timer with daily session logs and analytics",
    )
    subparsers = parser.add_subparsers(dest="command")

    # start subcommand
    start_parser = subparsers.add_parser("start", help="Run pomodoro sessions")
    start_parser.add_argument(
        "--work", "-w", type=int, default=None,
        help="Work duration in minutes (default: 25)"
    )
    start_parser.add_argument(
        "--break", "-b", type=int, default=None, dest="break_minutes",
        help="Short break duration in minutes (default: 5)"
    )
    start_parser.add_argument(
        "--long-break", "-l", type=int, default=None, dest="long_break",
        help="Long break duration in minutes (default: 15)"
    )
    start_parser.add_argument(
        "--sessions", "-n", type=int, default=None,
        help="Sessions before a long break (default: 4)"
    )
    start_parser.add_argument(
        "--deep-work", action="store_true", dest="deep_work",
        help="Run the fixed deep-work schedule (3 sets of 3 segments)"
    )
    start_parser.add_argument("--project", "-p", type=str, help="Project name")
    start_parser.add_argument("--log-dir", type=str, dest="log_dir", help="Log directory")
    start_parser.add_argument(
        "--status-file", type=str, dest="status_file",
        help="Status file for tmux integration (default: ~/.pomodoro_current)"
    )
    start_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Summarize session logs")
    analyze_parser.add_argument(
        "--directory", "-d", type=str, dest="log_dir",
        help="Log directory (default: ~/.pomodoro_logs)"
    )
    analyze_parser.add_argument(
        "--output", "-o", type=str,
        help="Output file (default: pomodoro_summary.csv)"
    )
    analyze_parser.add_argument(
        "--start-date", "-s", type=str, dest="start_date",
        help="Start date in YYYY-MM-DD format"
    )
    analyze_parser.add_argument(
        "--end-date", "-e", type=str, dest="end_date",
        help="End date in YYYY-MM-DD format (default: today)"
    )
    analyze_parser.add_argument(
        "--public-summary", action="store_true", dest="public_summary",
        help="Generate a public summary without personal details"
    )
    analyze_parser.add_argument(
        "--public-output", type=str, dest="public_output",
        help="Public summary output file (default: pomodoro_public_stats.md)"
    )
    analyze_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _setup_logging(getattr(args, "verbose", False))

    overrides: dict = {}
    if args.log_dir:
        overrides["log_dir"] = args.log_dir
    if args.verbose:
        overrides["verbose"] = True

    try:
        if args.command == "start":
            if args.work is not None:
                overrides["work_minutes"] = args.work
            if args.break_minutes is not None:
                overrides["break_minutes"] = args.break_minutes
            if args.long_break is not None:
                overrides["long_break_minutes"] = args.long_break
            if args.sessions is not None:
                overrides["sessions_before_long_break"] = args.sessions
            if args.deep_work:
                overrides["deep_work"] = True
            if args.status_file:
                overrides["status_file"] = args.status_file

            config = Config.load(overrides)
            config.validate()
            return _handle_start(args, config)

        if args.command == "analyze":
            analyzer_overrides = {}
            if args.output:
                analyzer_overrides["output_file"] = args.output
            if args.public_output:
                analyzer_overrides["public_output"] = args.public_output
            if analyzer_overrides:
                overrides["analyzer"] = analyzer_overrides

            config = Config.load(overrides)
            return _handle_analyze(args, config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())

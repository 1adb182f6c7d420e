"""Entry point for python -m pomotodo."""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from .log import setup_logging
from .scheduler import PomodoroTimer
from .settings import LIMITS
from .todo import TodoList
from .ui import run_ui


def _limit_help(name: str, what: str) -> str:
    default, low, high = LIMITS[name]
    return f"{what} ({low}-{high}, default: {default})"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pomotodo",
        description="Terminal Pomodoro timer with a to-do list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  Space    Start/Pause
  r        Reset current phase
  n        Finish current phase now
  q        Quit

Out-of-range values are clamped; non-numeric values use the default.

Examples:
  pomotodo                            # Ask for task and durations on start
  pomotodo --task "Write report"      # Skip the setup dialog
  pomotodo --work 50 --cycles 2       # Two 50-minute pomodoros
""",
    )

    # Numbers are parsed by TimerSettings so junk falls back to defaults.
    parser.add_argument(
        "--work",
        default=None,
        metavar="MINS",
        help=_limit_help("work_minutes", "Work phase duration in minutes"),
    )
    parser.add_argument(
        "--short",
        default=None,
        metavar="MINS",
        help=_limit_help("short_break_minutes", "Short break duration in minutes"),
    )
    parser.add_argument(
        "--long",
        default=None,
        metavar="MINS",
        help=_limit_help("long_break_minutes", "Long break duration in minutes"),
    )
    parser.add_argument(
        "--cycles",
        default=None,
        metavar="N",
        help=_limit_help("target_cycles", "Work phases to finish the task"),
    )
    parser.add_argument(
        "--task",
        default="",
        metavar="TITLE",
        help="Task to focus on; skips the setup dialog",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Minimum log level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help="Log file (default: platform log directory)",
    )

    return parser.parse_args(argv)


def build_timer(args: argparse.Namespace) -> PomodoroTimer:
    """Create the timer from parsed arguments."""
    return PomodoroTimer(
        work_mins=args.work,
        short_mins=args.short,
        long_mins=args.long,
        target_cycles=args.cycles,
        task_label=args.task.strip(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    log_path = setup_logging(args.log_level, args.log_file)
    logger.info(f"pomotodo starting, logging to {log_path}")

    timer = build_timer(args)
    todos = TodoList()

    try:
        run_ui(timer, todos, show_setup=not timer.task_label)
    except KeyboardInterrupt:
        pass

    logger.info("pomotodo exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())

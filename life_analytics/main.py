"""Entry point: load configuration, open the database and run a CLI command."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from .analytics.achievements import ACHIEVEMENTS_BY_ID
from .analytics.goals import Direction, GoalMetric
from .analytics.records import DailyRecord, InvalidRecordError
from .config import ConfigError, load_config
from .database.repository import Repository
from .formatters import format_report, format_streaks
from .tracker import build_dashboard, save_entry
from .utils.backup import create_backup, read_export, write_export
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="life-analytics", description="Personal life-tracking analytics")
    sub = parser.add_subparsers(dest="command")

    report = sub.add_parser("report", help="Show the dashboard for a day (default: today)")
    report.add_argument("--date", type=_parse_date, default=None)

    log_cmd = sub.add_parser("log", help="Save a day's entry from a JSON file")
    log_cmd.add_argument("path")

    export = sub.add_parser("export", help="Export all data to a JSON file")
    export.add_argument("path")

    import_cmd = sub.add_parser("import", help="Replace all data with a JSON export")
    import_cmd.add_argument("path")

    sub.add_parser("backup", help="Write a timestamped snapshot to BACKUP_DIR")

    habit = sub.add_parser("habit", help="Add a habit")
    habit.add_argument("name")

    goal = sub.add_parser("goal", help="Add a goal")
    goal.add_argument("name")
    goal.add_argument("metric", choices=[m.value for m in GoalMetric])
    goal.add_argument("target", type=float)
    goal.add_argument("window_days", type=int)
    goal.add_argument("--direction", choices=[d.value for d in Direction], default=None)

    return parser


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    command = args.command or "report"

    try:
        config = load_config()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)
    repo = Repository(config.database_path)
    repo.init_database()

    try:
        if command == "report":
            dashboard = build_dashboard(repo, getattr(args, "date", None), config.trend_window_days)
            print(format_report(dashboard))
        elif command == "log":
            record = DailyRecord.from_dict(read_export(args.path))
            result = save_entry(repo, record)
            print(format_streaks(result.streaks))
            for achievement_id in sorted(result.new_achievements):
                print(f"🏆 Unlocked: {ACHIEVEMENTS_BY_ID[achievement_id].title}")
        elif command == "export":
            dest = write_export(repo.export_data(), args.path)
            print(f"Exported to {dest}")
        elif command == "import":
            counts = repo.import_data(read_export(args.path))
            print("Imported " + ", ".join(f"{n} {kind}" for kind, n in counts.items()))
        elif command == "backup":
            dest = create_backup(repo, config.backup_dir, config.keep_backups)
            if dest is None:
                return 1
            print(f"Backup written to {dest}")
        elif command == "habit":
            habit = repo.add_habit(args.name)
            print(f"Added habit {habit.name!r} (id {habit.id})")
        elif command == "goal":
            direction = Direction(args.direction) if args.direction else None
            goal = repo.add_goal(args.name, GoalMetric(args.metric), args.target, args.window_days, direction)
            print(f"Added goal {goal.name!r} (id {goal.id})")
    except (InvalidRecordError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("Rejected input: %s", exc)
        return 1
    except OSError as exc:
        logger.error("File error: %s", exc)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from exercises import find_duplicate_slugs, summarize
from models import Domain, Level
from storage import JSONExerciseRepository, default_content_dir
from storage.query import ExerciseCatalog
from ui import ContentUI

EXIT_OK = 0
EXIT_FAILURE = 1


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Exercise content tooling")
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Content directory (default: $EXERCISES_ROOT or content/exercises)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every skipped file and issue",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser(
        "validate", help="Validate every exercise file (non-zero exit on errors)"
    )
    validate_parser.add_argument(
        "--unique-slugs",
        action="store_true",
        help="Also fail when two valid exercises share a slug",
    )

    subparsers.add_parser("stats", help="Count exercises by level and domain")

    recent_parser = subparsers.add_parser("recent", help="List the latest exercises")
    recent_parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=10,
        help="Number of exercises to list (default: 10)",
    )

    list_parser = subparsers.add_parser("list", help="List exercises by level/domain")
    list_parser.add_argument(
        "--level", "-l", choices=[level.value for level in Level], default=None
    )
    list_parser.add_argument(
        "--domain", "-d", choices=[domain.value for domain in Domain], default=None
    )

    search_parser = subparsers.add_parser("search", help="Search exercises")
    search_parser.add_argument("query", help="Text to look for (case-insensitive)")

    show_parser = subparsers.add_parser("show", help="Show one exercise")
    show_parser.add_argument("slug", help="Exercise slug")
    show_parser.add_argument(
        "--related",
        "-r",
        type=int,
        default=3,
        help="Number of related exercises to list (default: 3)",
    )

    return parser


def configure_logging(verbose: bool, console: Console) -> None:
    """Route log records through rich, on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def run_validate(args, ui: ContentUI) -> int:
    """Validate the whole tree; only errors make the run fail."""
    repo = JSONExerciseRepository(args.root)
    checks = repo.check_all()

    if not checks:
        ui.show_info(f"No exercise file found under {repo.root}")
        return EXIT_OK

    summary = summarize(check.result for check in checks)
    ui.show_validation_report(checks, summary, repo.root)

    status = EXIT_OK if summary.ok else EXIT_FAILURE

    if args.unique_slugs:
        records = [check.record for check in checks if check.record is not None]
        for slug, count in find_duplicate_slugs(records).items():
            ui.show_error(f'Slug "{slug}" is used by {count} exercises')
            status = EXIT_FAILURE

    return status


def run_stats(args, ui: ContentUI) -> int:
    catalog = ExerciseCatalog(JSONExerciseRepository(args.root).get_all())
    ui.show_counts(catalog)
    return EXIT_OK


def run_recent(args, ui: ContentUI) -> int:
    catalog = ExerciseCatalog(JSONExerciseRepository(args.root).get_all())
    ui.show_records("Latest exercises", catalog.recent(args.count))
    return EXIT_OK


def run_list(args, ui: ContentUI) -> int:
    catalog = ExerciseCatalog(JSONExerciseRepository(args.root).get_all())
    if args.level and args.domain:
        records = catalog.by_level_and_domain(args.level, args.domain)
    elif args.level:
        records = catalog.by_level(args.level)
    elif args.domain:
        records = catalog.by_domain(args.domain)
    else:
        records = catalog.records
    ui.show_records("Exercises", records)
    return EXIT_OK


def run_search(args, ui: ContentUI) -> int:
    catalog = ExerciseCatalog(JSONExerciseRepository(args.root).get_all())
    ui.show_records(f'Results for "{args.query}"', catalog.search(args.query))
    return EXIT_OK


def run_show(args, ui: ContentUI) -> int:
    catalog = ExerciseCatalog(JSONExerciseRepository(args.root).get_all())
    record = catalog.by_slug(args.slug)
    if record is None:
        ui.show_error(f'No valid exercise with slug "{args.slug}"')
        return EXIT_FAILURE

    ui.show_exercise(record)
    related = catalog.related(record, args.related)
    if related:
        ui.show_records("Related exercises", related)
    return EXIT_OK


COMMANDS = {
    "validate": run_validate,
    "stats": run_stats,
    "recent": run_recent,
    "list": run_list,
    "search": run_search,
    "show": run_show,
}


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Main entry point with CLI routing; returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = console or Console()
    configure_logging(args.verbose, Console(stderr=True))
    ui = ContentUI(console)

    if args.root is None:
        args.root = default_content_dir()

    # Default to validation, the pre-build gate
    command = args.command or "validate"
    if args.command is None:
        args.unique_slugs = False
    return COMMANDS[command](args, ui)


if __name__ == "__main__":
    sys.exit(main())

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .database import load_seed_from_db, store_seed
from .dictionary import DEFAULT_SEED, ConstructionFailure, WeightedDictionary
from .env import Settings, load_env
from .logger import StructuredLogger, get_logger
from .schema import validate_seed
from .scoring import ScoringPipeline, score_skills
from .storage import load_seed


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {n}")
    return n


def _make_logger(settings: Settings) -> StructuredLogger:
    # stdout is reserved for the score
    return get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_dir is not None,
        stream=sys.stderr,
    )


def _seed_entries(seed_path: Optional[Path], seed_db: Optional[Path]) -> List:
    if seed_path is not None:
        return load_seed(seed_path)
    if seed_db is not None:
        return load_seed_from_db(seed_db)
    return list(DEFAULT_SEED)


def build_dictionary(settings: Settings, logger: StructuredLogger) -> WeightedDictionary:
    """Build the scoring dictionary or exit: scoring never runs without one."""
    try:
        dictionary = WeightedDictionary.build(_seed_entries(settings.seed_path, settings.seed_db))
    except ConstructionFailure as e:
        logger.critical(f"Cannot build skill dictionary: {e}", errors=e.errors)
        raise SystemExit(1)
    logger.debug("Skill dictionary ready", keywords=len(dictionary))
    return dictionary


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if getattr(args, "seed", None):
        settings.seed_path = Path(args.seed)
    # seed-db treats --db as its target, not a seed source
    if getattr(args, "db", None) and args.command != "seed-db":
        settings.seed_db = Path(args.db)
        if not args.seed:
            # an explicit --db beats SHORTLIST_SEED_PATH
            settings.seed_path = None
    if getattr(args, "max_chars", None) is not None:
        settings.max_input_chars = args.max_chars
    return settings


def cmd_score(args: argparse.Namespace, settings: Settings) -> None:
    logger = _make_logger(settings)
    if args.skills is None:
        result = score_skills(None, logger=logger)
        print(result.score)
        return

    dictionary = build_dictionary(settings, logger)
    pipeline = ScoringPipeline(dictionary, max_input_chars=settings.max_input_chars, logger=logger)
    result = score_skills(args.skills, pipeline)
    print(result.score)
    if args.explain:
        for token, weight in result.matches:
            print(f"  +{weight:<3} {token}", file=sys.stderr)
        for token in result.unknown:
            print(f"  +0   {token} (unknown)", file=sys.stderr)
        if result.truncated:
            print(f"  input truncated to {settings.max_input_chars} characters", file=sys.stderr)


def cmd_validate_seed(args: argparse.Namespace, settings: Settings) -> None:
    try:
        entries = load_seed(Path(args.seed))
    except ConstructionFailure as e:
        raise SystemExit(str(e))
    errors = validate_seed(entries)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print(f"Valid ({len(entries)} keywords)")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    logger = _make_logger(settings)
    dictionary = build_dictionary(settings, logger)
    print(f"{len(dictionary)} weighted skills:\n")
    for keyword, weight in dictionary.ranked():
        print(f"  {weight:>3}  {keyword}")


def cmd_seed_db(args: argparse.Namespace, settings: Settings) -> None:
    logger = _make_logger(settings)
    try:
        entries = _seed_entries(settings.seed_path, None)
    except ConstructionFailure as e:
        raise SystemExit(str(e))
    errors = validate_seed(entries)
    if errors:
        raise SystemExit("Refusing to store invalid seed:\n" + "\n".join(f" - {e}" for e in errors))
    count = store_seed(Path(args.db), entries)
    logger.info("Stored seed", db=str(args.db), keywords=count)
    print(f"Stored {count} keywords in {args.db}")


def main(argv: Optional[List[str]] = None):
    # Load .env if present (SHORTLIST_SEED_PATH, SHORTLIST_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="shortlist", description="Score applicant skills against a weighted skill dictionary")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Score a comma-separated skills string")
    sc.add_argument("skills", nargs="?", help="Skills, e.g. \"dsa, python, mysql\". Omit to print 0")
    sc.add_argument("--explain", action="store_true", help="Print per-skill breakdown to stderr")
    sc.add_argument("--seed", help="JSON seed file (or set SHORTLIST_SEED_PATH)")
    sc.add_argument("--db", help="SQLite seed database (or set SHORTLIST_SEED_DB)")
    sc.add_argument("--max-chars", type=_non_negative_int, help="Truncate input beyond this many characters (default 511, 0 = no limit)")
    sc.set_defaults(func=cmd_score)

    val = subparsers.add_parser("validate-seed", help="Validate a JSON seed file")
    val.add_argument("--seed", required=True, help="Path to JSON seed file")
    val.set_defaults(func=cmd_validate_seed)

    lst = subparsers.add_parser("list", help="List weighted skills, highest first")
    lst.add_argument("--seed", help="JSON seed file (default: built-in seed)")
    lst.add_argument("--db", help="SQLite seed database")
    lst.set_defaults(func=cmd_list)

    sdb = subparsers.add_parser("seed-db", help="Write a seed (built-in or --seed) into a SQLite database")
    sdb.add_argument("--db", required=True, help="Path to SQLite database")
    sdb.add_argument("--seed", help="JSON seed file (default: built-in seed)")
    sdb.set_defaults(func=cmd_seed_db)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise SystemExit(str(e))

    if hasattr(args, "func"):
        _apply_overrides(settings, args)
        args.func(args, settings)
        return

    parser.print_help()


def score_main(argv: Optional[List[str]] = None):
    """
    Single-argument entry point: `shortlist-score "dsa, python"`.

    Exactly one argument is scored; anything else prints 0.
    """
    load_env()
    args = sys.argv[1:] if argv is None else argv
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise SystemExit(str(e))
    logger = _make_logger(settings)

    if len(args) != 1:
        result = score_skills(None, logger=logger)
        print(result.score)
        return

    dictionary = build_dictionary(settings, logger)
    pipeline = ScoringPipeline(dictionary, max_input_chars=settings.max_input_chars, logger=logger)
    print(score_skills(args[0], pipeline).score)


if __name__ == "__main__":
    main()

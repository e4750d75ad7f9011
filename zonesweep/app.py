import argparse
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from . import __version__
from .cleanup import delete_all
from .env import LOG_LEVELS, load_env, load_settings
from .logger import get_logger, reset_logger
from .patterns import CONTENT_MARKER, DEFAULT_EXCLUDE_PATTERNS, NAME_MARKER
from .prompt import confirm
from .scanner import attribute_sources, scan_by_content, scan_by_name

SEARCH_PROMPT = "Do you want to proceed with the search? (y/N): "
DELETE_PROMPT = (
    "Are you sure you want to PERMANENTLY remove the listed files? "
    "This action cannot be undone. (y/N): "
)
RULE = "-------------------------------------"

ConfirmFn = Callable[[str], bool]


def display_path(path: Path) -> str:
    """Printable form of path; undecodable name bytes are shown as \\xNN escapes."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def _print_paths(paths: Iterable[Path], out: Callable[[str], None]) -> None:
    for p in paths:
        out(f"  - {display_path(p)}")


def _print_banner(root: Path, out: Callable[[str], None]) -> None:
    marker = CONTENT_MARKER.decode()
    out("--- Zone Identifier File Removal Script ---")
    out(f"Searching for files related to Zone Identifiers in {display_path(root)} and its subdirectories.")
    out("This script looks for files:")
    out(f"  1. Whose names contain '{NAME_MARKER}'.")
    out(f"  2. Whose content contains '{marker}' (common in actual Zone Identifier streams).")
    out("")


def run_sweep(
    root: Path,
    confirm_fn: ConfirmFn = confirm,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
    dry_run: bool = False,
    strict: bool = False,
    out: Callable[[str], None] = print,
) -> int:
    """
    Run the search/confirm/delete pipeline and return the exit code.

    Declining either prompt ends the run without touching the filesystem;
    declining the first one skips scanning entirely.
    """
    logger = get_logger()
    marker = CONTENT_MARKER.decode()

    _print_banner(root, out)
    if not confirm_fn(SEARCH_PROMPT):
        out("Search cancelled.")
        return 0

    out("")
    out(f"Finding files named like '*{NAME_MARKER}*'...")
    named_files = scan_by_name(root)
    if named_files:
        out(f"Found files with '{NAME_MARKER}' in their name:")
        _print_paths(named_files, out)
    else:
        out(f"No files found with '{NAME_MARKER}' in their name.")
    out("")

    out(f"Finding files whose content contains '{marker}'...")
    content_files = scan_by_content(root, exclude_patterns)
    if content_files:
        out(f"Found files with '{marker}' in their content:")
        _print_paths(content_files, out)
    else:
        out(f"No files found with '{marker}' in their content.")
    out("")

    sources = attribute_sources(named_files, content_files)
    candidates = list(sources)
    logger.info(
        "Scan finished",
        root=str(root),
        name_matches=len(named_files),
        content_matches=len(content_files),
        candidates=len(candidates),
    )
    if not candidates:
        out("No Zone Identifier related files found to remove.")
        return 0

    out("--- Summary of files to be removed ---")
    for path, found_by in sources.items():
        out(f"  - {display_path(path)} ({', '.join(found_by)})")
    out("")

    if dry_run:
        out(f"Dry run: {len(candidates)} file(s) would be removed. No files were removed.")
        return 0

    if not confirm_fn(DELETE_PROMPT):
        out("Deletion cancelled. No files were removed.")
        return 0

    out("Removing files...")
    deleted, errors = delete_all(
        candidates,
        on_deleted=lambda p: out(f"removed '{display_path(p)}'"),
        on_error=lambda p, msg: out(f"failed to remove '{display_path(p)}': {msg}"),
    )
    out("Removal complete.")
    if errors:
        out(f"Removed {deleted} file(s); {len(errors)} could not be removed.")
    else:
        out(f"Removed {deleted} file(s).")
    out(RULE)
    logger.log_metrics_summary()

    if errors and strict:
        return 1
    return 0


def _auto_yes(prompt: str) -> bool:
    print(f"{prompt}y")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zonesweep",
        description="Find and remove Windows Zone.Identifier artifacts",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--root", help="Directory to scan (default: ZONESWEEP_ROOT or current directory)")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Extra glob excluded from the content scan (repeatable)",
    )
    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Do not apply the built-in exclusions (*.sh, *.log, .git*, *cache*, *node_modules*)",
    )
    parser.add_argument("--yes", "-y", action="store_true", help="Answer yes to both prompts")
    parser.add_argument("--dry-run", action="store_true", help="List candidates without removing anything")
    parser.add_argument("--strict", action="store_true", help="Exit with status 1 if any removal failed")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: ZONESWEEP_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env if present (ZONESWEEP_ROOT, ZONESWEEP_LOG_LEVEL, etc.)
    load_env()
    settings = load_settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    root = Path(args.root or settings["root"])
    if not root.is_dir():
        parser.error(f"not a directory: {root}")

    reset_logger()
    get_logger(
        level=args.log_level or settings["log_level"],
        log_dir=settings["log_dir"],
    )

    patterns = [] if args.no_default_excludes else list(DEFAULT_EXCLUDE_PATTERNS)
    patterns += settings["extra_excludes"] + args.exclude

    return run_sweep(
        root,
        confirm_fn=_auto_yes if args.yes else confirm,
        exclude_patterns=patterns,
        dry_run=args.dry_run,
        strict=args.strict,
    )


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Turn an activity grid into a backdated git history.

What it does:
- Reads a grid (weekday rows x 53 week columns) from an .xlsx sheet, or
  draws a word into that layout.
- Maps every marked cell to a date: column c is the week of the Sunday
  anchor c, row d adds d days.
- Writes one marker file per date and commits it with that date as author
  and committer date, oldest grid cells first in row order.

Without a grid it makes a single commit, at --date or now.

Usage:
  gridcommit --dir my-repo --grid attendance.xlsx --sheet 2024
  gridcommit --dir my-repo --text HELLO
  DRY_RUN=1 gridcommit --grid attendance.xlsx
  gridcommit --dir my-repo --date 2025-12-19T09:00:00Z --message "first"
"""

import argparse
import logging
import sys
from datetime import datetime, timezone

from .anchors import DEFAULT_REFERENCE, compute_anchors, parse_instant
from .config import Config
from .driver import run_batch
from .errors import GridCommitError
from .logging_config import setup_logging
from .materialize import materialize
from .repository import ensure_repository
from .sources import load_workbook_grid, rasterize_text

logger = logging.getLogger(__name__)


def build_parser():
    ap = argparse.ArgumentParser(
        prog="gridcommit",
        description="Create backdated commits from an activity grid.",
    )
    ap.add_argument("--dir", default="generated-repo", help="Repository directory (created if missing).")

    src = ap.add_mutually_exclusive_group()
    src.add_argument("--grid", help="Activity grid workbook (.xlsx).")
    src.add_argument("--text", help="Draw this text into the grid instead of reading a workbook.")
    ap.add_argument("--sheet", help="Sheet to read. Defaults to the first sheet.")
    ap.add_argument("--label-column", default="name", help="Header of the label column.")

    ap.add_argument("--reference",
                    help=f"Anchor reference instant (ISO 8601). Defaults to {DEFAULT_REFERENCE.isoformat()}.")
    ap.add_argument("--date", help="Single-commit mode: commit date (ISO 8601). Defaults to now.")
    ap.add_argument("--message", default="Initial commit", help="Single-commit mode: commit message.")

    ap.add_argument("--author-name", help="Commit author and committer name.")
    ap.add_argument("--author-email", help="Commit author and committer email.")
    ap.add_argument("--dry-run", action="store_true", default=None,
                    help="Print the grid and commit count without committing. Also enabled by DRY_RUN.")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def config_from_args(args) -> Config:
    config = Config(
        repo_dir=args.dir,
        grid_path=args.grid,
        sheet=args.sheet,
        label_column=args.label_column,
        text=args.text,
        message=args.message,
        author_name=args.author_name,
        author_email=args.author_email,
        verbose=args.verbose,
    )
    if args.reference is not None:
        config.reference = parse_instant(args.reference)
    if args.date is not None:
        config.date = parse_instant(args.date)
    if args.dry_run:
        config.dry_run = True
    config.validate()
    return config


def run(config: Config) -> int:
    """Execute a validated configuration. Returns the number of commits."""
    if not config.has_grid:
        when = config.date or datetime.now(timezone.utc)
        if config.dry_run:
            print(f"[DRY-RUN] would commit {config.message!r} at {when.isoformat()}")
            return 1
        ensure_repository(config.repo_dir)
        materialize(config.repo_dir, when, config.message, identity=config.identity)
        return 1

    if config.text is not None:
        grid = rasterize_text(config.text)
    else:
        grid = load_workbook_grid(config.grid_path, config.sheet, config.label_column)

    anchors = compute_anchors(config.reference)
    logger.info("Week 1 starts %s", anchors[0].date())
    if not config.dry_run:
        ensure_repository(config.repo_dir)
    return run_batch(grid, anchors, config.repo_dir, dry_run=config.dry_run, identity=config.identity)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = config_from_args(args)
        total = run(config)
    except GridCommitError as e:
        logger.debug("Aborted", exc_info=True)
        sys.stderr.write(f"error: {e}\n")
        raise SystemExit(1)

    if config.dry_run:
        print(f"[DRY-RUN] Total would commit: {total}")
        return
    print(f"Repo created at: {config.repo_dir}")


if __name__ == "__main__":
    main()

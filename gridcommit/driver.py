"""
Runs a whole activity grid, one commit at a time.
"""

import logging
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .grid import COLUMNS, ActivityGrid, is_marked, translate
from .materialize import materialize

logger = logging.getLogger(__name__)


def run_batch(
    grid: ActivityGrid,
    anchors: Sequence,
    root: Path,
    out=None,
    dry_run: bool = False,
    identity: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Commit every marked cell of `grid` into the repository at `root`.

    Rows are processed in order and columns ascending; each commit finishes
    before the next cell is looked at. One progress character per column
    ("x" marked, "." blank) goes to `out`, with a newline after each row.
    The first error aborts the batch and commits already made are kept.

    Returns the number of commits made, or that would be made when `dry_run`.
    """
    if out is None:
        out = sys.stdout
    total = 0
    for row in grid:
        # Validates the whole row before any progress is written for it.
        dates = dict(translate(row, row.day_offset, anchors))
        for column in COLUMNS:
            out.write("x" if is_marked(row.cells.get(column)) else ".")
            out.flush()
            if column not in dates:
                continue
            total += 1
            if not dry_run:
                materialize(root, dates[column], f"created file for {row.label} {column}", identity=identity)
        out.write("\n")
        out.flush()
        logger.debug("Row %r done (offset %d)", row.label, row.day_offset)

    logger.info("%s %d commits", "Would create" if dry_run else "Created", total)
    return total

"""
Activity grid and the cell -> date translation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Sequence, Tuple

from .anchors import ANCHOR_COUNT
from .errors import RangeError

COLUMNS = range(1, ANCHOR_COUNT + 1)


@dataclass
class Row:
    """One grid row: a label, its cells keyed by column (1..53) and its day offset."""

    label: str
    cells: Dict[int, Any] = field(default_factory=dict)
    day_offset: int = 0


@dataclass
class ActivityGrid:
    """Rows in source order."""

    rows: List[Row] = field(default_factory=list)

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)


def is_marked(value) -> bool:
    # None, False, 0 and "" are the only blanks.
    return bool(value)


def check_columns(row: Row) -> None:
    for column in row.cells:
        if isinstance(column, bool) or not isinstance(column, int) or column not in COLUMNS:
            raise RangeError(
                f"Row {row.label!r}: column {column!r} is outside 1..{ANCHOR_COUNT}"
            )


def translate(row: Row, day_offset: int, anchors: Sequence[datetime]) -> List[Tuple[int, datetime]]:
    """
    Map every truthy cell of `row` to its date.

    The date for column c is anchors[c-1] shifted by `day_offset` days.
    Offsets of 7 or more are not wrapped into the anchor's week.
    Raises RangeError for any cell keyed outside 1..53, marked or not.
    """
    check_columns(row)
    if day_offset < 0:
        raise RangeError(f"Row {row.label!r}: day offset {day_offset} is negative")

    try:
        shift = timedelta(days=day_offset)
        return [
            (column, anchors[column - 1] + shift)
            for column in COLUMNS
            if is_marked(row.cells.get(column))
        ]
    except OverflowError as e:
        raise RangeError(
            f"Row {row.label!r}: day offset {day_offset} moves a date outside the calendar"
        ) from e

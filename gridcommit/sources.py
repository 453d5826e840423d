"""
Where activity grids come from.

- load_workbook_grid: an .xlsx sheet, one row per label, week columns 1..53.
- rasterize_text: a word drawn into the 7x53 contribution layout.
"""

import logging
from pathlib import Path
from typing import Optional
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from PIL import Image, ImageDraw, ImageFont

from .anchors import ANCHOR_COUNT
from .errors import ConfigurationError
from .grid import ActivityGrid, Row

logger = logging.getLogger(__name__)

DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


# ---------- workbooks ----------

def column_index(header) -> Optional[int]:
    """Header cell -> week column, or None when it is not a number."""
    if isinstance(header, bool):
        return None
    if isinstance(header, int):
        return header
    if isinstance(header, float) and header.is_integer():
        return int(header)
    if isinstance(header, str) and header.strip().lstrip("-").isdigit():
        return int(header.strip())
    return None


def _open_workbook(path: Path):
    if not path.is_file():
        raise ConfigurationError(f"Grid file not found: {path}")
    try:
        return load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise ConfigurationError(f"Cannot read workbook {path}: {e}") from e


def load_workbook_grid(path, sheet: Optional[str] = None, label_column: str = "name") -> ActivityGrid:
    """
    Read an activity grid from an .xlsx workbook.

    The first row is the header. Numeric headers are week columns; the header
    matching `label_column` (case-insensitive), or else the first other
    header, holds the row label. Blank rows are skipped and every kept row
    gets its position as day offset.
    """
    path = Path(path)
    wb = _open_workbook(path)
    try:
        if not wb.sheetnames:
            raise ConfigurationError(f"Workbook {path} has no sheets")
        if sheet is None:
            ws = wb[wb.sheetnames[0]]
        elif sheet in wb.sheetnames:
            ws = wb[sheet]
        else:
            raise ConfigurationError(
                f"Sheet {sheet!r} not found in {path}. Available sheets: {', '.join(wb.sheetnames)}"
            )
        logger.info("Reading sheet %r from %s", ws.title, path)

        rows = ws.iter_rows(values_only=True)
        header = next(rows, None) or ()
        columns = {}
        label_at = None
        for i, value in enumerate(header):
            index = column_index(value)
            if index is not None:
                columns[i] = index
            elif isinstance(value, str) and label_at is None:
                label_at = i
        for i, value in enumerate(header):
            if isinstance(value, str) and value.strip().lower() == label_column.lower():
                label_at = i
                break

        grid = ActivityGrid()
        for values in rows:
            if all(v is None or v == "" for v in values):
                continue
            label = values[label_at] if label_at is not None and label_at < len(values) else None
            cells = {col: values[i] if i < len(values) else None for i, col in columns.items()}
            grid.rows.append(
                Row(
                    label=str(label) if label is not None else f"row {len(grid) + 1}",
                    cells=cells,
                    day_offset=len(grid),
                )
            )
    finally:
        wb.close()

    logger.info("Loaded %d rows", len(grid))
    return grid


# ---------- text ----------

def rasterize_text(text: str) -> ActivityGrid:
    """
    Render text using Pillow, then scale to 53x7 and binarize.
    Row y is weekday y (Sunday first), column x+1 is week x+1.
    """
    # Draw large to preserve shapes, then downscale cleanly.
    font = ImageFont.load_default()
    tmp = Image.new("L", (1200, 200), 0)
    drw = ImageDraw.Draw(tmp)
    drw.text((0, 0), text, fill=255, font=font)
    bbox = tmp.getbbox()

    grid = ActivityGrid()
    if not bbox:
        pix = [[False] * ANCHOR_COUNT for _ in range(7)]
    else:
        # NEAREST keeps pixels crisp.
        small = tmp.crop(bbox).resize((ANCHOR_COUNT, 7), Image.Resampling.NEAREST)
        data = small.load()
        pix = [[bool(data[x, y]) for x in range(ANCHOR_COUNT)] for y in range(7)]

    for y, line in enumerate(pix):
        grid.rows.append(
            Row(label=DAY_LABELS[y], cells={x + 1: lit for x, lit in enumerate(line)}, day_offset=y)
        )
    return grid

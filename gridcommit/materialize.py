"""
One marker file per commit.

The file lives under a directory chain built from the commit instant, down to
the millisecond, so the same instant always lands on the same path and two
different instants never share one.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from .anchors import as_utc
from .errors import FileSystemError
from .repository import commit, stage_all

logger = logging.getLogger(__name__)

MARKER_NAME = "index.md"


def marker_path(root: Path, when: datetime) -> Path:
    when = as_utc(when)
    parts = (
        when.year,
        when.month - 1,  # 0-based month
        when.day,
        when.hour,
        when.minute,
        when.second,
        when.microsecond // 1000,
    )
    return Path(root, "src", *(str(p) for p in parts), MARKER_NAME)


def materialize(
    root: Path,
    when: datetime,
    message: str,
    identity: Optional[Mapping[str, str]] = None,
) -> Path:
    """Write the marker file for `when`, stage everything and commit it dated `when`."""
    root = Path(root)
    path = marker_path(root, when)
    content = f"# {root.name}\n\nCreated at {datetime.now(timezone.utc).isoformat()}\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(path, e.strerror or e) from e

    stage_all(root)
    commit(root, message, when, identity=identity)
    logger.debug("Materialized %s", path.relative_to(root))
    return path

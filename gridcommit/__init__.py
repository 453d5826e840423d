"""gridcommit - backdated git history from an activity grid."""

__version__ = "0.1.0"

from .anchors import DEFAULT_REFERENCE, compute_anchors
from .driver import run_batch
from .errors import (
    ConfigurationError,
    ExternalToolError,
    FileSystemError,
    GridCommitError,
    RangeError,
)
from .grid import ActivityGrid, Row, translate
from .materialize import materialize
from .repository import commit, ensure_repository, stage_all

__all__ = [
    "ActivityGrid",
    "ConfigurationError",
    "DEFAULT_REFERENCE",
    "ExternalToolError",
    "FileSystemError",
    "GridCommitError",
    "RangeError",
    "Row",
    "commit",
    "compute_anchors",
    "ensure_repository",
    "materialize",
    "run_batch",
    "stage_all",
    "translate",
]

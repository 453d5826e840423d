"""
Run configuration.

Every field has a default here; nothing else in the package falls back to
implicit values. `validate` is called once, before any work starts.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .anchors import DEFAULT_REFERENCE
from .errors import ConfigurationError


def _dry_run_default() -> bool:
    return os.environ.get("DRY_RUN") is not None


@dataclass
class Config:
    """Configuration for one gridcommit run."""

    # Target repository, created when missing
    repo_dir: Path = Path("generated-repo")

    # Grid source: a workbook or a word, at most one of them
    grid_path: Optional[Path] = None
    sheet: Optional[str] = None  # first sheet when None
    label_column: str = "name"
    text: Optional[str] = None

    # Column 1 is the week of the Sunday on or before this instant
    reference: datetime = DEFAULT_REFERENCE

    # Single-commit mode (no grid source); date None means now
    date: Optional[datetime] = None
    message: str = "Initial commit"

    # Commit identity; git's own configuration when both are None
    author_name: Optional[str] = None
    author_email: Optional[str] = None

    dry_run: bool = field(default_factory=_dry_run_default)
    verbose: bool = False

    @property
    def has_grid(self) -> bool:
        return self.grid_path is not None or self.text is not None

    @property
    def identity(self) -> Optional[dict]:
        if self.author_name is None:
            return None
        return {"name": self.author_name, "email": self.author_email}

    def validate(self) -> None:
        """Check the whole configuration and resolve the repository path."""
        errors = []

        if self.grid_path is not None and self.text is not None:
            errors.append("use either a grid file or text, not both")
        if self.sheet is not None and self.grid_path is None:
            errors.append("a sheet name needs a grid file")
        if not self.label_column.strip():
            errors.append("label column must not be empty")
        if not self.message.strip():
            errors.append("message must not be empty")
        if (self.author_name is None) != (self.author_email is None):
            errors.append("author name and email must be given together")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

        self.repo_dir = Path(self.repo_dir).expanduser().resolve()
        if self.grid_path is not None:
            self.grid_path = Path(self.grid_path).expanduser()

"""
Everything that talks to git.

Each call runs one git command to completion; nothing here is concurrent.
Date overrides are passed per invocation and never written to os.environ.
"""

import logging
import os
import subprocess
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .anchors import as_utc
from .errors import ExternalToolError, FileSystemError

logger = logging.getLogger(__name__)


def rfc2822(instant: datetime) -> str:
    # e.g. "Sun, 07 Jan 2024 12:00:00 GMT"
    return format_datetime(as_utc(instant), usegmt=True)


def run_git(root: Path, args: Sequence[str], env: Optional[Mapping[str, str]] = None) -> str:
    cmd = ["git", *args]
    full_env = os.environ.copy()
    if env:
        full_env.update(env)

    logger.debug("Running %s in %s", cmd, root)
    try:
        res = subprocess.run(
            cmd,
            cwd=root,
            env=full_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        raise ExternalToolError(cmd, None, str(e)) from e
    if res.returncode != 0:
        raise ExternalToolError(cmd, res.returncode, res.stdout)
    return res.stdout


def ensure_repository(root: Path) -> bool:
    """
    Create `root` and run `git init` there unless `.git` already exists.

    Returns True when a repository was initialized, False when one was
    already present. Safe to call any number of times.
    """
    root = Path(root)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(root, e.strerror or e) from e

    if (root / ".git").exists():
        logger.debug("Repository already initialized at %s", root)
        return False

    logger.info("Initializing git repository at %s", root)
    run_git(root, ["init"])
    return True


def stage_all(root: Path) -> None:
    run_git(root, ["add", "-A"])


def identity_env(identity: Optional[Mapping[str, str]]) -> dict:
    if not identity:
        return {}
    return {
        "GIT_AUTHOR_NAME": identity["name"],
        "GIT_AUTHOR_EMAIL": identity["email"],
        "GIT_COMMITTER_NAME": identity["name"],
        "GIT_COMMITTER_EMAIL": identity["email"],
    }


def commit(
    root: Path,
    message: str,
    authored_at: datetime,
    identity: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Commit the staged changes with author and committer date `authored_at`.

    An empty index is not allowed: git's "nothing to commit" surfaces as
    ExternalToolError like any other failure.
    """
    stamp = rfc2822(authored_at)
    env = identity_env(identity)
    env["GIT_AUTHOR_DATE"] = stamp
    env["GIT_COMMITTER_DATE"] = stamp
    run_git(root, ["commit", "-m", message, "--quiet"], env=env)
    logger.debug("Committed %r at %s", message, stamp)

import shutil
import subprocess

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolated git identity and config for commits made during a test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Grid Tester")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "grid@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Grid Tester")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "grid@example.com")
    monkeypatch.delenv("GIT_AUTHOR_DATE", raising=False)
    monkeypatch.delenv("GIT_COMMITTER_DATE", raising=False)
    monkeypatch.delenv("DRY_RUN", raising=False)
    return home


def git_log(root, fmt="%aI"):
    res = subprocess.run(
        ["git", "log", "--reverse", f"--format={fmt}"],
        cwd=root, stdout=subprocess.PIPE, text=True, check=True,
    )
    return res.stdout.splitlines()

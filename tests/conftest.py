# File Syncer Test Fixtures
# Pytest fixtures for file-syncer tests

import shutil
import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

GIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "file-syncer",
    "GIT_AUTHOR_EMAIL": "file-syncer@example.com",
    "GIT_COMMITTER_NAME": "file-syncer",
    "GIT_COMMITTER_EMAIL": "file-syncer@example.com",
}


def write_file(base: Path, relative: str, content: str | bytes) -> Path:
    """Write a file below base, creating parent directories."""
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def run_git(cwd: Path, *args: str) -> str:
    """Run git for test setup and return stdout."""
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=False)
    if result.returncode != 0:
        raise AssertionError(f"git {' '.join(args)} failed:\n{result.stdout}\n{result.stderr}")
    return result.stdout


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Create a small source tree with a metadata directory."""
    root = temp_dir / "source"
    write_file(root, "test1.txt", "test content 1")
    write_file(root, "subdir/test2.txt", "test content 2")
    write_file(root, "subdir/nested/deep.txt", "deep content")
    write_file(root, ".git/config", "[core]")
    write_file(root, ".git/objects/ab/cdef", "object")
    return root


@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git a committer identity and isolate it from user config."""
    if shutil.which("git") is None:
        pytest.skip("git not available in PATH")
    for key, value in GIT_IDENTITY.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", "/dev/null")


@pytest.fixture
def make_remote(temp_dir: Path, git_identity: None):
    """Factory creating a bare repository seeded with files on branch main."""
    counter = {"n": 0}

    def _make(files: dict[str, str | bytes]) -> Path:
        counter["n"] += 1
        base = temp_dir / f"remote-{counter['n']}"
        remote = base / "remote.git"
        work = base / "seed"
        base.mkdir()
        run_git(base, "init", "--bare", str(remote))
        work.mkdir()
        run_git(work, "init")
        for relative, content in files.items():
            write_file(work, relative, content)
        run_git(work, "add", ".")
        run_git(work, "commit", "-m", "seed")
        run_git(work, "branch", "-M", "main")
        run_git(work, "remote", "add", "origin", str(remote))
        run_git(work, "push", "-u", "origin", "main")
        run_git(remote, "symbolic-ref", "HEAD", "refs/heads/main")
        return remote

    return _make

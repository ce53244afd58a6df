# File Syncer Git Operations
# Git command execution for clone, status, commit and push

import re
import subprocess
from pathlib import Path
from typing import Optional

from file_syncer.errors import BackendError, BranchNotFoundError

# git clone stderr when --branch names a ref the remote does not have
_MISSING_BRANCH_RE = re.compile(r"remote branch .+ not found in upstream|could not find remote branch", re.IGNORECASE)


def _run_git(
    *args: str,
    cwd: Optional[Path] = None,
    env: Optional[dict[str, str]] = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command.

    Args:
        *args: Git command arguments.
        cwd: Working directory.
        env: Environment for the subprocess (inherits when None).
        check: Whether to raise on non-zero exit.

    Returns:
        CompletedProcess with captured stdout/stderr.

    Raises:
        BackendError: If command fails and check is True.
    """
    cmd = ["git", *args]
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise BackendError("git command not found. Is git installed?") from e
    if check and result.returncode != 0:
        raise BackendError(
            f"git {args[0]} exited with status {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr.strip() if result.stderr else "",
        )
    return result


def clone_branch(
    url: str,
    dest: Path,
    branch: str,
    *,
    env: Optional[dict[str, str]] = None,
) -> None:
    """
    Clone a single branch of a repository.

    Args:
        url: Repository URL.
        dest: Destination directory (must be empty or absent).
        branch: Branch to check out.
        env: Subprocess environment.

    Raises:
        BranchNotFoundError: If the remote has no such branch.
        BackendError: For any other clone failure.
    """
    try:
        _run_git("clone", "--branch", branch, url, str(dest), env=env)
    except BackendError as e:
        if _MISSING_BRANCH_RE.search(e.stderr):
            raise BranchNotFoundError(
                f"branch {branch!r} not found in {url}",
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        raise


def clone(url: str, dest: Path, *, env: Optional[dict[str, str]] = None) -> None:
    """Clone a repository at its default branch."""
    _run_git("clone", url, str(dest), env=env)


def create_branch(path: Path, name: str, *, env: Optional[dict[str, str]] = None) -> None:
    """Create and check out a new local branch."""
    _run_git("checkout", "-b", name, cwd=path, env=env)


def git_status(path: Path, *, env: Optional[dict[str, str]] = None) -> str:
    """
    Get porcelain status output.

    Untracked files are listed individually so every new file gets its
    own status line.

    Args:
        path: Repository path.
        env: Subprocess environment.

    Returns:
        Raw status text, one entry per line.
    """
    result = _run_git("status", "--porcelain", "--untracked-files=all", cwd=path, env=env)
    return result.stdout


def stage_all(path: Path, *, env: Optional[dict[str, str]] = None) -> None:
    """Stage all changes, including deletions."""
    _run_git("add", "-A", cwd=path, env=env)


def commit(
    path: Path,
    subject: str,
    body: str = "",
    *,
    env: Optional[dict[str, str]] = None,
) -> str:
    """
    Create a commit.

    Args:
        path: Repository path.
        subject: First line of the commit message.
        body: Optional message body, added as a second paragraph.
        env: Subprocess environment.

    Returns:
        Hash of the new commit.
    """
    args = ["commit", "-m", subject]
    if body:
        args.extend(["-m", body])
    _run_git(*args, cwd=path, env=env)

    result = _run_git("rev-parse", "HEAD", cwd=path, env=env)
    return result.stdout.strip()


def push(
    path: Path,
    branch: str,
    *,
    remote: str = "origin",
    env: Optional[dict[str, str]] = None,
) -> None:
    """Push a branch to the remote."""
    _run_git("push", remote, branch, cwd=path, env=env)

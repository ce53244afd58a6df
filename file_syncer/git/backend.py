# File Syncer VCS Backend
# Backend contract used by the sync engine, with the git implementation

from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from file_syncer.errors import BranchNotFoundError
from file_syncer.git import operations
from file_syncer.git.transport import git_environment


class CloneResult(str, Enum):
    """Outcome of cloning a specific branch."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"


class VcsBackend(Protocol):
    """
    Operations the sync engine needs from a version-control backend.

    Every method raises BackendError on failure.
    """

    def clone_branch(self, url: str, branch: str, target_dir: Path) -> CloneResult: ...

    def clone(self, url: str, target_dir: Path) -> None: ...

    def create_branch(self, repo_dir: Path, name: str) -> None: ...

    def status(self, repo_dir: Path) -> str: ...

    def stage_all(self, repo_dir: Path) -> None: ...

    def commit(self, repo_dir: Path, subject: str, body: str = "") -> None: ...

    def push(self, repo_dir: Path, branch: str) -> None: ...


class GitBackend:
    """
    VcsBackend backed by the git command line.

    An optional SSH key is passed to every git invocation through
    GIT_SSH_COMMAND.
    """

    def __init__(self, ssh_key_path: Optional[str] = None):
        """
        Initialize backend.

        Args:
            ssh_key_path: Private key for SSH remotes.
        """
        self.ssh_key_path = ssh_key_path
        self._env = git_environment(ssh_key_path)

    def clone_branch(self, url: str, branch: str, target_dir: Path) -> CloneResult:
        try:
            operations.clone_branch(url, target_dir, branch, env=self._env)
        except BranchNotFoundError:
            return CloneResult.NOT_FOUND
        return CloneResult.SUCCESS

    def clone(self, url: str, target_dir: Path) -> None:
        operations.clone(url, target_dir, env=self._env)

    def create_branch(self, repo_dir: Path, name: str) -> None:
        operations.create_branch(repo_dir, name, env=self._env)

    def status(self, repo_dir: Path) -> str:
        return operations.git_status(repo_dir, env=self._env)

    def stage_all(self, repo_dir: Path) -> None:
        operations.stage_all(repo_dir, env=self._env)

    def commit(self, repo_dir: Path, subject: str, body: str = "") -> None:
        operations.commit(repo_dir, subject, body, env=self._env)

    def push(self, repo_dir: Path, branch: str) -> None:
        operations.push(repo_dir, branch, env=self._env)

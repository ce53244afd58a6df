# File Syncer Git Module
# Version-control backend and git command execution

from file_syncer.git.backend import CloneResult, GitBackend, VcsBackend
from file_syncer.git.operations import (
    clone,
    clone_branch,
    commit,
    create_branch,
    git_status,
    push,
    stage_all,
)
from file_syncer.git.transport import build_git_ssh_command, escape_shell_arg, git_environment

__all__ = [
    # Backend
    "VcsBackend",
    "GitBackend",
    "CloneResult",
    # Operations
    "clone",
    "clone_branch",
    "create_branch",
    "git_status",
    "stage_all",
    "commit",
    "push",
    # Transport
    "escape_shell_arg",
    "build_git_ssh_command",
    "git_environment",
]

# File Syncer Git Transport
# SSH command construction for authenticated git remotes

import os
from typing import Optional

# Characters backslash-escaped in the key path of GIT_SSH_COMMAND
SHELL_SPECIAL_CHARS = " \t\n\r\"'`$\\|&;<>(){}[]!*?"


def escape_shell_arg(value: str) -> str:
    """
    Escape shell metacharacters by prefixing each with a backslash.

    Args:
        value: Raw argument.

    Returns:
        Escaped argument; characters outside the special set are unchanged.
    """
    return "".join(f"\\{ch}" if ch in SHELL_SPECIAL_CHARS else ch for ch in value)


def build_git_ssh_command(ssh_key_path: str) -> str:
    """Build the GIT_SSH_COMMAND value for a private key."""
    return (
        f"ssh -i {escape_shell_arg(ssh_key_path)} "
        "-o IdentitiesOnly=yes -o StrictHostKeyChecking=accept-new"
    )


def git_environment(ssh_key_path: Optional[str] = None) -> Optional[dict[str, str]]:
    """
    Get the environment for git subprocesses.

    Args:
        ssh_key_path: Optional private key used for SSH remotes.

    Returns:
        A copy of os.environ with GIT_SSH_COMMAND set, or None to inherit
        the current environment unchanged.
    """
    if not ssh_key_path:
        return None
    env = dict(os.environ)
    env["GIT_SSH_COMMAND"] = build_git_ssh_command(ssh_key_path)
    return env

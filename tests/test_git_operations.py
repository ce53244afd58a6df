# Tests for file_syncer.git
# Git command execution, SSH transport and the backend adapter

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from file_syncer.errors import BackendError, BranchNotFoundError
from file_syncer.git.backend import CloneResult, GitBackend
from file_syncer.git.operations import (
    _run_git,
    clone,
    clone_branch,
    commit,
    create_branch,
    git_status,
    push,
    stage_all,
)
from file_syncer.git.transport import build_git_ssh_command, escape_shell_arg, git_environment

SSH_OPTIONS = "-o IdentitiesOnly=yes -o StrictHostKeyChecking=accept-new"


class TestBackendError:
    """Tests for BackendError exception."""

    def test_basic_error(self):
        err = BackendError("test message")
        assert err.message == "test message"
        assert err.returncode == 1
        assert err.stderr == ""
        assert str(err) == "test message"

    def test_error_with_details(self):
        err = BackendError("failed", returncode=128, stderr="fatal: not a repo")
        assert err.returncode == 128
        assert str(err) == "failed (fatal: not a repo)"


class TestRunGit:
    """Tests for _run_git helper."""

    @patch("file_syncer.git.operations.subprocess.run")
    def test_successful_command(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "status"], returncode=0, stdout="clean", stderr=""
        )
        result = _run_git("status")
        assert result.returncode == 0
        assert result.stdout == "clean"

    @patch("file_syncer.git.operations.subprocess.run")
    def test_failed_command_raises(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "push"], returncode=1, stdout="", stderr="rejected\n"
        )
        with pytest.raises(BackendError) as exc_info:
            _run_git("push")
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "rejected"

    @patch("file_syncer.git.operations.subprocess.run")
    def test_failed_command_no_check(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "bad"], returncode=1, stdout="", stderr="error"
        )
        result = _run_git("bad", check=False)
        assert result.returncode == 1

    @patch("file_syncer.git.operations.subprocess.run", side_effect=FileNotFoundError)
    def test_git_not_found(self, mock_run):
        with pytest.raises(BackendError, match="git command not found"):
            _run_git("status")

    @patch("file_syncer.git.operations.subprocess.run")
    def test_cwd_and_env_passed(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=["git", "status"], returncode=0, stdout="", stderr="")
        env = {"GIT_SSH_COMMAND": "ssh"}
        _run_git("status", cwd=Path("/tmp"), env=env)
        mock_run.assert_called_once_with(
            ["git", "status"], cwd=Path("/tmp"), env=env, check=False, capture_output=True, text=True
        )


class TestClone:
    """Tests for clone and clone_branch."""

    @patch("file_syncer.git.operations._run_git")
    def test_clone_branch_args(self, mock_git):
        clone_branch("https://example.com/repo.git", Path("/tmp/dest"), "main")
        args = mock_git.call_args[0]
        assert args == ("clone", "--branch", "main", "https://example.com/repo.git", "/tmp/dest")

    @patch(
        "file_syncer.git.operations._run_git",
        side_effect=BackendError(
            "git clone exited with status 128",
            returncode=128,
            stderr="warning: Could not find remote branch dev to clone.\n"
            "fatal: Remote branch dev not found in upstream origin",
        ),
    )
    def test_clone_branch_missing(self, mock_git):
        with pytest.raises(BranchNotFoundError):
            clone_branch("https://example.com/repo.git", Path("/tmp/dest"), "dev")

    @patch(
        "file_syncer.git.operations._run_git",
        side_effect=BackendError("git clone exited with status 128", returncode=128, stderr="fatal: repository not found"),
    )
    def test_clone_branch_other_failure(self, mock_git):
        with pytest.raises(BackendError) as exc_info:
            clone_branch("https://example.com/repo.git", Path("/tmp/dest"), "main")
        assert not isinstance(exc_info.value, BranchNotFoundError)

    @patch("file_syncer.git.operations._run_git")
    def test_clone_default_branch(self, mock_git):
        clone("https://example.com/repo.git", Path("/tmp/dest"))
        assert mock_git.call_args[0] == ("clone", "https://example.com/repo.git", "/tmp/dest")


class TestWorkingCopyOperations:
    """Tests for status, staging, commit, branch and push."""

    @patch("file_syncer.git.operations._run_git")
    def test_git_status(self, mock_git):
        mock_git.return_value = MagicMock(stdout="?? a.txt\n")
        assert git_status(Path("/repo")) == "?? a.txt\n"
        assert "--porcelain" in mock_git.call_args[0]

    @patch("file_syncer.git.operations._run_git")
    def test_stage_all(self, mock_git):
        stage_all(Path("/repo"))
        assert mock_git.call_args[0] == ("add", "-A")

    @patch("file_syncer.git.operations._run_git")
    def test_create_branch(self, mock_git):
        create_branch(Path("/repo"), "feature")
        assert mock_git.call_args[0] == ("checkout", "-b", "feature")

    @patch("file_syncer.git.operations._run_git")
    def test_commit_with_body(self, mock_git):
        mock_git.return_value = MagicMock(stdout="abc123\n")
        assert commit(Path("/repo"), "Sync 1 file (1 added)", "Added files:\n  + a") == "abc123"
        first_call_args = mock_git.call_args_list[0][0]
        assert first_call_args == ("commit", "-m", "Sync 1 file (1 added)", "-m", "Added files:\n  + a")

    @patch("file_syncer.git.operations._run_git")
    def test_commit_without_body(self, mock_git):
        mock_git.return_value = MagicMock(stdout="abc123\n")
        commit(Path("/repo"), "subject")
        assert mock_git.call_args_list[0][0] == ("commit", "-m", "subject")

    @patch("file_syncer.git.operations._run_git", side_effect=BackendError("error"))
    def test_commit_failure(self, mock_git):
        with pytest.raises(BackendError):
            commit(Path("/repo"), "test")

    @patch("file_syncer.git.operations._run_git")
    def test_push(self, mock_git):
        push(Path("/repo"), "main")
        assert mock_git.call_args[0] == ("push", "origin", "main")


class TestTransport:
    """Tests for SSH command construction."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/home/user/.ssh/id_rsa", "/home/user/.ssh/id_rsa"),
            ("/home/user/my files/.ssh/id_rsa", "/home/user/my\\ files/.ssh/id_rsa"),
            ("/home/user's/.ssh/id_rsa", "/home/user\\'s/.ssh/id_rsa"),
            ("/home/user/.ssh/key$file", "/home/user/.ssh/key\\$file"),
            (
                "/home/user name/.ssh/key file (1).pem",
                "/home/user\\ name/.ssh/key\\ file\\ \\(1\\).pem",
            ),
            ("a\tb\nc", "a\\\tb\\\nc"),
        ],
    )
    def test_escape_shell_arg(self, raw, expected):
        assert escape_shell_arg(raw) == expected

    def test_escape_all_special_characters(self):
        special = " \t\n\r\"'`$\\|&;<>(){}[]!*?"
        assert escape_shell_arg(special) == "".join("\\" + ch for ch in special)

    def test_build_git_ssh_command(self):
        assert build_git_ssh_command("/home/user/.ssh/id_rsa") == f"ssh -i /home/user/.ssh/id_rsa {SSH_OPTIONS}"
        assert (
            build_git_ssh_command("/home/user's key/.ssh/deploy (prod).pem")
            == f"ssh -i /home/user\\'s\\ key/.ssh/deploy\\ \\(prod\\).pem {SSH_OPTIONS}"
        )

    def test_git_environment(self, monkeypatch):
        monkeypatch.setenv("FILE_SYNCER_TEST_MARKER", "1")
        env = git_environment("/keys/id")
        assert env["GIT_SSH_COMMAND"] == f"ssh -i /keys/id {SSH_OPTIONS}"
        assert env["FILE_SYNCER_TEST_MARKER"] == "1"
        assert git_environment(None) is None


class TestGitBackend:
    """Tests for the GitBackend adapter."""

    @patch("file_syncer.git.backend.operations.clone_branch")
    def test_clone_branch_success(self, mock_clone):
        backend = GitBackend()
        assert backend.clone_branch("url", "main", Path("/tmp/x")) == CloneResult.SUCCESS
        mock_clone.assert_called_once_with("url", Path("/tmp/x"), "main", env=None)

    @patch("file_syncer.git.backend.operations.clone_branch", side_effect=BranchNotFoundError("missing"))
    def test_clone_branch_not_found(self, mock_clone):
        assert GitBackend().clone_branch("url", "dev", Path("/tmp/x")) == CloneResult.NOT_FOUND

    @patch("file_syncer.git.backend.operations.clone_branch", side_effect=BackendError("boom"))
    def test_clone_branch_error(self, mock_clone):
        with pytest.raises(BackendError):
            GitBackend().clone_branch("url", "main", Path("/tmp/x"))

    @patch("file_syncer.git.backend.operations.push")
    def test_ssh_key_sets_environment(self, mock_push):
        backend = GitBackend(ssh_key_path="/keys/my key")
        backend.push(Path("/repo"), "main")
        env = mock_push.call_args.kwargs["env"]
        assert env["GIT_SSH_COMMAND"] == f"ssh -i /keys/my\\ key {SSH_OPTIONS}"

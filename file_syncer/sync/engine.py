# File Syncer Sync Engine
# Sequences clone, transform, classification and commit for push and pull

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from file_syncer.config.loader import validate_config
from file_syncer.config.schema import Mode, SyncConfig
from file_syncer.errors import BranchNotFoundError, FilesystemError, SyncError
from file_syncer.git.backend import CloneResult, GitBackend, VcsBackend
from file_syncer.output.console import Console
from file_syncer.sync.changes import ChangeRecord, parse_status
from file_syncer.sync.message import CommitMessage, build_commit_message
from file_syncer.sync.pipeline import PipelineResult, TransformPipeline
from file_syncer.sync.transform import TransformMode
from file_syncer.utils.paths import ensure_dir, expand_path, resolve_existing_dir, safe_delete

SCRATCH_PREFIX = "file-syncer-"
WORKTREE_NAME = "worktree"


@dataclass
class SyncOutcome:
    """Result of a push or pull."""

    mode: Mode
    pipeline: PipelineResult
    changes: Optional[ChangeRecord] = None
    message: Optional[CommitMessage] = None

    @property
    def changed(self) -> bool:
        """Check if a push created a commit."""
        return self.message is not None


@contextmanager
def step(message: str) -> Iterator[None]:
    """Re-raise any SyncError as the same kind of error with added context."""
    try:
        yield
    except SyncError as e:
        raise type(e)(message) from e


class SyncEngine:
    """
    Runs one push or pull.

    Each run clones the remote into a private scratch directory that is
    removed on every exit path.
    """

    def __init__(
        self,
        config: SyncConfig,
        backend: Optional[VcsBackend] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize sync engine.

        Args:
            config: Sync configuration.
            backend: VCS backend (git command line if not provided).
            console: Output side channel (silent if not provided).
        """
        self.config = config
        self.backend = backend or GitBackend(config.ssh_key_path)
        self.console = console or Console(quiet=True)

    def run(self) -> SyncOutcome:
        """
        Validate the configuration and run the configured mode.

        Raises:
            SyncError: If any step fails.
        """
        validate_config(self.config)
        config = self.config

        self.console.print_info(
            f"File Syncer started: mode={config.mode.value}, folder={config.folder_path}, "
            f"repository={config.repo_url}, branch={config.branch}, compress={str(config.compress).lower()}"
        )

        if config.mode == Mode.PUSH:
            return self.push()
        return self.pull()

    def push(self) -> SyncOutcome:
        """
        Mirror the local folder into the remote branch as one commit.

        Returns:
            SyncOutcome; ``changed`` is False when there was nothing to commit.
        """
        config = self.config
        self.console.print_info("Starting push operation")

        try:
            source = resolve_existing_dir(config.folder)
        except OSError as e:
            raise FilesystemError(f"failed to resolve folder path {config.folder_path}", path=config.folder) from e

        with self._scratch() as scratch:
            worktree = scratch / WORKTREE_NAME
            self._clone_for_push(worktree)

            mode = TransformMode.COMPRESS if config.compress else TransformMode.NONE
            if config.compress:
                self.console.print_info(
                    f"Compression enabled; syncing files with zstd ({config.compression_level.value})"
                )
            pipeline = self._sync(source, worktree, mode)

            with step("failed to check git status"):
                status_output = self.backend.status(worktree)

            if not status_output.strip():
                self.console.print_success("No changes to push")
                return SyncOutcome(mode=Mode.PUSH, pipeline=pipeline)

            changes = parse_status(status_output)
            self.console.print_changes(changes)

            self.console.print_info("Adding changes")
            with step("failed to add changes"):
                self.backend.stage_all(worktree)

            message = build_commit_message(changes)
            self.console.print_info(f"Committing changes: {message.subject}")
            with step("failed to commit changes"):
                self.backend.commit(worktree, message.subject, message.body)

            self.console.print_info(f"Pushing to remote branch {config.branch}")
            with step("failed to push changes"):
                self.backend.push(worktree, config.branch)

        self.console.print_success("Push completed successfully")
        return SyncOutcome(mode=Mode.PUSH, pipeline=pipeline, changes=changes, message=message)

    def pull(self) -> SyncOutcome:
        """
        Mirror the remote branch into the local folder.

        Returns:
            SyncOutcome with the pipeline result.
        """
        config = self.config
        self.console.print_info("Starting pull operation")

        dest = expand_path(config.folder)
        try:
            ensure_dir(dest)
        except OSError as e:
            raise FilesystemError(f"failed to create folder {dest}", path=dest) from e

        with self._scratch() as scratch:
            worktree = scratch / WORKTREE_NAME
            self.console.print_info(f"Cloning repository: url={config.repo_url}, branch={config.branch}")
            with step("failed to clone repository"):
                result = self.backend.clone_branch(config.repo_url, config.branch, worktree)
            if result == CloneResult.NOT_FOUND:
                raise BranchNotFoundError(f"failed to clone repository: branch {config.branch} does not exist")

            mode = TransformMode.DECOMPRESS if config.compress else TransformMode.NONE
            if config.compress:
                self.console.print_info("Compression enabled; decompressing files after pull")
            pipeline = self._sync(worktree, dest, mode)

        self.console.print_success("Pull completed successfully")
        return SyncOutcome(mode=Mode.PULL, pipeline=pipeline)

    def _clone_for_push(self, worktree: Path) -> None:
        config = self.config
        self.console.print_info(f"Cloning repository: url={config.repo_url}, branch={config.branch}")

        with step("failed to clone repository"):
            result = self.backend.clone_branch(config.repo_url, config.branch, worktree)
        if result == CloneResult.SUCCESS:
            return

        self.console.print_info(
            f"Branch not found, cloning default branch: remote has no branch {config.branch}"
        )
        try:
            safe_delete(worktree, missing_ok=True)
        except OSError as e:
            raise FilesystemError(f"failed to remove partial clone {worktree}", path=worktree) from e
        with step("failed to clone repository"):
            self.backend.clone(config.repo_url, worktree)
        with step("failed to create branch"):
            self.backend.create_branch(worktree, config.branch)

    def _sync(self, source: Path, dest: Path, mode: TransformMode) -> PipelineResult:
        config = self.config
        self.console.print_info(f"Syncing files from {source} to {dest}")
        pipeline = TransformPipeline(
            mode,
            level=config.compression_level.zstd_level,
            workers=config.workers,
            prune=config.prune,
        )
        with step("failed to sync files"):
            result = pipeline.run(source, dest)
        self.console.print_debug(f"Synced {result.summary()}")
        for rel_path in result.pruned:
            self.console.print_debug(f"Removed {rel_path}")
        return result

    @contextmanager
    def _scratch(self) -> Iterator[Path]:
        try:
            scratch = tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX)
        except OSError as e:
            raise FilesystemError("failed to create temp directory") from e
        with scratch as path:
            yield Path(path)


def run(
    config: SyncConfig,
    *,
    backend: Optional[VcsBackend] = None,
    console: Optional[Console] = None,
) -> SyncOutcome:
    """Run a sync for ``config``."""
    return SyncEngine(config, backend=backend, console=console).run()

# File Syncer Transform Pipeline
# Mirrors a source tree into a destination through path and content transforms

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from file_syncer.errors import FilesystemError
from file_syncer.sync.actions import ActionType, TransformAction, execute_action, plan_action
from file_syncer.sync.item import is_metadata_path, walk_tree
from file_syncer.sync.transform import PathTransformer, TransformMode
from file_syncer.utils.paths import safe_delete


@dataclass
class PipelineResult:
    """Summary of one pipeline run."""

    directories: int = 0
    copied: int = 0
    compressed: int = 0
    decompressed: int = 0
    pruned: list[str] = field(default_factory=list)
    produced: set[str] = field(default_factory=set)

    @property
    def files(self) -> int:
        """Total number of files written."""
        return self.copied + self.compressed + self.decompressed

    def count(self, action: TransformAction) -> None:
        """Record a completed action."""
        self.produced.add(action.target)
        if action.action_type == ActionType.CREATE_DIR:
            self.directories += 1
        elif action.action_type == ActionType.COMPRESS:
            self.compressed += 1
        elif action.action_type == ActionType.DECOMPRESS:
            self.decompressed += 1
        else:
            self.copied += 1

    def summary(self) -> str:
        """One-line description of the work done."""
        parts = [f"{self.files} files", f"{self.directories} directories"]
        if self.compressed:
            parts.append(f"{self.compressed} compressed")
        if self.decompressed:
            parts.append(f"{self.decompressed} decompressed")
        if self.pruned:
            parts.append(f"{len(self.pruned)} pruned")
        return ", ".join(parts)


class TransformPipeline:
    """
    Copies every record of a source tree into a destination tree.

    Directories are created in walk order before anything beneath them.
    With more than one worker, file transforms run on a thread pool and
    the run only returns once all of them have finished.
    """

    def __init__(
        self,
        mode: TransformMode = TransformMode.NONE,
        *,
        level: int = 3,
        workers: int = 1,
        prune: bool = False,
    ):
        """
        Initialize pipeline.

        Args:
            mode: Content transform for this pass.
            level: zstd level for compression.
            workers: Number of parallel file transforms.
            prune: Remove destination entries the pass did not produce.
        """
        self.transformer = PathTransformer(mode)
        self.level = level
        self.workers = max(1, workers)
        self.prune = prune

    @property
    def mode(self) -> TransformMode:
        return self.transformer.mode

    def run(self, source: Path, dest: Path) -> PipelineResult:
        """
        Mirror ``source`` into ``dest``.

        Args:
            source: Existing source root.
            dest: Destination root (created if absent).

        Returns:
            PipelineResult with counts and produced paths.

        Raises:
            FilesystemError: On walk or write failures, or when two source
                entries map to the same destination path.
            EncodingError: If a compression stream fails.
        """
        result = PipelineResult()
        claimed: dict[str, str] = {}

        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures: dict[Future, TransformAction] = {}
                try:
                    for action in self._plan(source, claimed):
                        if action.is_file:
                            futures[executor.submit(execute_action, action, dest, level=self.level)] = action
                        else:
                            execute_action(action, dest, level=self.level)
                            result.count(action)
                finally:
                    error = self._collect(futures, result)
                if error is not None:
                    raise error
        else:
            for action in self._plan(source, claimed):
                execute_action(action, dest, level=self.level)
                result.count(action)

        if self.prune:
            result.pruned = prune_tree(dest, result.produced)

        return result

    def _plan(self, source: Path, claimed: dict[str, str]):
        for record in walk_tree(source):
            action = plan_action(record, self.transformer)
            previous = claimed.get(action.target)
            if previous is not None:
                raise FilesystemError(
                    f"{record.rel_path} and {previous} both map to {action.target}",
                    path=record.source,
                )
            claimed[action.target] = record.rel_path
            yield action

    @staticmethod
    def _collect(futures: dict[Future, TransformAction], result: PipelineResult) -> Optional[BaseException]:
        first_error: Optional[BaseException] = None
        for future in as_completed(futures):
            error = future.exception()
            if error is None:
                result.count(futures[future])
            elif first_error is None:
                first_error = error
        return first_error


def prune_tree(dest: Path, keep: set[str]) -> list[str]:
    """
    Remove destination entries that are not in ``keep``.

    The top-level metadata directory is never touched.

    Args:
        dest: Destination root.
        keep: Relative paths produced by the pipeline.

    Returns:
        Relative paths that were removed, in walk order.
    """
    removed: list[str] = []
    for record in list(walk_tree(dest)):
        if record.rel_path in keep or is_metadata_path(record.rel_path):
            continue
        if any(record.rel_path.startswith(f"{gone}/") for gone in removed):
            continue
        try:
            safe_delete(record.source, missing_ok=True)
        except OSError as e:
            raise FilesystemError(f"failed to remove {record.source}", path=record.source) from e
        removed.append(record.rel_path)
    return removed


def sync_files(
    source: Path,
    dest: Path,
    mode: TransformMode = TransformMode.NONE,
    *,
    level: int = 3,
    workers: int = 1,
    prune: bool = False,
) -> PipelineResult:
    """Run a TransformPipeline from ``source`` into ``dest``."""
    pipeline = TransformPipeline(mode, level=level, workers=workers, prune=prune)
    return pipeline.run(source, dest)

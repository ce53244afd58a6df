# File Syncer Sync Actions
# Per-record transform actions and their execution

import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import zstandard

from file_syncer.errors import EncodingError, FilesystemError
from file_syncer.sync.item import FileRecord
from file_syncer.sync.transform import PathTransformer
from file_syncer.utils.paths import ensure_dir

COPY_CHUNK_SIZE = 1024 * 1024


class ActionType(str, Enum):
    """What to do with a single record."""

    CREATE_DIR = "create_dir"
    COPY = "copy"
    COMPRESS = "compress"
    DECOMPRESS = "decompress"


@dataclass(frozen=True)
class TransformAction:
    """A planned write of one record into the destination tree."""

    record: FileRecord
    action_type: ActionType
    target: str

    @property
    def is_file(self) -> bool:
        """Check if this action writes a file."""
        return self.action_type != ActionType.CREATE_DIR


def plan_action(record: FileRecord, transformer: PathTransformer) -> TransformAction:
    """
    Decide how a record is written.

    Args:
        record: Source record.
        transformer: Path mapping for the current pass.

    Returns:
        TransformAction naming the target path relative to the destination.
    """
    if record.is_dir:
        return TransformAction(record, ActionType.CREATE_DIR, record.rel_path)

    if transformer.needs_compress(record.rel_path):
        action_type = ActionType.COMPRESS
    elif transformer.needs_decompress(record.rel_path):
        action_type = ActionType.DECOMPRESS
    else:
        action_type = ActionType.COPY

    return TransformAction(record, action_type, transformer.target_path(record.rel_path))


def execute_action(action: TransformAction, dest_root: Path, *, level: int = 3) -> Path:
    """
    Execute a transform action.

    Args:
        action: The action to execute.
        dest_root: Root of the destination tree.
        level: zstd level used by COMPRESS actions.

    Returns:
        Absolute path that was written.

    Raises:
        FilesystemError: On read, write or permission failures.
        EncodingError: If a compression stream fails.
    """
    dst = dest_root.joinpath(*action.target.split("/"))
    src = action.record.source
    mode = action.record.mode

    if action.action_type == ActionType.CREATE_DIR:
        create_directory(dst, mode)
    elif action.action_type == ActionType.COMPRESS:
        compress_file(src, dst, mode, level=level)
    elif action.action_type == ActionType.DECOMPRESS:
        decompress_file(src, dst, mode)
    else:
        copy_file(src, dst, mode)
    return dst


def create_directory(dst: Path, mode: int) -> None:
    """Create a directory with its ancestors and apply permission bits."""
    try:
        ensure_dir(dst)
        os.chmod(dst, mode)
    except OSError as e:
        raise FilesystemError(f"failed to create directory {dst}", path=dst) from e


def copy_file(src: Path, dst: Path, mode: int) -> None:
    """
    Copy file bytes and apply permission bits.

    Args:
        src: Source file.
        dst: Destination file (parents are created).
        mode: Permission bits applied after the write.
    """
    try:
        ensure_dir(dst.parent)
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            shutil.copyfileobj(fsrc, fdst, COPY_CHUNK_SIZE)
        os.chmod(dst, mode)
    except OSError as e:
        raise FilesystemError(f"failed to copy {src} to {dst}", path=dst) from e


def compress_file(src: Path, dst: Path, mode: int, *, level: int = 3) -> None:
    """Stream-compress a file with zstd and apply permission bits."""
    compressor = zstandard.ZstdCompressor(level=level)
    try:
        ensure_dir(dst.parent)
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            compressor.copy_stream(fsrc, fdst, read_size=COPY_CHUNK_SIZE)
        os.chmod(dst, mode)
    except zstandard.ZstdError as e:
        raise EncodingError(f"failed to compress {src}") from e
    except OSError as e:
        raise FilesystemError(f"failed to compress {src} to {dst}", path=dst) from e


def decompress_file(src: Path, dst: Path, mode: int) -> None:
    """
    Stream-decompress a zstd file and apply permission bits.

    Args:
        src: Compressed source file.
        dst: Destination file (parents are created).
        mode: Permission bits applied after the write.

    Raises:
        EncodingError: If the stream is corrupt or ends before the frame does.
        FilesystemError: On read, write or permission failures.
    """
    decompressor = zstandard.ZstdDecompressor()
    try:
        ensure_dir(dst.parent)
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            dobj = decompressor.decompressobj()
            while True:
                chunk = fsrc.read(COPY_CHUNK_SIZE)
                if not chunk:
                    break
                fdst.write(dobj.decompress(chunk))
            complete = dobj.eof
        if not complete:
            raise EncodingError(f"failed to decompress {src}: incomplete zstd frame")
        os.chmod(dst, mode)
    except zstandard.ZstdError as e:
        raise EncodingError(f"failed to decompress {src}") from e
    except OSError as e:
        raise FilesystemError(f"failed to decompress {src} to {dst}", path=dst) from e

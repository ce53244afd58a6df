# File Syncer Path Transforms
# Stored-name convention for compressed files

from enum import Enum
from pathlib import PurePosixPath

# Appended to a file's name when its content is stored compressed
COMPRESSED_SUFFIX = "-zstd"


class TransformMode(str, Enum):
    """Per-invocation content transform."""

    NONE = "none"
    COMPRESS = "compress"
    DECOMPRESS = "decompress"


def has_suffix(rel_path: str) -> bool:
    """Check whether a relative path names a compressed file."""
    return rel_path.endswith(COMPRESSED_SUFFIX)


def to_stored_path(rel_path: str, mode: TransformMode) -> str:
    """
    Map a relative path to the path it is written to.

    Under COMPRESS the suffix is appended to the file name component;
    a name that already carries it is left alone. Other modes return the
    path unchanged.

    Args:
        rel_path: Slash-separated path relative to the sync root.
        mode: Transform applied by this pass.

    Returns:
        Target relative path.
    """
    if mode != TransformMode.COMPRESS or has_suffix(rel_path):
        return rel_path

    path = PurePosixPath(rel_path)
    return str(path.with_name(path.name + COMPRESSED_SUFFIX))


def from_stored_path(rel_path: str) -> str:
    """
    Restore the original path of a stored file.

    Args:
        rel_path: Slash-separated stored path.

    Returns:
        Path with the suffix stripped from the file name, or the path
        unchanged when it carries no suffix.
    """
    path = PurePosixPath(rel_path)
    if not path.name.endswith(COMPRESSED_SUFFIX) or path.name == COMPRESSED_SUFFIX:
        return rel_path
    return str(path.with_name(path.name[: -len(COMPRESSED_SUFFIX)]))


class PathTransformer:
    """Maps source-relative paths to destination-relative paths for one pass."""

    def __init__(self, mode: TransformMode = TransformMode.NONE):
        self.mode = mode

    def target_path(self, rel_path: str) -> str:
        """Destination path for a file found at ``rel_path`` in the source."""
        if self.mode == TransformMode.DECOMPRESS:
            return from_stored_path(rel_path)
        return to_stored_path(rel_path, self.mode)

    def needs_decompress(self, rel_path: str) -> bool:
        """Check whether the file's content must be decompressed."""
        return self.mode == TransformMode.DECOMPRESS and from_stored_path(rel_path) != rel_path

    def needs_compress(self, rel_path: str) -> bool:
        """Check whether the file's content must be compressed."""
        return self.mode == TransformMode.COMPRESS and not has_suffix(rel_path)

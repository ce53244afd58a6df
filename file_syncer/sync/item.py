# File Syncer Sync Item
# File records and the source tree walker

import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from file_syncer.errors import FilesystemError

# Version-control metadata directory, excluded at the top level of a sync root
METADATA_DIR = ".git"


class EntryKind(str, Enum):
    """Kind of filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileRecord:
    """
    A single entry found under a sync root.

    rel_path is slash-separated and relative to the root; mode holds the
    permission bits of the source entry.
    """

    rel_path: str
    kind: EntryKind
    mode: int
    source: Path

    @property
    def is_dir(self) -> bool:
        """Check if record is a directory."""
        return self.kind == EntryKind.DIRECTORY


def is_metadata_path(rel_path: str) -> bool:
    """
    Check whether a relative path lies in the root's metadata directory.

    Only the first path segment is compared, so a directory of the same
    name deeper in the tree is ordinary content.
    """
    return rel_path.split("/", 1)[0] == METADATA_DIR


def walk_tree(root: Path) -> Iterator[FileRecord]:
    """
    Walk a directory tree depth-first.

    Directories are yielded before their contents; entries within a
    directory are visited in name order. The top-level metadata
    directory and everything under it is skipped. Entries that are
    neither regular files nor real directories (sockets, broken links,
    links to directories) are skipped.

    Args:
        root: Existing, readable directory.

    Yields:
        FileRecord for each directory and file below root.

    Raises:
        FilesystemError: If a directory cannot be listed or an entry's
            metadata cannot be read.
    """
    yield from _walk(root, "")


def _walk(directory: Path, prefix: str) -> Iterator[FileRecord]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FilesystemError(f"failed to list directory {directory}", path=directory) from e

    for entry in entries:
        rel_path = f"{prefix}{entry.name}"
        if is_metadata_path(rel_path):
            continue

        try:
            if entry.is_symlink() and entry.is_dir():
                continue
            if entry.is_dir():
                kind = EntryKind.DIRECTORY
            elif entry.is_file():
                kind = EntryKind.FILE
            else:
                continue
            mode = stat.S_IMODE(entry.stat().st_mode)
        except OSError as e:
            raise FilesystemError(f"failed to read metadata of {entry}", path=entry) from e

        record = FileRecord(rel_path=rel_path, kind=kind, mode=mode, source=entry)
        yield record

        if kind == EntryKind.DIRECTORY:
            yield from _walk(entry, f"{rel_path}/")

# File Syncer Change Classification
# Parses porcelain status output into added, modified and deleted files

from dataclasses import dataclass, field

RENAME_SEPARATOR = " -> "

ADDED_CODES = ("A ", "??")
MODIFIED_CODES = ("M ", " M", "MM")
DELETED_CODES = ("D ", " D")


@dataclass
class ChangeRecord:
    """Files changed in a working copy, in status-report order."""

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of changed files."""
        return len(self.added) + len(self.modified) + len(self.deleted)

    @property
    def is_empty(self) -> bool:
        """Check if nothing changed."""
        return self.total == 0


def parse_status(status_output: str) -> ChangeRecord:
    """
    Classify porcelain status lines.

    Each line is a two-character status code, one separator character
    and a path. Lines shorter than three characters and unknown codes
    are ignored. For renames the path after the first " -> " is recorded
    as modified. Paths are taken literally; no unquoting is done.

    Args:
        status_output: Raw status text.

    Returns:
        ChangeRecord with the classified paths.
    """
    record = ChangeRecord()

    for line in status_output.split("\n"):
        if len(line) < 3:
            continue

        code = line[:2]
        path = line[3:]

        if code in ADDED_CODES:
            record.added.append(path)
        elif code in MODIFIED_CODES:
            record.modified.append(path)
        elif code in DELETED_CODES:
            record.deleted.append(path)
        elif code.startswith("R"):
            _, sep, new_path = path.partition(RENAME_SEPARATOR)
            record.modified.append(new_path if sep else path)

    return record

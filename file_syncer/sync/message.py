# File Syncer Commit Messages
# Renders a commit subject and body from classified changes

from dataclasses import dataclass

from file_syncer.sync.changes import ChangeRecord

# (label, line marker) per section, in output order
_SECTIONS = (
    ("added", "Added files:", "+"),
    ("modified", "Modified files:", "~"),
    ("deleted", "Deleted files:", "-"),
)


@dataclass(frozen=True)
class CommitMessage:
    """Commit subject line and optional body."""

    subject: str
    body: str = ""

    def __str__(self) -> str:
        if not self.body:
            return self.subject
        return f"{self.subject}\n\n{self.body}"


def build_commit_message(changes: ChangeRecord) -> CommitMessage:
    """
    Build a commit message describing the changes.

    The subject reads "Sync N file(s) (a added, m modified, d deleted)"
    listing only non-zero counts; the body has one section per non-empty
    list.

    Args:
        changes: Classified changes.

    Returns:
        CommitMessage.
    """
    total = changes.total
    subject = f"Sync {total} file" + ("" if total == 1 else "s")

    counts = [
        f"{len(getattr(changes, attr))} {attr}" for attr, _, _ in _SECTIONS if getattr(changes, attr)
    ]
    if counts:
        subject += f" ({', '.join(counts)})"

    sections = []
    for attr, label, marker in _SECTIONS:
        files = getattr(changes, attr)
        if not files:
            continue
        lines = [label] + [f"  {marker} {name}" for name in files]
        sections.append("\n".join(lines))

    return CommitMessage(subject=subject, body="\n\n".join(sections).strip())

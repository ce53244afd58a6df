# File Syncer Utilities Module
# Helper functions for path handling

from file_syncer.utils.paths import (
    ensure_dir,
    expand_path,
    resolve_existing_dir,
    safe_delete,
)

__all__ = [
    "expand_path",
    "ensure_dir",
    "resolve_existing_dir",
    "safe_delete",
]

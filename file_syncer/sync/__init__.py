# File Syncer Sync Module
# Tree walking, transforms, change classification and the sync engine

from file_syncer.sync.actions import ActionType, TransformAction, execute_action, plan_action
from file_syncer.sync.changes import ChangeRecord, parse_status
from file_syncer.sync.engine import SyncEngine, SyncOutcome, run
from file_syncer.sync.item import METADATA_DIR, EntryKind, FileRecord, is_metadata_path, walk_tree
from file_syncer.sync.message import CommitMessage, build_commit_message
from file_syncer.sync.pipeline import PipelineResult, TransformPipeline, sync_files
from file_syncer.sync.transform import (
    COMPRESSED_SUFFIX,
    PathTransformer,
    TransformMode,
    from_stored_path,
    has_suffix,
    to_stored_path,
)

__all__ = [
    # Item
    "FileRecord",
    "EntryKind",
    "METADATA_DIR",
    "is_metadata_path",
    "walk_tree",
    # Transform
    "TransformMode",
    "PathTransformer",
    "COMPRESSED_SUFFIX",
    "to_stored_path",
    "from_stored_path",
    "has_suffix",
    # Actions
    "ActionType",
    "TransformAction",
    "plan_action",
    "execute_action",
    # Pipeline
    "TransformPipeline",
    "PipelineResult",
    "sync_files",
    # Changes
    "ChangeRecord",
    "parse_status",
    "CommitMessage",
    "build_commit_message",
    # Engine
    "SyncEngine",
    "SyncOutcome",
    "run",
]

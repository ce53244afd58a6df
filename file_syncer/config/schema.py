# File Syncer Configuration Schema
# Pydantic models for sync configuration validation

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class Mode(str, Enum):
    """Synchronization direction."""

    PUSH = "push"
    PULL = "pull"


class CompressionLevel(str, Enum):
    """Named compression presets."""

    FAST = "fast"
    DEFAULT = "default"
    MAX = "max"

    @property
    def zstd_level(self) -> int:
        """Numeric zstd level for this preset."""
        return _ZSTD_LEVELS[self]


_ZSTD_LEVELS: dict[CompressionLevel, int] = {
    CompressionLevel.FAST: 1,
    CompressionLevel.DEFAULT: 3,
    CompressionLevel.MAX: 19,
}


class SyncConfig(BaseModel):
    """Settings for a single push or pull invocation."""

    mode: Mode = Field(description="Sync direction: push (local to remote) or pull (remote to local)")
    folder_path: str = Field(description="Local folder to sync")
    repo_url: str = Field(description="Git repository URL")
    branch: str = Field(default="main", description="Git branch to use")
    ssh_key_path: str | None = Field(default=None, description="SSH private key for git operations")
    compress: bool = Field(default=False, description="Store files compressed in the repository")
    compression_level: CompressionLevel = Field(
        default=CompressionLevel.DEFAULT, description="Compression preset used when compress is enabled"
    )
    thread_count: int | None = Field(default=None, ge=1, description="Worker threads for file transforms")
    prune: bool = Field(default=False, description="Remove destination files the sync did not produce")
    verbose: bool = Field(default=False, description="Enable verbose output")
    log_file: str | None = Field(default=None, description="Path to an additional plain-text log file")

    @field_validator("ssh_key_path", "log_file")
    @classmethod
    def expand_optional_paths(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None or not v.strip():
            return None
        return str(Path(v).expanduser())

    @field_validator("folder_path", mode="before")
    @classmethod
    def coerce_folder(cls, v):
        """Accept Path objects, keeping an empty value empty."""
        if isinstance(v, Path):
            return str(v)
        return v

    @property
    def folder(self) -> Path:
        """Folder path with ~ expanded."""
        return Path(self.folder_path).expanduser()

    @property
    def workers(self) -> int:
        """Effective number of transform workers."""
        return self.thread_count or 1

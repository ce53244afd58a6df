"""File Syncer - mirror a local folder to and from a git repository.

Pushes a local directory tree into a branch as a single descriptive
commit, or pulls a branch into a local directory, optionally storing
files zstd-compressed in the repository.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SyncConfig",
    "Mode",
    "CompressionLevel",
    "SyncEngine",
    "SyncOutcome",
    "run",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("SyncConfig", "Mode", "CompressionLevel"):
        from file_syncer.config import schema

        return getattr(schema, name)
    if name in ("SyncEngine", "SyncOutcome", "run"):
        from file_syncer.sync import engine

        return getattr(engine, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

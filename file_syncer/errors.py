# File Syncer Errors
# Exception taxonomy shared by the sync engine and the CLI


class SyncError(Exception):
    """Base class for all file-syncer failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(SyncError):
    """Raised when the sync configuration is missing or invalid."""


class FilesystemError(SyncError):
    """Raised for path resolution, permission, read or write failures."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)


class BackendError(SyncError):
    """Exception raised when a version-control operation fails."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message} ({self.stderr})"
        return self.message


class BranchNotFoundError(BackendError):
    """Raised when the requested branch does not exist on the remote."""


class EncodingError(SyncError):
    """Raised when a compression or decompression stream fails mid-transfer."""


def format_error_chain(error: BaseException) -> str:
    """
    Render an exception and its causes as a single line.

    Args:
        error: Outermost exception.

    Returns:
        Messages joined from the user-facing action down to the root cause.
    """
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        if text not in parts:
            parts.append(text)
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__

    return ": ".join(parts)

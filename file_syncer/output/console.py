# File Syncer Console Output
# Rich-based console output for sync progress and results

from pathlib import Path
from typing import IO, TYPE_CHECKING, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from file_syncer.errors import FilesystemError

if TYPE_CHECKING:
    from file_syncer.config.schema import SyncConfig
    from file_syncer.sync.changes import ChangeRecord


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations and, when a log file
    is given, mirrors every message to it without colours.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        colored: bool = True,
        quiet: bool = False,
        log_file: Optional[str] = None,
        stderr: bool = False,
    ):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            quiet: Suppress terminal output (log file still written).
            log_file: Optional path of a plain-text log file (appended to).
            stderr: Write terminal output to stderr instead of stdout.

        Raises:
            FilesystemError: If the log file cannot be opened.
        """
        self.verbose = verbose
        self._console = RichConsole(
            no_color=not colored, quiet=quiet, stderr=stderr, highlight=False, soft_wrap=True
        )
        self._log_handle: Optional[IO[str]] = None
        self._log_console: Optional[RichConsole] = None
        if log_file:
            path = Path(log_file).expanduser()
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._log_handle = open(path, "a", encoding="utf-8")
            except OSError as e:
                raise FilesystemError(f"failed to open log file {path}", path=path) from e
            self._log_console = RichConsole(
                file=self._log_handle, no_color=True, log_path=False, width=120, highlight=False
            )

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)
        if self._log_console is not None:
            self._log_console.log(*args)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.print(f"[blue]{escape(message)}[/blue]")

    def print_debug(self, message: str) -> None:
        """Print message only in verbose mode."""
        if self.verbose:
            self.print(f"[dim]{escape(message)}[/dim]")

    def print_changes(self, changes: "ChangeRecord") -> None:
        """
        Print classified changes as a table.

        Args:
            changes: Changes about to be committed.
        """
        if changes.is_empty:
            self.print("[dim]No changes[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Change")
        table.add_column("Path")

        for name in changes.added:
            table.add_row("[green]added[/green]", escape(name))
        for name in changes.modified:
            table.add_row("[yellow]modified[/yellow]", escape(name))
        for name in changes.deleted:
            table.add_row("[red]deleted[/red]", escape(name))

        self.print(table)

    def print_config_summary(self, config: "SyncConfig") -> None:
        """Print the effective configuration."""
        lines = [
            f"Mode: {config.mode.value}",
            f"Folder: {config.folder_path}",
            f"Repository: {config.repo_url}",
            f"Branch: {config.branch}",
        ]
        if config.compress:
            lines.append(f"Compression: {config.compression_level.value}")
        if config.thread_count:
            lines.append(f"Threads: {config.thread_count}")
        if config.prune:
            lines.append("Prune: enabled")
        self.print(Panel(escape("\n".join(lines)), title="File Syncer", border_style="blue"))

    def close(self) -> None:
        """Close the log file, if any."""
        if self._log_handle is not None:
            self._log_handle.close()
            self._log_handle = None
            self._log_console = None


def create_console(
    *,
    verbose: bool = False,
    colored: bool = True,
    quiet: bool = False,
    log_file: Optional[str] = None,
) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.
        quiet: Suppress terminal output.
        log_file: Optional plain-text log file.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored, quiet=quiet, log_file=log_file)

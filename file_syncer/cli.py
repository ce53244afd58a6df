"""Click-based CLI for File Syncer."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from file_syncer import __version__
from file_syncer.config import CompressionLevel, Mode, build_config
from file_syncer.errors import SyncError, format_error_chain
from file_syncer.output.console import Console, create_console
from file_syncer.sync.engine import run


def _report_failure(error: BaseException) -> None:
    """Write the error chain to stderr and exit with status 1."""
    Console(stderr=True).print_error(format_error_chain(error))
    sys.exit(1)


@click.command()
@click.version_option(version=__version__, prog_name="file-syncer")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode]),
    default=None,
    help="push: local folder to repository; pull: repository to local folder",
)
@click.option("--folder", "folder", default=None, metavar="PATH", help="Path to the folder to sync")
@click.option("--repo", "repo", default=None, metavar="URL", help="Git repository URL")
@click.option("--branch", default=None, help="Git branch to use (default: main)")
@click.option("--ssh-key", "ssh_key", default=None, metavar="PATH", help="SSH private key for git operations")
@click.option("--compress", is_flag=True, default=None, help="Store files zstd-compressed in the repository")
@click.option(
    "--compression-level",
    type=click.Choice([level.value for level in CompressionLevel]),
    default=None,
    help="Compression preset (default: default)",
)
@click.option("--threads", type=click.IntRange(min=1), default=None, help="Worker threads for file transforms")
@click.option("--delete", "prune", is_flag=True, default=None, help="Remove destination files missing from the source")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file (env: FILE_SYNCER_CONFIG)",
)
@click.option("--log-file", default=None, metavar="PATH", help="Also append output to this file")
@click.option("--verbose", "-v", is_flag=True, default=None, help="Show detailed output")
def cli(
    mode: Optional[str],
    folder: Optional[str],
    repo: Optional[str],
    branch: Optional[str],
    ssh_key: Optional[str],
    compress: Optional[bool],
    compression_level: Optional[str],
    threads: Optional[int],
    prune: Optional[bool],
    config_path: Optional[Path],
    log_file: Optional[str],
    verbose: Optional[bool],
) -> None:
    """Sync a local folder with a git repository using push or pull operations.

    \b
    push: clone the branch, copy the folder into it, commit and push
    pull: clone the branch and copy its files into the folder
    """
    overrides = {
        "mode": mode,
        "folder_path": folder,
        "repo_url": repo,
        "branch": branch,
        "ssh_key_path": ssh_key,
        "compress": compress or None,
        "compression_level": compression_level,
        "thread_count": threads,
        "prune": prune or None,
        "log_file": log_file,
        "verbose": verbose or None,
    }

    try:
        config = build_config(overrides, config_path)
    except SyncError as e:
        _report_failure(e)

    try:
        console = create_console(verbose=config.verbose, log_file=config.log_file)
    except SyncError as e:
        _report_failure(e)

    try:
        if config.verbose:
            console.print_config_summary(config)
        outcome = run(config, console=console)
        if outcome.changed:
            console.print_debug(str(outcome.message))
    except SyncError as e:
        console.print_debug(f"Sync failed: {format_error_chain(e)}")
        _report_failure(e)
    finally:
        console.close()


def main() -> None:
    """Entry point for ``python -m file_syncer``."""
    cli()


if __name__ == "__main__":
    main()

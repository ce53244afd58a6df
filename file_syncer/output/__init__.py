# File Syncer Output Module
# Rich console output

from file_syncer.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]

# File Syncer Default Configuration
# Base values merged under file and command-line settings

from typing import Any

DEFAULT_BRANCH = "main"

CONFIG_ENV_VAR = "FILE_SYNCER_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "branch": DEFAULT_BRANCH,
    "ssh_key_path": None,
    "compress": False,
    "compression_level": "default",
    "thread_count": None,
    "prune": False,
    "verbose": False,
    "log_file": None,
}

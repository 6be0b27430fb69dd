"""Server configuration read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Set

DEFAULT_EXCLUDE_DIRS = ".git,.obsidian,node_modules,.trash"
DEFAULT_API_PORT = 9400


def parse_exclude_dirs(raw: str) -> Set[str]:
    """Parse a comma-separated list of directory names to exclude."""
    return {part.strip() for part in raw.split(",") if part.strip()}


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _env_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass
class Settings:
    """
    Environment variables:
        VAULT_ROOT    vault directory (required)
        EXCLUDE_DIRS  comma-separated directory names skipped when listing notes
        DAILY_FOLDER  folder for daily notes, relative to the vault
        API_ENABLED   serve the REST API alongside MCP (true/false)
        API_PORT      REST API port
        LOG_LEVEL     logging level name
    """

    vault_root: Optional[Path]
    exclude_dirs: Set[str] = field(default_factory=lambda: parse_exclude_dirs(DEFAULT_EXCLUDE_DIRS))
    daily_folder: str = "daily"
    api_enabled: bool = True
    api_port: int = DEFAULT_API_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        vault_root = env.get("VAULT_ROOT", "")
        return cls(
            vault_root=Path(vault_root).expanduser() if vault_root else None,
            exclude_dirs=parse_exclude_dirs(env.get("EXCLUDE_DIRS", DEFAULT_EXCLUDE_DIRS)),
            daily_folder=env.get("DAILY_FOLDER", "daily"),
            api_enabled=_env_bool(env.get("API_ENABLED"), True),
            api_port=_env_int(env.get("API_PORT"), DEFAULT_API_PORT),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

"""Config File Loader - reads config.toml from disk and runs the pure pipeline.

Invariants:
    - The file is read once, fully, before parsing
    - Any OSError -> ConfigFileError; parse/resolve errors propagate unchanged
    - Returns a complete Config or raises; the caller never sees a partial one
"""

import logging
from pathlib import Path

from mxbot.core.errors import ConfigFileError
from mxbot.core.parse_raw_config import parse_raw_config
from mxbot.core.resolve_config import resolve_config
from mxbot.core.resolved_config import Config

logger = logging.getLogger(__name__)


def read_config_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise ConfigFileError(str(path), "file not found") from exc
    except PermissionError as exc:
        raise ConfigFileError(str(path), "permission denied") from exc
    except OSError as exc:
        raise ConfigFileError(str(path), exc.strerror or "I/O error") from exc


def load_config(path: Path) -> Config:
    """Load, parse, and resolve the config document at path."""
    raw = parse_raw_config(read_config_bytes(path))
    config = resolve_config(raw)
    logger.info(f"Loaded config from {path}", extra={"path": str(path)})
    return config

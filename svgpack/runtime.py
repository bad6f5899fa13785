"""
Runtime configuration for svgpack.

Holds fetch, validation, and packaging settings in one place. Defaults can be
overridden from the environment (SVGPACK_* variables) and then by explicit
arguments from the CLI or web server.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from svgpack.validators import MAX_FILE_SIZE


# Mid-range deflate level, between speed and size
DEFAULT_COMPRESSION_LEVEL = 6
DEFAULT_FETCH_TIMEOUT_MS = 30_000
DEFAULT_RETRY_BACKOFF_MS = 1_000
DEFAULT_ARCHIVE_NAME = "images.zip"


@dataclass
class RuntimeConfig:
    """
    Runtime configuration for fetching and packaging.

    Attributes:
        fetch_timeout_ms: Abort a URL fetch after this many milliseconds
        fetch_retries: Extra fetch attempts after the first failure
        retry_backoff_ms: Base delay between retries (doubles per attempt)
        max_file_size: Largest accepted SVG file in bytes
        compression_level: Deflate level for ZIP entries (0-9)
        archive_name: Default filename for downloaded archives
        verbose: Print debug information
    """

    fetch_timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS
    fetch_retries: int = 0
    retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS
    max_file_size: int = MAX_FILE_SIZE
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    archive_name: str = DEFAULT_ARCHIVE_NAME

    verbose: bool = False

    def __post_init__(self):
        """Clamp settings to usable ranges."""
        self.fetch_retries = max(0, self.fetch_retries)
        self.retry_backoff_ms = max(0, self.retry_backoff_ms)
        self.compression_level = min(9, max(0, self.compression_level))


# Environment variable -> RuntimeConfig field
ENV_OVERRIDES: dict[str, str] = {
    "SVGPACK_FETCH_TIMEOUT_MS": "fetch_timeout_ms",
    "SVGPACK_FETCH_RETRIES": "fetch_retries",
    "SVGPACK_RETRY_BACKOFF_MS": "retry_backoff_ms",
    "SVGPACK_MAX_FILE_SIZE": "max_file_size",
    "SVGPACK_COMPRESSION_LEVEL": "compression_level",
}


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_runtime_config(
    fetch_timeout_ms: int | None = None,
    fetch_retries: int | None = None,
    retry_backoff_ms: int | None = None,
    compression_level: int | None = None,
    archive_name: str | None = None,
    verbose: bool = False,
) -> RuntimeConfig:
    """
    Create a runtime configuration from defaults, environment, and overrides.

    Args:
        fetch_timeout_ms: Override fetch timeout
        fetch_retries: Override retry count
        retry_backoff_ms: Override retry back-off base
        compression_level: Override deflate level
        archive_name: Override archive filename
        verbose: Enable verbose output

    Returns:
        Configured RuntimeConfig instance

    Raises:
        ValueError: If an SVGPACK_* variable is not an integer
    """
    values: dict[str, object] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = _env_int(env_name)
        if value is not None:
            values[field_name] = value

    env_archive_name = os.environ.get("SVGPACK_ARCHIVE_NAME")
    if env_archive_name:
        values["archive_name"] = env_archive_name

    overrides = {
        "fetch_timeout_ms": fetch_timeout_ms,
        "fetch_retries": fetch_retries,
        "retry_backoff_ms": retry_backoff_ms,
        "compression_level": compression_level,
        "archive_name": archive_name,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    return RuntimeConfig(verbose=verbose, **values)  # type: ignore[arg-type]


# Global config instance (can be set by CLI/web server)
_global_config: RuntimeConfig | None = None


def set_global_config(config: RuntimeConfig) -> None:
    """Set the global runtime configuration."""
    global _global_config
    _global_config = config


def get_global_config() -> RuntimeConfig:
    """Get the global runtime configuration, creating default if needed."""
    global _global_config
    if _global_config is None:
        _global_config = get_runtime_config()
    return _global_config

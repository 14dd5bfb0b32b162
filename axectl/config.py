"""Host and timeout resolution: command line > environment > config file."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, PositiveFloat, ValidationError

from axectl._util import normalize_base_url
from axectl.exceptions import ConfigError
from axectl.transport import DEFAULT_TIMEOUT

ENV_HOST = "BITAXE_URL"
ENV_TIMEOUT = "AXECTL_TIMEOUT"
ENV_CONFIG = "AXECTL_CONFIG"

DEFAULT_CONFIG_PATH = Path("~/.config/axectl/config.toml")
LEGACY_CONFIG_PATH = Path("~/.config/bitaxe-cli/config.toml")


class FileConfig(BaseModel):
    """Contents of ``config.toml``. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    host: str | None = None
    timeout: PositiveFloat | None = None


class Settings(BaseModel):
    """Resolved connection settings for one invocation."""

    base_url: str
    timeout: PositiveFloat = DEFAULT_TIMEOUT


def _default_config_path() -> Path:
    """First existing default location, new name before the legacy one."""
    for candidate in (DEFAULT_CONFIG_PATH, LEGACY_CONFIG_PATH):
        if candidate.expanduser().exists():
            return candidate
    return DEFAULT_CONFIG_PATH


def load_config_file(path: Path | None = None) -> FileConfig:
    """Read the TOML config file.

    An explicitly given *path* (argument or ``AXECTL_CONFIG``) must exist and
    parse. A default location that is absent or broken is skipped with a
    warning, so ``--host`` keeps working.
    """
    explicit = path is not None or bool(os.getenv(ENV_CONFIG))
    if path is None:
        path = Path(os.getenv(ENV_CONFIG) or _default_config_path())
    path = path.expanduser()

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug(f"No config file at {path}")
        return FileConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        cfg = FileConfig.model_validate(data)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        if explicit:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        logger.warning(f"Ignoring invalid config file {path}: {e}")
        return FileConfig()

    logger.debug(f"Loaded config from {path}: {cfg!r}")
    return cfg


def resolve_settings(
    host: str | None = None,
    timeout: float | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Combine command-line values, environment and config file into Settings."""
    cfg = load_config_file(config_path)

    resolved_host = host or os.getenv(ENV_HOST) or cfg.host
    if not resolved_host:
        raise ConfigError(
            f"No host configured. Use --host, set {ENV_HOST} or create {DEFAULT_CONFIG_PATH}"
        )

    resolved_timeout: float | str | None = timeout
    if resolved_timeout is None:
        resolved_timeout = os.getenv(ENV_TIMEOUT) or cfg.timeout or DEFAULT_TIMEOUT

    try:
        return Settings(base_url=normalize_base_url(resolved_host), timeout=resolved_timeout)
    except ValidationError as e:
        raise ConfigError(f"Invalid timeout {resolved_timeout!r}: must be a positive number of seconds") from e

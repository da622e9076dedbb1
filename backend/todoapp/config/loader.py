"""Profile-based configuration loader with environment overrides."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_DATABASE_URL = "sqlite:///todo.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_POOL_SIZE = 5
DEFAULT_POOL_MAX_OVERFLOW = 10
DEFAULT_PROFILE_DICT: dict[str, Any] = {
    "environment": DEFAULT_ENVIRONMENT,
    "database": {
        "url": DEFAULT_DATABASE_URL,
        "pool": {
            "size": DEFAULT_POOL_SIZE,
            "max_overflow": DEFAULT_POOL_MAX_OVERFLOW,
        },
    },
    "server": {"host": DEFAULT_HOST, "port": DEFAULT_PORT},
    "logging": {"level": DEFAULT_LOG_LEVEL},
}
CONFIG_PROFILE_ENV = "TODOAPP_CONFIG_PROFILE"
CONFIG_DIR_ENV = "TODOAPP_CONFIG_DIR"
DATABASE_URL_ENV = "DATABASE_URL"
HOST_ENV = "TODOAPP_HOST"
PORT_ENV = "TODOAPP_PORT"
DEFAULT_PROFILE = "dev"
DEFAULT_CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config" / "profiles"
CONFIG_EXTENSIONS = (".yaml", ".yml")


@dataclass
class PoolConfig:
    size: int = DEFAULT_POOL_SIZE
    max_overflow: int = DEFAULT_POOL_MAX_OVERFLOW
    # None leaves SQLAlchemy's own checkout timeout in place.
    timeout_seconds: float | None = None
    echo: bool = False


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    database_url: str = DEFAULT_DATABASE_URL
    pool: PoolConfig = field(default_factory=PoolConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = DEFAULT_LOG_LEVEL
    raw: dict[str, Any] = field(default_factory=dict)


def load_settings(
    profile: str | None = None, config_dir: str | Path | None = None
) -> Settings:
    """Load settings from the requested profile or fall back to defaults."""

    profile_name = profile or os.getenv(CONFIG_PROFILE_ENV, DEFAULT_PROFILE)
    config_root = Path(
        config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_ROOT)
    ).expanduser()
    config_data = _load_profile_dict(profile_name, config_root)
    if not config_data:
        config_data = copy.deepcopy(DEFAULT_PROFILE_DICT)

    database_cfg = config_data.get("database") or {}
    database_url = os.getenv(
        DATABASE_URL_ENV, database_cfg.get("url", DEFAULT_DATABASE_URL)
    )

    server_cfg = config_data.get("server") or {}
    host = os.getenv(HOST_ENV) or str(server_cfg.get("host", DEFAULT_HOST))
    port = _parse_port(os.getenv(PORT_ENV) or server_cfg.get("port", DEFAULT_PORT))

    logging_cfg = config_data.get("logging") or {}

    return Settings(
        environment=str(config_data.get("environment", DEFAULT_ENVIRONMENT)),
        database_url=str(database_url),
        pool=_build_pool_config(database_cfg.get("pool")),
        server=ServerConfig(host=host, port=port),
        log_level=str(logging_cfg.get("level", DEFAULT_LOG_LEVEL)).upper(),
        raw=config_data,
    )


def _load_profile_dict(profile_name: str, config_root: Path) -> dict[str, Any]:
    """Load the YAML profile if available, otherwise return an empty dict."""

    if not config_root.exists():
        return {}

    for extension in CONFIG_EXTENSIONS:
        candidate = config_root / f"{profile_name}{extension}"
        if not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise RuntimeError(
                f"Failed to parse config profile {candidate}: {exc}"
            ) from exc
        if not isinstance(loaded, dict):
            raise RuntimeError(
                f"Config profile {candidate} must be a mapping at the root"
            )
        return loaded

    return {}


def _build_pool_config(pool_cfg: dict[str, Any] | None) -> PoolConfig:
    pool_cfg = pool_cfg or {}
    timeout = pool_cfg.get("timeout_seconds")
    return PoolConfig(
        size=int(pool_cfg.get("size", DEFAULT_POOL_SIZE)),
        max_overflow=int(pool_cfg.get("max_overflow", DEFAULT_POOL_MAX_OVERFLOW)),
        timeout_seconds=float(timeout) if timeout is not None else None,
        echo=bool(pool_cfg.get("echo", False)),
    )


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"Invalid server port: {value!r}") from exc
    if not 0 < port < 65536:
        raise RuntimeError(f"Server port out of range: {port}")
    return port

"""Config package exporting loader helpers."""

from .loader import PoolConfig, ServerConfig, Settings, load_settings

__all__ = ["PoolConfig", "ServerConfig", "Settings", "load_settings"]

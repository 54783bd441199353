"""Application configuration."""

from .settings import RuntimeConfig, Settings, SystemConfig

__all__ = ["RuntimeConfig", "Settings", "SystemConfig"]

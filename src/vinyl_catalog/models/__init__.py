"""Configuration models for the vinyl catalog."""

from .config import Config, DiscogsConfig, StorageConfig

__all__ = ["Config", "DiscogsConfig", "StorageConfig"]

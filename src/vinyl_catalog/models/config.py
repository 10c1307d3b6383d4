"""Configuration model for the vinyl catalog."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from ..exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.discogs.com"
DEFAULT_USER_AGENT = "VinylCollectionApp/1.0"
DEFAULT_STORAGE_KEY = "vinyl_records"
DEFAULT_DATA_DIR = Path("~/.vinyl_catalog")


@dataclass
class DiscogsConfig:
    """Configuration for the Discogs lookup client."""
    token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0


@dataclass
class StorageConfig:
    """Configuration for the local collection storage."""
    data_dir: Path = DEFAULT_DATA_DIR
    storage_key: str = DEFAULT_STORAGE_KEY


@dataclass
class Config:
    """Main configuration model."""
    discogs: DiscogsConfig = field(default_factory=DiscogsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create a default configuration without credentials."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a configuration from environment variables.

        DISCOGS_TOKEN holds the personal access token, an empty value counts
        as not configured. DISCOGS_BASE_URL and VINYL_CATALOG_DATA_DIR
        override the API host and the storage directory.
        """
        env = os.environ if environ is None else environ
        config = cls()
        config.discogs.token = env.get("DISCOGS_TOKEN") or None
        if env.get("DISCOGS_BASE_URL"):
            config.discogs.base_url = env["DISCOGS_BASE_URL"]
        if env.get("VINYL_CATALOG_DATA_DIR"):
            config.storage.data_dir = Path(env["VINYL_CATALOG_DATA_DIR"])
        return config


def _dataclass_to_dict(obj):
    """Convert dataclass to dict recursively."""
    from dataclasses import is_dataclass, asdict
    if is_dataclass(obj):
        result = {}
        for key, value in asdict(obj).items():
            result[key] = _dataclass_to_dict(value)
        return result
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    else:
        return obj


def _dict_to_dataclass(data: Mapping[str, Any], dataclass_type):
    """Convert dict to dataclass recursively."""
    from dataclasses import is_dataclass, fields
    if not is_dataclass(dataclass_type):
        return data

    field_types = {f.name: f.type for f in fields(dataclass_type)}

    kwargs = {}
    for field_name, field_type in field_types.items():
        if field_name not in data:
            continue
        value = data[field_name]
        if hasattr(field_type, '__dataclass_fields__'):
            if not isinstance(value, dict):
                raise ConfigurationError(f"Section '{field_name}' must be an object")
            kwargs[field_name] = _dict_to_dataclass(value, field_type)
        elif field_type is Path:
            kwargs[field_name] = Path(value)
        else:
            kwargs[field_name] = value

    return dataclass_type(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")

    return _dict_to_dataclass(config_data, Config)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _dataclass_to_dict(config)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config_dict, f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(Config.default(), config_path)

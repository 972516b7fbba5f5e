"""Project configuration stored in ``ctxcn.config.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from os import PathLike
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ctxcn.config.json"
DEFAULT_SOURCE = "ctxcn_clients"
DEFAULT_CONFIG_RELAYS = ("ws://localhost:10547",)


@dataclass
class ProjectConfig:
    """Settings shared by every client generated in a project.

    Attributes:
        source: Directory, relative to the project root, receiving client modules
        relays: Relay URLs embedded into generated clients
        private_key: Default private key embedded into generated clients
        added_clients: Public keys of the servers a client was generated for
    """

    source: str = DEFAULT_SOURCE
    relays: list[str] = field(default_factory=lambda: list(DEFAULT_CONFIG_RELAYS))
    private_key: str | None = None
    added_clients: list[str] = field(default_factory=list)


def config_path(cwd: str | PathLike[str]) -> Path:
    return Path(cwd) / CONFIG_FILENAME


def config_exists(cwd: str | PathLike[str]) -> bool:
    return config_path(cwd).is_file()


def load_config(cwd: str | PathLike[str]) -> ProjectConfig:
    """Load the project configuration, falling back to defaults.

    A missing file yields the default configuration. Invalid or missing
    values are replaced by their defaults; unknown keys are ignored.

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    path = config_path(cwd)
    if not path.is_file():
        logger.debug("No configuration at %s, using defaults", path)
        return ProjectConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a JSON object")

    config = ProjectConfig()
    source = data.get("source")
    if isinstance(source, str) and source:
        config.source = source
    relays = data.get("relays")
    if isinstance(relays, list) and all(isinstance(relay, str) for relay in relays):
        config.relays = list(relays)
    private_key = data.get("private_key")
    if isinstance(private_key, str) and private_key:
        config.private_key = private_key
    added_clients = data.get("added_clients")
    if isinstance(added_clients, list):
        config.added_clients = [item for item in added_clients if isinstance(item, str)]
    return config


def save_config(cwd: str | PathLike[str], config: ProjectConfig) -> Path:
    """Write the configuration as indented JSON and return its path."""
    path = config_path(cwd)
    data = {key: value for key, value in asdict(config).items() if value is not None}
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.debug("Saved configuration to %s", path)
    return path

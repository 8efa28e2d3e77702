"""Configuration loader for the ledger agent tools."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"
EXAMPLE_CONFIG_PATH = Path(__file__).parent.parent / "config.example.yaml"


@dataclass
class NetworkConfig:
    ledger_id: str = "testnet"
    operator_account_id: str = ""
    # Per-network mirror node overrides, e.g. {"local": "http://localhost:5551"}
    mirror_node_urls: dict[str, str] = field(default_factory=dict)

    def get_mirror_node_url(self, ledger_id: str | None = None) -> str:
        """Return the mirror node base URL for a network."""
        network = (ledger_id or self.ledger_id).lower()
        return self.mirror_node_urls.get(network) or f"https://{network}.mirrornode.hedera.com"


@dataclass
class AgentConfig:
    mode: str = "immediate"


@dataclass
class HttpConfig:
    timeout: float = 30.0


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    """Application configuration."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(cls: type, data: dict[str, Any]) -> Any:
    """Convert a dict to a dataclass, ignoring unknown fields."""
    if not data:
        return cls()
    valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return cls(**filtered)


def load_config(path: Path | None = None) -> Config:
    """Load configuration from YAML file.

    Falls back to defaults if config file doesn't exist.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        logger.warning(
            "Config file not found at %s. Using defaults. "
            "Copy config.example.yaml to config.yaml to configure the network.",
            config_path,
        )
        return Config()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return Config(
        network=_dict_to_dataclass(NetworkConfig, raw.get("network", {})),
        agent=_dict_to_dataclass(AgentConfig, raw.get("agent", {})),
        http=_dict_to_dataclass(HttpConfig, raw.get("http", {})),
        server=_dict_to_dataclass(ServerConfig, raw.get("server", {})),
        logging=_dict_to_dataclass(LoggingConfig, raw.get("logging", {})),
    )


# Singleton config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance, loading it on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from disk."""
    global _config
    _config = load_config()
    return _config

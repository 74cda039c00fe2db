from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from gw2refs.helpers.errors import ConfigError

BASE_URL = "https://api.guildwars2.com/v2"
# The API rejects larger ?ids= batches for traits; used for every category.
CHUNK_SIZE = 200
REQUEST_TIMEOUT = 30.0
USER_AGENT = "gw2refs/0.1 (+reference sheet generator)"
DEFAULT_CONFIG = Path("gw2refs.yaml")


@dataclass(frozen=True)
class Settings:
    base_url: str = BASE_URL
    timeout: float = REQUEST_TIMEOUT
    chunk_size: int = CHUNK_SIZE
    user_agent: str = USER_AGENT

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}


def _check_settings(settings: Settings) -> Settings:
    if not settings.base_url:
        raise ConfigError("base_url must not be empty")
    if settings.timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {settings.timeout}")
    if not 1 <= settings.chunk_size <= CHUNK_SIZE:
        raise ConfigError(f"chunk_size must be between 1 and {CHUNK_SIZE}, got {settings.chunk_size}")
    return replace(settings, base_url=settings.base_url.rstrip("/"))


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping of setting overrides. Recognised keys:
      base_url: str
      timeout: number of seconds
      chunk_size: int (1..200)
      user_agent: str
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse settings file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"settings file must be a mapping, got {type(data).__name__}")

    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key in ("base_url", "user_agent"):
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string in {path}")
        elif key == "timeout":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"timeout must be a number in {path}")
            value = float(value)
        elif key == "chunk_size":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"chunk_size must be an integer in {path}")
        else:
            raise ConfigError(f"unknown setting '{key}' in {path}")
        out[key] = value
    return out


def load_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    """
    Merge defaults, the optional YAML file and CLI overrides (None = unset).
    The default config file is only read when it exists; an explicit path must exist.
    """
    file_values: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"settings file {config_path} does not exist")
        file_values = load_config_file(config_path)
    elif DEFAULT_CONFIG.exists():
        file_values = load_config_file(DEFAULT_CONFIG)

    merged = dict(file_values)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return _check_settings(Settings(**merged))

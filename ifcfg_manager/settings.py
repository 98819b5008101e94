"""
Runtime settings for ifcfg-manager.

Settings are resolved in order: built-in defaults, the YAML config file,
then environment variables.

Environment variables:
    IFCFG_CONFIG_FILE: YAML settings file (default: ~/.ifcfg-manager/config.yaml)
    IFCFG_CONFIG_DIR: Directory holding ifcfg-* files
    IFCFG_LOCK_DIR: Directory for inter-process lock files
    IFCFG_LOCK_TIMEOUT: Seconds to wait for the interface lock
    IFCFG_COMMAND_TIMEOUT: Seconds to wait for ifup/ifdown
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from ifcfg_manager.errors import IfcfgError
from ifcfg_manager.locking import DEFAULT_LOCK_TIMEOUT
from ifcfg_manager.services import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_IFDOWN_COMMAND,
    DEFAULT_IFUP_COMMAND,
)
from ifcfg_manager.storage import DEFAULT_CONFIG_DIR

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path.home() / ".ifcfg-manager" / "config.yaml"
DEFAULT_LOCK_DIR = Path("/run/lock/ifcfg-manager")

_PATH_FIELDS = {"config_dir", "lock_dir"}
_FLOAT_FIELDS = {"lock_timeout", "command_timeout"}

ENV_OVERRIDES = {
    "IFCFG_CONFIG_DIR": "config_dir",
    "IFCFG_LOCK_DIR": "lock_dir",
    "IFCFG_LOCK_TIMEOUT": "lock_timeout",
    "IFCFG_COMMAND_TIMEOUT": "command_timeout",
}


@dataclass
class Settings:
    """Resolved settings"""

    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    lock_dir: Path | None = field(default_factory=lambda: DEFAULT_LOCK_DIR)
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    ifup_command: str = DEFAULT_IFUP_COMMAND
    ifdown_command: str = DEFAULT_IFDOWN_COMMAND

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {key: str(value) if isinstance(value, Path) else value for key, value in data.items()}


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        if name == "lock_dir":
            return None
        raise IfcfgError(f"Setting '{name}' cannot be empty")
    if name in _PATH_FIELDS:
        return Path(str(value)).expanduser()
    if name in _FLOAT_FIELDS:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise IfcfgError(f"Setting '{name}' must be a number, got {value!r}") from None
        if number <= 0:
            raise IfcfgError(f"Setting '{name}' must be positive, got {value!r}")
        return number
    return str(value)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise IfcfgError(f"Invalid settings file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise IfcfgError(f"Settings file {path} must contain a mapping")
    return data


def load_settings(path: Path | str | None = None) -> Settings:
    """
    Load settings from defaults, the YAML file and the environment.

    Args:
        path: Settings file; defaults to $IFCFG_CONFIG_FILE or
            ~/.ifcfg-manager/config.yaml. A missing file is not an error.

    Returns:
        Settings instance

    Raises:
        IfcfgError: If the file or a value is malformed
    """
    settings = Settings()
    known = {f.name for f in fields(Settings)}

    if path is None:
        path = os.environ.get("IFCFG_CONFIG_FILE") or DEFAULT_SETTINGS_FILE
    path = Path(path).expanduser()

    if path.is_file():
        logger.debug(f"Loading settings from {path}")
        for name, value in _load_yaml(path).items():
            if name not in known:
                logger.warning(f"Ignoring unknown setting '{name}' in {path}")
                continue
            setattr(settings, name, _coerce(name, value))

    for env_var, name in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            setattr(settings, name, _coerce(name, value))

    return settings

from importlib import metadata

from .codec import parse_config, serialize_config
from .errors import (
    ConfigurationLockError,
    IfcfgError,
    InvalidAddressError,
    InvalidInterfaceNameError,
    MissingConfigurationFileError,
)
from .interface import IfcfgInterface, SaveState
from .interface_config import InterfaceConfig
from .settings import Settings, load_settings

try:
    __version__ = metadata.version("ifcfg-manager")
except metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigurationLockError",
    "IfcfgError",
    "IfcfgInterface",
    "InterfaceConfig",
    "InvalidAddressError",
    "InvalidInterfaceNameError",
    "MissingConfigurationFileError",
    "SaveState",
    "Settings",
    "load_settings",
    "parse_config",
    "serialize_config",
]

"""
Exception hierarchy for ifcfg-manager.

Service start/stop failures are not exceptions: they are reported as a
boolean result by ``IfcfgInterface.save``. Everything here is raised for
malformed input, a missing file, or lock contention.
"""

from pathlib import Path


class IfcfgError(Exception):
    """Base error for interface configuration operations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.user_message = message


class MissingConfigurationFileError(IfcfgError):
    """The interface configuration file does not exist."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Configuration file not found: {self.path}")


class InvalidAddressError(IfcfgError, ValueError):
    """A value is not an IPv4 or IPv6 address literal."""

    def __init__(self, address: object):
        self.address = address
        super().__init__(f"{address} is not a valid IPv4 or IPv6 address")


class InvalidInterfaceNameError(IfcfgError, ValueError):
    """The interface name cannot be mapped to a configuration file."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid interface name '{name}'")


class ConfigurationLockError(IfcfgError):
    """Another writer holds the interface lock."""

    def __init__(self, name: str, timeout: float):
        self.name = name
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout}s waiting for the configuration lock on '{name}'"
        )

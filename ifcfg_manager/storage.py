"""
File access and path resolution for interface configuration files.
"""

import logging
import os
import re
import stat
import tempfile
from pathlib import Path
from typing import Protocol

from ifcfg_manager.errors import InvalidInterfaceNameError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("/etc/sysconfig/network-scripts")
IFCFG_PREFIX = "ifcfg-"
INTERFACE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:@-]*$")


class FileStore(Protocol):
    """Raw byte access to configuration files."""

    def exists(self, path: Path) -> bool: ...

    def read(self, path: Path) -> bytes: ...

    def write(self, path: Path, data: bytes) -> None: ...


class PathResolver(Protocol):
    """Maps an interface name to its configuration file."""

    def resolve(self, interface: str) -> Path: ...


class LocalFileStore:
    """
    Filesystem-backed ``FileStore``.

    Writes go through a temporary file in the target directory followed by
    ``os.replace``, so readers see either the old or the new contents.
    """

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def write(self, path: Path, data: bytes) -> None:
        path = Path(path)
        mode: int | None = None
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            mode = None

        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb", delete=False, dir=str(path.parent), prefix=f".{path.name}."
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())

            os.chmod(tmp_path, mode if mode is not None else 0o644)
            os.replace(tmp_path, path)
            tmp_path = None
            logger.debug(f"Wrote {len(data)} bytes to {path}")
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()


class IfcfgPathResolver:
    """Resolves ``eth0`` to ``<config_dir>/ifcfg-eth0``."""

    def __init__(self, config_dir: Path | str = DEFAULT_CONFIG_DIR):
        self.config_dir = Path(config_dir)

    def resolve(self, interface: str) -> Path:
        """
        Get the configuration file path for an interface.

        Raises:
            InvalidInterfaceNameError: If the name is empty or could escape
                the configuration directory
        """
        if not interface or not INTERFACE_NAME_PATTERN.match(interface):
            raise InvalidInterfaceNameError(interface)
        return self.config_dir / f"{IFCFG_PREFIX}{interface}"

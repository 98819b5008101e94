"""
Transactional management of one interface configuration file.

``IfcfgInterface`` loads ``ifcfg-<name>``, applies typed changes in memory
and commits them with ``save``: the interface is stopped, the new file is
written and the interface is started again. If it does not come back up the
previous file contents are restored and the interface is started once more
with them.
"""

import difflib
import logging
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from ifcfg_manager.errors import MissingConfigurationFileError
from ifcfg_manager.interface_config import InterfaceConfig
from ifcfg_manager.locking import interface_lock
from ifcfg_manager.services import IfupDownController, ServiceController
from ifcfg_manager.settings import Settings
from ifcfg_manager.storage import FileStore, IfcfgPathResolver, LocalFileStore, PathResolver

logger = logging.getLogger(__name__)


class SaveState(Enum):
    """Stages of a save transaction."""

    IDLE = "idle"
    STOPPING = "stopping"
    WRITING = "writing"
    STARTING = "starting"
    COMMITTED = "committed"
    ROLLING_BACK = "rolling_back"
    ROLLED_BACK = "rolled_back"


class IfcfgInterface:
    """
    A network interface configured through an ifcfg file.

    Args:
        name: Interface name, e.g. ``eth0``
        settings: Runtime settings. When omitted, defaults are used; if a
            store or controller is injected the inter-process lock file is
            skipped and only the in-process lock is taken
        store: File access; defaults to the local filesystem
        resolver: Maps the name to a file; defaults to ``settings.config_dir``
        controller: Stops and starts the interface; defaults to ifdown/ifup

    Raises:
        MissingConfigurationFileError: If the configuration file does not exist
        InvalidInterfaceNameError: If the name cannot be mapped to a file
    """

    def __init__(
        self,
        name: str,
        *,
        settings: Settings | None = None,
        store: FileStore | None = None,
        resolver: PathResolver | None = None,
        controller: ServiceController | None = None,
    ):
        if settings is None:
            injected = store is not None or controller is not None
            settings = Settings(lock_dir=None) if injected else Settings()
        self.settings = settings
        self._name = name
        self._store = store or LocalFileStore()
        self._resolver = resolver or IfcfgPathResolver(self.settings.config_dir)
        self._controller = controller or IfupDownController(
            ifup_command=self.settings.ifup_command,
            ifdown_command=self.settings.ifdown_command,
            timeout=self.settings.command_timeout,
        )
        self._path = self._resolver.resolve(name)
        if not self._store.exists(self._path):
            raise MissingConfigurationFileError(self._path)

        self.last_save_state = SaveState.IDLE
        self._config = InterfaceConfig.from_text(self._store.read(self._path))
        logger.debug(f"Loaded {len(self._config)} keys from {self._path}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, path={str(self._path)!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def config(self) -> InterfaceConfig:
        """Current in-memory configuration (read-only mapping)."""
        return self._config

    def reload(self) -> None:
        """Re-read the file, discarding unsaved changes."""
        self._config = InterfaceConfig.from_text(self._store.read(self._path))

    def set_address(self, address: str) -> None:
        self._config.set_address(address)

    def set_gateway(self, address: str) -> None:
        self._config.set_gateway(address)

    def set_netmask(self, mask: str) -> None:
        self._config.set_netmask(mask)

    def set_dns(self, servers: str | Sequence[str] | None) -> None:
        self._config.set_dns(servers)

    def set_search_order(self, domains: str | Sequence[str] | None) -> None:
        self._config.set_search_order(domains)

    def enable_dhcp(self) -> None:
        self._config.enable_dhcp()

    def render(self) -> str:
        """Text that ``save`` would write."""
        return self._config.to_text()

    def pending_diff(self) -> str:
        """
        Unified diff between the file on disk and the current state.

        Returns:
            Diff text, empty if saving would not change the file
        """
        current = self._store.read(self._path).decode("utf-8", "replace").splitlines()
        proposed = self._config.to_bytes().decode("utf-8", "replace").splitlines()
        diff = difflib.unified_diff(
            current,
            proposed,
            fromfile=str(self._path),
            tofile=f"{self._path} (pending)",
            lineterm="",
        )
        return "\n".join(diff)

    def stage_static(
        self,
        ip: str,
        mask: str,
        gw: str,
        dns: str | Sequence[str] | None,
        search: str | Sequence[str] | None = None,
    ) -> None:
        """
        Set a static configuration in memory without saving it.

        All values are applied to a staged copy first; the current state only
        changes once every value is valid.

        Raises:
            InvalidAddressError: If ip, mask or gw is malformed
        """
        staged = self._config.copy()
        staged.set_address(ip)
        staged.set_netmask(mask)
        staged.set_gateway(gw)
        staged.set_dns(dns)
        if search is not None:
            staged.set_search_order(search)

        self._config.replace_with(staged)

    def apply_static(
        self,
        ip: str,
        mask: str,
        gw: str,
        dns: str | Sequence[str] | None,
        search: str | Sequence[str] | None = None,
    ) -> bool:
        """
        Configure a static address and save it.

        Args:
            ip: IP address
            mask: Subnet mask
            gw: Gateway address
            dns: Up to two DNS servers
            search: Search domains; ``DOMAIN`` is left alone when omitted

        Returns:
            True if the interface came up with the new configuration

        Raises:
            InvalidAddressError: If ip, mask or gw is malformed; nothing is
                changed and nothing is written
        """
        self.stage_static(ip, mask, gw, dns, search)
        return self.save()

    def _transition(self, state: SaveState) -> None:
        logger.debug(f"{self._name}: {self.last_save_state.value} -> {state.value}")
        self.last_save_state = state

    def save(self) -> bool:
        """
        Write the configuration and restart the interface.

        Returns:
            True if the interface was restarted with the new configuration,
            False if it could not be stopped or did not come back up (the
            previous file contents are restored in that case)

        Raises:
            OSError: If the file cannot be read or written
            ConfigurationLockError: If another writer holds the interface lock
        """
        with interface_lock(self._name, self.settings.lock_dir, self.settings.lock_timeout):
            self.last_save_state = SaveState.IDLE
            snapshot = self._store.read(self._path)

            self._transition(SaveState.STOPPING)
            if not self._controller.stop(self._name):
                logger.error(f"Could not stop {self._name}, configuration not written")
                self._transition(SaveState.ROLLED_BACK)
                return False

            self._transition(SaveState.WRITING)
            try:
                self._store.write(self._path, self._config.to_bytes())
            except OSError:
                logger.error(f"Failed to write {self._path}, restoring previous contents")
                try:
                    self._rollback(snapshot)
                except OSError:
                    logger.exception(f"Failed to restore previous contents of {self._path}")
                raise

            self._transition(SaveState.STARTING)
            if self._controller.start(self._name):
                self._transition(SaveState.COMMITTED)
                logger.info(f"Applied new configuration to {self._name}")
                return True

            logger.error(f"{self._name} failed to start, restoring previous configuration")
            self._rollback(snapshot)
            return False

    def _rollback(self, snapshot: bytes) -> None:
        self._transition(SaveState.ROLLING_BACK)
        try:
            self._store.write(self._path, snapshot)
        finally:
            if not self._controller.start(self._name):
                logger.warning(f"{self._name} did not start with the restored configuration")
            self._transition(SaveState.ROLLED_BACK)

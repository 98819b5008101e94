"""
Bringing interfaces down and up.

The transaction in ``IfcfgInterface.save`` only needs a yes/no answer from
``stop`` and ``start``; controllers report failures as ``False`` and log the
details instead of raising.
"""

import logging
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_IFUP_COMMAND = "ifup"
DEFAULT_IFDOWN_COMMAND = "ifdown"
DEFAULT_COMMAND_TIMEOUT = 60  # seconds


class ServiceController(Protocol):
    """Stops and starts the network service of an interface."""

    def stop(self, interface: str) -> bool: ...

    def start(self, interface: str) -> bool: ...


class IfupDownController:
    """
    ``ServiceController`` backed by the ``ifdown``/``ifup`` scripts.

    Args:
        ifup_command: Executable used to bring an interface up
        ifdown_command: Executable used to bring an interface down
        timeout: Seconds to wait for each command
    """

    def __init__(
        self,
        ifup_command: str = DEFAULT_IFUP_COMMAND,
        ifdown_command: str = DEFAULT_IFDOWN_COMMAND,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
    ):
        self.ifup_command = ifup_command
        self.ifdown_command = ifdown_command
        self.timeout = timeout

    def stop(self, interface: str) -> bool:
        return self._run(self.ifdown_command, interface)

    def start(self, interface: str) -> bool:
        return self._run(self.ifup_command, interface)

    def _run(self, command: str, interface: str) -> bool:
        cmd = [command, interface]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            logger.error(f"{command} not found - is the network-scripts package installed?")
            return False
        except subprocess.TimeoutExpired:
            logger.error(f"{' '.join(cmd)} timed out after {self.timeout}s")
            return False

        if result.returncode != 0:
            logger.error(f"{' '.join(cmd)} failed with exit code {result.returncode}")
            if result.stderr:
                logger.error(f"stderr: {result.stderr.strip()}")
            return False

        logger.info(f"{' '.join(cmd)} succeeded")
        return True

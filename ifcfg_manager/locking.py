"""
Single-writer locking per interface.

A process-local re-entrant lock serializes threads; an advisory
``filelock`` lock in the lock directory serializes processes.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as FileLockTimeout

from ifcfg_manager.errors import ConfigurationLockError

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 30  # seconds

_registry_lock = threading.Lock()
_interface_locks: dict[str, threading.RLock] = {}


def _thread_lock(interface: str) -> threading.RLock:
    with _registry_lock:
        lock = _interface_locks.get(interface)
        if lock is None:
            lock = threading.RLock()
            _interface_locks[interface] = lock
        return lock


def lock_path(lock_dir: Path, interface: str) -> Path:
    return Path(lock_dir) / f"ifcfg-{interface}.lock"


@contextmanager
def interface_lock(
    interface: str,
    lock_dir: Path | str | None = None,
    timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> Iterator[None]:
    """
    Hold the write lock for one interface.

    Args:
        interface: Interface name
        lock_dir: Directory for the inter-process lock file, or None to only
            lock within this process
        timeout: Seconds to wait for each lock

    Raises:
        ConfigurationLockError: If a lock cannot be acquired in time
    """
    thread_lock = _thread_lock(interface)
    if not thread_lock.acquire(timeout=timeout):
        raise ConfigurationLockError(interface, timeout)

    try:
        if lock_dir is None:
            yield
            return

        lock_dir = Path(lock_dir)
        lock_dir.mkdir(parents=True, exist_ok=True)
        file_lock = FileLock(str(lock_path(lock_dir, interface)), timeout=timeout)
        try:
            file_lock.acquire()
        except FileLockTimeout:
            logger.error(f"Timeout waiting for file lock on {interface}")
            raise ConfigurationLockError(interface, timeout) from None

        try:
            yield
        finally:
            file_lock.release()
    finally:
        thread_lock.release()

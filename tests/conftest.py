"""Pytest configuration for the `tests/` suite.

Puts the repository root on `sys.path` so the suite runs from a plain checkout
as well as from an editable install, and provides in-memory stand-ins for the
file store and the interface controller.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _prepend_sys_path(path: Path) -> None:
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


_REPO_ROOT = Path(__file__).resolve().parents[1]
_prepend_sys_path(_REPO_ROOT)

from ifcfg_manager.settings import Settings  # noqa: E402


class FakeController:
    """Records stop/start calls and returns scripted results."""

    def __init__(self, stop_results=(True,), start_results=(True,)):
        self.stop_results = list(stop_results)
        self.start_results = list(start_results)
        self.calls: list[tuple[str, str]] = []

    def _next(self, results: list[bool]) -> bool:
        # The last scripted result repeats once the list runs out
        return results.pop(0) if len(results) > 1 else results[0]

    def stop(self, interface: str) -> bool:
        self.calls.append(("stop", interface))
        return self._next(self.stop_results)

    def start(self, interface: str) -> bool:
        self.calls.append(("start", interface))
        return self._next(self.start_results)


class MemoryFileStore:
    """Dict-backed file store that records every write."""

    def __init__(self, files: dict[Path, bytes] | None = None):
        self.files = dict(files or {})
        self.writes: list[tuple[Path, bytes]] = []

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read(self, path: Path) -> bytes:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def write(self, path: Path, data: bytes) -> None:
        self.writes.append((Path(path), data))
        self.files[Path(path)] = data


@pytest.fixture
def ifcfg_dir(tmp_path):
    """Temporary network-scripts directory."""
    path = tmp_path / "etc" / "sysconfig" / "network-scripts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def settings(ifcfg_dir, tmp_path):
    """Settings pointing at temporary directories."""
    return Settings(config_dir=ifcfg_dir, lock_dir=tmp_path / "locks", lock_timeout=5)


@pytest.fixture
def controller():
    return FakeController()


@pytest.fixture
def write_ifcfg(ifcfg_dir):
    """Write an ifcfg-<name> file and return its path."""

    def _write(name: str, content: str) -> Path:
        path = ifcfg_dir / f"ifcfg-{name}"
        path.write_text(content, encoding="utf-8")
        return path

    return _write

"""Shared test fixtures for installer tests."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any, Iterable, List, Tuple

import pytest

from hybrid_installer.console import UiPrinter
from hybrid_installer.context import InstallCtx
from hybrid_installer.lib.input_events import InputEvent
from hybrid_installer.settings import InstallerSettings

ABIS = ("arm64-v8a", "x86_64", "armeabi-v7a")

TEMPLATE = """\
# Hybrid Mount daemon configuration
moduledir = "/data/adb/modules"
mountsource = "KSU"
verbose = false
partitions = []
"""


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class ScriptedSource:
    """Input source that replays (time offset, events) pairs against a FakeClock.

    Each read() advances the clock by the requested timeout and returns every
    scripted event whose offset falls inside that window.
    """

    def __init__(self, clock: FakeClock, script: Iterable[Tuple[float, Iterable[InputEvent]]] = ()) -> None:
        self.clock = clock
        self.origin = clock.now
        self.script = sorted((t, frozenset(ev)) for t, ev in script)
        self.reads: List[float] = []
        self.closed = False

    def read(self, timeout_s: float) -> frozenset:
        assert not self.closed
        self.reads.append(timeout_s)
        lo = self.clock.now - self.origin
        self.clock.now += timeout_s
        hi = self.clock.now - self.origin
        out: set = set()
        for t, ev in self.script:
            if lo < t <= hi:
                out |= ev
        return frozenset(out)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def chown_calls(monkeypatch) -> List[Tuple[str, int, int]]:
    """Record os.chown instead of requiring root."""
    calls: List[Tuple[str, int, int]] = []

    def fake_chown(path: Any, uid: int, gid: int, **kwargs: Any) -> None:
        calls.append((str(path), uid, gid))

    monkeypatch.setattr(os, "chown", fake_chown)
    return calls


@pytest.fixture
def modpath(tmp_path: Path) -> Path:
    """Extracted module directory with every ABI staged."""
    m = tmp_path / "module"
    for abi in ABIS:
        b = m / "binaries" / abi / "Hybrid-Mount"
        b.parent.mkdir(parents=True)
        b.write_bytes(f"ELF:{abi}".encode())
    (m / "system" / "bin").mkdir(parents=True)
    (m / "system" / "bin" / "placeholder").write_text("", encoding="utf-8")
    (m / "tools").mkdir()
    (m / "tools" / "mkfs.erofs").write_bytes(b"ELF:mkfs")
    (m / "module.prop").write_text("id=hybrid_mount\n", encoding="utf-8")
    (m / "config.toml").write_text(TEMPLATE, encoding="utf-8")
    return m


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    return tmp_path / "data" / "adb" / "Hybrid-Mount"


@pytest.fixture
def settings(base_dir: Path) -> InstallerSettings:
    return InstallerSettings(
        raw={
            "paths": {"base_dir": str(base_dir)},
            "permissions": {"selinux_context": None},
        }
    )


@pytest.fixture
def opened_sources() -> List[ScriptedSource]:
    return []


@pytest.fixture
def make_ctx(modpath: Path, settings: InstallerSettings, clock: FakeClock, opened_sources: List[ScriptedSource]):
    """Build an InstallCtx whose prompt replays the given key script."""

    def _make(script: Iterable[Tuple[float, Iterable[InputEvent]]] = ()) -> InstallCtx:
        def open_events() -> ScriptedSource:
            s = ScriptedSource(clock, script)
            opened_sources.append(s)
            return s

        return InstallCtx(
            modpath=modpath,
            settings=settings,
            ui=UiPrinter(stream=io.StringIO()),
            open_events=open_events,
            clock=clock,
        )

    return _make

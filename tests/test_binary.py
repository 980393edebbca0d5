from __future__ import annotations

import stat
from pathlib import Path

import pytest

from hybrid_installer.errors import BinaryNotFound
from hybrid_installer.lib.binary import install_binary


def test_installs_matching_abi(modpath: Path, chown_calls) -> None:
    target = install_binary(modpath, "arm64-v8a", "Hybrid-Mount")

    assert target == modpath / "Hybrid-Mount"
    assert target.read_bytes() == b"ELF:arm64-v8a"
    assert stat.S_IMODE(target.stat().st_mode) == 0o755
    assert (str(target), 0, 0) in chown_calls


def test_staging_payloads_removed(modpath: Path, chown_calls) -> None:
    install_binary(modpath, "x86_64", "Hybrid-Mount")

    assert not (modpath / "binaries").exists()
    assert not (modpath / "system").exists()
    assert (modpath / "tools" / "mkfs.erofs").exists()
    assert (modpath / "config.toml").exists()


def test_overwrites_previous_binary(modpath: Path, chown_calls) -> None:
    (modpath / "Hybrid-Mount").write_bytes(b"old")
    install_binary(modpath, "armeabi-v7a", "Hybrid-Mount")
    assert (modpath / "Hybrid-Mount").read_bytes() == b"ELF:armeabi-v7a"


def test_missing_binary_aborts_without_copy(modpath: Path, chown_calls) -> None:
    (modpath / "binaries" / "x86_64" / "Hybrid-Mount").unlink()

    with pytest.raises(BinaryNotFound) as exc:
        install_binary(modpath, "x86_64", "Hybrid-Mount")

    assert str(exc.value) == "Binary For x86_64 Not Found In This Zip"
    assert not (modpath / "Hybrid-Mount").exists()
    # Nothing discarded either: a later run with a good package can still proceed.
    assert (modpath / "binaries").exists()
    assert chown_calls == []

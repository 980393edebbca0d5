from __future__ import annotations

import logging
import platform
from typing import Optional

from ..errors import UnsupportedArchitecture

logger = logging.getLogger(__name__)

ABI_BY_ARCH = {
    "arm64": "arm64-v8a",
    "x64": "x86_64",
    "arm": "armeabi-v7a",
}


def normalize_arch(machine: str) -> str:
    """Map a kernel machine name onto the installer's raw ARCH vocabulary."""
    m = machine.lower()
    return {
        "aarch64": "arm64",
        "arm64": "arm64",
        "x86_64": "x64",
        "amd64": "x64",
        "armv7l": "arm",
        "armv8l": "arm",
    }.get(m, m)


def detect_arch(explicit: Optional[str] = None) -> str:
    if explicit:
        return explicit
    machine = platform.machine()
    arch = normalize_arch(machine)
    logger.info("No ARCH supplied; derived %s from machine %s", arch, machine)
    return arch


def resolve_abi(arch: str) -> str:
    logger.info("Resolving ABI for raw architecture %r", arch)
    try:
        return ABI_BY_ARCH[arch]
    except KeyError:
        raise UnsupportedArchitecture(arch) from None

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..errors import BinaryNotFound
from .perms import set_perm

logger = logging.getLogger(__name__)

STAGING_DIRS = ("binaries", "system")


def binary_source(modpath: str | Path, abi: str, binary_name: str) -> Path:
    return Path(modpath) / "binaries" / abi / binary_name


def discard_staging(modpath: str | Path) -> None:
    """Remove one-time install payloads (all ABI variants, overlay skeleton)."""
    for name in STAGING_DIRS:
        p = Path(modpath) / name
        if p.exists():
            shutil.rmtree(p)
            logger.info("Removed staging payload %s", p)


def install_binary(
    modpath: str | Path,
    abi: str,
    binary_name: str,
    *,
    context: Optional[str] = None,
) -> Path:
    """Install the ABI-matched daemon binary at <modpath>/<binary_name>.

    Raises BinaryNotFound before touching the target when the staging copy is
    missing. Returns the installed path.
    """

    src = binary_source(modpath, abi, binary_name)
    if not src.is_file():
        raise BinaryNotFound(abi, str(src))

    target = Path(modpath) / binary_name
    if target.is_dir():
        shutil.rmtree(target)
    shutil.copyfile(src, target)
    set_perm(target, 0, 0, 0o755, context=context)
    logger.info("Installed %s -> %s", src, target)

    discard_staging(modpath)
    return target

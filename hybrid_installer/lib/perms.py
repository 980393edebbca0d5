from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

SELINUX_FS = "/sys/fs/selinux"


def _selinux_enabled() -> bool:
    return Path(SELINUX_FS).is_dir() and shutil.which("chcon") is not None


def _apply_context(path: Path, context: Optional[str], *, recursive: bool = False) -> None:
    if not context or not _selinux_enabled():
        return
    argv = ["chcon", "-R", context, str(path)] if recursive else ["chcon", context, str(path)]
    run_cmd(argv, check=False)


def set_perm(path: str | Path, uid: int, gid: int, mode: int, *, context: Optional[str] = None) -> None:
    p = Path(path)
    os.chown(p, uid, gid)
    os.chmod(p, mode)
    _apply_context(p, context)


def set_perm_recursive(
    root: str | Path,
    uid: int,
    gid: int,
    dir_mode: int,
    file_mode: int,
    *,
    context: Optional[str] = None,
) -> None:
    """Own everything under root by uid:gid; dirs get dir_mode, everything else file_mode."""

    r = Path(root)
    set_perm(r, uid, gid, dir_mode)
    for item in r.rglob("*"):
        if item.is_symlink():
            os.chown(item, uid, gid, follow_symlinks=False)
        elif item.is_dir():
            set_perm(item, uid, gid, dir_mode)
        else:
            set_perm(item, uid, gid, file_mode)
    _apply_context(r, context, recursive=True)
    logger.info("Permissions set under %s (dirs=%o files=%o)", r, dir_mode, file_mode)

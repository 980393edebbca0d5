from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..errors import BinaryNotFound, InstallAbort
from ..lib.binary import binary_source, install_binary

logger = logging.getLogger(__name__)


class InstallBinaryStep:
    step_id = "20_install_binary"

    def __init__(self, ctx: InstallCtx) -> None:
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        inst = state.setdefault("install", {})
        abi = inst.get("abi")
        if not abi:
            raise InstallAbort("install.abi missing; run 10_resolve_arch first")

        src = binary_source(self.ctx.modpath, abi, self.ctx.settings.binary_name)
        if not src.is_file():
            raise BinaryNotFound(abi, str(src))

        # Refreshed on every run, upgrades included.
        self.ctx.ui.say(f"Installing Binary For {abi}...")
        target = install_binary(
            self.ctx.modpath,
            abi,
            self.ctx.settings.binary_name,
            context=self.ctx.settings.selinux_context,
        )
        inst["binary_target"] = str(target)
        return state

from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.arch import resolve_abi

logger = logging.getLogger(__name__)


class ResolveArchStep:
    step_id = "10_resolve_arch"

    def __init__(self, ctx: InstallCtx) -> None:
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        inst = state.setdefault("install", {})
        arch = str(inst.get("arch") or "")

        abi = resolve_abi(arch)
        inst["abi"] = abi

        self.ctx.ui.say(f"Device Architecture: {arch} ({abi})")
        return state

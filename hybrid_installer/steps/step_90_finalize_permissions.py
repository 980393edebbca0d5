from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.perms import set_perm, set_perm_recursive

logger = logging.getLogger(__name__)

MKFS_EROFS = "tools/mkfs.erofs"


class FinalizePermissionsStep:
    step_id = "90_finalize_permissions"

    def __init__(self, ctx: InstallCtx) -> None:
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        modpath = self.ctx.modpath
        context = self.ctx.settings.selinux_context

        set_perm_recursive(modpath, 0, 0, 0o755, 0o644, context=context)

        # The recursive pass drops exec bits; restore them on the executables.
        for exe in (self.ctx.binary_target, modpath / MKFS_EROFS):
            if exe.is_file():
                set_perm(exe, 0, 0, 0o755)
            else:
                logger.info("No %s to mark executable", exe)

        self.ctx.ui.say("Installation Complete")
        return state

from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.config_store import DEFAULT_MODE_KEY
from ..lib.mode_select import select_mode

logger = logging.getLogger(__name__)


class BootstrapConfigStep:
    step_id = "30_bootstrap_config"

    def __init__(self, ctx: InstallCtx) -> None:
        self.ctx = ctx

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ui = self.ctx.ui
        store = self.ctx.config_store
        inst = state.setdefault("install", {})
        inst["config_path"] = str(store.path)

        store.ensure_base_dir()

        if store.exists():
            # Upgrade: preservation is by not touching the file at all.
            ui.say("Existing Config Found")
            ui.say("Skipping Setup Wizard To Preserve Settings")
            inst["fresh_install"] = False
            return state

        ui.say("Fresh Installation Detected")
        ui.say("Installing Default Config...")
        # Nothing is written at the config path until default_mode is set.
        doc = store.read_template(self.ctx.config_template)

        selection = select_mode(
            self.ctx.open_events(),
            say=ui.say,
            timeout_s=self.ctx.settings.prompt_timeout_s,
            poll_s=self.ctx.settings.prompt_poll_s,
            clock=self.ctx.clock,
        )
        doc[DEFAULT_MODE_KEY] = selection.mode.value
        store.create(doc)

        inst["fresh_install"] = True
        inst["default_mode"] = selection.mode.value
        inst["mode_selection"] = {
            "state": selection.state.value,
            "elapsed_s": round(selection.elapsed_s, 2),
        }
        return state

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .console import UiPrinter
from .lib.config_store import ConfigStore
from .lib.input_events import GeteventSource, InputEventSource
from .settings import InstallerSettings


@dataclass(frozen=True)
class InstallCtx:
    modpath: Path
    settings: InstallerSettings = field(default_factory=InstallerSettings)
    ui: UiPrinter = field(default_factory=UiPrinter)
    open_events: Callable[[], InputEventSource] = GeteventSource
    clock: Callable[[], float] = time.monotonic

    @property
    def binary_target(self) -> Path:
        return self.modpath / self.settings.binary_name

    @property
    def config_template(self) -> Path:
        return self.modpath / self.settings.config_name

    @property
    def config_store(self) -> ConfigStore:
        return ConfigStore(base_dir=Path(self.settings.base_dir), config_name=self.settings.config_name)

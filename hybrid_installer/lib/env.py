from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    base_dir: str = "/data/adb/Hybrid-Mount"
    config_name: str = "config.toml"
    binary_name: str = "Hybrid-Mount"
    log_default: str = "/data/adb/Hybrid-Mount/install.log"


PATHS = Paths()

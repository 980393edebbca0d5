from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.env import PATHS
from .lib.mode_select import DEFAULT_POLL_S, DEFAULT_TIMEOUT_S

DEFAULT_SELINUX_CONTEXT = "u:object_r:system_file:s0"


@dataclass(frozen=True)
class InstallerSettings:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def base_dir(self) -> str:
        return str(((self.raw.get("paths") or {}).get("base_dir")) or PATHS.base_dir)

    @property
    def config_name(self) -> str:
        return str(((self.raw.get("paths") or {}).get("config_name")) or PATHS.config_name)

    @property
    def binary_name(self) -> str:
        return str(((self.raw.get("binary") or {}).get("name")) or PATHS.binary_name)

    @property
    def prompt_timeout_s(self) -> float:
        v = (self.raw.get("mode_prompt") or {}).get("timeout_s")
        return float(v) if v is not None else DEFAULT_TIMEOUT_S

    @property
    def prompt_poll_s(self) -> float:
        v = (self.raw.get("mode_prompt") or {}).get("poll_s")
        return float(v) if v is not None else DEFAULT_POLL_S

    @property
    def selinux_context(self) -> Optional[str]:
        perms = self.raw.get("permissions") or {}
        if "selinux_context" in perms:
            return perms["selinux_context"] or None
        return DEFAULT_SELINUX_CONTEXT

    def as_dict(self) -> Dict[str, Any]:
        return {
            "base_dir": self.base_dir,
            "config_name": self.config_name,
            "binary_name": self.binary_name,
            "prompt_timeout_s": self.prompt_timeout_s,
            "prompt_poll_s": self.prompt_poll_s,
            "selinux_context": self.selinux_context,
        }


def load_settings(path: Optional[str]) -> InstallerSettings:
    if not path:
        return InstallerSettings()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer settings must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read installer settings") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("installer settings must contain a mapping/object")

    return InstallerSettings(raw=raw)

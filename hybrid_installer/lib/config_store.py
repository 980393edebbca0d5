from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

from ..errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MODE_KEY = "default_mode"


def _parse(path: Path) -> TOMLDocument:
    try:
        return tomlkit.parse(path.read_text(encoding="utf-8"))
    except (TOMLKitError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e


@dataclass(frozen=True)
class ConfigStore:
    """Single owner of the persisted daemon configuration file.

    Every write (create() on first install, set_value() afterwards) goes
    through a same-directory temp file and rename, so the path either holds
    a complete document or does not exist.
    """

    base_dir: Path
    config_name: str = "config.toml"

    @property
    def path(self) -> Path:
        return self.base_dir / self.config_name

    def ensure_base_dir(self) -> None:
        self.base_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_template(self, template: str | Path) -> TOMLDocument:
        t = Path(template)
        if not t.is_file():
            raise ConfigError(f"Default config template missing: {t}")
        return _parse(t)

    def create(self, doc: TOMLDocument) -> None:
        """Publish a complete first config in one rename; nothing exists at path before."""
        self.ensure_base_dir()
        self._replace(tomlkit.dumps(doc))
        logger.info("Created %s", self.path)

    def load(self) -> TOMLDocument:
        return _parse(self.path)

    def set_value(self, key: str, value: str) -> None:
        doc = self.load()
        doc[key] = value
        self._replace(tomlkit.dumps(doc))
        logger.info("Wrote %s = %r to %s", key, value, self.path)

    def _replace(self, text: str) -> None:
        mode = self.path.stat().st_mode & 0o7777 if self.path.exists() else 0o644
        fd, tmp = tempfile.mkstemp(prefix=f".{self.config_name}.", dir=str(self.base_dir))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp, mode)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

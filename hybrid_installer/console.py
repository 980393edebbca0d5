from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import List, TextIO

logger = logging.getLogger("hybrid_installer.ui")


@dataclass
class UiPrinter:
    """Operator-facing progress lines (the installer's only failure channel).

    Lines are written to the stream and mirrored into the install log.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    lines: List[str] = field(default_factory=list)

    def say(self, msg: str) -> None:
        self.lines.append(msg)
        logger.info("ui: %s", msg)
        self.stream.write(msg + "\n")
        self.stream.flush()

    def abort(self, msg: str) -> None:
        self.lines.append(f"! {msg}")
        logger.error("abort: %s", msg)
        self.stream.write(f"! {msg}\n")
        self.stream.flush()

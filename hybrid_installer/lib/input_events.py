from __future__ import annotations

import enum
import logging
import os
import re
import selectors
import shutil
import subprocess
import time
from typing import FrozenSet, Optional, Protocol

from .command import fmt_argv

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"\bKEY_(VOLUMEUP|VOLUMEDOWN)\b")


class InputEvent(enum.Enum):
    VOLUME_UP = "KEY_VOLUMEUP"
    VOLUME_DOWN = "KEY_VOLUMEDOWN"


def parse_getevent(text: str) -> FrozenSet[InputEvent]:
    """Extract volume key events from `getevent -l` output.

    Any line naming the key counts (press, release or repeat).
    """
    return frozenset(InputEvent(f"KEY_{m}") for m in _KEY_RE.findall(text))


class InputEventSource(Protocol):
    """Subscription to raw key events.

    read() blocks for at most timeout_s and returns whatever arrived in that
    window (possibly nothing). close() cancels the subscription.
    """

    def read(self, timeout_s: float) -> FrozenSet[InputEvent]:
        ...

    def close(self) -> None:
        ...


class GeteventSource:
    """Streams `getevent -l` from a single child process for the life of the prompt."""

    argv = ["getevent", "-l"]

    def __init__(self) -> None:
        self._proc: Optional[subprocess.Popen] = None
        self._sel: Optional[selectors.BaseSelector] = None
        self._pending = ""

        if shutil.which(self.argv[0]) is None:
            logger.warning("%s not available; key selection disabled", self.argv[0])
            return

        logger.info("CMD %s", fmt_argv(self.argv))
        self._proc = subprocess.Popen(
            self.argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
        self._sel = selectors.DefaultSelector()
        self._sel.register(self._proc.stdout, selectors.EVENT_READ)

    def read(self, timeout_s: float) -> FrozenSet[InputEvent]:
        if self._proc is None or self._sel is None:
            time.sleep(max(timeout_s, 0.0))
            return frozenset()

        if not self._sel.select(timeout=max(timeout_s, 0.0)):
            return frozenset()

        chunk = os.read(self._proc.stdout.fileno(), 4096)
        if not chunk:
            logger.warning("getevent exited (rc=%s); no further key input", self._proc.poll())
            self._shutdown()
            return frozenset()

        text = self._pending + chunk.decode("utf-8", errors="replace")
        events = parse_getevent(text)
        # Carry an unfinished last line only while it could still complete a key name.
        tail = text.rpartition("\n")[2]
        self._pending = "" if parse_getevent(tail) else tail
        return events

    def _shutdown(self) -> None:
        if self._sel is not None:
            self._sel.close()
            self._sel = None
        if self._proc is not None:
            if self._proc.poll() is None:
                self._proc.terminate()
                try:
                    self._proc.wait(timeout=1)
                except subprocess.TimeoutExpired:
                    self._proc.kill()
                    self._proc.wait()
            if self._proc.stdout is not None:
                self._proc.stdout.close()
            self._proc = None

    def close(self) -> None:
        self._shutdown()

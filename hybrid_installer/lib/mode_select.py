from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable

from .input_events import InputEvent, InputEventSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_POLL_S = 0.5


class MountMode(enum.Enum):
    OVERLAY = "Overlay"
    MAGIC = "Magic"


class SelectionState(enum.Enum):
    PROMPTING = "prompting"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"


FALLBACK_MODE = MountMode.OVERLAY

_LABELS = {
    MountMode.OVERLAY: "OverlayFS",
    MountMode.MAGIC: "Magic Mount",
}


@dataclass(frozen=True)
class ModeSelection:
    mode: MountMode
    state: SelectionState
    elapsed_s: float


def mode_from_events(events: frozenset[InputEvent]) -> MountMode | None:
    # Up is checked first, so it wins when both keys land in one batch.
    if InputEvent.VOLUME_UP in events:
        return MountMode.OVERLAY
    if InputEvent.VOLUME_DOWN in events:
        return MountMode.MAGIC
    return None


def print_banner(say: Callable[[str], None], timeout_s: float) -> None:
    say(" ")
    say("================================")
    say("      Select Default Mount Mode     ")
    say("================================")
    say("  Volume Up (+): OverlayFS")
    say("  Volume Down (-): Magic Mount")
    say(" ")
    say(f"  Defaulting To OverlayFS In {timeout_s:g} Seconds")
    say("================================")


def select_mode(
    source: InputEventSource,
    *,
    say: Callable[[str], None],
    timeout_s: float = DEFAULT_TIMEOUT_S,
    poll_s: float = DEFAULT_POLL_S,
    clock: Callable[[], float] = time.monotonic,
) -> ModeSelection:
    """Wait for the first volume key or the deadline, whichever comes first.

    The source is closed before returning.
    """

    print_banner(say, timeout_s)

    start = clock()
    deadline = start + timeout_s
    try:
        while True:
            remaining = max(deadline - clock(), 0.0)
            mode = mode_from_events(source.read(min(poll_s, remaining)))
            now = clock()
            elapsed = now - start
            if mode is not None:
                say(f"Key Detected: Selected {_LABELS[mode]}")
                selection = ModeSelection(mode=mode, state=SelectionState.RESOLVED, elapsed_s=elapsed)
                break
            if now >= deadline:
                say(f"Timeout: Selected {_LABELS[FALLBACK_MODE]}")
                selection = ModeSelection(mode=FALLBACK_MODE, state=SelectionState.TIMED_OUT, elapsed_s=elapsed)
                break
    finally:
        source.close()

    logger.info("Mode selection: %s (%s after %.1fs)", selection.mode.value, selection.state.value, selection.elapsed_s)
    say(f"- Configured mode: {selection.mode.value}")
    return selection

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .console import UiPrinter
from .context import InstallCtx
from .errors import InstallAbort
from .lib.arch import detect_arch
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .settings import load_settings
from .state_store import ensure_defaults, save_state
from .steps import (
    BootstrapConfigStep,
    FinalizePermissionsStep,
    InstallBinaryStep,
    ResolveArchStep,
)

logger = logging.getLogger(__name__)


def build_steps(ctx: InstallCtx):
    return [
        ResolveArchStep(ctx),
        InstallBinaryStep(ctx),
        BootstrapConfigStep(ctx),
        FinalizePermissionsStep(ctx),
    ]


def run(
    ctx: InstallCtx,
    *,
    arch: str,
    report_path: Optional[str] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> Dict[str, Any]:
    """Run the install pipeline. Errors are recorded in the state and re-raised."""

    state = ensure_defaults({"config": ctx.settings.as_dict()})
    state["config"]["modpath"] = str(ctx.modpath)
    state["install"]["arch"] = arch

    try:
        result = run_pipeline(
            state=state,
            steps=build_steps(ctx),
            start_at=start_at,
            stop_after=stop_after,
        )
        state = result.state
        state.setdefault("execution", {})["ran_steps"] = result.ran_steps
        return state
    except Exception as e:
        logger.exception("Installer failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if report_path:
            save_state(report_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="hybrid-mount-installer")
    p.add_argument("--arch", default=os.environ.get("ARCH"), help="Raw device architecture (arm64|x64|arm)")
    p.add_argument("--modpath", default=os.environ.get("MODPATH"), help="Extracted module directory")
    p.add_argument("--settings", default=None, help="Installer settings override (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--report", default=None, help="Write install state report (json|yaml)")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 20_install_binary)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--verbose", action="store_true", help="Also log to the console")

    args = p.parse_args(argv)
    if not args.modpath:
        p.error("--modpath (or MODPATH) is required")

    configure_logging(log_path=args.log, also_console=bool(args.verbose))
    ui = UiPrinter()

    try:
        ctx = InstallCtx(modpath=Path(args.modpath), settings=load_settings(args.settings), ui=ui)
        run(
            ctx,
            arch=detect_arch(args.arch),
            report_path=args.report,
            start_at=args.start_at,
            stop_after=args.stop_after,
        )
    except (InstallAbort, OSError) as e:
        ui.abort(str(e))
        return 1
    except Exception as e:
        logger.exception("Unexpected installer failure")
        ui.abort(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

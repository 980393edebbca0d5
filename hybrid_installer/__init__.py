"""Hybrid Mount module installer (Python-first, step-driven).

Core design goals:
- Idempotent steps, safe to re-run over a partial install
- Architecture-aware binary selection
- Configuration created once, never clobbered on upgrade
- Centralized logging
"""

__all__ = []

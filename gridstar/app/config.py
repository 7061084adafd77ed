#!/usr/bin/env python3
"""
Viewer settings.

Resolution order: defaults < GRIDSTAR_* environment variables < --key=value args.
    GRIDSTAR_ROWS=30 gridstar-viewer --algo=Dijkstra --steps_per_sec=20
"""

import os
import sys
from dataclasses import dataclass, fields
from typing import List, Mapping, Optional

from gridstar.core.types import GridConfigError

ENV_PREFIX = "GRIDSTAR_"
ALGOS = ("A*", "Dijkstra")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    rows: int = 20
    cols: int = 20
    algo: str = "A*"
    steps_per_sec: int = 10
    cell_size: int = 28
    map: Optional[str] = None
    log_level: str = "WARNING"


def _coerce(name: str, raw: str):
    if name in ("rows", "cols", "steps_per_sec", "cell_size"):
        try:
            v = int(raw)
        except ValueError:
            raise GridConfigError(f"{name} must be an integer, got {raw!r}") from None
        if v <= 0:
            raise GridConfigError(f"{name} must be positive, got {v}")
        return v
    if name == "algo":
        for a in ALGOS:
            if raw.lower() in (a.lower(), a.lower().rstrip("*") + "star"):
                return a
        raise GridConfigError(f"unknown algo {raw!r}, expected one of {', '.join(ALGOS)}")
    if name == "log_level":
        level = raw.upper()
        if level not in LOG_LEVELS:
            raise GridConfigError(f"unknown log level {raw!r}")
        return level
    return raw or None


def resolve_settings(argv: Optional[List[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env

    raw = {}
    names = [f.name for f in fields(Settings)]
    for name in names:
        key = ENV_PREFIX + name.upper()
        if key in env:
            raw[name] = env[key]
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        k, v = arg[2:].split("=", 1)
        k = k.replace("-", "_")
        if k in names:
            raw[k] = v

    return Settings(**{k: _coerce(k, v) for k, v in raw.items()})

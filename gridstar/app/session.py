#!/usr/bin/env python3
"""
Session — the driver side of the Pathfinder contract, without any drawing.

Owns the editable grid (dimensions, walls, start, end), the active strategy
and the pacing of step() calls. Any edit marks the search dirty; the next
tick() (or an explicit reset()) re-runs deinit() + init().
"""

import logging
import time
from typing import Any, Dict, List, Optional

from gridstar.core.astar import AStarAlgo
from gridstar.core.dijkstra import DijkstraAlgo
from gridstar.core.maps import load_map
from gridstar.core.pathfinder import Pathfinder, run_to_completion
from gridstar.core.types import Grid, GridConfigError, Position, PosLike, StepResult, as_position

logger = logging.getLogger(__name__)

MIN_SPEED = 1
MAX_SPEED = 120

ALGORITHMS = {
    "A*": AStarAlgo,
    "Dijkstra": DijkstraAlgo,
}


def make_algo(label: str) -> Pathfinder:
    try:
        return ALGORITHMS[label](name=label)
    except KeyError:
        raise GridConfigError(f"unknown algorithm {label!r}") from None


class Session:
    def __init__(self, rows: int = 20, cols: int = 20, algo: str = "A*",
                 steps_per_sec: int = 10, grid: Optional[Grid] = None):
        if grid is None:
            grid = Grid.empty(rows, cols, (0, 0), (cols - 1, rows - 1))
        grid.validate()
        self.rows = grid.rows
        self.cols = grid.cols
        self.walls: List[List[bool]] = [list(row) for row in grid.walls]
        self.start: Position = grid.start
        self.end: Position = grid.end

        self.selected_algo = algo
        self.algo: Pathfinder = make_algo(algo)
        self.steps_per_sec = self._clamp_speed(steps_per_sec)

        self.running = False
        self.current: Position = self.start
        self.last: StepResult = StepResult(status="idle")
        self.needs_reset = True
        self._last_step_t = 0.0

    @classmethod
    def from_map(cls, path, algo: str = "A*", steps_per_sec: int = 10) -> "Session":
        return cls(algo=algo, steps_per_sec=steps_per_sec, grid=load_map(path))

    # ---------- grid ----------
    def grid(self) -> Grid:
        return Grid(self.rows, self.cols, [list(row) for row in self.walls], self.start, self.end)

    def _in_bounds(self, p: Position) -> bool:
        return 0 <= p.x < self.cols and 0 <= p.y < self.rows

    # ---------- edits ----------
    def set_wall(self, pos: PosLike, blocked: bool = True) -> bool:
        p = as_position(pos)
        if not self._in_bounds(p) or p in (self.start, self.end):
            return False
        if self.walls[p.y][p.x] == blocked:
            return False
        self.walls[p.y][p.x] = blocked
        self.needs_reset = True
        return True

    def set_start(self, pos: PosLike) -> bool:
        p = as_position(pos)
        if not self._in_bounds(p) or p == self.end:
            return False
        self.walls[p.y][p.x] = False
        self.start = p
        self.needs_reset = True
        return True

    def set_end(self, pos: PosLike) -> bool:
        p = as_position(pos)
        if not self._in_bounds(p) or p == self.start:
            return False
        self.walls[p.y][p.x] = False
        self.end = p
        self.needs_reset = True
        return True

    def resize(self, rows: int, cols: int) -> None:
        rows, cols = max(1, rows), max(1, cols)
        if (rows, cols) == (self.rows, self.cols):
            return
        walls = [[False] * cols for _ in range(rows)]
        for y in range(min(rows, self.rows)):
            for x in range(min(cols, self.cols)):
                walls[y][x] = self.walls[y][x]
        self.rows, self.cols, self.walls = rows, cols, walls
        self.start = Position(min(self.start.x, cols - 1), min(self.start.y, rows - 1))
        self.end = Position(min(self.end.x, cols - 1), min(self.end.y, rows - 1))
        for p in (self.start, self.end):
            self.walls[p.y][p.x] = False
        self.needs_reset = True

    def switch_algo(self, label: str) -> None:
        algo = make_algo(label)
        self.algo.deinit()
        self.algo = algo
        self.selected_algo = label
        self.needs_reset = True

    def bump_speed(self, dv: int) -> None:
        self.steps_per_sec = self._clamp_speed(self.steps_per_sec + dv)

    @staticmethod
    def _clamp_speed(v: int) -> int:
        return int(max(MIN_SPEED, min(MAX_SPEED, v)))

    # ---------- search control ----------
    def reset(self) -> None:
        self.running = False
        self.current = self.start
        self.last = StepResult(status="idle")
        self.algo.deinit()
        self.algo.init(self.rows, self.cols, self.start, self.end, self.walls)
        self.needs_reset = False
        logger.debug("session reset: %s on %dx%d", self.selected_algo, self.rows, self.cols)

    def _ensure_ready(self) -> None:
        if self.needs_reset:
            self.reset()

    @property
    def finished(self) -> bool:
        return self.last.done

    def toggle_run(self) -> None:
        if self.finished:
            self.reset()
            return
        self._ensure_ready()
        self.running = not self.running

    def step_once(self) -> StepResult:
        self._ensure_ready()
        if self.finished:
            return self.last
        return self._record(self.algo.step())

    def run_instant(self) -> StepResult:
        self._ensure_ready()
        return self._record(run_to_completion(self.algo))

    def _record(self, res: StepResult) -> StepResult:
        self.last = res
        if res.position is not None:
            self.current = res.position
        if res.done:
            self.running = False
        return res

    def tick(self, now: Optional[float] = None) -> Optional[StepResult]:
        """Called once per frame; steps when running and the interval elapsed."""
        now = time.monotonic() if now is None else now
        if self.needs_reset:
            self.reset()
        if not self.running:
            return None
        if now - self._last_step_t < 1.0 / self.steps_per_sec:
            return None
        self._last_step_t = now
        return self.step_once()

    # ---------- observation ----------
    def status_label(self) -> str:
        if self.last.found:
            return "Found"
        if self.last.exhausted:
            return "No path"
        if self.running:
            return "Running"
        return "Paused" if self.last.status == "searching" else "Idle"

    def snapshot(self) -> Dict[str, Any]:
        self._ensure_ready()
        metrics = dict(self.last.metrics) if self.last.metrics else {"algo": self.selected_algo}
        return {
            "rows": self.rows,
            "cols": self.cols,
            "walls": [list(row) for row in self.walls],
            "start": self.start,
            "end": self.end,
            "current": self.current,
            "visited": self.algo.get_visited(),
            "frontier": self.algo.get_frontier(),
            "path": self.algo.get_path(),
            "state": self.algo.get_state(),
            "status": self.status_label(),
            "algo": self.selected_algo,
            "steps_per_sec": self.steps_per_sec,
            "metrics": metrics,
        }

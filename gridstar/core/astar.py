#!/usr/bin/env python3
"""
A* on an 8-connected grid — one expansion per step() so a driver can animate it.

Costs (exact integers):
- STRAIGHT_COST = 10 for an axis-aligned move, DIAGONAL_COST = 14 for a diagonal.
- Octile distance with the same constants as heuristic; it never overestimates
  and is consistent for these step costs, so the first pop of the goal is optimal.
- Diagonals are allowed even when both flanking orthogonal cells are walls.

Tie-breaking in the PQ:
- (f, h, seq, g, pos): lower f, then lower h, then FIFO by seq.

The frontier is a plain heap without decrease-key, so a cell may be queued
several times. The per-cell record is authoritative; entries worse than it
are dropped when popped.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import heapq
import logging
import sys

from gridstar.core.pathfinder import Pathfinder
from gridstar.core.types import Grid, GridConfigError, Position, PosLike, StepResult

logger = logging.getLogger(__name__)

STRAIGHT_COST = 10
DIAGONAL_COST = 14
INF = sys.maxsize  # g_cost of a cell never reached

# column offset outer, row offset inner
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

Node = Tuple[int, int, int, int, Position]  # (f, h, seq, g, pos)


def octile(a: PosLike, b: PosLike) -> int:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    lo, hi = min(dx, dy), max(dx, dy)
    return lo * DIAGONAL_COST + (hi - lo) * STRAIGHT_COST


def step_cost(dx: int, dy: int) -> int:
    return DIAGONAL_COST if dx and dy else STRAIGHT_COST


@dataclass
class CellRecord:
    g_cost: int = INF
    h_cost: int = 0
    prev: Optional[Position] = None


def _copy_walls(walls: Sequence[Sequence[bool]]) -> List[List[bool]]:
    try:
        return [[bool(v) for v in row] for row in walls]
    except TypeError:
        raise GridConfigError("walls must be a matrix of booleans") from None


@dataclass
class AStarAlgo(Pathfinder):
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    frontier: List[Node] = field(default_factory=list)
    records: List[List[CellRecord]] = field(default_factory=list)   # [row][col]
    current: Optional[Position] = None
    status: str = "idle"
    steps: int = 0
    visited_count: int = 0
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, rows: int, cols: int, start: PosLike, end: PosLike,
             walls: Sequence[Sequence[bool]]) -> None:
        grid = Grid(rows, cols, _copy_walls(walls), start, end)
        try:
            grid.validate()
        except GridConfigError as ex:
            logger.warning("%s: rejected grid: %s", self.name, ex)
            raise

        self.deinit()
        self.grid = grid
        self.records = [
            [CellRecord(h_cost=self.heuristic(Position(x, y))) for x in range(cols)]
            for y in range(rows)
        ]
        s = grid.start
        self.records[s.y][s.x].g_cost = 0
        self.visited_count = 1
        self._push(s, 0)
        self.status = "searching"
        logger.debug("%s: init %dx%d start=%s end=%s", self.name, rows, cols, tuple(s), tuple(grid.end))

    def deinit(self) -> None:
        self.grid = None
        self.frontier = []
        self.records = []
        self.current = None
        self.status = "idle"
        self.steps = 0
        self.visited_count = 0
        self.seq = 0

    # -------------------- helpers --------------------

    def heuristic(self, p: Position) -> int:
        return octile(p, self.grid.end)

    def _push(self, p: Position, g: int) -> None:
        h = self.records[p.y][p.x].h_cost
        self.seq += 1
        heapq.heappush(self.frontier, (g + h, h, self.seq, g, p))

    def _pop(self) -> Optional[Tuple[int, Position]]:
        while self.frontier:
            _, _, _, g, p = heapq.heappop(self.frontier)
            if g > self.records[p.y][p.x].g_cost:
                continue  # stale
            return g, p
        return None

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Pop the lowest-f node; an empty frontier means no path.
          - If it is the goal, stop without expanding it.
          - Else relax its 8 neighbours and queue every strict improvement.
        """
        if self.grid is None or self.status in ("found", "exhausted"):
            return self.peek()

        popped = self._pop()
        if popped is None:
            self.current = None
            self.status = "exhausted"
            logger.debug("%s: frontier empty after %d steps, no path", self.name, self.steps)
            return StepResult(status="exhausted", metrics=self.metrics())

        g_u, u = popped
        self.current = u
        self.steps += 1

        if u == self.grid.end:
            self.status = "found"
            logger.debug("%s: reached %s at cost %d after %d steps", self.name, tuple(u), g_u, self.steps)
            return StepResult(status="found", position=u, metrics=self.metrics())

        for dx, dy in NEIGHBOR_OFFSETS:
            v = Position(u.x + dx, u.y + dy)
            if not self.grid.in_bounds(v) or self.grid.is_wall(v):
                continue
            alt = g_u + step_cost(dx, dy)
            rec = self.records[v.y][v.x]
            # don't backtrack
            if alt >= rec.g_cost:
                continue
            if rec.g_cost == INF:
                self.visited_count += 1
            rec.g_cost = alt
            rec.prev = u
            self._push(v, alt)

        return StepResult(status="searching", position=u, metrics=self.metrics())

    # -------------------- observation --------------------

    def peek(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})
        return StepResult(status=self.status, position=self.current, metrics=self.metrics())

    def get_frontier(self) -> List[Position]:
        return [node[4] for node in self.frontier]

    def get_path(self) -> List[Position]:
        if self.current is None or not self.records:
            return []
        path = [self.current]
        prev = self.records[self.current.y][self.current.x].prev
        while prev is not None:
            path.append(prev)
            prev = self.records[prev.y][prev.x].prev
        return path

    def get_visited(self) -> List[List[bool]]:
        return [[rec.g_cost != INF for rec in row] for row in self.records]

    def get_state(self) -> List[List[Optional[str]]]:
        return [
            [None if rec.g_cost == INF else f"{rec.g_cost}|{rec.h_cost}" for rec in row]
            for row in self.records
        ]

    def path_cost(self) -> Optional[int]:
        if self.current is None or not self.records:
            return None
        return self.records[self.current.y][self.current.x].g_cost

    # -------------------- metrics --------------------

    def metrics(self) -> dict:
        path = self.get_path()
        return {
            "algo": self.name,
            "steps": self.steps,
            "frontier_size": len(self.frontier),
            "visited_count": self.visited_count,
            "path_len": len(path),
            "path_cost": self.path_cost(),
        }

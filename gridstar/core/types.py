#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Dict, Any, Sequence, Tuple, Union


class Position(NamedTuple):
    x: int  # column
    y: int  # row


PosLike = Union[Position, Tuple[int, int], Sequence[int]]


class GridConfigError(ValueError):
    """Rejected grid configuration: bad dimensions, walls, start or end."""


def as_position(p: PosLike) -> Position:
    try:
        x, y = p
    except (TypeError, ValueError):
        raise GridConfigError(f"not a 2D position: {p!r}") from None
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        raise GridConfigError(f"position must hold integers: {p!r}")
    return Position(x, y)


@dataclass
class Grid:
    rows: int
    cols: int
    walls: List[List[bool]]             # [row][col], True = wall
    start: Position
    end: Position

    @staticmethod
    def empty(rows: int, cols: int, start: PosLike, end: PosLike) -> "Grid":
        walls = [[False] * cols for _ in range(rows)]
        return Grid(rows, cols, walls, as_position(start), as_position(end))

    def in_bounds(self, p: PosLike) -> bool:
        x, y = p
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_wall(self, p: PosLike) -> bool:
        x, y = p
        return bool(self.walls[y][x])

    def validate(self) -> None:
        """Fail fast on anything the search loop would otherwise trip over."""
        for label, v in (("rows", self.rows), ("cols", self.cols)):
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise GridConfigError(f"{label} must be a positive integer, got {v!r}")
        if len(self.walls) != self.rows:
            raise GridConfigError(f"walls has {len(self.walls)} rows, expected {self.rows}")
        for r, row in enumerate(self.walls):
            if len(row) != self.cols:
                raise GridConfigError(f"walls row {r} has {len(row)} cells, expected {self.cols}")
        self.start = as_position(self.start)
        self.end = as_position(self.end)
        for label, p in (("start", self.start), ("end", self.end)):
            if not self.in_bounds(p):
                raise GridConfigError(f"{label} {tuple(p)} out of bounds for {self.rows}x{self.cols} grid")
            if self.is_wall(p):
                raise GridConfigError(f"{label} {tuple(p)} is a wall")


@dataclass
class StepResult:
    status: str                   # "idle" | "searching" | "found" | "exhausted"
    position: Optional[Position] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == "found"

    @property
    def exhausted(self) -> bool:
        return self.status == "exhausted"

    @property
    def done(self) -> bool:
        return self.status in ("found", "exhausted")

#!/usr/bin/env python3
"""
Pathfinder contract — what a grid-search strategy exposes to a driver.

A driver calls init() once per configuration, then step() at its own pace
until the result is terminal, reading get_frontier()/get_visited()/get_path()/
get_state() in between, and deinit() before the next init().
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from gridstar.core.types import Position, PosLike, StepResult


class Pathfinder(ABC):
    name: str = "(pathfinder)"

    @abstractmethod
    def init(self, rows: int, cols: int, start: PosLike, end: PosLike,
             walls: Sequence[Sequence[bool]]) -> None:
        """Discard prior state and begin a new search from start toward end."""

    @abstractmethod
    def step(self) -> StepResult:
        """Expand exactly one frontier node."""

    @abstractmethod
    def peek(self) -> StepResult:
        """Current status and position, without advancing."""

    @abstractmethod
    def get_frontier(self) -> List[Position]:
        """Positions queued for expansion, in no particular order."""

    @abstractmethod
    def get_path(self) -> List[Position]:
        """Current node back to the start, current first."""

    @abstractmethod
    def get_visited(self) -> List[List[bool]]:
        """[row][col] -> whether the cell has a finite cost."""

    @abstractmethod
    def get_state(self) -> List[List[Optional[str]]]:
        """[row][col] -> debug token or None when unvisited."""

    @abstractmethod
    def deinit(self) -> None:
        """Release search state. Safe to call more than once."""


def run_to_completion(pathfinder: Pathfinder, max_steps: Optional[int] = None) -> StepResult:
    """Instant mode: step until found/exhausted (or max_steps expansions)."""
    if max_steps is not None and max_steps <= 0:
        return pathfinder.peek()
    res = pathfinder.step()
    steps = 1
    while res.status == "searching":
        if max_steps is not None and steps >= max_steps:
            break
        res = pathfinder.step()
        steps += 1
    return res

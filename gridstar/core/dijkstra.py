#!/usr/bin/env python3
from dataclasses import dataclass

from gridstar.core.astar import AStarAlgo
from gridstar.core.types import Position


@dataclass
class DijkstraAlgo(AStarAlgo):
    """Uniform-cost search: the A* engine with a zero heuristic."""

    name: str = "Dijkstra"

    def heuristic(self, p: Position) -> int:
        return 0

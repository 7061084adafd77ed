import heapq
import random
from typing import List, Optional, Tuple

import pytest

Cell = Tuple[int, int]  # (col, row)


def brute_force_costs(walls: List[List[bool]], start: Cell) -> List[List[Optional[int]]]:
    """Plain Dijkstra with 10/14 moves, independent from the engine under test."""
    rows, cols = len(walls), len(walls[0])
    dist: List[List[Optional[int]]] = [[None] * cols for _ in range(rows)]
    pq = [(0, start)]
    while pq:
        d, (x, y) = heapq.heappop(pq)
        if dist[y][x] is not None:
            continue
        dist[y][x] = d
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < cols and 0 <= ny < rows and not walls[ny][nx] and dist[ny][nx] is None:
                    heapq.heappush(pq, (d + (14 if dx and dy else 10), (nx, ny)))
    return dist


def path_cost(path: List[Cell]) -> int:
    total = 0
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        dx, dy = abs(x1 - x0), abs(y1 - y0)
        assert max(dx, dy) == 1, f"cells {(x0, y0)} and {(x1, y1)} are not adjacent"
        total += 14 if dx and dy else 10
    return total


def random_walls(rows: int, cols: int, p: float, seed: int, keep: List[Cell]) -> List[List[bool]]:
    rng = random.Random(seed)
    walls = [[rng.random() < p for _ in range(cols)] for _ in range(rows)]
    for (x, y) in keep:
        walls[y][x] = False
    return walls


@pytest.fixture
def oracle():
    return brute_force_costs


@pytest.fixture
def walk_cost():
    return path_cost


@pytest.fixture
def make_walls():
    return random_walls

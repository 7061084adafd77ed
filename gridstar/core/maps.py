#!/usr/bin/env python3
"""
JSON grid files.

    {"width": 20, "height": 20, "start": [0, 0], "goal": [19, 19],
     "cells": [[0, 1, ...], ...]}

cells[row][col], 1 = wall. Only the grid is stored, never search progress.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

from gridstar.core.types import Grid, GridConfigError, as_position

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def grid_from_dict(data: dict) -> Grid:
    try:
        width = int(data["width"])
        height = int(data["height"])
        start = as_position(data["start"])
        goal = as_position(data["goal"])
        cells = data["cells"]
        walls = [[int(v) == 1 for v in row] for row in cells]
    except GridConfigError:
        raise
    except KeyError as ex:
        raise GridConfigError(f"map is missing key {ex.args[0]!r}") from None
    except (TypeError, ValueError) as ex:
        raise GridConfigError(f"malformed map: {ex}") from None
    grid = Grid(height, width, walls, start, goal)
    grid.validate()
    return grid


def grid_to_dict(grid: Grid) -> dict:
    return {
        "width": grid.cols,
        "height": grid.rows,
        "start": [grid.start.x, grid.start.y],
        "goal": [grid.end.x, grid.end.y],
        "cells": [[1 if v else 0 for v in row] for row in grid.walls],
    }


def load_map(path: PathLike) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            raise GridConfigError(f"{path}: not valid JSON ({ex})") from None
    if not isinstance(data, dict):
        raise GridConfigError(f"{path}: expected a JSON object")
    grid = grid_from_dict(data)
    logger.debug("loaded %dx%d map from %s", grid.rows, grid.cols, path)
    return grid


def save_map(grid: Grid, path: PathLike) -> None:
    grid.validate()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(grid_to_dict(grid), f)
        f.write("\n")

import pytest

from gridstar.app.session import Session, make_algo
from gridstar.core.astar import AStarAlgo
from gridstar.core.dijkstra import DijkstraAlgo
from gridstar.core.maps import save_map
from gridstar.core.types import Grid, GridConfigError, Position


def test_fresh_session_snapshot():
    s = Session(rows=6, cols=8)
    snap = s.snapshot()
    assert snap["start"] == (0, 0)
    assert snap["end"] == (7, 5)
    assert snap["frontier"] == [(0, 0)]
    assert snap["path"] == []
    assert snap["status"] == "Idle"
    assert len(snap["visited"]) == 6 and len(snap["visited"][0]) == 8


def test_make_algo():
    assert isinstance(make_algo("A*"), AStarAlgo)
    assert isinstance(make_algo("Dijkstra"), DijkstraAlgo)
    with pytest.raises(GridConfigError):
        make_algo("BFS")


def test_tick_is_paced():
    s = Session(rows=10, cols=10, steps_per_sec=10)
    assert s.tick(now=1.0) is None  # not running yet
    s.toggle_run()
    assert s.running
    assert s.tick(now=1.0).position == (0, 0)
    assert s.tick(now=1.05) is None
    assert s.tick(now=1.11).position == (1, 1)
    assert s.status_label() == "Running"


def test_running_stops_on_goal():
    s = Session(rows=3, cols=3, steps_per_sec=100)
    s.toggle_run()
    t = 0.0
    while s.running:
        t += 1.0
        s.tick(now=t)
    assert s.status_label() == "Found"
    assert s.current == (2, 2)
    assert s.snapshot()["path"] == [(2, 2), (1, 1), (0, 0)]


def test_edits_restart_the_search():
    s = Session(rows=5, cols=5)
    s.step_once()
    s.step_once()
    assert s.set_wall((2, 2))
    assert s.needs_reset
    s.tick(now=0.0)
    assert not s.needs_reset
    assert s.current == s.start
    assert s.last.status == "idle"
    assert s.snapshot()["walls"][2][2]
    assert s.algo.get_frontier() == [(0, 0)]


def test_walls_cannot_cover_start_or_end():
    s = Session(rows=4, cols=4)
    assert not s.set_wall((0, 0))
    assert not s.set_wall((3, 3))
    assert not s.set_wall((9, 9))
    assert s.set_wall((1, 1))
    assert not s.set_wall((1, 1))  # already a wall
    assert s.set_wall((1, 1), blocked=False)


def test_moving_start_and_end_clears_walls():
    s = Session(rows=4, cols=4)
    s.set_wall((2, 1))
    assert s.set_start((2, 1))
    assert s.start == Position(2, 1)
    assert not s.walls[1][2]
    assert not s.set_end((2, 1))  # same as start
    assert s.set_end((0, 3))
    assert s.end == (0, 3)


def test_resize_clamps_start_and_end():
    s = Session(rows=5, cols=5)
    s.set_wall((1, 1))
    s.resize(3, 2)
    assert (s.rows, s.cols) == (3, 2)
    assert s.end == (1, 2)
    assert s.walls[1][1] is True
    s.resize(0, 0)
    assert (s.rows, s.cols) == (1, 1)
    assert s.start == s.end == (0, 0)
    assert s.step_once().found


def test_instant_run_without_path():
    s = Session(rows=3, cols=3)
    for x in range(3):
        s.set_wall((x, 1))
    res = s.run_instant()
    assert res.exhausted
    assert s.status_label() == "No path"
    assert s.snapshot()["path"] == []
    # once finished, run/pause restarts the search
    s.toggle_run()
    assert not s.running
    assert s.last.status == "idle"


def test_switch_algo():
    s = Session(rows=4, cols=4)
    s.switch_algo("Dijkstra")
    assert isinstance(s.algo, DijkstraAlgo)
    assert s.snapshot()["state"][0][0] == "0|0"
    with pytest.raises(GridConfigError):
        s.switch_algo("BFS")
    assert s.selected_algo == "Dijkstra"


def test_speed_is_clamped():
    s = Session(steps_per_sec=500)
    assert s.steps_per_sec == 120
    s.bump_speed(-1000)
    assert s.steps_per_sec == 1


def test_from_map(tmp_path):
    g = Grid.empty(4, 6, (0, 3), (5, 0))
    g.walls[2][2] = True
    p = tmp_path / "m.json"
    save_map(g, p)
    s = Session.from_map(p, algo="Dijkstra")
    assert (s.rows, s.cols) == (4, 6)
    assert s.walls[2][2]
    assert s.grid() == g
    assert s.run_instant().found

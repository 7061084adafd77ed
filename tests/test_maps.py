import json

import pytest

from gridstar.core.maps import grid_to_dict, load_map, save_map
from gridstar.core.types import Grid, GridConfigError


def test_save_then_load(tmp_path):
    g = Grid.empty(3, 4, (0, 0), (3, 2))
    g.walls[1][1] = True
    g.walls[0][3] = True
    out = tmp_path / "maps" / "small.json"
    save_map(g, out)

    data = json.loads(out.read_text())
    assert data["width"] == 4 and data["height"] == 3
    assert data["cells"][1] == [0, 1, 0, 0]
    assert data["goal"] == [3, 2]

    back = load_map(out)
    assert back == g


def test_load_rejects_missing_key(tmp_path):
    p = tmp_path / "bad.json"
    d = grid_to_dict(Grid.empty(2, 2, (0, 0), (1, 1)))
    del d["cells"]
    p.write_text(json.dumps(d))
    with pytest.raises(GridConfigError, match="cells"):
        load_map(p)


def test_load_rejects_size_mismatch(tmp_path):
    p = tmp_path / "bad.json"
    d = grid_to_dict(Grid.empty(2, 2, (0, 0), (1, 1)))
    d["height"] = 3
    p.write_text(json.dumps(d))
    with pytest.raises(GridConfigError):
        load_map(p)


def test_load_rejects_start_on_wall(tmp_path):
    p = tmp_path / "bad.json"
    d = grid_to_dict(Grid.empty(2, 2, (0, 0), (1, 1)))
    d["cells"][0][0] = 1
    p.write_text(json.dumps(d))
    with pytest.raises(GridConfigError, match="start"):
        load_map(p)


def test_load_rejects_garbage(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("{not json")
    with pytest.raises(GridConfigError):
        load_map(p)
    p.write_text("[1, 2]")
    with pytest.raises(GridConfigError):
        load_map(p)


def test_missing_file_is_an_os_error(tmp_path):
    with pytest.raises(OSError):
        load_map(tmp_path / "nope.json")


def test_load_rejects_undecodable_bytes(tmp_path):
    p = tmp_path / "bad.json"
    p.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(GridConfigError, match="not valid JSON"):
        load_map(p)

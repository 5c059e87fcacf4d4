import json

from okestra.main import main
from okestra.store import ClusterStore


def test_distribute(capsys):
    assert main(["distribute", "9", "w-1", "w-2", "w-3", "w-4"]) == 0

    out = capsys.readouterr().out
    assert "w-1" in out
    assert "w-3" in out
    assert "w-4" not in out


def test_distribute_not_possible(capsys):
    assert main(["distribute", "4", "w-1", "w-2"]) == 1
    assert "cannot be distributed" in capsys.readouterr().out


def test_status_json(capsys, tmp_path, active_cluster):
    path = tmp_path / "clusters.json"
    ClusterStore(path).save(active_cluster)

    assert main(["--store", str(path), "status", "7", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "demo"
    assert data["node_pools"]["pool1"]["count"] == 9


def test_status_missing_cluster(tmp_path):
    assert main(["--store", str(tmp_path / "none.json"), "status", "3"]) == 1


def test_list(capsys, tmp_path, active_cluster):
    path = tmp_path / "clusters.json"
    ClusterStore(path).save(active_cluster)

    assert main(["--store", str(path), "list"]) == 0
    assert "demo" in capsys.readouterr().out


def test_status_malformed_record(tmp_path):
    path = tmp_path / "clusters.json"
    path.write_text('{"1": {"name": "broken"}}')

    assert main(["--store", str(path), "status", "1"]) == 1
    assert main(["--store", str(path), "list"]) == 1

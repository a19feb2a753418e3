import json
import re

from tests.conftest import TIMESTAMP_PATTERN


def _create(client, *locations):
    r = client.post("/bins", json=[{"location": loc} for loc in locations])
    assert r.status_code == 201
    return r.json()["data"]


def test_create_single_bin(client):
    r = client.post("/bins", json={"location": "Market Square"})

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "1 bins added successfully"
    assert len(body["data"]) == 1
    created = body["data"][0]
    assert created["id"] == 1
    assert created["location"] == "Market Square"
    assert created["fillLevel"] == 0
    assert created["needsCollection"] is False
    assert re.match(TIMESTAMP_PATTERN, created["lastUpdated"])


def test_create_batch(client):
    r = client.post("/bins", json=[{"location": "A"}, {"location": "B"}, {"location": "C"}])

    assert r.status_code == 201
    assert r.json()["message"] == "3 bins added successfully"
    assert [b["id"] for b in r.json()["data"]] == [1, 2, 3]


def test_create_batch_with_invalid_item_adds_nothing(client, snapshot_path):
    r = client.post("/bins", json=[{"location": "A"}, {"name": "B"}, {"location": "C"}])

    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Each bin must have a location string"}
    assert client.get("/bins").json()["data"] == []
    assert not snapshot_path.exists()
    assert _create(client, "D")[0]["id"] == 1


def test_create_rejects_non_string_location(client):
    r = client.post("/bins", json={"location": 12})
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_create_accepts_whitespace_only_location(client):
    r = client.post("/bins", json={"location": "   "})

    assert r.status_code == 201
    assert r.json()["data"][0]["location"] == "   "


def test_create_rejects_empty_location(client):
    r = client.post("/bins", json={"location": ""})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Each bin must have a location string"}


def test_create_rejects_non_json_body(client):
    r = client.post("/bins", content="{location", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["message"].startswith("Malformed request")


def test_list_bins_empty(client):
    r = client.get("/bins")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "No bins available", "data": []}


def test_list_bins_in_insertion_order(client):
    _create(client, "C", "A", "B")
    r = client.get("/bins")

    assert r.json()["message"] == "Retrieved 3 bins"
    assert [b["location"] for b in r.json()["data"]] == ["C", "A", "B"]


def test_get_bin(client):
    _create(client, "A", "B")

    r = client.get("/bins/2")
    assert r.status_code == 200
    assert r.json()["message"] == "Retrieved bin with ID 2"
    assert r.json()["data"]["location"] == "B"


def test_get_unknown_bin(client):
    r = client.get("/bins/42")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Bin with ID 42 not found"}


def test_get_bin_with_non_numeric_id(client):
    r = client.get("/bins/abc")
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_update_bin(client):
    _create(client, "A")
    before = client.get("/bins/1").json()["data"]

    r = client.put("/bins/1", json={"location": "Central Park", "fillLevel": 150, "needsCollection": True})

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Bin with ID 1 updated successfully"
    assert body["data"]["location"] == "Central Park"
    assert body["data"]["fillLevel"] == 100
    assert body["data"]["needsCollection"] is True
    assert body["data"]["lastUpdated"] > before["lastUpdated"]


def test_update_clamps_negative_fill_level(client):
    _create(client, "A")
    r = client.put("/bins/1", json={"fillLevel": -5})
    assert r.json()["data"]["fillLevel"] == 0


def test_update_clamps_oversized_integer_fill_level(client):
    _create(client, "A")

    r = client.put("/bins/1", json={"fillLevel": int("9" * 400)})

    assert r.status_code == 200
    assert r.json()["data"]["fillLevel"] == 100


def test_update_ignores_unknown_and_mistyped_fields(client):
    _create(client, "A")
    r = client.put("/bins/1", json={"fillLevel": "full", "owner": "council", "id": 9})

    assert r.status_code == 200
    assert r.json()["data"]["id"] == 1
    assert r.json()["data"]["fillLevel"] == 0


def test_update_unknown_bin(client):
    r = client.put("/bins/3", json={"fillLevel": 10})
    assert r.status_code == 404
    assert r.json()["message"] == "Bin with ID 3 not found"


def test_update_malformed_body(client):
    _create(client, "A")

    r = client.put("/bins/1", content="not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

    r = client.put("/bins/1", json=[{"fillLevel": 10}])
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Update payload must be a JSON object"}


def test_delete_bin(client):
    _create(client, "A", "B")

    r = client.delete("/bins/1")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Bin with ID 1 deleted successfully"}

    r = client.delete("/bins/1")
    assert r.status_code == 404
    assert r.json()["success"] is False


def test_collect_sensor_data_on_empty_registry(client):
    r = client.post("/bins/collect-sensor-data")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "No bins available"}


def test_collect_sensor_data(client):
    _create(client, "A", "B", "C", "D")

    r = client.post("/bins/collect-sensor-data")

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Sensor data collected and updated"
    assert [b["id"] for b in body["data"]] == [1, 2, 3, 4]
    for b in body["data"]:
        assert 0 <= b["fillLevel"] <= 100
        assert b["needsCollection"] is (b["fillLevel"] >= 75)


def test_mutations_are_persisted(client, snapshot_path):
    _create(client, "A", "B")
    client.put("/bins/2", json={"fillLevel": 64})
    client.delete("/bins/1")

    stored = json.loads(snapshot_path.read_text())
    assert [(b["id"], b["location"], b["fillLevel"]) for b in stored] == [(2, "B", 64)]


def test_lifecycle_scenario(client):
    created = _create(client, "A", "B", "C")
    assert [b["id"] for b in created] == [1, 2, 3]

    updated = client.put("/bins/2", json={"fillLevel": 80}).json()["data"]
    assert updated["fillLevel"] == 80
    assert updated["needsCollection"] is False

    swept = client.post("/bins/collect-sensor-data").json()["data"]
    assert len(swept) == 3
    for b in swept:
        assert 0 <= b["fillLevel"] <= 100
        assert b["needsCollection"] is (b["fillLevel"] >= 75)

    assert client.delete("/bins/1").status_code == 200
    assert [b["id"] for b in client.get("/bins").json()["data"]] == [2, 3]

    assert _create(client, "D")[0]["id"] == 4


def test_create_after_restart_continues_ids(client, registry, snapshot_path):
    from fastapi.testclient import TestClient
    from bin_tracker.main import create_app
    from bin_tracker.registry import BinRegistry, SnapshotStore

    _create(client, "A", "B", "C")
    client.delete("/bins/3")

    restarted = create_app(registry=BinRegistry(snapshot=SnapshotStore(snapshot_path)))
    with TestClient(restarted) as second:
        assert [b["id"] for b in second.get("/bins").json()["data"]] == [1, 2]
        assert _create(second, "E")[0]["id"] == 3

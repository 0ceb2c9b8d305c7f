"""
tests/test_equipment_api.py
───────────────────────────
HTTP-level tests for /api/equipment over the in-memory repository.
"""
import pytest


def create(client, code="VOL-01", equipment_type="DUMP_TRUCK", **extra):
    resp = client.post("/api/equipment", json={"code": code, "equipment_type": equipment_type, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestCreateEndpoint:
    def test_created_envelope(self, client):
        resp = client.post("/api/equipment", json={"code": "VOL-01", "equipment_type": "DUMP_TRUCK"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Equipment created successfully"
        assert "timestamp" in body
        data = body["data"]
        assert data["code"] == "VOL-01"
        assert data["status"] == "AVAILABLE"
        assert data["fuel_level"] == 100.0
        assert data["can_operate"] is True
        assert data["allowed_transitions"] == ["INACTIVE", "MAINTENANCE", "OPERATING"]
        assert data["capabilities"] == ["haulage"]

    def test_initial_values(self, client):
        data = create(client, "EXC-01", "excavator", fuel_level=55, operating_hours=7)
        assert data["equipment_type"] == "EXCAVATOR"
        assert data["fuel_level"] == 55.0
        assert data["operating_hours"] == 7.0

    def test_invalid_type(self, client):
        resp = client.post("/api/equipment", json={"code": "VOL-01", "equipment_type": "TRACTOR"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Invalid input data"
        assert len(body["errors"]) == 1

    def test_short_code(self, client):
        resp = client.post("/api/equipment", json={"code": "X", "equipment_type": "DRILL"})
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_missing_body_field_is_400(self, client):
        resp = client.post("/api/equipment", json={"code": "VOL-01"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Invalid input data"
        assert any("equipment_type" in e for e in body["errors"])

    def test_negative_fuel(self, client):
        resp = client.post("/api/equipment", json={"code": "VOL-01", "equipment_type": "CRANE", "fuel_level": -1})
        assert resp.status_code == 400

    def test_duplicate_code(self, client):
        create(client)
        resp = client.post("/api/equipment", json={"code": "VOL-01", "equipment_type": "CRANE"})
        assert resp.status_code == 409
        assert resp.json()["success"] is False


class TestReadEndpoints:
    def test_list_with_filters(self, client):
        truck = create(client, "VOL-01", "DUMP_TRUCK")
        create(client, "DRL-01", "DRILL")
        client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "OPERATING"})

        body = client.get("/api/equipment").json()
        assert [e["code"] for e in body["data"]] == ["VOL-01", "DRL-01"]
        assert body["metadata"]["total"] == 2

        drills = client.get("/api/equipment", params={"type": "DRILL"}).json()
        assert [e["code"] for e in drills["data"]] == ["DRL-01"]

        operating = client.get("/api/equipment", params={"status": "OPERATING"}).json()
        assert [e["code"] for e in operating["data"]] == ["VOL-01"]

    def test_list_invalid_filter(self, client):
        resp = client.get("/api/equipment", params={"status": "BROKEN"})
        assert resp.status_code == 400

    def test_empty_list(self, client):
        body = client.get("/api/equipment").json()
        assert body["success"] is True
        assert body["data"] == []
        assert body["metadata"] == {"total": 0, "filters": {"type": None, "status": None}}

    def test_capabilities_by_type(self, client):
        create(client, "EXC-01", "EXCAVATOR")
        create(client, "CRN-01", "CRANE")
        caps = {e["code"]: e["capabilities"] for e in client.get("/api/equipment").json()["data"]}
        assert caps == {"EXC-01": ["excavation"], "CRN-01": []}

    def test_get_by_id(self, client):
        truck = create(client)
        resp = client.get(f"/api/equipment/{truck['id']}")
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == truck["id"]

    def test_get_missing(self, client):
        resp = client.get("/api/equipment/does-not-exist")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert "does-not-exist" in body["message"]

    def test_stats(self, client):
        create(client, "VOL-01", "DUMP_TRUCK")
        create(client, "VOL-02", "DUMP_TRUCK")
        resp = client.get("/api/equipment/stats")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total"] == 2
        assert data["by_type"]["DUMP_TRUCK"] == 2
        assert data["by_status"]["AVAILABLE"] == 2


class TestMutationEndpoints:
    def test_status_change(self, client):
        truck = create(client)
        resp = client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "operating"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "OPERATING"
        assert data["can_operate"] is False

    def test_illegal_transition(self, client):
        truck = create(client)
        client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "OPERATING"})
        resp = client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "INACTIVE"})
        assert resp.status_code == 400
        assert resp.json()["errors"] == ["Allowed transitions from OPERATING: AVAILABLE, MAINTENANCE"]

    def test_fuel_endpoints(self, client):
        truck = create(client)
        resp = client.put(f"/api/equipment/{truck['id']}/fuel", json={"value": 60})
        assert resp.json()["data"]["fuel_level"] == 60.0

        resp = client.post(f"/api/equipment/{truck['id']}/fuel/consume", json={"amount": 15})
        assert resp.status_code == 200
        assert resp.json()["data"]["fuel_level"] == 45.0

    def test_overconsumption(self, client):
        truck = create(client, fuel_level=10)
        resp = client.post(f"/api/equipment/{truck['id']}/fuel/consume", json={"amount": 11})
        assert resp.status_code == 400
        assert client.get(f"/api/equipment/{truck['id']}").json()["data"]["fuel_level"] == 10.0

    def test_non_numeric_amount(self, client):
        truck = create(client)
        resp = client.post(f"/api/equipment/{truck['id']}/fuel/consume", json={"amount": "lots"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid input data"

    def test_hours_endpoints(self, client):
        truck = create(client)
        client.put(f"/api/equipment/{truck['id']}/hours", json={"value": 100})
        resp = client.post(f"/api/equipment/{truck['id']}/hours/add", json={"amount": 2.5})
        assert resp.json()["data"]["operating_hours"] == 102.5

        resp = client.post(f"/api/equipment/{truck['id']}/hours/add", json={"amount": -1})
        assert resp.status_code == 400

    def test_hours_overflow_rejected(self, client):
        truck = create(client)
        client.put(f"/api/equipment/{truck['id']}/hours", json={"value": 1.7e308})
        resp = client.post(f"/api/equipment/{truck['id']}/hours/add", json={"amount": 1.7e308})
        assert resp.status_code == 400
        data = client.get(f"/api/equipment/{truck['id']}").json()["data"]
        assert data["operating_hours"] == 1.7e308

    def test_reset(self, client):
        truck = create(client, fuel_level=30, operating_hours=4)
        client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "MAINTENANCE"})
        data = client.post(f"/api/equipment/{truck['id']}/reset").json()["data"]
        assert (data["status"], data["fuel_level"], data["operating_hours"]) == ("AVAILABLE", 100.0, 0.0)

    @pytest.mark.parametrize("method,path,payload", [
        ("patch", "/status", {"status": "OPERATING"}),
        ("put", "/fuel", {"value": 1}),
        ("post", "/fuel/consume", {"amount": 1}),
        ("put", "/hours", {"value": 1}),
        ("post", "/hours/add", {"amount": 1}),
        ("post", "/reset", None),
    ])
    def test_missing_equipment(self, client, method, path, payload):
        kwargs = {"json": payload} if payload is not None else {}
        resp = getattr(client, method)(f"/api/equipment/ghost{path}", **kwargs)
        assert resp.status_code == 404


class TestHistoryAndDelete:
    def test_history(self, client):
        truck = create(client)
        client.patch(f"/api/equipment/{truck['id']}/status", json={"status": "OPERATING"})
        client.post(f"/api/equipment/{truck['id']}/fuel/consume", json={"amount": 5})
        client.post(f"/api/equipment/{truck['id']}/fuel/consume", json={"amount": 500})

        body = client.get(f"/api/equipment/{truck['id']}/history").json()
        assert [h["action"] for h in body["data"]] == ["create", "change_status", "consume_fuel"]
        assert body["data"][1]["value"] == "OPERATING"
        assert body["metadata"]["total"] == 3

    def test_history_missing(self, client):
        assert client.get("/api/equipment/ghost/history").status_code == 404

    def test_history_entries_share_one_shape(self, client):
        truck = create(client)
        client.post(f"/api/equipment/{truck['id']}/reset")
        entries = client.get(f"/api/equipment/{truck['id']}/history").json()["data"]
        assert entries[0]["value"] == {"fuel_level": 100.0, "operating_hours": 0.0}
        assert entries[1]["action"] == "reset"
        assert entries[1]["value"] is None
        assert all(set(e) == {"action", "value", "timestamp"} for e in entries)

    def test_delete(self, client):
        truck = create(client)
        resp = client.delete(f"/api/equipment/{truck['id']}")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": truck["id"]}
        assert client.get(f"/api/equipment/{truck['id']}").status_code == 404
        assert client.delete(f"/api/equipment/{truck['id']}").status_code == 404


class TestCorrelationId:
    def test_echoes_incoming_header(self, client):
        resp = client.get("/api/equipment", headers={"X-Correlation-ID": "req-123"})
        assert resp.headers["x-correlation-id"] == "req-123"

    def test_generates_when_absent(self, client):
        resp = client.get("/api/equipment")
        assert resp.headers.get("x-correlation-id")

    def test_error_responses_carry_it_too(self, client):
        resp = client.get("/api/equipment/ghost", headers={"X-Correlation-ID": "req-404"})
        assert resp.status_code == 404
        assert resp.headers["x-correlation-id"] == "req-404"


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["app"] == "minewatch-backend"

    def test_unknown_route_uses_error_envelope(self, client):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["success"] is False

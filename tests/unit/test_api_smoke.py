"""
Module A1 - API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. Stateless builds under GET /forest/build/{leaf_count}
3. Controller transitions, including rejected calls answered with accepted=false
4. Selection, node details and SVG rendering
5. Transition history
"""

import xml.etree.ElementTree as ET

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import get_controller

from fixtures import make_controller


# =============================================================================
# Test Fixtures
# =============================================================================

def client_for(controller):
    app.dependency_overrides[get_controller] = lambda: controller
    return TestClient(app)


@pytest.fixture
def client():
    """Client over a 4-leaf controller with zero delays."""
    with client_for(make_controller()) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def single_leaf_client():
    with client_for(make_controller(initial_leaf_count=1)) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def slow_auto_client():
    """Client whose auto sequence never ticks during a test."""
    with client_for(make_controller(initial_leaf_count=0, auto_interval=60)) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# Tests
# =============================================================================

class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "forest-demo-api"


class TestBuildEndpoint:
    """Tests for GET /forest/build/{leaf_count}."""

    def test_build_five_leaves(self, client):
        response = client.get("/forest/build/5", params={"salt": "demo"})

        assert response.status_code == 200
        data = response.json()
        assert data["leaf_count"] == 5
        assert data["summary"]["root_count"] == 2
        assert data["summary"]["node_count"] == 8
        assert len(data["edges"]) == 6
        assert len(data["fingerprints"]) == 8

    def test_build_is_deterministic_with_salt(self, client):
        first = client.get("/forest/build/6", params={"salt": "s"}).json()
        second = client.get("/forest/build/6", params={"salt": "s"}).json()

        assert first["fingerprints"] == second["fingerprints"]

    def test_build_does_not_touch_controller(self, client):
        client.get("/forest/build/9")

        assert client.get("/forest").json()["leaf_count"] == 4

    def test_build_empty(self, client):
        data = client.get("/forest/build/0").json()

        assert data["nodes"] == []
        assert data["summary"]["height"] == 0

    @pytest.mark.parametrize("leaf_count", [-1, 5000])
    def test_build_out_of_range(self, client, leaf_count):
        response = client.get(f"/forest/build/{leaf_count}")

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_REQUEST"

    def test_build_non_integer_returns_422(self, client):
        response = client.get("/forest/build/abc")

        assert response.status_code == 422


class TestControllerEndpoints:
    """Tests for controller transitions."""

    def test_get_forest(self, client):
        data = client.get("/forest").json()

        assert data["state"] == "idle"
        assert data["leaf_count"] == 4
        assert data["can_remove"] is True
        assert data["summary"]["root_count"] == 1

    def test_add_leaf(self, client):
        data = client.post("/forest/leaves").json()

        assert data["accepted"] is True
        assert data["leaf_count"] == 5
        assert data["summary"]["root_count"] == 2

    def test_remove_leaf(self, client):
        data = client.delete("/forest/leaves").json()

        assert data["accepted"] is True
        assert data["leaf_count"] == 3

    def test_remove_last_leaf_rejected(self, single_leaf_client):
        response = single_leaf_client.delete("/forest/leaves")

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is False
        assert data["leaf_count"] == 1
        assert data["can_remove"] is False

    def test_reset(self, client):
        data = client.post("/forest/reset").json()

        assert data["accepted"] is True
        assert data["leaf_count"] == 0
        assert data["nodes"] == []

    def test_auto_sequence_start_and_stop(self, slow_auto_client):
        started = slow_auto_client.post("/forest/auto/start").json()

        assert started["accepted"] is True
        assert started["state"] == "auto_sequencing"
        assert started["leaf_count"] == 1

        rejected = slow_auto_client.post("/forest/leaves").json()
        assert rejected["accepted"] is False
        assert rejected["leaf_count"] == 1

        stopped = slow_auto_client.post("/forest/auto/stop").json()
        assert stopped["accepted"] is True
        assert stopped["state"] == "idle"
        assert stopped["leaf_count"] == 1

    def test_stop_when_idle_rejected(self, client):
        data = client.post("/forest/auto/stop").json()

        assert data["accepted"] is False
        assert data["state"] == "idle"


class TestSelectionEndpoints:
    """Tests for selection, node details and SVG."""

    def test_select_toggle(self, client):
        selected = client.post("/forest/select", json={"node_id": "leaf-1"}).json()

        assert selected["selected"]["id"] == "leaf-1"
        assert selected["selected"]["role"] == "leaf"
        assert [n["id"] for n in selected["nodes"] if n["selected"]] == ["leaf-1"]

        cleared = client.post("/forest/select", json={"node_id": "leaf-1"}).json()
        assert cleared["selected"] is None

    def test_select_unknown_rejected(self, client):
        data = client.post("/forest/select", json={"node_id": "node-99"}).json()

        assert data["accepted"] is False
        assert data["selected"] is None

    def test_node_details(self, client):
        response = client.get("/forest/nodes/node-2")

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "root"
        assert data["children"] == ["node-0", "node-1"]
        assert data["parent"] is None
        assert len(data["fingerprint"]) == 8

    def test_node_not_found(self, client):
        response = client.get("/forest/nodes/node-99")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NODE_NOT_FOUND"

    def test_svg(self, client):
        response = client.get("/forest/svg")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        root = ET.fromstring(response.text)
        assert len(root.findall("{http://www.w3.org/2000/svg}g")) == 7


class TestErrorHandling:
    """Tests for error responses."""

    def test_unexpected_error_returns_internal_error(self):
        def broken_controller():
            raise RuntimeError("controller unavailable")

        app.dependency_overrides[get_controller] = broken_controller
        try:
            with TestClient(app, raise_server_exceptions=False) as c:
                response = c.get("/forest")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "INTERNAL_ERROR"
        assert data["error"]["details"]["type"] == "RuntimeError"

    def test_invalid_select_body_returns_422(self, client):
        response = client.post("/forest/select", json={"node_id": "x" * 100})

        assert response.status_code == 422


class TestHistoryEndpoints:
    """Tests for the transition history."""

    def test_history_records_calls(self, single_leaf_client):
        single_leaf_client.post("/forest/leaves")
        single_leaf_client.post("/forest/auto/stop")

        data = single_leaf_client.get("/forest/history").json()

        actions = [(e["action"], e["accepted"]) for e in data["entries"]]
        assert actions == [("add_leaf", True), ("stop_auto_sequence", False)]
        assert data["total_entries"] == 2

    def test_clear_history(self, client):
        client.post("/forest/leaves")

        assert client.delete("/forest/history").json()["total_entries"] == 0
        assert client.get("/forest/history").json()["entries"] == []

"""Tests for the organization chart API routes."""

from unittest.mock import MagicMock, patch

import pytest
from flask import Flask

from emergency_network.models.staff import StaffPosition
from emergency_network.routes.organization import organization_bp
from emergency_network.services.chart_service import OrganizationChart
from emergency_network.services.layout_store import LayoutStoreError
from emergency_network.services.org_tree import (
    LayoutFormatError,
    OrganizationNode,
    StaffRecord,
)
from emergency_network.services.school_store import SchoolNotFoundError
from emergency_network.services.tree_reorder import InvalidMoveError, NotFoundError

MODULE = "emergency_network.routes.organization"


@pytest.fixture
def app():
    """Create a test Flask application."""
    app = Flask(__name__)
    app.register_blueprint(organization_bp)
    app.config["TESTING"] = True
    app.config["APP_CONFIG"] = {"organization": {"reconcile_on_load": False}}
    return app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def chart():
    """A one-node chart."""
    record = StaffRecord(
        id="p", name="Park", department="Office",
        position=StaffPosition.PRINCIPAL, contact="010-1",
    )
    return OrganizationChart(forest=[OrganizationNode(staff=record)], source="derived")


def _move_body(**overrides):
    body = {
        "node_id": "h1",
        "from_parent_id": "p",
        "from_index": 0,
        "to_parent_id": "p",
        "to_index": 1,
    }
    body.update(overrides)
    return body


class TestGetChart:
    """Tests for GET /api/schools/<id>/organization."""

    def test_returns_chart(self, client, chart):
        with patch(f"{MODULE}.get_organization_chart", return_value=chart) as mock_get:
            response = client.get("/api/schools/s-1/organization")

        assert response.status_code == 200
        data = response.get_json()
        assert data["source"] == "derived"
        assert data["tree"][0]["staff"]["name"] == "Park"
        assert data["orphans"] == []
        mock_get.assert_called_once_with("s-1", reconcile=False)

    def test_reconcile_query_param(self, client, chart):
        with patch(f"{MODULE}.get_organization_chart", return_value=chart) as mock_get:
            client.get("/api/schools/s-1/organization?reconcile=true")

        mock_get.assert_called_once_with("s-1", reconcile=True)

    def test_reconcile_from_config(self, app, client, chart):
        app.config["APP_CONFIG"] = {"organization": {"reconcile_on_load": True}}
        with patch(f"{MODULE}.get_organization_chart", return_value=chart) as mock_get:
            client.get("/api/schools/s-1/organization")

        mock_get.assert_called_once_with("s-1", reconcile=True)

    def test_unknown_school(self, client):
        with patch(f"{MODULE}.get_organization_chart", side_effect=SchoolNotFoundError("x")):
            response = client.get("/api/schools/nope/organization")

        assert response.status_code == 404

    def test_store_failure(self, client):
        with patch(f"{MODULE}.get_organization_chart", side_effect=LayoutStoreError("db")):
            response = client.get("/api/schools/s-1/organization")

        assert response.status_code == 500
        assert "error" in response.get_json()


class TestMove:
    """Tests for POST /api/schools/<id>/organization/move."""

    def test_move_success(self, client, chart):
        chart.source = "layout"
        with patch(f"{MODULE}.move_and_save", return_value=chart) as mock_move:
            response = client.post("/api/schools/s-1/organization/move", json=_move_body())

        assert response.status_code == 200
        assert response.get_json()["source"] == "layout"
        mock_move.assert_called_once_with("s-1", "h1", "p", 0, "p", 1, reconcile=False)

    def test_parent_defaults_to_root(self, client, chart):
        body = _move_body()
        del body["from_parent_id"]
        body["to_parent_id"] = None
        with patch(f"{MODULE}.move_and_save", return_value=chart) as mock_move:
            client.post("/api/schools/s-1/organization/move", json=body)

        mock_move.assert_called_once_with("s-1", "h1", "root", 0, "root", 1, reconcile=False)

    def test_missing_body(self, client):
        response = client.post("/api/schools/s-1/organization/move")
        assert response.status_code == 400

    @pytest.mark.parametrize("overrides", [
        {"node_id": ""},
        {"from_index": "0"},
        {"to_index": None},
        {"to_index": True},
        {"to_parent_id": 5},
    ])
    def test_invalid_fields(self, client, overrides):
        with patch(f"{MODULE}.move_and_save") as mock_move:
            response = client.post(
                "/api/schools/s-1/organization/move", json=_move_body(**overrides)
            )

        assert response.status_code == 400
        mock_move.assert_not_called()

    def test_stale_ids_conflict(self, client):
        with patch(f"{MODULE}.move_and_save", side_effect=NotFoundError("stale")):
            response = client.post("/api/schools/s-1/organization/move", json=_move_body())

        assert response.status_code == 409
        assert response.get_json()["error"] == "stale"

    def test_invalid_target_index(self, client):
        with patch(f"{MODULE}.move_and_save", side_effect=InvalidMoveError("range")):
            response = client.post("/api/schools/s-1/organization/move", json=_move_body())

        assert response.status_code == 422

    def test_unknown_school(self, client):
        with patch(f"{MODULE}.move_and_save", side_effect=SchoolNotFoundError("x")):
            response = client.post("/api/schools/s-1/organization/move", json=_move_body())

        assert response.status_code == 404

    def test_save_failure(self, client):
        with patch(f"{MODULE}.move_and_save", side_effect=LayoutStoreError("db")):
            response = client.post("/api/schools/s-1/organization/move", json=_move_body())

        assert response.status_code == 500


class TestLayoutEndpoints:
    """Tests for PUT/DELETE /api/schools/<id>/organization/layout."""

    def test_put_layout(self, client, chart):
        with patch(f"{MODULE}.save_layout", return_value=chart) as mock_save:
            response = client.put(
                "/api/schools/s-1/organization/layout", json={"tree": [{"id": "p"}]}
            )

        assert response.status_code == 200
        mock_save.assert_called_once_with("s-1", [{"id": "p"}])

    def test_put_layout_requires_tree(self, client):
        response = client.put("/api/schools/s-1/organization/layout", json={"nodes": []})
        assert response.status_code == 400

    def test_put_malformed_layout(self, client):
        with patch(f"{MODULE}.save_layout", side_effect=LayoutFormatError("bad shape")):
            response = client.put("/api/schools/s-1/organization/layout", json={"tree": {}})

        assert response.status_code == 422
        assert response.get_json()["error"] == "bad shape"

    def test_delete_layout(self, client, chart):
        with patch(f"{MODULE}.reset_layout", return_value=chart) as mock_reset:
            response = client.delete("/api/schools/s-1/organization/layout")

        assert response.status_code == 200
        assert response.get_json()["source"] == "derived"
        mock_reset.assert_called_once_with("s-1")


class TestSharedChart:
    """Tests for GET /api/shared/<token>/organization."""

    def test_shared_chart(self, client, chart):
        school = MagicMock()
        school.id = "s-1"
        school.school_name = "Hanbit Middle School"
        with patch(f"{MODULE}.get_school_by_share_token", return_value=school), \
                patch(f"{MODULE}.get_organization_chart", return_value=chart) as mock_get:
            response = client.get("/api/shared/tok/organization")

        assert response.status_code == 200
        assert response.get_json()["school_name"] == "Hanbit Middle School"
        mock_get.assert_called_once_with("s-1", reconcile=False)

    def test_unknown_token(self, client):
        with patch(f"{MODULE}.get_school_by_share_token", side_effect=SchoolNotFoundError("x")):
            response = client.get("/api/shared/nope/organization")

        assert response.status_code == 404

"""Tests for the HTTP surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import REPLIES, VALID_REQUESTS
from lunarscope.api import app
from lunarscope.errors import UpstreamError


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestAnalyzeEndpoint:
    @pytest.mark.parametrize("kind", sorted(VALID_REQUESTS))
    def test_valid_request_returns_reply(self, client, shared_model, kind, valid_request, reply_for):
        shared_model.reply = reply_for(kind)

        response = client.post(f"/api/v1/analyses/{kind}", json=valid_request(kind))

        assert response.status_code == 200
        assert response.json() == REPLIES[kind]

    def test_missing_field_returns_422_with_issues(self, client, shared_model):
        response = client.post("/api/v1/analyses/shadow-slope", json={"imageUri": "data:image/png;base64,AAAA"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_REQUEST"
        fields = {i["field"] for i in error["details"]["issues"]}
        assert fields == {"dtmUri", "description"}
        assert not shared_model.invoked

    def test_malformed_data_uri_returns_422(self, client, shared_model):
        response = client.post("/api/v1/analyses/feature-detection", json={"photoDataUri": "moon.png"})

        assert response.status_code == 422
        assert response.json()["error"]["details"]["issues"][0]["field"] == "photoDataUri"
        assert not shared_model.invoked

    def test_unknown_kind_returns_404(self, client, shared_model):
        response = client.post("/api/v1/analyses/crater-counting", json={})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "UNKNOWN_ANALYSIS"

    def test_off_schema_reply_returns_502(self, client, shared_model, valid_request):
        shared_model.reply = {"changeSummary": "x", "detailedChanges": [{"description": "d"}]}

        response = client.post("/api/v1/analyses/temporal", json=valid_request("temporal"))

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "UPSTREAM_FAILED"

    def test_model_failure_returns_502(self, client, shared_model, valid_request):
        shared_model.error = UpstreamError("Model request failed: 403 PERMISSION_DENIED", service="gemini")

        response = client.post("/api/v1/analyses/geological-reasoning", json=valid_request("geological-reasoning"))

        assert response.status_code == 502
        error = response.json()["error"]
        assert "PERMISSION_DENIED" in error["message"]
        assert error["details"]["service"] == "gemini"

    def test_non_object_body_rejected(self, client, shared_model):
        response = client.post("/api/v1/analyses/temporal", json=["a"])

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_REQUEST"
        assert error["details"]["issues"][0]["field"] == "<root>"
        assert not shared_model.invoked

    def test_unknown_kind_wins_over_body_shape(self, client, shared_model):
        response = client.post("/api/v1/analyses/crater-counting", json=["a"])

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "UNKNOWN_ANALYSIS"

    def test_missing_body_uses_error_envelope(self, client, shared_model):
        response = client.post("/api/v1/analyses/temporal")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_REQUEST"
        assert not shared_model.invoked


class TestMetaEndpoints:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert isinstance(data["has_gemini_key"], bool)
        assert data["model"]

    def test_list_analyses(self, client):
        response = client.get("/api/v1/analyses")

        assert response.status_code == 200
        kinds = {a["kind"]: a["entry_point"] for a in response.json()}
        assert kinds == {
            "feature-detection": "detect_features",
            "shadow-slope": "analyze_shadow_slope",
            "geological-reasoning": "enhance_geological_reasoning",
            "temporal": "analyze_temporal_changes",
        }

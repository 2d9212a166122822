"""
Tests for the health, info and error-envelope behavior of the API.
"""


class TestHealthEndpoint:

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["name"] == "Recipe Finder API"
        assert data["db_reachable"] is True
        assert isinstance(data["uptime_seconds"], int)

    def test_health_reports_provider_configuration(self, client, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        monkeypatch.delenv("PEXELS_API_KEY", raising=False)

        data = client.get("/health").json()

        assert data["ai_configured"] is True
        assert data["images_configured"] is False
        assert data["ai_model"]

    def test_root(self, client):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert data["version"] == "1.0.0"


class TestErrorEnvelope:

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_malformed_body_is_400(self, client, auth_headers):
        response = client.post(
            "/api/recipes",
            headers=auth_headers,
            json={"name": "Soup", "cooking_time": "forever"},
        )

        assert response.status_code == 400
        assert "cooking_time" in response.json()["error"]

    def test_error_envelope_is_documented(self, client):
        """Test that OpenAPI describes error statuses with the {error} envelope schema."""
        schema = client.get("/openapi.json").json()

        assert "ErrorResponse" in schema["components"]["schemas"]
        delete_responses = schema["paths"]["/api/favorites/{favorite_id}"]["delete"]["responses"]
        generate_responses = schema["paths"]["/api/ai/generate"]["post"]["responses"]
        ref = "#/components/schemas/ErrorResponse"
        assert delete_responses["404"]["content"]["application/json"]["schema"]["$ref"] == ref
        assert generate_responses["500"]["content"]["application/json"]["schema"]["$ref"] == ref

"""Tests for the HTTP service module."""

import inspect

import pytest
from fastapi.testclient import TestClient

from long_multiplication.engine import EngineLimits
from long_multiplication.service import app, create_app


class TestMultiplicationService:
    """Test suite for service endpoints."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    def test_root_endpoint(self, client):
        """Test root endpoint returns service info."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "Long Multiplication Service"
        assert data["styles"] == ["steps", "grid"]
        assert "/multiply" in data["endpoints"]

    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "long-multiplication"}

    def test_multiply_text(self, client, block_23x14):
        """Test the plain text rendering."""
        response = client.get("/multiply", params={"multiplier": "23", "multiplicand": "14"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == block_23x14

    def test_multiply_text_annotated_grid(self, client):
        """Test the annotation flag and grid style parameters."""
        response = client.get(
            "/multiply",
            params={"multiplier": "7", "multiplicand": "5", "annotate": "yes", "style": "grid"},
        )

        assert response.status_code == 200
        assert response.text.startswith("Symbols\n=======\n")
        assert "┃ 3 │ 5 ┃ P" in response.text

    def test_multiply_text_invalid_digit(self, client):
        """Test invalid operands give a plain text 400."""
        response = client.get("/multiply", params={"multiplier": "2x", "multiplicand": "14"})

        assert response.status_code == 400
        assert response.text.startswith("Error: The multiplier '2x'")

    def test_multiply_text_unknown_style(self, client):
        """Test unknown styles are rejected."""
        response = client.get(
            "/multiply", params={"multiplier": "2", "multiplicand": "3", "style": "spiral"}
        )

        assert response.status_code == 400
        assert "spiral" in response.json()["detail"]

    def test_multiply_text_missing_parameter(self, client):
        """Test a missing operand fails validation."""
        response = client.get("/multiply", params={"multiplier": "2"})

        assert response.status_code == 422

    def test_multiply_json(self, client):
        """Test the JSON rendering."""
        response = client.post("/multiply", json={"multiplier": "23", "multiplicand": "14"})

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == "322"
        assert [row["row_sum"] for row in data["rows"]] == ["42", "28"]
        assert [row["partial_product"] for row in data["rows"]] == ["42", "280"]
        assert data["text"].endswith("= 322\n")

    def test_multiply_json_big_numbers_stay_exact(self, client):
        """Test large totals are returned as digit strings."""
        multiplier = "9" * 40
        response = client.post(
            "/multiply",
            json={"multiplier": multiplier, "multiplicand": multiplier, "style": "grid"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == str(int(multiplier) ** 2)
        assert data["text"].startswith("┏")

    def test_limits(self):
        """Test limits given to the app are enforced."""
        client = TestClient(create_app(EngineLimits(max_input_digits=4)))

        response = client.post("/multiply", json={"multiplier": "123", "multiplicand": "45"})

        assert response.status_code == 400
        assert "maximum supported is 4" in response.text

    def test_multiply_handlers_run_in_threadpool(self):
        """Test the rendering endpoints are plain functions, off the event loop."""
        endpoints = [
            route.endpoint for route in app.routes if getattr(route, "path", None) == "/multiply"
        ]

        assert len(endpoints) == 2
        for endpoint in endpoints:
            assert not inspect.iscoroutinefunction(endpoint)

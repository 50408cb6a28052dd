"""Tests for the HTTP API."""

import pytest
import sys
from pathlib import Path

from fastapi.testclient import TestClient

# Add api directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "api"))

from index import app


PETS = "# Intro\nThis is about cats and dogs.\n\n# Details\nCats are independent. Dogs are loyal."


@pytest.fixture
def client():
    return TestClient(app)


class TestCatalogEndpoints:
    """Tests for read-only endpoints."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_styles(self, client):
        """Test styles grouped by tier."""
        tiers = client.get("/api/styles").json()["tiers"]

        assert [t["tier"] for t in tiers] == ["S", "A", "B", "C"]
        assert sum(len(t["styles"]) for t in tiers) == 11

    def test_use_cases(self, client):
        """Test the use-case list."""
        assert len(client.get("/api/use-cases").json()["use_cases"]) == 10


class TestAnalyzeEndpoint:
    """Tests for POST /api/analyze."""

    def test_plan(self, client):
        """Test a plan for a short note."""
        response = client.post("/api/analyze", json={"content": PETS, "image_count": 2})

        assert response.status_code == 200
        data = response.json()
        assert len(data["prompts"]) == 2
        assert data["heading_count"] == 2

    def test_invalid_config(self, client):
        """Test that invalid thresholds are rejected."""
        response = client.post("/api/analyze", json={"content": PETS, "aspect_ratio": "5:4"})

        assert response.status_code == 422


class TestPlacementsEndpoint:
    """Tests for POST /api/placements."""

    def test_details_section(self, client):
        """Test the loyal-dog suggestion with a lowered floor."""
        response = client.post("/api/placements", json={
            "content": PETS,
            "prompt": "a photo of a loyal dog",
            "min_placement_score": 50,
        })

        suggestions = response.json()["suggestions"]
        assert len(suggestions) == 1
        assert suggestions[0]["location"]["line_number"] == 4
        assert suggestions[0]["score"] == 55

    def test_default_floor(self, client):
        """Test that the default floor filters weak sections."""
        response = client.post("/api/placements", json={"content": PETS, "prompt": "a photo of a loyal dog"})

        assert response.json()["suggestions"] == []

    def test_invalid_floor(self, client):
        """Test an out-of-range floor."""
        response = client.post("/api/placements", json={"content": PETS, "prompt": "x", "min_placement_score": 101})

        assert response.status_code == 422


class TestInsertEndpoint:
    """Tests for POST /api/insert."""

    def test_insert_with_placement(self, client):
        """Test placed and fallback images."""
        response = client.post("/api/insert", json={
            "content": "# A\ntext",
            "image_paths": ["img/one.png", "img/two.png"],
            "placements": [{"image_index": 0, "line_number": 1}],
            "size": "small",
        })

        data = response.json()
        assert data["embeds"] == ["![[one.png|256]]", "![[two.png|256]]"]
        assert data["content"] == "# A\n\n![[one.png|256]]\ntext\n\n![[two.png|256]]"

    def test_insert_at_cursor(self, client):
        """Test inserting everything at the cursor."""
        response = client.post("/api/insert", json={
            "content": "a\nb",
            "image_paths": ["one.png"],
            "cursor_line": 1,
            "use_placements": False,
        })

        assert response.json()["content"] == "a\n\n![[one.png|700]]\n\nb"

    def test_bad_image_index(self, client):
        """Test a placement for an image that does not exist."""
        response = client.post("/api/insert", json={
            "content": "a",
            "image_paths": ["one.png"],
            "placements": [{"image_index": 3, "line_number": 1}],
        })

        assert response.status_code == 400

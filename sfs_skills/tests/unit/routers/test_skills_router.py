"""Unit tests for the skill catalog API."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from sfs_skills.application.services.skill_catalog import SkillCatalog
from sfs_skills.infrastructure.adapters.primary.web.main import create_app
from sfs_skills.infrastructure.skill.filesystem_scanner import FileSystemSkillScanner


@pytest.fixture
def catalog(tmp_path, write_skill):
    root = tmp_path / "builtin"
    write_skill(
        "sfs-jwt-auth",
        root=root,
        description="Add JWT authentication.",
        body="# JWT Auth\n\n## Middleware\nVerify tokens.",
    )
    write_skill(
        "sfs-stripe-billing",
        root=root,
        description="Add Stripe subscriptions and webhooks.",
        body="# Stripe Billing\n\nRequires sfs-jwt-auth.",
    )
    project = tmp_path / "project"
    project.mkdir(exist_ok=True)

    catalog = SkillCatalog(scanner=FileSystemSkillScanner(builtin_skills_path=root))
    catalog.load(project)
    return catalog


@pytest.fixture
def client(settings, catalog):
    return TestClient(create_app(settings=settings, catalog=catalog))


@pytest.mark.unit
class TestSkillsRouter:
    """Test cases for the skills router endpoints."""

    def test_health(self, client):
        """Test the health endpoint reports the skill count."""
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert data["skills"] == 2

    def test_list_skills(self, client):
        """Test listing every skill."""
        response = client.get("/api/v1/skills")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 2
        assert [s["name"] for s in data["skills"]] == ["sfs-jwt-auth", "sfs-stripe-billing"]
        assert data["skills"][0]["source"] == "builtin"
        assert "content" not in data["skills"][0]

    def test_list_skills_with_query(self, client):
        """Test keyword filtering."""
        response = client.get("/api/v1/skills", params={"q": "stripe"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["skills"][0]["name"] == "sfs-stripe-billing"

    def test_list_skills_with_limit(self, client):
        """Test limit without a query."""
        response = client.get("/api/v1/skills", params={"limit": 1})
        assert response.json()["total"] == 1

    def test_list_skills_invalid_limit(self, client):
        """Test limit bounds are enforced."""
        response = client.get("/api/v1/skills", params={"limit": 0})
        assert response.status_code == 422

    def test_get_skill(self, client):
        """Test fetching one skill with relations."""
        response = client.get("/api/v1/skills/sfs-jwt-auth")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "JWT Auth"
        assert data["sections"] == ["Middleware"]
        assert data["referenced_by"] == ["sfs-stripe-billing"]
        assert data["content"].startswith("# JWT Auth")

    def test_get_skill_not_found(self, client):
        """Test unknown names return 404."""
        response = client.get("/api/v1/skills/sfs-nope")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "sfs-nope" in response.json()["detail"]

    def test_get_skill_raw(self, client):
        """Test the raw document is served as markdown."""
        response = client.get("/api/v1/skills/sfs-stripe-billing/raw")
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/markdown")
        assert response.text.startswith("---\nname: sfs-stripe-billing\n")

    def test_get_skill_raw_not_found(self, client):
        """Test unknown names return 404 for raw documents."""
        response = client.get("/api/v1/skills/sfs-nope/raw")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_report(self, client):
        """Test the lint report."""
        response = client.get("/api/v1/skills/report")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_valid"] is True
        assert data["total"] == 2

    def test_validate_valid(self, client, skill_md):
        """Test validating a good document."""
        response = client.post(
            "/api/v1/skills/validate", json={"content": skill_md(name="sfs-new")}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_valid"] is True
        assert data["skill_name"] == "sfs-new"

    def test_validate_invalid_is_not_an_http_error(self, client, skill_md):
        """Test invalid documents still return 200 with errors."""
        response = client.post(
            "/api/v1/skills/validate", json={"content": skill_md(name="New Skill")}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["is_valid"] is False
        assert data["error_count"] >= 1
        assert all(e["field"] == "name" for e in data["errors"])

    def test_validate_strict(self, client, skill_md):
        """Test strict validation turns warnings into errors."""
        content = skill_md(extra="license: MIT")
        lenient = client.post("/api/v1/skills/validate", json={"content": content}).json()
        strict = client.post(
            "/api/v1/skills/validate", json={"content": content, "strict": True}
        ).json()
        assert lenient["is_valid"] is True
        assert lenient["warning_count"] == 1
        assert strict["is_valid"] is False

    def test_validate_requires_content(self, client):
        """Test the request body is validated."""
        response = client.post("/api/v1/skills/validate", json={})
        assert response.status_code == 422


@pytest.mark.unit
class TestCreateApp:
    """Test the app factory loading the catalog itself."""

    def test_loads_catalog_from_settings(self, settings):
        """Test the builtin pack is loaded when no catalog is passed."""
        client = TestClient(create_app(settings=settings))
        data = client.get("/health").json()
        assert data["skills"] >= 10
        assert client.get("/api/v1/skills/sfs-readme").status_code == status.HTTP_200_OK

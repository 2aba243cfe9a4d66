"""
Tests for the HTTP API using httpx AsyncClient.
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock, MagicMock

from mcpgen.dependencies import get_generation_service
from mcpgen.errors import TemplateError, ValidationError
from mcpgen.main import app
from mcpgen.services.generation_service import GenerationService


@pytest_asyncio.fixture
async def client(generation_service):
    """Client against the app with a generation service writing under tmp_path."""
    app.dependency_overrides[get_generation_service] = lambda: generation_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def _failing_service(**methods):
    service = MagicMock(spec=GenerationService)
    for name, error in methods.items():
        setattr(service, name, AsyncMock(side_effect=error))
    return service


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/v1/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["service"] == "mcp-server-generator"
    assert "remote_analysis" in data
    assert len(resp.headers["X-Request-ID"]) == 12


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_list_patterns(client):
    resp = await client.get("/api/v1/catalog/patterns")

    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == len(data["patterns"]) == 9
    assert data["patterns"][0]["id"] == "api-request"


@pytest.mark.asyncio
async def test_list_patterns_by_category(client):
    resp = await client.get("/api/v1/catalog/patterns", params={"category": "database"})

    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["patterns"]] == ["database-query", "cache-store"]


@pytest.mark.asyncio
async def test_list_patterns_unknown_category(client):
    resp = await client.get("/api/v1/catalog/patterns", params={"category": "quantum"})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_integrations(client):
    resp = await client.get("/api/v1/catalog/integrations")

    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 8
    assert "sendgrid" in [i["id"] for i in data["integrations"]]


@pytest.mark.asyncio
async def test_resolve(client):
    resp = await client.post(
        "/api/v1/resolve",
        json={"description": "send Slack notifications when a GitHub issue is created"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert [i["id"] for i in data["integrations"]] == ["github", "slack"]
    assert data["metadata"]["fallback"] is True


@pytest.mark.asyncio
async def test_resolve_rejects_empty_description(client):
    resp = await client.post("/api/v1/resolve", json={"description": ""})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_generate(client, settings):
    # When
    resp = await client.post("/api/v1/generate", json={"description": "email a weekly report"})

    # Then
    assert resp.status_code == 201
    data = resp.json()
    output_dir = Path(data["output_dir"])
    assert output_dir.parent == Path(settings.output_root)
    assert (output_dir / "README.md").is_file()
    assert data["used_fallback"] is True
    assert "pyproject.toml" in data["files"]


@pytest.mark.asyncio
async def test_generate_run_id_matches_request_id(client, settings):
    # When
    resp = await client.post("/api/v1/generate", json={"description": "email a weekly report"})

    # Then: the response header names the run directory and its log
    request_id = resp.headers["X-Request-ID"]
    data = resp.json()
    assert data["run_id"] == request_id
    assert Path(data["output_dir"]).name == request_id
    assert (Path(settings.logs_dir) / request_id / "generation.log").is_file()


@pytest.mark.asyncio
async def test_requests_get_distinct_request_ids(client):
    first = await client.get("/api/v1/health")
    second = await client.get("/api/v1/health")

    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_generate_validation_failure(client):
    # Given
    app.dependency_overrides[get_generation_service] = lambda: _failing_service(
        generate=ValidationError(["Server name is required"])
    )

    # When
    resp = await client.post("/api/v1/generate", json={"description": "anything"})

    # Then
    assert resp.status_code == 422
    assert resp.json()["detail"]["errors"] == ["Server name is required"]


@pytest.mark.asyncio
async def test_generate_template_failure(client):
    app.dependency_overrides[get_generation_service] = lambda: _failing_service(
        generate=TemplateError("Unresolved placeholder '$missing'", template="tools/x.py", placeholder="missing")
    )

    resp = await client.post("/api/v1/generate", json={"description": "anything"})

    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail["code"] == "TEMPLATE_ERROR"
    assert detail["placeholder"] == "missing"


@pytest.mark.asyncio
async def test_generate_from_template(client):
    resp = await client.post("/api/v1/templates/notifications")

    assert resp.status_code == 201
    data = resp.json()
    assert data["config"]["name"] == "notifications-mcp-server"
    assert [i["id"] for i in data["config"]["integrations"]] == ["slack", "sendgrid"]
    assert data["run_id"] == resp.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_generate_from_unknown_template(client):
    resp = await client.post("/api/v1/templates/kitchen-sink")

    assert resp.status_code == 404

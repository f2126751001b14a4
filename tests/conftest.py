"""
Pytest fixtures for IssueForge tests.

Each API test gets a fresh SQLite database file driven through the real
application lifespan. Client tests talk to an in-memory FakeIssuesApi.
"""

import json
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from issueforge.application import create_app
from issueforge.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'issues.db'}")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_issue(client):
    """Create an issue through the API and return its JSON."""

    def _make(**overrides):
        payload = {"title": "Fix login", "owner": "Alice"}
        payload.update(overrides)
        response = client.post("/api/issues", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


class FakeIssuesApi:
    """In-memory stand-in for the issues API, used as an httpx transport handler."""

    def __init__(self):
        self.issues = []
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.method)
        issue_id = request.url.path.rsplit("/", 1)[-1] if request.url.path != "/api/issues" else None

        if request.method == "GET":
            return httpx.Response(200, json=self.issues)

        if request.method == "POST":
            data = json.loads(request.content)
            if not data.get("title") or not data.get("owner"):
                return httpx.Response(
                    400, json={"error": "Validation failed", "message": "Title and Owner are required fields"}
                )
            issue = {"id": str(uuid.uuid4()), "created": "2026-10-18T09:00:00", **data}
            self.issues.insert(0, issue)
            return httpx.Response(201, json=issue)

        existing = next((i for i in self.issues if i["id"] == issue_id), None)
        if existing is None:
            return httpx.Response(
                404, json={"error": "Issue not found", "message": f"No issue found with ID: {issue_id}"}
            )

        if request.method == "PUT":
            existing.update(json.loads(request.content))
            return httpx.Response(200, json=existing)

        self.issues.remove(existing)
        return httpx.Response(200, json={"message": "Issue deleted successfully", "deletedIssue": existing})


@pytest.fixture
def fake_api():
    return FakeIssuesApi()

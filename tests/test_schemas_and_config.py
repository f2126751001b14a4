import asyncio
from datetime import date

import pytest
from pydantic import ValidationError

from issueforge.application import store_backend
from issueforge.config import DEFAULT_CORS_ORIGINS, load_settings
from issueforge.database.store import IssueStore, parse_issue_id
from issueforge.errors import ConfigurationError, InvalidIdentifier, StoreUnavailable
from issueforge.schemas import IssueCreate, IssueStatus, IssueUpdate


def test_issue_status_values():
    assert [s.value for s in IssueStatus] == ["New", "In Progress", "Fixed", "Closed"]


def test_issue_create_defaults():
    issue = IssueCreate(title="Fix login", owner="Alice")

    assert issue.status is IssueStatus.NEW
    assert issue.effort == 0
    assert issue.due_date is None


def test_issue_create_accepts_camel_case_due_date():
    issue = IssueCreate.model_validate({"title": "Fix", "owner": "Alice", "dueDate": "2026-12-01"})

    assert issue.due_date == date(2026, 12, 1)


@pytest.mark.parametrize(
    "data",
    [
        {"title": "Fix", "owner": "Alice", "status": "Done"},
        {"title": "Fix", "owner": "Alice", "effort": -1},
        {"title": " ", "owner": "Alice"},
    ],
)
def test_issue_create_rejects_invalid(data):
    with pytest.raises(ValidationError):
        IssueCreate.model_validate(data)


def test_issue_update_changes_only_include_supplied_fields():
    update = IssueUpdate.model_validate({"status": "Closed", "dueDate": None})

    assert update.changes() == {"status": IssueStatus.CLOSED, "due_date": None}


def test_issue_update_rejects_null_title():
    with pytest.raises(ValidationError):
        IssueUpdate.model_validate({"title": None})


def test_parse_issue_id():
    raw = "3F2504E0-4F89-11D3-9A0C-0305E82C3301"

    assert parse_issue_id(raw) == raw.lower()
    with pytest.raises(InvalidIdentifier):
        parse_issue_id("507f1f77bcf86cd799439011")


def test_load_settings_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(ConfigurationError):
        load_settings(env_file=False)


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/issues")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("SQL_ECHO", "true")

    settings = load_settings(env_file=False)

    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/issues"
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.echo_sql is True


def test_load_settings_default_cors(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///issues.db")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    assert load_settings(env_file=False).cors_origins == DEFAULT_CORS_ORIGINS


def test_store_backend_name():
    assert store_backend("postgresql+asyncpg://u:p@db/issues") == "postgresql"
    assert store_backend("sqlite+aiosqlite:///issues.db") == "sqlite"


def test_unreachable_store_fails_to_connect(tmp_path):
    store = IssueStore(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'issues.db'}")

    async def connect_then_close():
        try:
            await store.connect()
        finally:
            await store.close()

    with pytest.raises(StoreUnavailable):
        asyncio.run(connect_then_close())

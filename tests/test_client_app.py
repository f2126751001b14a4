import uuid
from pathlib import Path

import httpx
import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from issueforge.client import api as client_api

APP_PATH = str(Path(__file__).resolve().parents[1] / "issueforge" / "client" / "app.py")
BASE_URL = "http://testserver/api/issues"


def _issue(title, owner, status="New"):
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "owner": owner,
        "status": status,
        "created": "2026-10-18T09:00:00",
        "effort": 1,
        "dueDate": None,
    }


@pytest.fixture
def page(fake_api, monkeypatch):
    """The Streamlit page wired to the in-memory API."""
    real_client = client_api.IssueApiClient
    monkeypatch.setattr(
        client_api,
        "IssueApiClient",
        lambda: real_client(BASE_URL, transport=httpx.MockTransport(fake_api)),
    )
    st.cache_resource.clear()
    yield AppTest.from_file(APP_PATH, default_timeout=30)
    st.cache_resource.clear()


def _captions(at):
    return [c.value for c in at.caption]


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def test_page_renders_issue_table(page, fake_api):
    fake_api.issues = [_issue("Login broken", "Alice"), _issue("Slow search", "Bob")]

    page.run()

    assert not page.exception
    assert page.title[0].value == "IssueForge"
    assert "Showing 2 of 2 issues" in _captions(page)
    assert fake_api.requests == ["GET"]


def test_page_filters_locally(page, fake_api):
    fake_api.issues = [_issue("Login broken", "Alice", "Closed"), _issue("Slow search", "Bob")]
    page.run()

    page.text_input(key="filter_owner").input("ALI").run()
    assert "Showing 1 of 2 issues" in _captions(page)

    page.text_input(key="filter_owner").input("").run()
    page.selectbox(key="filter_status").select("New").run()
    assert "Showing 1 of 2 issues" in _captions(page)

    assert fake_api.requests == ["GET"]


def test_delete_needs_second_confirmation_click(page, fake_api):
    issue = _issue("Login broken", "Alice")
    fake_api.issues = [issue]
    page.run()

    page.button(key=f"delete_{issue['id']}_btn").click().run()

    assert fake_api.requests == ["GET"]
    assert any("Are you sure you want to delete issue" in w.value for w in page.warning)

    page.button(key=f"confirm_delete_{issue['id']}").click().run()

    assert not page.exception
    assert fake_api.requests == ["GET", "DELETE", "GET"]
    assert fake_api.issues == []
    assert "Issue deleted successfully!" in [s.value for s in page.success]
    assert "Showing 0 of 0 issues" in _captions(page)


def test_cancelled_delete_sends_nothing(page, fake_api):
    issue = _issue("Login broken", "Alice")
    fake_api.issues = [issue]
    page.run()

    page.button(key=f"delete_{issue['id']}_btn").click().run()
    page.button(key=f"cancel_delete_{issue['id']}").click().run()

    assert fake_api.requests == ["GET"]
    assert fake_api.issues == [issue]
    assert not page.warning


def test_edit_form_saves_and_refetches(page, fake_api):
    issue = _issue("Login broken", "Alice")
    fake_api.issues = [issue]
    page.run()

    page.button(key=f"edit_{issue['id']}_btn").click().run()
    title_input = next(t for t in page.text_input if t.label == "Title *")
    title_input.input("Login redirect broken")
    _button(page, "Save Changes").click().run()

    assert not page.exception
    assert fake_api.requests == ["GET", "PUT", "GET"]
    assert fake_api.issues[0]["title"] == "Login redirect broken"
    assert "Issue updated successfully!" in [s.value for s in page.success]
    assert not any(b.label == "Save Changes" for b in page.button)


def test_unreachable_api_shows_error(monkeypatch):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    real_client = client_api.IssueApiClient
    monkeypatch.setattr(
        client_api,
        "IssueApiClient",
        lambda: real_client(BASE_URL, transport=httpx.MockTransport(refuse)),
    )
    st.cache_resource.clear()
    at = AppTest.from_file(APP_PATH, default_timeout=30)

    at.run()

    assert not at.exception
    assert [e.value for e in at.error] == [
        "Failed to load issues from server. Make sure the backend is running."
    ]
    st.cache_resource.clear()

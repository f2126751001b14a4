"""IssueForge single-page UI.

Run with: streamlit run issueforge/client/app.py
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import streamlit as st
from dotenv import load_dotenv

from issueforge.client.api import IssueApiClient
from issueforge.client.display import issue_row, parse_date
from issueforge.client.state import (
    FILTER_CHOICES,
    STATUS_CHOICES,
    BoardState,
    FormError,
    IssueBoardController,
    build_issue_payload,
)

logger = logging.getLogger(__name__)

KEY_STATE = "issueforge_board"
KEY_FLASH = "issueforge_flash"
KEY_PENDING_DELETE = "issueforge_pending_delete"


@st.cache_resource
def _get_api() -> IssueApiClient:
    load_dotenv()
    return IssueApiClient()


def _flash(kind: str, message: str) -> None:
    st.session_state.setdefault(KEY_FLASH, []).append((kind, message))


def _render_flash() -> None:
    for kind, message in st.session_state.pop(KEY_FLASH, []):
        if kind == "error":
            st.error(message, icon="🚨")
        else:
            st.success(message)


def _get_controller() -> IssueBoardController:
    first_run = KEY_STATE not in st.session_state
    if first_run:
        st.session_state[KEY_STATE] = BoardState()

    controller = IssueBoardController(
        api=_get_api(),
        state=st.session_state[KEY_STATE],
        alert=lambda message: _flash("error", message),
        notify=lambda message: _flash("success", message),
    )
    if first_run:
        with st.spinner("Loading issues..."):
            controller.refresh()
    return controller


def render_filters(state: BoardState) -> None:
    st.subheader("Filter Issues")
    a, b, c = st.columns([2, 3, 1])
    with a:
        state.status_filter = st.selectbox(
            "Status",
            FILTER_CHOICES,
            index=FILTER_CHOICES.index(state.status_filter),
            key="filter_status",
        )
    with b:
        state.owner_filter = st.text_input(
            "Owner",
            value=state.owner_filter,
            placeholder="Search by owner name...",
            key="filter_owner",
        )
    with c:
        st.write("")
        if st.button("Clear Filters", use_container_width=True):
            state.clear_filters()
            st.session_state.pop("filter_status", None)
            st.session_state.pop("filter_owner", None)
            st.rerun()

    shown, total = state.counts()
    st.caption(f"Showing {shown} of {total} issues")


def _issue_form(key: str, issue: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
    """Shared create/edit form. Returns a validated payload on submit."""
    issue = issue or {}
    status = issue.get("status", STATUS_CHOICES[0])

    with st.form(key, clear_on_submit=not issue):
        title = st.text_input("Title *", value=issue.get("title", ""), placeholder="Describe the issue...")
        owner = st.text_input("Owner *", value=issue.get("owner", ""), placeholder="Assigned person")
        status = st.selectbox("Status", STATUS_CHOICES, index=STATUS_CHOICES.index(status))
        effort = st.number_input(
            "Effort (days)", min_value=0, step=1, value=issue.get("effort"), placeholder="Estimated days"
        )
        due_date = st.date_input("Due Date", value=parse_date(issue.get("dueDate")))
        submitted = st.form_submit_button("Save Changes" if issue else "Add Issue")

    if not submitted:
        return None
    try:
        return build_issue_payload(title, owner, status, effort, due_date)
    except FormError as e:
        st.warning(str(e))
        return None


def render_edit_form(controller: IssueBoardController) -> None:
    issue = controller.state.editing
    if not issue:
        return

    with st.container(border=True):
        st.subheader("Edit Issue")
        payload = _issue_form(f"edit_{issue['id']}", issue)
        if payload is not None:
            with st.spinner("Saving changes..."):
                controller.update_issue(issue["id"], payload)
            st.rerun()
        if st.button("Cancel", key="edit_cancel"):
            controller.cancel_edit()
            st.rerun()


def render_issue_list(controller: IssueBoardController) -> None:
    st.subheader("Current Issues")
    issues = controller.state.visible_issues()
    if not issues:
        st.info("No issues found. Try adjusting your filters or add a new issue below!")
        return

    headers = ["Title", "Owner", "Status", "Created", "Effort", "Due Date", "Actions"]
    widths = [3, 2, 2, 2, 1, 2, 2]
    for col, header in zip(st.columns(widths), headers):
        col.markdown(f"**{header}**")

    pending = st.session_state.get(KEY_PENDING_DELETE)
    for issue in issues:
        cols = st.columns(widths)
        for col, value in zip(cols, issue_row(issue).values()):
            col.write(value)

        with cols[-1]:
            edit_col, delete_col = st.columns(2)
            if edit_col.button("Edit", key=f"edit_{issue['id']}_btn", help="Edit this issue"):
                controller.start_edit(issue)
                st.rerun()
            if delete_col.button("Delete", key=f"delete_{issue['id']}_btn", help="Delete this issue"):
                st.session_state[KEY_PENDING_DELETE] = issue["id"]
                st.rerun()

        if pending == issue["id"]:
            st.warning(f'Are you sure you want to delete issue: "{issue["title"]}"?')
            yes, no = st.columns([1, 5])
            if yes.button("Yes, delete", key=f"confirm_delete_{issue['id']}", type="primary"):
                st.session_state.pop(KEY_PENDING_DELETE, None)
                with st.spinner("Deleting issue..."):
                    controller.delete_issue(issue, confirm=lambda _message: True)
                st.rerun()
            if no.button("Cancel", key=f"cancel_delete_{issue['id']}"):
                st.session_state.pop(KEY_PENDING_DELETE, None)
                st.rerun()


def render_add_form(controller: IssueBoardController) -> None:
    st.subheader("Create New Issue")
    payload = _issue_form("add_issue")
    if payload is not None:
        with st.spinner("Adding issue..."):
            controller.add_issue(payload)
        st.rerun()


def main() -> None:
    st.set_page_config(page_title="IssueForge", page_icon="🔥", layout="wide")
    st.title("IssueForge")
    st.caption("Track, filter and update issues")

    controller = _get_controller()
    _render_flash()

    render_filters(controller.state)
    render_edit_form(controller)
    render_issue_list(controller)
    render_add_form(controller)


main()

"""Client-side board state, form handling and mutation flow.

The board keeps the full issue list as returned by the API. Filtering is
purely local; every successful mutation re-fetches the whole list.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional, Union

from issueforge.client.api import ApiError, IssueApiClient
from issueforge.schemas import IssueStatus

logger = logging.getLogger(__name__)

ALL_STATUSES = "All"
STATUS_CHOICES = [s.value for s in IssueStatus]
FILTER_CHOICES = [ALL_STATUSES, *STATUS_CHOICES]

Issue = dict[str, Any]


class FormError(ValueError):
    """Raised when form input fails client-side validation."""


@dataclass
class BoardState:
    issues: list[Issue] = field(default_factory=list)
    status_filter: str = ALL_STATUSES
    owner_filter: str = ""
    editing: Optional[Issue] = None
    loading: bool = False

    def matches(self, issue: Issue) -> bool:
        status_match = self.status_filter == ALL_STATUSES or issue.get("status") == self.status_filter
        needle = self.owner_filter.lower()
        owner_match = needle == "" or needle in str(issue.get("owner", "")).lower()
        return status_match and owner_match

    def visible_issues(self) -> list[Issue]:
        return [issue for issue in self.issues if self.matches(issue)]

    def counts(self) -> tuple[int, int]:
        """(shown, total) for the results line."""
        return len(self.visible_issues()), len(self.issues)

    def clear_filters(self) -> None:
        self.status_filter = ALL_STATUSES
        self.owner_filter = ""


def coerce_effort(value: Union[str, int, float, None]) -> int:
    """Effort as a non-negative whole number of days; blank means 0."""
    if value is None:
        return 0
    text = str(value).strip()
    if not text:
        return 0
    try:
        effort = int(float(text))
    except ValueError:
        raise FormError("Effort must be a whole number of days")
    return max(effort, 0)


def build_issue_payload(
    title: str,
    owner: str,
    status: str = IssueStatus.NEW.value,
    effort: Union[str, int, float, None] = None,
    due_date: Union[date, str, None] = None,
) -> dict[str, Any]:
    """
    Validate form input and build the JSON body for create/update.

    Raises:
        FormError: If title or owner is blank, status is unknown, or effort is not numeric
    """
    title = (title or "").strip()
    owner = (owner or "").strip()
    if not title or not owner:
        raise FormError("Please fill in both Title and Owner fields")

    if status not in STATUS_CHOICES:
        raise FormError(f"Unknown status: {status}")

    if isinstance(due_date, date):
        due_date = due_date.isoformat()

    return {
        "title": title,
        "owner": owner,
        "status": status,
        "effort": coerce_effort(effort),
        "dueDate": due_date or None,
    }


class IssueBoardController:
    """
    Runs list/create/update/delete against the API and keeps BoardState in sync.

    alert receives failure messages, notify receives success messages.
    """

    def __init__(
        self,
        api: IssueApiClient,
        state: BoardState,
        alert: Callable[[str], None],
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.api = api
        self.state = state
        self.alert = alert
        self.notify = notify or (lambda message: None)

    def refresh(self) -> bool:
        self.state.loading = True
        try:
            self.state.issues = self.api.list_issues()
            logger.info(f"Loaded {len(self.state.issues)} issues from server")
            return True
        except ApiError as e:
            logger.error(f"Error loading issues: {e.message}")
            self.alert("Failed to load issues from server. Make sure the backend is running.")
            return False
        finally:
            self.state.loading = False

    def add_issue(self, data: dict[str, Any]) -> bool:
        try:
            created = self.api.create_issue(data)
        except ApiError as e:
            self.alert(f"Failed to add issue: {e.message}")
            return False

        logger.info("Issue created", extra={"issue_id": created.get("id")})
        self.refresh()
        self.notify("Issue added successfully!")
        return True

    def start_edit(self, issue: Issue) -> None:
        self.state.editing = issue

    def cancel_edit(self) -> None:
        self.state.editing = None

    def update_issue(self, issue_id: str, data: dict[str, Any]) -> bool:
        try:
            self.api.update_issue(issue_id, data)
        except ApiError as e:
            self.alert(f"Failed to update issue: {e.message}")
            return False

        logger.info("Issue updated", extra={"issue_id": issue_id})
        self.refresh()
        self.state.editing = None
        self.notify("Issue updated successfully!")
        return True

    def delete_issue(self, issue: Issue, confirm: Callable[[str], bool]) -> bool:
        """Delete after an explicit confirmation; declining issues no request."""
        if not confirm(f'Are you sure you want to delete issue: "{issue.get("title")}"?'):
            return False

        try:
            self.api.delete_issue(issue["id"])
        except ApiError as e:
            self.alert(f"Failed to delete issue: {e.message}")
            return False

        logger.info("Issue deleted", extra={"issue_id": issue["id"]})
        if self.state.editing and self.state.editing.get("id") == issue["id"]:
            self.state.editing = None
        self.refresh()
        self.notify("Issue deleted successfully!")
        return True

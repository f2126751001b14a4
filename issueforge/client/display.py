from datetime import date, datetime
from typing import Any, Optional, Union

STATUS_BADGES = {
    "New": "🆕 New",
    "In Progress": "🚧 In Progress",
    "Fixed": "✅ Fixed",
    "Closed": "🔒 Closed",
}


def status_badge(status: Optional[str]) -> str:
    return STATUS_BADGES.get(status or "", status or "")


def format_date(value: Union[str, date, datetime, None]) -> str:
    """YYYY-MM-DD for display, N/A when missing."""
    if not value:
        return "N/A"
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    text = str(value)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return text[:10]


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Date for form widgets; None when missing or unparseable."""
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def issue_row(issue: dict[str, Any]) -> dict[str, str]:
    """Table cells for one issue."""
    return {
        "Title": issue.get("title", ""),
        "Owner": issue.get("owner", ""),
        "Status": status_badge(issue.get("status")),
        "Created": format_date(issue.get("created")),
        "Effort": f"{issue.get('effort', 0)} days",
        "Due Date": format_date(issue.get("dueDate")),
    }

"""Single-page client for the issues API."""

from issueforge.client.api import ApiError, IssueApiClient
from issueforge.client.state import BoardState, FormError, IssueBoardController, build_issue_payload

__all__ = [
    "ApiError",
    "BoardState",
    "FormError",
    "IssueApiClient",
    "IssueBoardController",
    "build_issue_payload",
]

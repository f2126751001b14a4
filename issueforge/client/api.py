import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api/issues"


class ApiError(Exception):
    """Raised when the API rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class IssueApiClient:
    """
    Thin synchronous client for the issues API.

    Every method returns decoded JSON on success and raises ApiError with
    the server-reported message otherwise.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or os.getenv("ISSUEFORGE_API_URL", DEFAULT_API_URL)).rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def list_issues(self) -> list[dict[str, Any]]:
        return self._request("GET", self.base_url, fallback="Failed to fetch issues")

    def create_issue(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", self.base_url, json=data, fallback="Failed to create issue")

    def update_issue(self, issue_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "PUT", f"{self.base_url}/{issue_id}", json=data, fallback="Failed to update issue"
        )

    def delete_issue(self, issue_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"{self.base_url}/{issue_id}", fallback="Failed to delete issue")

    def _request(self, method: str, url: str, fallback: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {str(e)}")
            raise ApiError(f"Could not reach the server at {self.base_url}. Make sure the backend is running.")

        if response.is_error:
            raise ApiError(_error_message(response, fallback), status_code=response.status_code)

        return response.json()


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback

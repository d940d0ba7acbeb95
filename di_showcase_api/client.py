"""DI Showcase API client.

A thin wrapper around the HTTP API built on ``requests``.  The session
is injected like any other collaborator: pass your own
``requests.Session`` (configured with proxies, retries or auth) or a
test double; by default a new session is created.

Example::

    client = ShowcaseClient("http://localhost:8000")
    client.register_user("ada@example.com", full_name="Ada")
    print(client.inspect_lifetimes()["scoped"]["same_instance"])  # True

Every method returns the decoded JSON body.  Responses outside the
2xx range raise :class:`ShowcaseAPIError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests


logger = logging.getLogger(__name__)


class ShowcaseAPIError(Exception):
    """Raised for non‑2xx responses.

    Attributes:
        status_code: HTTP status of the response.
        detail: The ``detail`` field of the error body, or the raw text.
    """

    def __init__(self, status_code: int, detail: Any) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")


class ShowcaseClient:
    """Client for the DI Showcase API."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        api_prefix: str = "/api/v1",
    ) -> None:
        self.base_url = base_url.rstrip("/") + api_prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail") if isinstance(body, dict) else response.text
            raise ShowcaseAPIError(response.status_code, detail)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _params(**params: Any) -> Dict[str, Any]:
        return {key: value for key, value in params.items() if value is not None}

    # Emails -----------------------------------------------------------------

    def send_email(self, to: str, subject: str, body: str = "", sender: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"to": to, "subject": subject, "body": body}
        if sender:
            payload["sender"] = sender
        return self._request("POST", "/emails/", json=payload)

    def list_outbox(self, recipient: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        return self._request(
            "GET", "/emails/outbox", params=self._params(recipient=recipient, limit=limit, offset=offset)
        )

    # Users ------------------------------------------------------------------

    def register_user(self, email: str, full_name: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/users/", json={"email": email, "full_name": full_name})

    def list_users(self, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        return self._request("GET", "/users/", params={"limit": limit, "offset": offset})

    def get_user(self, user_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/users/{user_id}")

    # Notifications ----------------------------------------------------------

    def notify(self, recipient: str, message: str, channels: Optional[List[str]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"recipient": recipient, "message": message}
        if channels is not None:
            payload["channels"] = channels
        return self._request("POST", "/notifications/", json=payload)

    def list_channels(self) -> List[str]:
        return self._request("GET", "/notifications/channels")

    def list_notifications(self, recipient: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        return self._request(
            "GET", "/notifications/", params=self._params(recipient=recipient, limit=limit, offset=offset)
        )

    # Introspection ----------------------------------------------------------

    def inspect_lifetimes(self) -> Dict[str, Any]:
        return self._request("GET", "/lifetimes/")

    def list_logs(
        self,
        level: Optional[str] = None,
        category: Optional[str] = None,
        request_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        params = self._params(level=level, category=category, request_id=request_id, limit=limit, offset=offset)
        return self._request("GET", "/logs/", params=params)

    def list_services(self) -> Dict[str, Any]:
        return self._request("GET", "/services/")

    def close(self) -> None:
        self.session.close()

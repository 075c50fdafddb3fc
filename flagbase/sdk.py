"""HTTP client for evaluating flags and recording metric events on a server."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Optional

_DEFAULT_TIMEOUT = 10.0


class Client:
    """A flag server client bound to a single endpoint.

    ``token`` is a bearer token obtained from ``POST /auth/login``; when empty,
    requests are sent without an ``Authorization`` header.
    """

    def __init__(self, base_url: str, token: str = "", timeout: float = _DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url
        self.token = token
        self.timeout = timeout

    def _headers(self, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
        headers = dict(extra or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> tuple[int, bytes]:
        request = urllib.request.Request(
            f"{self.base_url}{path}",
            data=body,
            method=method,
            headers=self._headers(headers),
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as exc:
            with exc:
                return exc.code, exc.read()

    def evaluate_flag(self, key: str) -> bool:
        """Evaluate flag ``key`` for the authenticated user.

        Raises RuntimeError on a non-200 status and ValueError on a malformed
        response body; network failures propagate as OSError.
        """
        status, payload = self._send("GET", f"/api/v1/flags/{key}/evaluate")
        if status != 200:
            raise RuntimeError(f"evaluate flag: unexpected status {status}")
        try:
            document = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"evaluate flag: decoding response: {exc}") from exc
        if document is None:
            return False
        if not isinstance(document, dict):
            raise ValueError("evaluate flag: response is not an object")
        value = document.get("value")
        if value is None:
            return False
        if not isinstance(value, bool):
            raise ValueError("evaluate flag: 'value' is not a boolean")
        return value

    def record_event(self, flag_key: str, variant: str, event_type: str, value: float) -> None:
        """Publish a metric event for a flag variant.

        Raises RuntimeError when the server answers with a status of 300 or more.
        """
        payload = json.dumps(
            {
                "flag_key": flag_key,
                "variant": variant,
                "event_type": event_type,
                "value": float(value),
            }
        ).encode("utf-8")
        status, _ = self._send(
            "POST",
            "/api/v1/metrics",
            body=payload,
            headers={"Content-Type": "application/json"},
        )
        if status >= 300:
            raise RuntimeError(f"record event: unexpected status {status}")
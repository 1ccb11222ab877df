"""
In-memory transport doubles for the request helper unit tests.
"""

import json
from typing import Any, Dict, List, Optional


class FakeResponse:
    """Mimics the transport response shape: status, status_text, json()."""

    def __init__(self, status: int = 200, body: Any = None, status_text: str = "OK", raw: Optional[str] = None):
        self.status = status
        self.status_text = status_text
        self._raw = raw if raw is not None else json.dumps(body)

    def json(self) -> Any:
        return json.loads(self._raw)


class FakeClient:
    """
    Records every call and replays scripted responses in order.

    A scripted Exception instance is raised instead of returned.
    """

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"No scripted response left for {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs: Any) -> Any:
        return self._send("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Any:
        return self._send("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> Any:
        return self._send("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> Any:
        return self._send("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Any:
        return self._send("DELETE", url, **kwargs)

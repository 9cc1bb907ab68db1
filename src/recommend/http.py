from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)
_SLOW_REQUEST_SECONDS = 5.0


@dataclass(slots=True)
class RecommendationHttpClient:
    """JSON-over-HTTP client that makes exactly one attempt per call."""

    timeout_seconds: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            }
        )

        retry = Retry(total=0, connect=0, read=0, status=0, redirect=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> RecommendationHttpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def timeout_tuple(self) -> tuple[float, float]:
        connect_timeout = max(1.0, min(self.timeout_seconds, 5.0))
        read_timeout = max(connect_timeout, self.timeout_seconds)
        return connect_timeout, read_timeout

    def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """POST `payload` and decode the JSON body.

        Raises `requests.HTTPError` on non-2xx responses and `ValueError`
        (`requests.JSONDecodeError`) when the body is not JSON.
        """
        return self._request("POST", url, json_payload=payload).json()

    def _request(
        self,
        method: str,
        url: str,
        *,
        json_payload: dict[str, Any] | None = None,
    ) -> Response:
        started_at = time.monotonic()
        response = self._session.request(
            method=method,
            url=url,
            json=json_payload,
            timeout=self.timeout_tuple,
        )
        elapsed = time.monotonic() - started_at
        if elapsed > _SLOW_REQUEST_SECONDS:
            logger.warning("Slow HTTP %s %.3fs %s", method, elapsed, url)
        response.raise_for_status()
        return response

"""Shared HTTP plumbing for the enrichment service clients."""

import logging
from typing import Any, Dict, Optional

import requests
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

from core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


def _is_retryable_error(exc: Exception) -> bool:
    """
    Determine if an exception is retryable.

    Only retries on:
    - Timeouts
    - Server errors (5xx)
    - Connection errors without a response

    Does NOT retry on client errors (4xx).
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, requests.HTTPError):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None and 400 <= response.status_code < 500:
            return False
        return True

    return False


class ServiceClient:
    """
    Base client owning a requests.Session with retrying JSON POSTs.

    Subclasses call _post_json() and translate the payload into typed
    results. Exhausted retries and error payloads surface as
    UpstreamServiceError.
    """

    service_name = "service"

    def __init__(
        self,
        base_url: Optional[str] = None,
        request_timeout_seconds: int = 60,
        max_attempts: int = 3,
        retry_wait_seconds: float = 2.0
    ):
        self.base_url = (base_url or "http://localhost:8080").rstrip("/")
        self.request_timeout_seconds = request_timeout_seconds
        self.max_attempts = max(1, int(max_attempts))
        self.retry_wait_seconds = retry_wait_seconds

        self.session = requests.Session()

        logger.info(
            f"{type(self).__name__} initialized: base_url={self.base_url}, "
            f"timeout={request_timeout_seconds}s, attempts={self.max_attempts}"
        )

    def _send(self, path: str, payload: Dict[str, Any]) -> requests.Response:
        response = self.session.post(
            f"{self.base_url}{path}",
            json=payload,
            timeout=self.request_timeout_seconds
        )
        response.raise_for_status()
        return response

    def _post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_wait_seconds),
            retry=retry_if_exception(_is_retryable_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        try:
            response = retryer(self._send, path, payload)
            data = response.json()
        except requests.RequestException as e:
            raise UpstreamServiceError(f"{self.service_name} call to {path} failed: {e}") from e
        except ValueError as e:
            raise UpstreamServiceError(f"{self.service_name} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamServiceError(f"{self.service_name} returned unexpected payload type {type(data).__name__}")

        if data.get("success") is False:
            raise UpstreamServiceError(f"{self.service_name} error: {data.get('error', 'Unknown error')}")

        return data

    def close(self):
        """Close the session and release resources."""
        self.session.close()
        logger.info(f"{type(self).__name__} session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

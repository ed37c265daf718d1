"""Abstract base class for upstream API clients.

This module provides the base class shared by the Jira and GitHub
transports, with common functionality for rate limiting, retry logic
and turning HTTP responses into parsed JSON or transport faults.
"""

from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Callable

import requests

from ..agent_logging import get_logger
from .errors import TransportFault

logger = get_logger("integrations")

# Statuses worth retrying at the transport layer
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


class IntegrationClient(ABC):
    """Abstract base class for upstream API clients.

    Provides common functionality for rate limiting and retry logic.
    Retries happen here and only here; the status components above
    never retry on their own.
    """

    def __init__(
        self,
        api_key: str,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        requests_per_minute: int = 60,
        timeout: float = 30.0,
    ):
        """Initialize the integration client.

        Args:
            api_key: Credential used for authentication
            max_retries: Maximum number of retry attempts
            base_delay: Base delay for exponential backoff (seconds)
            max_delay: Maximum delay between retries (seconds)
            requests_per_minute: Rate limit (requests per minute)
            timeout: Per-request timeout (seconds)
        """
        self.api_key = api_key
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.timeout = timeout
        self._requests_per_minute = requests_per_minute

        # Rate limiting state, shared by concurrent fetches
        self._request_times: list[float] = []
        self._lock = Lock()

        self._session = requests.Session()

    @property
    @abstractmethod
    def service(self) -> str:
        """Return the upstream service name used in fault messages."""
        pass

    @property
    @abstractmethod
    def api_base(self) -> str:
        """Return the base URL requests are made against."""
        pass

    def _check_rate_limits(self) -> None:
        """Check and enforce rate limits.

        Blocks if rate limit would be exceeded.
        """
        with self._lock:
            current_time = time.time()

            # Clean old entries (older than 1 minute)
            self._request_times = [
                t for t in self._request_times if current_time - t < 60
            ]

            if len(self._request_times) < self._requests_per_minute:
                return
            sleep_time = 60 - (current_time - self._request_times[0]) + 1

        if sleep_time > 0:
            logger.debug(f"{self.service} rate limit reached, sleeping {sleep_time:.1f}s")
            time.sleep(sleep_time)

    def _record_request(self) -> None:
        """Record a request for rate limiting."""
        with self._lock:
            self._request_times.append(time.time())

    def _calculate_delay(self, attempt: int) -> float:
        """Calculate delay with exponential backoff and jitter.

        Args:
            attempt: Current attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay = self.base_delay * (2**attempt)
        delay = min(delay, self.max_delay)
        # Add jitter (10-30% of delay)
        jitter = random.uniform(0.1, 0.3) * delay
        return delay + jitter

    def _should_retry(self, error: Exception, attempt: int) -> bool:
        """Determine if error should trigger retry.

        Args:
            error: The exception that occurred
            attempt: Current attempt number (0-indexed)

        Returns:
            True if should retry, False otherwise
        """
        if attempt >= self.max_retries:
            return False

        if isinstance(error, TransportFault):
            return error.status is None or error.status in TRANSIENT_STATUSES

        return isinstance(error, (requests.ConnectionError, requests.Timeout))

    def _execute_with_retry(self, operation: Callable[..., Any], *args, **kwargs):
        """Execute an operation with retry logic.

        Args:
            operation: The function to execute
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Result of the operation

        Raises:
            Exception: If all retries are exhausted
        """
        last_error: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                self._check_rate_limits()
                result = operation(*args, **kwargs)
                self._record_request()
                return result
            except Exception as e:
                last_error = e
                if self._should_retry(e, attempt):
                    delay = self._calculate_delay(attempt)
                    logger.debug(
                        f"{self.service} request failed ({e}), retrying in {delay:.1f}s"
                    )
                    time.sleep(delay)
                else:
                    raise

        if last_error:
            raise last_error

    def _request(
        self, method: str, endpoint: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make a request and return the parsed JSON body.

        Args:
            method: HTTP method
            endpoint: API endpoint (relative to base)
            params: Query parameters

        Returns:
            Response data

        Raises:
            TransportFault: If the request fails or returns a non-success status
        """

        def _do_request() -> Any:
            url = f"{self.api_base}{endpoint}"
            try:
                response = self._session.request(
                    method, url, params=params, timeout=self.timeout
                )
            except requests.RequestException as e:
                raise TransportFault(
                    status=None, body=str(e), url=url, service=self.service
                ) from e
            if not response.ok:
                raise TransportFault.from_response(response, self.service)
            return response.json()

        return self._execute_with_retry(_do_request)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

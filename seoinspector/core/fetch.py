"""Fetcher protocol and the requests-based implementation.

The Inspector depends on the Fetcher protocol via dependency injection.
No check ever fetches: acquisition happens once, here, and checks only
read the resulting Document.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol, runtime_checkable

import requests

from seoinspector.core.config import FetchConfig
from seoinspector.core.errors import FetchError

logger = logging.getLogger(__name__)


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for page acquisition.

    Enables testing with a Mock fetcher instead of the network.
    """

    def fetch(self, url: str) -> str:
        """Return the page body for ``url``.

        Raises:
            FetchError: On network failure or a non-success status.
        """
        ...


class RequestsFetcher:
    """Fetcher implementation using a requests Session."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or FetchConfig()
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", self.config.user_agent)

    def fetch(self, url: str) -> str:
        if not url:
            raise FetchError("URL missing")
        last_error: Optional[str] = None
        for attempt in range(self.config.max_retries):
            try:
                response = self._session.get(url, timeout=self.config.timeout_seconds)
            except requests.RequestException as e:
                last_error = str(e)
            else:
                if response.ok:
                    logger.info("Fetched %s (%d bytes)", url, len(response.content))
                    return response.text
                if response.status_code < 500:
                    raise FetchError(
                        f"Fetch failed: {response.status_code} {response.reason} for {url}"
                    )
                last_error = f"{response.status_code} {response.reason}"
            if attempt < self.config.max_retries - 1:
                logger.warning("Attempt %d: fetching %s failed: %s", attempt + 1, url, last_error)
                time.sleep(self.config.backoff_seconds * 2**attempt)
        raise FetchError(
            f"Fetch failed after {self.config.max_retries} attempt(s) for {url}: {last_error}"
        )

    def close(self) -> None:
        self._session.close()

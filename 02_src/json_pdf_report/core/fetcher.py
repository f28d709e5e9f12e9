"""HTTP fetcher for remote JSON documents and images.

Retries rate limits, server errors and connection failures with
exponential backoff.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..schemas.config import FetchConfig

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a remote document cannot be fetched or parsed."""


class ImageFetchError(FetchError):
    """Raised when a remote image cannot be fetched."""


class HttpFetcher:
    """Blocking HTTP GET with retry logic."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            config: Fetch configuration (defaults from environment)
            session: Requests session to reuse connections (optional)
        """
        self.config = config or FetchConfig()
        self.session = session or requests.Session()

    def close(self) -> None:
        """Release pooled connections; the fetcher stays usable afterwards."""
        self.session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _headers(self, accept: str) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.config.auth_token:
            headers["Authorization"] = f"Bearer {self.config.auth_token}"
        return headers

    def _get(self, url: str, accept: str, error_cls: type) -> requests.Response:
        """GET ``url`` with retries, raising ``error_cls`` on final failure."""
        last_error: Optional[str] = None

        for attempt in range(1, self.config.max_retries + 1):
            start_time = time.time()
            try:
                resp = self.session.get(
                    url,
                    headers=self._headers(accept),
                    timeout=self.config.timeout_sec,
                )
                status = resp.status_code
                latency_ms = int((time.time() - start_time) * 1000)

                # Retry on rate limit or server errors
                if status == 429 or (500 <= status < 600):
                    last_error = f"status={status}"
                    logger.warning(
                        f"GET {url} attempt {attempt}/{self.config.max_retries}: "
                        f"status={status}, latency={latency_ms}ms"
                    )
                    if attempt < self.config.max_retries:
                        time.sleep(self.config.backoff_base ** (attempt - 1))
                        continue

                resp.raise_for_status()
                logger.debug(f"GET {url} -> {status} ({latency_ms}ms, {len(resp.content)} bytes)")
                return resp

            except requests.HTTPError as exc:
                raise error_cls(f"GET {url} failed: {exc}") from exc

            except (requests.ConnectionError, requests.Timeout) as exc:
                last_error = str(exc)
                logger.warning(
                    f"GET {url} attempt {attempt}/{self.config.max_retries}: "
                    f"error={str(exc)[:200]}"
                )
                if attempt < self.config.max_retries:
                    time.sleep(self.config.backoff_base ** (attempt - 1))
                    continue
                raise error_cls(f"GET {url} failed: {exc}") from exc

            except requests.RequestException as exc:
                raise error_cls(f"GET {url} failed: {exc}") from exc

        raise error_cls(
            f"GET {url} failed after {self.config.max_retries} attempts: {last_error}"
        )

    def fetch_json(self, url: str) -> Any:
        """Fetch and parse a JSON document.

        Raises:
            FetchError: On network/HTTP failure or a non-JSON body
        """
        resp = self._get(url, "application/json", FetchError)
        try:
            data = resp.json()
        except ValueError as exc:
            raise FetchError(f"Response from {url} is not valid JSON: {exc}") from exc
        logger.info(f"Fetched JSON document from {url}")
        return data

    def fetch_image(self, url: str) -> bytes:
        """Fetch raw image bytes.

        Raises:
            ImageFetchError: On network/HTTP failure or an empty body
        """
        resp = self._get(url, "image/*", ImageFetchError)
        if not resp.content:
            raise ImageFetchError(f"Empty image body from {url}")
        return resp.content

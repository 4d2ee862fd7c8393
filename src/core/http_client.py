"""HTTP fetch capability used by the scraping pipeline.

Kept separate from parsing so extractors stay pure functions of the document.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Network failure, timeout or non-success response for a single URL."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def fetch(
    url: str,
    *,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    retries: int | None = None,
    backoff_factor: float | None = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Return the document at ``url`` as text or raise :class:`FetchError`."""
    ua = user_agent or settings.DEFAULT_USER_AGENT
    timeout = timeout or settings.DEFAULT_TIMEOUT
    retries = retries if retries is not None else settings.DEFAULT_RETRIES
    backoff_factor = (
        backoff_factor if backoff_factor is not None else settings.DEFAULT_BACKOFF_FACTOR
    )

    headers = {"User-Agent": ua}
    close_client = False
    if client is None:
        client = httpx.Client(headers=headers, timeout=timeout, follow_redirects=True)
        close_client = True
    try:
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = client.get(url, headers=headers, timeout=timeout)
                resp.raise_for_status()
                return resp.text
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if attempt > retries:
                    raise FetchError(
                        f"Failed to fetch {url}: HTTP {status}", url=url, status_code=status
                    ) from e
                error: Exception = e
            except httpx.HTTPError as e:
                if attempt > retries:
                    raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e
                error = e
            sleep_for = backoff_factor * (2 ** (attempt - 1))
            logger.warning(
                "Attempt %d/%d failed for %s: %s. Retrying in %.1fs...",
                attempt,
                retries,
                url,
                error,
                sleep_for,
            )
            time.sleep(sleep_for)
    finally:
        if close_client:
            client.close()

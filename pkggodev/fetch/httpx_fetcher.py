import datetime as dt
import logging
from typing import Optional
import httpx

from pkggodev.core.config import settings
from pkggodev.core.errors import TransportError
from .base import BaseFetcher, FetchResult

logger = logging.getLogger(__name__)

class HttpxFetcher(BaseFetcher):
    """Default fetcher. Pass ``transport`` to point it at a mock or a proxy."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None, user_agent: Optional[str] = None):
        self.transport = transport
        self.headers = {
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

    def fetch(self, url: str, timeout_sec: int = 30) -> FetchResult:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                transport=self.transport,
                timeout=timeout_sec,
                headers=self.headers,
                follow_redirects=True,
            ) as client:
                response = client.get(url)
                body = response.content
        except httpx.HTTPError as e:
            raise TransportError(url, e) from e

        return FetchResult(
            url=url,
            status_code=int(response.status_code),
            final_url=str(response.url),
            body=body,
            fetched_at=dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
        )

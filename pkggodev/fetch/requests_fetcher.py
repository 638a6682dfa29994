import datetime as dt
import logging
from typing import Optional
import requests

from pkggodev.core.config import settings
from pkggodev.core.errors import TransportError
from .base import BaseFetcher, FetchResult

logger = logging.getLogger(__name__)

class RequestsFetcher(BaseFetcher):
    def __init__(self, session: Optional[requests.Session] = None, user_agent: Optional[str] = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept-Language": "en-US,en;q=0.5",
        })

    def fetch(self, url: str, timeout_sec: int = 30) -> FetchResult:
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=timeout_sec)
        except requests.RequestException as e:
            raise TransportError(url, e) from e

        return FetchResult(
            url=url,
            status_code=int(resp.status_code),
            final_url=str(resp.url),
            body=resp.content or b"",
            fetched_at=dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
        )

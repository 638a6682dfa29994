from dataclasses import dataclass
from typing import Optional

@dataclass
class FetchResult:
    url: str
    status_code: int
    final_url: str
    body: bytes
    fetched_at: str  # ISO 8601

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

class BaseFetcher:
    """
    One HTTP GET. Implementations return the status code and body as-is and
    raise TransportError only for network-level faults; status mapping is
    left to the client.
    """
    def fetch(self, url: str, timeout_sec: int = 30) -> FetchResult:
        raise NotImplementedError

def get_fetcher(backend: Optional[str] = None) -> BaseFetcher:
    """Build the fetcher named by ``backend`` (defaults to settings.HTTP_BACKEND)."""
    from pkggodev.core.config import settings

    backend = (backend or settings.HTTP_BACKEND).lower()
    if backend == "httpx":
        from .httpx_fetcher import HttpxFetcher
        return HttpxFetcher()
    if backend == "requests":
        from .requests_fetcher import RequestsFetcher
        return RequestsFetcher()
    raise ValueError(f"Unknown HTTP backend '{backend}' (expected 'httpx' or 'requests')")

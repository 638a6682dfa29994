from datetime import datetime, timezone
import pytest
from pkggodev.core import config
from pkggodev.fetch.base import BaseFetcher, FetchResult
from pkggodev.services.client import PkgGoDevClient

BASE_URL = "http://pkg.test"

# Reference "now" for relative dates ("3 days ago") in tests
FIXED_NOW = datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc)

class FakeFetcher(BaseFetcher):
    """
    In-memory fetcher. ``pages`` maps a URL to either an HTML string
    (served with 200) or a (status, body) tuple. Unknown URLs get 404.
    """
    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requested = []

    def fetch(self, url: str, timeout_sec: int = 30) -> FetchResult:
        self.requested.append(url)
        page = self.pages.get(url, (404, ""))
        if isinstance(page, tuple):
            status, body = page
        else:
            status, body = 200, page
        return FetchResult(
            url=url,
            status_code=status,
            final_url=url,
            body=body.encode("utf-8"),
            fetched_at="2024-03-10T15:00:00+00:00",
        )

@pytest.fixture(autouse=True)
def setup_test_environment():
    """Pin settings that affect parsing so tests don't depend on the host"""
    original_tz = config.settings.TIMEZONE
    original_base_url = config.settings.BASE_URL
    config.settings.TIMEZONE = "UTC"
    config.settings.BASE_URL = BASE_URL
    yield
    config.settings.TIMEZONE = original_tz
    config.settings.BASE_URL = original_base_url

@pytest.fixture
def fetcher():
    return FakeFetcher()

@pytest.fixture
def client(fetcher):
    return PkgGoDevClient(base_url=BASE_URL, fetcher=fetcher, clock=lambda: FIXED_NOW)

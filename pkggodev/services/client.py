import logging
from datetime import datetime
from http import HTTPStatus
from typing import Callable, List, Optional
from urllib.parse import urlencode

from pkggodev.core.config import settings
from pkggodev.core.errors import ErrorAccumulator, NotFoundError, NotYetImplementedError, TransportError
from pkggodev.fetch.base import BaseFetcher, FetchResult, get_fetcher
from pkggodev.parse import pages
from pkggodev.schemas import Change, ImportedBy, License, Package, SearchResult, SearchResults, Versions

logger = logging.getLogger(__name__)


class PkgGoDevClient:
    """
    Scraping client for pkg.go.dev.

    Every call fetches one page (search: one page at a time, in order),
    parses it and returns a fresh record. Nothing is cached or shared
    between calls.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        fetcher: Optional[BaseFetcher] = None,
        timeout_sec: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")
        self.fetcher = fetcher or get_fetcher()
        self.timeout_sec = timeout_sec or settings.REQUEST_TIMEOUT
        # Reference time for relative dates; None means "now" at parse time
        self.clock = clock

    def _now(self) -> Optional[datetime]:
        return self.clock() if self.clock else None

    def _url(self, path: str, **query) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if query:
            url += "?" + urlencode(query)
        return url

    def _get(self, url: str) -> FetchResult:
        """Fetch ``url`` and map non-2xx statuses to error kinds."""
        result = self.fetcher.fetch(url, timeout_sec=self.timeout_sec)
        if result.status_code == 404:
            raise NotFoundError(url)
        if not result.ok:
            raise TransportError(url, f"HTTP {result.status_code}: {_reason(result.status_code)}")
        logger.debug("Fetched %s (%d bytes)", url, len(result.body))
        return result

    def describe_package(self, package: str) -> Package:
        result = self._get(self._url(package))
        return pages.parse_package(package, result.body, now=self._now())

    def versions(self, package: str) -> Versions:
        result = self._get(self._url(package, tab="versions"))
        return pages.parse_versions(package, result.body, now=self._now())

    def imported_by(self, package: str) -> ImportedBy:
        result = self._get(self._url(package, tab="importedby"))
        return pages.parse_imported_by(package, result.body)

    def search(self, query: str, limit: Optional[int] = None) -> SearchResults:
        """
        Search packages, following result pages until ``limit`` results are
        collected or the site reports the last page.

        A failure on any page aborts the whole search.
        """
        if limit is not None and limit <= 0:
            raise ValueError("limit must be a positive integer")

        errors = ErrorAccumulator()
        results: List[SearchResult] = []
        page_num = 1
        last_high = None
        while True:
            result = self._get(self._url("search", q=query, page=page_num))
            remaining = None if limit is None else limit - len(results)
            page = pages.parse_search_page(result.body, errors, remaining=remaining, now=self._now())
            errors.raise_if_any()
            if _repeats_previous_page(page, last_high):
                logger.warning("Search %r: page %d repeats earlier results, stopping", query, page_num)
                break
            results.extend(page.results)

            if not _has_next_page(page, len(results), limit):
                break
            if not page.results:
                logger.warning("Search %r: page %d has no rows, stopping", query, page_num)
                break
            last_high = page.summary.high
            page_num += 1

        logger.debug("Search %r: %d results over %d page(s)", query, len(results), page_num)
        return SearchResults(query=query, results=results)

    def licenses(self, package: str) -> List[License]:
        raise NotYetImplementedError("license listing")

    def imports(self, package: str) -> List[str]:
        raise NotYetImplementedError("import listing")

    def version_changes(self, package: str, version: str) -> List[Change]:
        raise NotYetImplementedError("change-note parsing")


def _has_next_page(page: pages.SearchPage, collected: int, limit: Optional[int]) -> bool:
    if page.summary is None:
        logger.debug("No results summary on page, stopping")
        return False
    if limit is not None and collected >= limit:
        return False
    return page.summary.more_pages


def _repeats_previous_page(page: pages.SearchPage, last_high: Optional[int]) -> bool:
    """A mirror that ignores page= keeps serving the same range."""
    if last_high is None or page.summary is None or page.summary.high is None:
        return False
    return page.summary.high <= last_high


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"

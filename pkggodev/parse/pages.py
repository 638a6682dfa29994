"""
Page parsers for pkg.go.dev.

One parser per page type. Each turns a response body into a schema record,
collecting field-level failures in an ErrorAccumulator and raising them all
at the end so one call reports every problem on the page.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pkggodev.core.errors import ErrorAccumulator, ParseError, StructuralError
from pkggodev.parse import extract
from pkggodev.parse.extract import by_test_id
from pkggodev.parse.utils import is_truncated, normalize_date, parse_count, strip_prefix
from pkggodev.schemas import ImportedBy, Package, SearchResult, Version, Versions

logger = logging.getLogger(__name__)

# Checklist items in the order the detail page renders them. The mapping is
# positional: the page gives the items no stable key.
CHECKLIST_FIELDS = (
    "has_valid_go_mod_file",
    "has_redistributable_license",
    "has_tagged_version",
    "has_stable_version",
)


def parse_package(path: str, html, now: Optional[datetime] = None) -> Package:
    doc = extract.parse_html(html)
    errors = ErrorAccumulator()
    fields = {"package": path}

    version = extract.first_child_text(doc, by_test_id("UnitHeader-version"))
    if version is not None:
        fields["version"] = strip_prefix(version, "Version: ")

    license_name = extract.first_child_text(doc, by_test_id("UnitHeader-licenses"))
    if license_name is not None:
        fields["license"] = license_name

    for name, checked in zip(CHECKLIST_FIELDS, extract.checklist(doc, ".UnitMeta")):
        fields[name] = checked

    repository = extract.first_child_text(doc, ".UnitMeta-repo")
    if repository is not None:
        fields["repository"] = repository

    published = extract.anchor_text(doc, by_test_id("UnitHeader-commitTime"))
    if published is not None:
        try:
            fields["published"] = normalize_date(strip_prefix(published, "Published: "), now=now)
        except ParseError as e:
            errors.add(e)

    is_package = False
    is_module = False
    for label in extract.sibling_labels(doc, ".UnitHeader-titleHeading"):
        if label == "package":
            is_package = True
        elif label == "module":
            is_module = True
        else:
            break
    if not is_package:
        errors.add(StructuralError(
            f"IsPackage=false after parsing page for '{path}', "
            "this probably indicates a parsing bug"
        ))
    fields["is_package"] = is_package
    fields["is_module"] = is_module

    errors.raise_if_any()
    return Package(**fields)


class VersionListState:
    """
    Fold over the children of the version list.

    Rows come flat: a major label (often blank on continuation rows), the
    tag, then a terminator carrying the date. The major label is sticky
    across entries.
    """

    def __init__(self):
        self.major_version = ""
        self.full_version = ""
        self.entries: List[Version] = []

    def on_major(self, label: str):
        if label:
            self.major_version = label

    def on_tag(self, full_version: str):
        self.full_version = full_version

    def finish(self, date: str):
        self.entries.append(Version(
            major_version=self.major_version,
            full_version=self.full_version,
            date=date,
        ))
        self.full_version = ""

    def discard(self):
        self.full_version = ""


_VERSION_ROLES = {
    "Version-major": "major",
    "Version-tag": "tag",
    "Version-commitTime": "commit_time",
    "Version-details": "details",
}


def parse_versions(path: str, html, now: Optional[datetime] = None) -> Versions:
    doc = extract.parse_html(html)
    errors = ErrorAccumulator()
    state = VersionListState()

    for role, node in extract.classify_children(doc, ".Versions-list", _VERSION_ROLES):
        if role == "major":
            state.on_major(extract.text_of(node))
        elif role == "tag":
            state.on_tag(extract.text_of(node.select_one(".js-versionLink")))
        elif role == "commit_time":
            try:
                state.finish(normalize_date(extract.text_of(node), now=now))
            except ParseError as e:
                errors.add(e)
                state.discard()
        elif role == "details":
            # Change notes under the summary are not parsed yet
            try:
                state.finish(normalize_date(extract.text_of(node.select_one(".Version-summary")), now=now))
            except ParseError as e:
                logger.warning("Skipping version %s of %s: %s", state.full_version or "?", path, e)
                state.discard()

    errors.raise_if_any()
    return Versions(package=path, versions=state.entries)


_ZERO_RESULTS = "0 results"
_SHORT_SUMMARY_RE = re.compile(r"^([\d,]+) results?$")
_RANGE_SUMMARY_RE = re.compile(r"^([\d,]+)\s*[-\u2013\u2014]\s*([\d,]+) of ([\d,]+) results?$")


@dataclass
class SearchSummary:
    total: int
    high: Optional[int] = None
    # False when this page is known to be the last one
    more_pages: bool = False


@dataclass
class SearchPage:
    summary: Optional[SearchSummary]
    results: List[SearchResult] = field(default_factory=list)


def parse_search_summary(text: str) -> SearchSummary:
    """
    Parse the results-count line above the search results.

    '0 results'                 -> nothing found
    '7 results'                 -> everything fits on one page
    '1 - 25 of 125 results'     -> more pages while high != total
    """
    s = " ".join((text or "").split())
    if s == _ZERO_RESULTS:
        return SearchSummary(total=0)

    m = _SHORT_SUMMARY_RE.match(s)
    if m:
        return SearchSummary(total=parse_count(m.group(1)))

    m = _RANGE_SUMMARY_RE.match(s)
    if m:
        high = parse_count(m.group(2))
        total = parse_count(m.group(3))
        return SearchSummary(total=total, high=high, more_pages=high != total)

    raise ParseError(s, "unrecognized results summary")


def parse_search_result(snippet, errors: ErrorAccumulator, now: Optional[datetime] = None) -> Optional[SearchResult]:
    """One result row; returns None (errors recorded) if a field failed."""
    info = snippet.select_one(".SearchSnippet-infoLabel")
    if info is None:
        info = snippet
    failed = len(errors)

    version = extract.anchor_text(info, by_test_id("snippet-version")) or ""
    if is_truncated(version):
        version = ""

    published = ""
    try:
        published = normalize_date(extract.anchor_text(info, by_test_id("snippet-published")) or "", now=now)
    except ParseError as e:
        errors.add(e)

    imported_by = 0
    try:
        imported_by = parse_count(extract.anchor_text(info, by_test_id("snippet-importedby")) or "")
    except ParseError as e:
        errors.add(e)

    if len(errors) > failed:
        return None

    return SearchResult(
        package=extract.anchor_text(snippet, by_test_id("snippet-title")) or "",
        synopsis=extract.anchor_text(snippet, ".SearchSnippet-synopsis") or "",
        version=version,
        published=published,
        imported_by=imported_by,
        license=extract.anchor_text(info, by_test_id("snippet-license")) or "",
    )


def parse_search_page(html, errors: ErrorAccumulator, remaining: Optional[int] = None,
                      now: Optional[datetime] = None) -> SearchPage:
    """
    Parse one page of search results.

    At most ``remaining`` rows are parsed; the rest are skipped. The summary
    is parsed regardless so the caller can decide on pagination.
    """
    doc = extract.parse_html(html)

    summary = None
    summary_text = extract.anchor_text(doc, by_test_id("results-total"))
    if summary_text is not None:
        try:
            summary = parse_search_summary(summary_text)
        except ParseError as e:
            errors.add(e)

    page = SearchPage(summary=summary)
    for snippet in doc.select(".LegacySearchSnippet"):
        if remaining is not None and len(page.results) >= remaining:
            break
        result = parse_search_result(snippet, errors, now=now)
        if result is not None:
            page.results.append(result)
    return page


def parse_imported_by(path: str, html) -> ImportedBy:
    doc = extract.parse_html(html)
    return ImportedBy(package=path, imported_by=extract.all_texts(doc, ".u-breakWord"))

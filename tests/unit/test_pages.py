import logging
import pytest
from datetime import datetime, timezone
from pkggodev.core.errors import ErrorAccumulator, ErrorList, ParseError, StructuralError
from pkggodev.parse.pages import (
    parse_imported_by,
    parse_package,
    parse_search_page,
    parse_search_summary,
    parse_versions,
)
from pkggodev.schemas import Package, Version

NOW = datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc)

def detail_page(checks=("checked",) * 4, labels=("package", "module"), published="Feb 3, 2000"):
    items = "\n".join(f'<li><img alt="{c}"/> item</li>' for c in checks)
    spans = "".join(f"<span>{label}</span>" for label in labels)
    return f"""
    <html><body>
      <div data-test-id="UnitHeader-version"><a>Version: v1.4.0</a><span>Latest</span></div>
      <div data-test-id="UnitHeader-licenses"><a>  BSD-3-Clause  </a></div>
      <div class="UnitMeta"><ul>{items}</ul></div>
      <div class="UnitMeta-repo"><a href="https://github.com/foo/bar">
          github.com/foo/bar    </a></div>
      <div data-test-id="UnitHeader-commitTime">  Published: {published} </div>
      <div><h1 class="UnitHeader-titleHeading">bar</h1>{spans}</div>
    </body></html>
    """

class TestParsePackage:
    """Unit tests for the package detail page parser"""

    def test_full_page(self):
        pkg = parse_package("github.com/foo/bar", detail_page())
        assert pkg == Package(
            package="github.com/foo/bar",
            version="v1.4.0",
            license="BSD-3-Clause",
            has_valid_go_mod_file=True,
            has_redistributable_license=True,
            has_tagged_version=True,
            has_stable_version=True,
            repository="github.com/foo/bar",
            published="2000-02-03",
            is_module=True,
            is_package=True,
        )

    def test_checklist_is_positional(self):
        pkg = parse_package("p", detail_page(checks=("checked", "unchecked", "checked", "unchecked")))
        assert pkg.has_valid_go_mod_file is True
        assert pkg.has_redistributable_license is False
        assert pkg.has_tagged_version is True
        assert pkg.has_stable_version is False

    def test_package_but_not_module(self):
        html = '<div class="UnitHeader-titleHeading">Heading</div><div>package</div><div>something else</div>'
        assert parse_package("somepackage", html) == Package(package="somepackage", is_package=True)

    def test_missing_package_label_is_structural_error(self):
        html = '<div class="UnitHeader-titleHeading">Heading</div><div>module</div><div>something else</div>'
        with pytest.raises(StructuralError) as exc:
            parse_package("somepackage", html)
        assert "IsPackage=false after parsing page for 'somepackage'" in str(exc.value)

    def test_bad_publish_date(self):
        with pytest.raises(ParseError) as exc:
            parse_package("p", detail_page(published="February 333, 20"))
        assert "parsing time" in str(exc.value)

    def test_relative_publish_date(self):
        pkg = parse_package("p", detail_page(published="2 days ago"), now=NOW)
        assert pkg.published == "2024-03-08"

    def test_all_errors_reported_together(self):
        """A bad date and a missing classification both show up"""
        html = '<div data-test-id="UnitHeader-commitTime">Published: whenever</div>'
        with pytest.raises(ErrorList) as exc:
            parse_package("p", html)
        kinds = sorted(type(e).__name__ for e in exc.value.errors)
        assert kinds == ["ParseError", "StructuralError"]

VERSIONS_HTML = """
<div class="Versions-list">
  <div class="Version-major">v2</div>
  <div class="Version-tag"><a class="js-versionLink" href="/p@v2.1.0">v2.1.0</a></div>
  <div class="Version-commitTime">Mar 1, 2024</div>
  <div class="Version-major"> </div>
  <div class="Version-tag"><a class="js-versionLink" href="/p@v2.0.0">v2.0.0</a></div>
  <details class="Version-details">
    <summary class="Version-summary">Jan 5, 2024</summary>
    <div class="Version-changes">added Foo</div>
  </details>
  <div class="Version-major">v1</div>
  <div class="Version-tag"><a class="js-versionLink" href="/p@v1.9.3">v1.9.3</a></div>
  <div class="Version-commitTime">2 weeks ago</div>
</div>
"""

class TestParseVersions:
    """Unit tests for the versions tab parser"""

    def test_sticky_major_version(self):
        versions = parse_versions("p", VERSIONS_HTML, now=NOW)
        assert versions.package == "p"
        assert versions.versions == [
            Version(major_version="v2", full_version="v2.1.0", date="2024-03-01"),
            Version(major_version="v2", full_version="v2.0.0", date="2024-01-05"),
            Version(major_version="v1", full_version="v1.9.3", date="2024-02-25"),
        ]

    def test_no_version_list(self):
        assert parse_versions("p", "<html></html>").versions == []

    def test_bad_details_date_is_skipped(self, caplog):
        html = VERSIONS_HTML.replace("Jan 5, 2024", "sometime")
        with caplog.at_level(logging.WARNING, logger="pkggodev.parse.pages"):
            versions = parse_versions("p", html, now=NOW)
        assert [v.full_version for v in versions.versions] == ["v2.1.0", "v1.9.3"]
        assert "v2.0.0" in caplog.text

    def test_bad_commit_time_is_an_error(self):
        html = VERSIONS_HTML.replace("Mar 1, 2024", "bogus")
        with pytest.raises(ParseError):
            parse_versions("p", html, now=NOW)

    def test_multiple_bad_commit_times_aggregated(self):
        html = VERSIONS_HTML.replace("Mar 1, 2024", "bogus").replace("2 weeks ago", "2 fortnights ago")
        with pytest.raises(ErrorList) as exc:
            parse_versions("p", html, now=NOW)
        assert len(exc.value.errors) == 2

def snippet(pkg, version="v1.2.3", published="Feb 3, 2000", imported_by="1,234", license="MIT"):
    return f"""
    <div class="LegacySearchSnippet">
      <h2><a data-test-id="snippet-title" href="/{pkg}">{pkg}</a></h2>
      <p class="SearchSnippet-synopsis">Package {pkg} does things.</p>
      <div class="SearchSnippet-infoLabel">
        <span data-test-id="snippet-version">{version}</span>
        <span data-test-id="snippet-published">{published}</span>
        <span data-test-id="snippet-importedby">{imported_by}</span>
        <span data-test-id="snippet-license">{license}</span>
      </div>
    </div>
    """

def search_page(summary, snippets=()):
    return f'<html><body><div data-test-id="results-total">{summary}</div>{"".join(snippets)}</body></html>'

class TestSearchSummary:
    """Unit tests for the results-count line"""

    def test_zero_results(self):
        summary = parse_search_summary("0 results")
        assert summary.total == 0
        assert summary.more_pages is False

    def test_short_form(self):
        assert parse_search_summary("1 result").more_pages is False
        assert parse_search_summary("7 results").total == 7

    def test_range_with_more_pages(self):
        summary = parse_search_summary("1 - 25 of 125 results")
        assert (summary.high, summary.total, summary.more_pages) == (25, 125, True)

    def test_range_last_page(self):
        summary = parse_search_summary("1 - 25 of 25 results")
        assert summary.more_pages is False

    def test_range_with_dash_variants(self):
        for dash in ("\u2013", "\u2014"):
            summary = parse_search_summary(f"1 {dash} 25 of 125 results")
            assert (summary.high, summary.total, summary.more_pages) == (25, 125, True)

    def test_range_with_separators(self):
        summary = parse_search_summary("1,001 - 1,025 of 2,000 results")
        assert (summary.high, summary.total) == (1025, 2000)

    def test_unrecognized(self):
        with pytest.raises(ParseError):
            parse_search_summary("lots of results")

class TestParseSearchPage:
    """Unit tests for a single search results page"""

    def test_rows(self):
        errors = ErrorAccumulator()
        page = parse_search_page(search_page("2 results", [snippet("a"), snippet("b", imported_by="0")]), errors, now=NOW)
        assert not errors
        assert [r.package for r in page.results] == ["a", "b"]
        first = page.results[0]
        assert first.synopsis == "Package a does things."
        assert first.version == "v1.2.3"
        assert first.published == "2000-02-03"
        assert first.imported_by == 1234
        assert first.license == "MIT"

    def test_truncated_pseudo_version_is_blank(self):
        errors = ErrorAccumulator()
        page = parse_search_page(search_page("1 result", [snippet("a", version="v0.0.0-2021…")]), errors)
        assert page.results[0].version == ""

    def test_relative_published_date(self):
        errors = ErrorAccumulator()
        page = parse_search_page(search_page("1 result", [snippet("a", published="3 days ago")]), errors, now=NOW)
        assert page.results[0].published == "2024-03-07"

    def test_rows_past_remaining_are_skipped(self):
        """Rows past the limit aren't parsed, so their errors don't count"""
        errors = ErrorAccumulator()
        rows = [snippet("a"), snippet("b"), snippet("c", imported_by="broken")]
        page = parse_search_page(search_page("1 - 3 of 9 results", rows), errors, remaining=2)
        assert not errors
        assert [r.package for r in page.results] == ["a", "b"]
        assert page.summary.more_pages is True

    def test_bad_count_is_collected(self):
        errors = ErrorAccumulator()
        page = parse_search_page(search_page("2 results", [snippet("a", imported_by="many"), snippet("b")]), errors)
        assert len(errors) == 1
        assert [r.package for r in page.results] == ["b"]

    def test_missing_summary(self):
        page = parse_search_page("<html></html>", ErrorAccumulator())
        assert page.summary is None
        assert page.results == []

class TestParseImportedBy:
    def test_in_document_order(self):
        html = '<div class="u-breakWord">foo</div><div class="u-breakWord"> bar </div><div class="u-breakWord">foo</div>'
        assert parse_imported_by("p", html).imported_by == ["foo", "bar", "foo"]

    def test_empty_page(self):
        result = parse_imported_by("p", "")
        assert result.package == "p"
        assert result.imported_by == []

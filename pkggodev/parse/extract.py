"""
Field extraction helpers for pkg.go.dev markup.

Every helper takes a parsed BeautifulSoup document (or a Tag inside one) and
returns plain Python values. A missing anchor gives None or an empty list;
whether that is fatal is up to the page parser calling it.
"""

from bs4 import BeautifulSoup, Tag
from typing import Dict, Iterator, List, Optional, Tuple


def parse_html(html) -> BeautifulSoup:
    """Parse a response body (str or bytes) into a document."""
    return BeautifulSoup(html or "", "html.parser")


def by_test_id(test_id: str) -> str:
    """CSS selector for the site's stable data-test-id anchors."""
    return f'[data-test-id="{test_id}"]'


def find_anchor(root: Tag, selector: str) -> Optional[Tag]:
    return root.select_one(selector)


def text_of(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return tag.get_text().strip()


def anchor_text(root: Tag, selector: str) -> Optional[str]:
    """Trimmed text of the first element matching ``selector``."""
    tag = find_anchor(root, selector)
    if tag is None:
        return None
    return text_of(tag)


def first_child(tag: Optional[Tag]) -> Optional[Tag]:
    if tag is None:
        return None
    return tag.find(True, recursive=False)


def first_child_text(root: Tag, selector: str) -> Optional[str]:
    """
    Trimmed text of the first element child of the anchor.

    Header fields wrap their value in an inner element next to tooltips and
    icons, so the anchor's own text is too broad.
    """
    anchor = find_anchor(root, selector)
    if anchor is None:
        return None
    return text_of(first_child(anchor))


def is_checked(tag: Tag) -> bool:
    """True when the element carries a checkmark icon."""
    return tag.select_one('img[alt="checked"]') is not None


def checklist(root: Tag, selector: str) -> List[bool]:
    """Checked state of every list item under the anchor, in order."""
    anchor = find_anchor(root, selector)
    if anchor is None:
        return []
    return [is_checked(li) for li in anchor.find_all("li")]


def sibling_labels(root: Tag, selector: str) -> Iterator[str]:
    """Trimmed text of each element sibling following the anchor."""
    anchor = find_anchor(root, selector)
    if anchor is None:
        return
    for sibling in anchor.find_next_siblings(True):
        yield text_of(sibling)


def all_texts(root: Tag, selector: str) -> List[str]:
    """Trimmed text of every matching element, in document order."""
    return [text_of(tag) for tag in root.select(selector)]


def classify_children(root: Tag, selector: str, roles: Dict[str, str]) -> Iterator[Tuple[str, Tag]]:
    """
    Walk the anchor's element children in document order and tag each one
    with a role.

    ``roles`` maps a CSS class to a role name. Children matching none of the
    classes are skipped. The first matching class (in ``roles`` order) wins.
    """
    anchor = find_anchor(root, selector)
    if anchor is None:
        return
    for child in anchor.find_all(True, recursive=False):
        classes = child.get("class") or []
        for css_class, role in roles.items():
            if css_class in classes:
                yield role, child
                break

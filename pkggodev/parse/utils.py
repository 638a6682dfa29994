import re
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo
from typing import Optional

from pkggodev.core.config import settings
from pkggodev.core.errors import ParseError

ISO_DATE = "%Y-%m-%d"
# pkg.go.dev renders absolute dates like "Jan 2, 2006"
SITE_DATE = "%b %d, %Y"

_RELATIVE_RE = re.compile(r"^(\S+)\s+([A-Za-z]+?)s?\s+ago$")
_UNIT_DELTAS = {
    "hour": lambda n: timedelta(hours=n),
    "day": lambda n: timedelta(days=n),
    "week": lambda n: timedelta(days=7 * n),
}

def now_local() -> datetime:
    """Current time in the configured timezone"""
    return datetime.now(ZoneInfo(settings.TIMEZONE))

def normalize_date(text: str, now: Optional[datetime] = None) -> str:
    """
    Normalize a date as the site prints it to YYYY-MM-DD.

    Recognized, in order:
      'today'          -> current date
      '3 days ago'     -> now minus N hours / days / weeks
      'Feb 3, 2000'    -> '2000-02-03'
    Raises ParseError for anything else.
    """
    if text is None:
        raise ParseError("", "empty date")
    s = " ".join(text.split())
    if now is None:
        now = now_local()

    if s.lower() == "today":
        return now.strftime(ISO_DATE)

    m = _RELATIVE_RE.match(s)
    if m:
        qty_str, unit = m.group(1), m.group(2).lower()
        if not re.fullmatch(r"[0-9]+", qty_str):
            raise ParseError(qty_str, f"invalid quantity in {s!r}")
        qty = int(qty_str)
        if unit not in _UNIT_DELTAS:
            raise ParseError(unit, f"unknown time unit in {s!r}")
        return (now - _UNIT_DELTAS[unit](qty)).strftime(ISO_DATE)

    try:
        return datetime.strptime(s, SITE_DATE).strftime(ISO_DATE)
    except ValueError as e:
        raise ParseError(s, f"parsing time: {e}")

def parse_count(text: str) -> int:
    """
    Parse an integer count that may carry thousands separators.
    Examples: '1,234' -> 1234, '0' -> 0
    """
    cleaned = (text or "").strip().replace(",", "")
    try:
        return int(cleaned)
    except ValueError:
        raise ParseError(text or "", "invalid count")

def strip_prefix(text: str, prefix: str) -> str:
    """Remove ``prefix`` if present and trim whitespace"""
    text = (text or "").strip()
    if text.startswith(prefix):
        text = text[len(prefix):]
    return text.strip()

def is_truncated(text: str) -> bool:
    """Listings elide long pseudo-versions with an ellipsis"""
    return text.endswith("…") or text.endswith("...")

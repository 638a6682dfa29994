"""
Error kinds raised by the pkg.go.dev client.

Transport failures (404, other HTTP errors, network faults) abort a call
immediately. Field-level failures inside one page are collected with an
ErrorAccumulator so the caller sees every problem on the page at once.
"""

from typing import List, Optional


class PkgGoDevError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(PkgGoDevError):
    """The backing page returned 404."""

    def __init__(self, url: Optional[str] = None):
        self.url = url
        super().__init__("not found on pkg.go.dev")


class TransportError(PkgGoDevError):
    """Non-404 HTTP failure or network fault."""

    def __init__(self, url: str, cause):
        self.url = url
        self.cause = cause
        super().__init__(f"making req to {url}: {cause}")


class ParseError(PkgGoDevError):
    """A field's text matched none of the recognized grammars."""

    def __init__(self, text: str, reason: str = "unrecognized format"):
        self.text = text
        self.reason = reason
        super().__init__(f"parsing {text!r}: {reason}")


class StructuralError(PkgGoDevError):
    """The page shape violated an assumed invariant."""


class NotYetImplementedError(PkgGoDevError, NotImplementedError):
    """A capability the site exposes but this client does not parse yet."""

    def __init__(self, capability: str):
        self.capability = capability
        super().__init__(f"{capability} is not implemented yet")


class ErrorList(PkgGoDevError):
    """Several field-level failures from a single page."""

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        super().__init__("errors: [" + "; ".join(str(e) for e in self.errors) + "]")


class ErrorAccumulator:
    """Collects field errors while a page parser keeps going."""

    def __init__(self):
        self.errors: List[Exception] = []

    def add(self, error: Exception):
        self.errors.append(error)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def raise_if_any(self):
        if not self.errors:
            return
        if len(self.errors) == 1:
            raise self.errors[0]
        raise ErrorList(self.errors)

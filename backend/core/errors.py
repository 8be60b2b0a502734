"""Errors raised while compiling StarRez documentation. All of them abort the run."""
from typing import Optional


class StarRezError(Exception):
    """Base class for compilation failures."""


class UpstreamUnavailable(StarRezError):
    """An upstream call (StarRez or the converter) did not succeed."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        status = f"HTTP {status_code}" if status_code is not None else "no response"
        super().__init__(f"{url} → {status}{f': {reason}' if reason else ''}")


class MalformedMetadata(StarRezError):
    """Upstream data could not be parsed (bad XML, attribute values or JSON)."""

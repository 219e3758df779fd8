from __future__ import annotations

from typing import Dict, List
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit


class PageLocation:
    """Current page URL with navigation primitives.

    The base class only tracks the URL; UI adapters override `navigate` to
    actually leave the page.
    """

    def __init__(self, url: str):
        self._url = url
        self.history: List[str] = []

    @property
    def current_url(self) -> str:
        return self._url

    def navigate(self, url: str) -> None:
        self.history.append(self._url)
        self._url = url

    def replace_url(self, url: str) -> None:
        self._url = url

    def query(self) -> Dict[str, List[str]]:
        return parse_qs(urlsplit(self._url).query)


def without_query_param(url: str, name: str) -> str:
    parts = urlsplit(url)
    params = [(k, v) for k, vs in parse_qs(parts.query, keep_blank_values=True).items() if k != name for v in vs]
    return urlunsplit(parts._replace(query=urlencode(params)))


def with_query_param(url: str, name: str, value: str) -> str:
    parts = urlsplit(url)
    params = [(k, v) for k, vs in parse_qs(parts.query, keep_blank_values=True).items() if k != name for v in vs]
    params.append((name, value))
    return urlunsplit(parts._replace(query=urlencode(params)))

"""
Content fetchers

A fetcher turns a directive reference into raw bytes. The processor only
depends on the one-method Fetcher protocol, so local files, HTTP, caches
and in-memory test doubles are interchangeable.

    DefaultFetcher  - http(s) URLs via requests, everything else from disk
    CachingFetcher  - memoizes another fetcher by (base, reference)
"""

from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple

import requests

from .errors import FetchError
from .log import LOG


class Fetcher(Protocol):
    """Capability resolving a reference relative to a base location into bytes"""

    def fetch(self, base: str, reference: str) -> bytes:
        """
        Return the raw content named by reference.

        Raises:
            FetchError: If the reference cannot be resolved or read
        """
        ...


def url_is(reference: str) -> bool:
    """Check if a reference is fetched over the network"""
    return reference.startswith("http://") or reference.startswith("https://")


def path_resolve(base: str, reference: str) -> Path:
    """
    Resolve a forward-slash separated reference under base

    The reference is split on '/' regardless of the host's separator, so
    documents stay portable. A leading slash does not escape base.

    Example:
        >>> path_resolve("docs", "code/main.go")
        PosixPath('docs/code/main.go')
    """
    parts = [part for part in reference.split("/") if part]
    return Path(base or ".").joinpath(*parts)


class DefaultFetcher:
    """
    Fetch http(s) URLs with requests and read anything else from disk

    Attributes:
        timeout: Seconds to wait for an HTTP response
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None) -> None:
        from ..config import appsettings

        self.timeout = timeout if timeout is not None else appsettings.fetch_timeout
        self.user_agent = user_agent or appsettings.user_agent

    def fetch(self, base: str, reference: str) -> bytes:
        if url_is(reference):
            return self.url_fetch(reference)
        return self.file_read(base, reference)

    def url_fetch(self, url: str) -> bytes:
        """GET a URL, treating any non-2xx status as a failure"""
        LOG(f"Fetching {url}", level=2)
        try:
            resp = requests.get(url, headers={"User-Agent": self.user_agent}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"could not fetch: {exc}", reference=url) from exc

        if resp.status_code >= 300:
            raise FetchError(f"HTTP {resp.status_code} {resp.reason or ''}".rstrip(), reference=url)
        return resp.content

    def file_read(self, base: str, reference: str) -> bytes:
        path = path_resolve(base, reference)
        LOG(f"Reading {path}", level=2)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FetchError(f"could not read {path}: {exc.strerror or exc}", reference=reference) from exc


class CachingFetcher:
    """
    Memoize another fetcher

    Useful when processing many documents that embed from the same files.
    Failures are not cached.
    """

    def __init__(self, inner: Fetcher) -> None:
        self.inner = inner
        self.cache: Dict[Tuple[str, str], bytes] = {}

    def fetch(self, base: str, reference: str) -> bytes:
        # URLs ignore base, so they share one entry
        key = ("", reference) if url_is(reference) else (base, reference)
        if key not in self.cache:
            self.cache[key] = self.inner.fetch(base, reference)
        else:
            LOG(f"Cache hit: {reference}", level=3)
        return self.cache[key]

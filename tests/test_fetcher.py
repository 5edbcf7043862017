"""
Fetcher tests

Tests local path resolution, HTTP fetching (with requests patched out, no
network access) and the caching decorator.
"""

from pathlib import Path

import pytest
import requests

from embedmd.lib import fetcher as fetcher_module
from embedmd.lib.fetcher import DefaultFetcher, CachingFetcher, path_resolve, url_is
from embedmd.lib.errors import FetchError


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code=200, content=b"", reason="OK"):
        self.status_code = status_code
        self.content = content
        self.reason = reason


class CountingFetcher:
    """Fetcher double recording every call"""

    def __init__(self, files):
        self.files = files
        self.calls = []

    def fetch(self, base, reference):
        self.calls.append((base, reference))
        if reference not in self.files:
            raise FetchError("no such file", reference=reference)
        return self.files[reference]


class TestPathResolution:
    """Test how references map onto the local file system"""

    def test_url_detection(self):
        assert url_is("http://example.com/a.go")
        assert url_is("https://example.com/a.go")
        assert not url_is("docs/a.go")
        assert not url_is("ftp://example.com/a.go")

    def test_forward_slashes_split(self):
        assert path_resolve("base", "code/pkg/main.go") == Path("base", "code", "pkg", "main.go")

    def test_leading_slash_stays_under_base(self):
        assert path_resolve("base", "/main.go") == Path("base", "main.go")

    def test_empty_base_is_current_dir(self):
        assert path_resolve("", "main.go") == Path("main.go")


class TestLocalFiles:
    """Test DefaultFetcher against files on disk"""

    def test_read_relative_to_base(self, tmp_path):
        (tmp_path / "code").mkdir()
        (tmp_path / "code" / "hello.go").write_bytes(b"package main\n")

        content = DefaultFetcher().fetch(str(tmp_path), "code/hello.go")
        assert content == b"package main\n"

    def test_bytes_returned_verbatim(self, tmp_path):
        raw = b"line one\r\nline two\x00\xff"
        (tmp_path / "data.bin").write_bytes(raw)
        assert DefaultFetcher().fetch(str(tmp_path), "data.bin") == raw

    def test_missing_file(self, tmp_path):
        with pytest.raises(FetchError) as excinfo:
            DefaultFetcher().fetch(str(tmp_path), "missing.go")

        assert excinfo.value.reference == "missing.go"
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_directory_is_not_readable(self, tmp_path):
        (tmp_path / "pkg").mkdir()
        with pytest.raises(FetchError):
            DefaultFetcher().fetch(str(tmp_path), "pkg")


class TestHttp:
    """Test DefaultFetcher for http(s) references"""

    def test_fetch_url_ignores_base(self, monkeypatch):
        calls = []

        def fake_get(url, headers=None, timeout=None):
            calls.append((url, headers, timeout))
            return FakeResponse(content=b"print('hi')\n")

        monkeypatch.setattr(fetcher_module.requests, "get", fake_get)

        fetcher = DefaultFetcher(timeout=5, user_agent="embedmd-test")
        content = fetcher.fetch("/some/base", "https://example.com/hello.py")

        assert content == b"print('hi')\n"
        assert calls == [("https://example.com/hello.py", {"User-Agent": "embedmd-test"}, 5)]

    def test_default_timeout_from_settings(self):
        from embedmd.config import appsettings
        assert DefaultFetcher().timeout == appsettings.fetch_timeout

    def test_http_error_status(self, monkeypatch):
        monkeypatch.setattr(
            fetcher_module.requests, "get",
            lambda url, headers=None, timeout=None: FakeResponse(status_code=404, reason="Not Found"),
        )

        with pytest.raises(FetchError, match="404") as excinfo:
            DefaultFetcher().fetch(".", "https://example.com/missing.py")
        assert excinfo.value.reference == "https://example.com/missing.py"

    def test_network_failure_wrapped(self, monkeypatch):
        def fake_get(url, headers=None, timeout=None):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(fetcher_module.requests, "get", fake_get)

        with pytest.raises(FetchError, match="connection refused") as excinfo:
            DefaultFetcher().fetch(".", "http://example.com/a.go")
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_timeout_wrapped(self, monkeypatch):
        def fake_get(url, headers=None, timeout=None):
            raise requests.Timeout("read timed out")

        monkeypatch.setattr(fetcher_module.requests, "get", fake_get)

        with pytest.raises(FetchError):
            DefaultFetcher(timeout=0.1).fetch(".", "https://example.com/slow.go")


class TestCachingFetcher:
    """Test the memoizing decorator"""

    def test_repeated_fetch_hits_inner_once(self):
        inner = CountingFetcher({"a.go": b"A"})
        cache = CachingFetcher(inner)

        assert cache.fetch("docs", "a.go") == b"A"
        assert cache.fetch("docs", "a.go") == b"A"
        assert inner.calls == [("docs", "a.go")]

    def test_local_cache_keyed_by_base(self):
        inner = CountingFetcher({"a.go": b"A"})
        cache = CachingFetcher(inner)

        cache.fetch("docs", "a.go")
        cache.fetch("other", "a.go")
        assert len(inner.calls) == 2

    def test_urls_shared_across_bases(self):
        inner = CountingFetcher({"https://example.com/a.go": b"A"})
        cache = CachingFetcher(inner)

        cache.fetch("docs", "https://example.com/a.go")
        cache.fetch("other", "https://example.com/a.go")
        assert len(inner.calls) == 1

    def test_failures_not_cached(self):
        inner = CountingFetcher({})
        cache = CachingFetcher(inner)

        for _ in range(2):
            with pytest.raises(FetchError):
                cache.fetch("docs", "missing.go")
        assert len(inner.calls) == 2

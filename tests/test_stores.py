"""Tests for storage adapters."""

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from coa_engine.exceptions import CoaRateLimitError, CoaStoreError
from coa_engine.store import FileStore, HttpStore, MemoryStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_missing_key_returns_none(self) -> None:
        assert MemoryStore().get("nope") is None

    def test_put_then_get(self) -> None:
        store = MemoryStore()
        store.put("k", b"v")

        assert store.get("k") == b"v"
        assert store.keys() == ["k"]
        assert len(store) == 1


class TestFileStore:
    """Tests for FileStore."""

    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        assert FileStore(tmp_path).get("charts-of-accounts") is None

    def test_nested_key_creates_directories(self, tmp_path: Path) -> None:
        """Should map "/" in keys to sub-directories."""
        store = FileStore(tmp_path)
        store.put("accounts/c1", b"[]")

        assert (tmp_path / "accounts" / "c1").read_bytes() == b"[]"
        assert store.get("accounts/c1") == b"[]"

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        store = FileStore(tmp_path)
        store.put("k", b"one")
        store.put("k", b"two")

        assert store.get("k") == b"two"
        assert [p.name for p in tmp_path.iterdir()] == ["k"]

    @pytest.mark.parametrize("key", ["", "../escape", "accounts//x", "a/./b"])
    def test_rejects_unsafe_keys(self, tmp_path: Path, key: str) -> None:
        with pytest.raises(CoaStoreError) as exc_info:
            FileStore(tmp_path).put(key, b"x")

        assert exc_info.value.key == key
        assert exc_info.value.operation == "put"

    def test_unsafe_key_on_get_reports_operation(self, tmp_path: Path) -> None:
        """Should reject the key before touching the filesystem."""
        with pytest.raises(CoaStoreError) as exc_info:
            FileStore(tmp_path).get("accounts/../escape")

        assert exc_info.value.operation == "get"
        assert list(tmp_path.iterdir()) == []

    def test_io_failure_raises_store_error(self, tmp_path: Path) -> None:
        """Should wrap OSError when the root is not a directory."""
        root = tmp_path / "not-a-dir"
        root.write_text("occupied")
        store = FileStore(root)

        with pytest.raises(CoaStoreError) as exc_info:
            store.put("k", b"x")
        assert exc_info.value.operation == "put"

        with pytest.raises(CoaStoreError) as exc_info:
            store.get("k")
        assert exc_info.value.operation == "get"


def make_store(handler) -> HttpStore:
    """Create an HttpStore whose requests go to handler."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpStore("http://kv.test/", http_client=client)


class TestHttpStore:
    """Tests for HttpStore."""

    def test_get_returns_body(self) -> None:
        """Should GET the key under /kv/ and return the raw body."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"[1]")

        assert make_store(handler).get("accounts/c1") == b"[1]"
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/kv/accounts/c1"

    def test_get_missing_returns_none(self) -> None:
        store = make_store(lambda request: httpx.Response(404))
        assert store.get("charts-of-accounts") is None

    def test_put_sends_body(self) -> None:
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return httpx.Response(204)

        make_store(handler).put("charts-of-accounts", b"[]")

        assert bodies == [b"[]"]

    def test_put_not_found_is_error(self) -> None:
        """A 404 only means "unset" for reads."""
        store = make_store(lambda request: httpx.Response(404))

        with pytest.raises(CoaStoreError):
            store.put("k", b"x")

    def test_server_error_raises_store_error(self) -> None:
        store = make_store(lambda request: httpx.Response(500))

        with pytest.raises(CoaStoreError) as exc_info:
            store.get("k")

        assert exc_info.value.key == "k"
        assert exc_info.value.operation == "get"

    def test_transport_error_raises_store_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CoaStoreError) as exc_info:
            make_store(handler).get("k")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestHttpStoreRateLimit:
    """Tests for automatic retry on rate limit errors."""

    def test_retries_on_rate_limit_and_succeeds(self) -> None:
        """Should retry when 429 is returned and succeed after."""
        call_count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                return httpx.Response(429, headers={"Retry-After": "1"})
            return httpx.Response(200, content=b"ok")

        with patch("time.sleep"):
            result = make_store(handler).get("k")

        assert call_count == 3
        assert result == b"ok"

    def test_raises_after_max_retries(self) -> None:
        """Should raise CoaRateLimitError after 5 attempts."""
        call_count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal call_count
            call_count += 1
            return httpx.Response(429)

        with patch("time.sleep"):
            with pytest.raises(CoaRateLimitError):
                make_store(handler).put("k", b"x")

        assert call_count == 5

    def test_does_not_retry_other_errors(self) -> None:
        call_count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal call_count
            call_count += 1
            return httpx.Response(503)

        with pytest.raises(CoaStoreError):
            make_store(handler).get("k")

        assert call_count == 1


class TestHttpStoreLifecycle:
    """Tests for connection pool ownership."""

    def test_context_manager_creates_and_closes_client(self) -> None:
        with HttpStore("http://kv.test") as store:
            assert isinstance(store._http_client, httpx.Client)

        assert store._http_client is None

    def test_external_client_is_not_closed(self) -> None:
        external = httpx.Client()
        try:
            with HttpStore("http://kv.test", http_client=external) as store:
                assert store._http_client is external

            assert not external.is_closed
        finally:
            external.close()

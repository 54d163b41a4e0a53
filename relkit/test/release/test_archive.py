"""Tests for release/archive.py - tag archive download and digest."""

from __future__ import annotations

import hashlib

from relkit.core.result import Err, Ok
from relkit.platform.http import HttpError, MockHttpClient
from relkit.release.archive import ReleaseArchiveFetcher, archive_url, sha256_hex
from relkit.release.remote import RemoteCoordinates

COORDS = RemoteCoordinates(host="github.com", owner="octo", repository="find-symlinks")
URL = "https://github.com/octo/find-symlinks/archive/refs/tags/v0.1.0.tar.gz"


def test_archive_url_uses_tag_pattern() -> None:
    assert archive_url(COORDS, "0.1.0") == URL


def test_sha256_hex_is_lowercase_64_chars() -> None:
    digest = sha256_hex(b"")

    assert digest == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    assert len(digest) == 64


def test_fetch_success_returns_content_and_digest() -> None:
    payload = b"\x1f\x8b fake tarball"
    client = MockHttpClient()
    client.set_download(URL, payload)

    result = ReleaseArchiveFetcher(client).fetch(COORDS, "0.1.0")

    assert isinstance(result, Ok)
    assert result.value.url == URL
    assert result.value.content == payload
    assert result.value.size == len(payload)
    assert result.value.sha256 == hashlib.sha256(payload).hexdigest()
    assert client.calls == [URL]


def test_fetch_success_removes_temp_download() -> None:
    client = MockHttpClient()
    client.set_download(URL, b"data")

    ReleaseArchiveFetcher(client).fetch(COORDS, "0.1.0")

    [dest] = client.destinations
    assert not dest.exists()
    assert not dest.parent.exists()


def test_fetch_missing_tag_is_not_found_and_leaves_no_temp_file() -> None:
    client = MockHttpClient()

    result = ReleaseArchiveFetcher(client).fetch(COORDS, "0.1.0")

    assert isinstance(result, Err)
    assert result.error.kind == "not_found"
    assert result.error.status == 404
    assert result.error.url == URL
    assert "v0.1.0" in (result.error.hint or "")
    [dest] = client.destinations
    assert not dest.parent.exists()


def test_fetch_transport_failure_is_unreachable() -> None:
    client = MockHttpClient()
    client.set_download(URL, HttpError(url=URL, status=0, message="Name or service not known"))

    result = ReleaseArchiveFetcher(client).fetch(COORDS, "0.1.0")

    assert isinstance(result, Err)
    assert result.error.kind == "unreachable"
    assert URL in result.error.message


def test_fetch_server_error_is_not_found() -> None:
    client = MockHttpClient()
    client.set_download(URL, HttpError(url=URL, status=500, message="Internal Server Error"))

    result = ReleaseArchiveFetcher(client).fetch(COORDS, "0.1.0")

    assert isinstance(result, Err)
    assert result.error.kind == "not_found"
    assert result.error.status == 500

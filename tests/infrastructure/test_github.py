"""Tests for the releases API client."""

from __future__ import annotations

import http.client
import io
import json
import urllib.error
import urllib.request
from typing import Any

import pytest

from setup_kced.infrastructure.github import ReleasesApiError, ReleasesClient


class RecordingOpener:
    def __init__(self, body: Any = None, error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.requests: list[urllib.request.Request] = []

    def __call__(self, req: urllib.request.Request, timeout: float | None = None) -> io.BytesIO:
        self.requests.append(req)
        if self.error is not None:
            raise self.error
        raw = self.body if isinstance(self.body, bytes) else json.dumps(self.body).encode()
        return io.BytesIO(raw)


class FailingReadBody(io.BytesIO):
    def __init__(self, error: Exception) -> None:
        super().__init__(b"")
        self.error = error

    def read(self, size: int | None = -1) -> bytes:
        raise self.error


class FailingReadOpener:
    """Connects fine, then fails while the body is read."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def __call__(self, req: urllib.request.Request, timeout: float | None = None) -> io.BytesIO:
        return FailingReadBody(self.error)


class TestListReleases:
    def test_requests_listing_endpoint(self) -> None:
        opener = RecordingOpener([{"tag_name": "v0.1.11"}])
        client = ReleasesClient(opener=opener)
        releases = client.list_releases("Kong", "go-apiops")
        assert releases == [{"tag_name": "v0.1.11"}]
        assert len(opener.requests) == 1
        assert opener.requests[0].full_url == "https://api.github.com/repos/Kong/go-apiops/releases"

    def test_sends_token(self) -> None:
        opener = RecordingOpener([])
        ReleasesClient(token="abc", opener=opener).list_releases("Kong", "go-apiops")
        assert opener.requests[0].get_header("Authorization") == "Bearer abc"

    def test_omits_empty_token(self) -> None:
        opener = RecordingOpener([])
        ReleasesClient(opener=opener).list_releases("Kong", "go-apiops")
        assert opener.requests[0].get_header("Authorization") is None

    def test_custom_api_url(self) -> None:
        opener = RecordingOpener([])
        ReleasesClient("https://ghe.example.com/api/v3/", opener=opener).list_releases("a", "b")
        assert opener.requests[0].full_url == "https://ghe.example.com/api/v3/repos/a/b/releases"

    def test_http_error(self) -> None:
        err = urllib.error.HTTPError(
            "https://api.github.com", 403, "Forbidden", hdrs=None, fp=None  # type: ignore[arg-type]
        )
        client = ReleasesClient(opener=RecordingOpener(error=err))
        with pytest.raises(ReleasesApiError, match="HTTP 403") as info:
            client.list_releases("Kong", "go-apiops")
        assert info.value.status == 403
        assert info.value.code == "RELEASES_API_FAILED"

    def test_transport_error(self) -> None:
        client = ReleasesClient(opener=RecordingOpener(error=urllib.error.URLError("offline")))
        with pytest.raises(ReleasesApiError, match="offline"):
            client.list_releases("Kong", "go-apiops")

    def test_invalid_json(self) -> None:
        client = ReleasesClient(opener=RecordingOpener(b"<html>"))
        with pytest.raises(ReleasesApiError, match="not valid JSON"):
            client.list_releases("Kong", "go-apiops")

    def test_non_list_payload(self) -> None:
        client = ReleasesClient(opener=RecordingOpener({"message": "Not Found"}))
        with pytest.raises(ReleasesApiError, match="Unexpected releases payload"):
            client.list_releases("Kong", "go-apiops")

    def test_non_object_entries(self) -> None:
        client = ReleasesClient(opener=RecordingOpener(["v1.2.3"]))
        with pytest.raises(ReleasesApiError, match="Unexpected releases payload"):
            client.list_releases("Kong", "go-apiops")

    def test_body_not_utf8(self) -> None:
        client = ReleasesClient(opener=RecordingOpener(b"\xff\xfe[]"))
        with pytest.raises(ReleasesApiError, match="not valid JSON"):
            client.list_releases("Kong", "go-apiops")

    @pytest.mark.parametrize(
        "error",
        [
            TimeoutError("read timed out"),
            ConnectionResetError("connection reset by peer"),
            http.client.IncompleteRead(b"[", 10),
        ],
    )
    def test_read_failure(self, error: Exception) -> None:
        client = ReleasesClient(opener=FailingReadOpener(error))
        with pytest.raises(ReleasesApiError, match="Failed to read releases") as info:
            client.list_releases("Kong", "go-apiops")
        assert info.value.__cause__ is error

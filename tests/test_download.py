import zipfile
from pathlib import Path

import pytest
import requests

from ratingindex.data import download


class _FakeResponse:
    def __init__(self, payload: bytes, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int):
        for start in range(0, len(self._payload), chunk_size):
            yield self._payload[start : start + chunk_size]


def test_download_from_url_writes_file(tmp_path: Path, monkeypatch) -> None:
    requested = {}

    def fake_get(url, stream, timeout):
        requested.update(url=url, stream=stream, timeout=timeout)
        return _FakeResponse(b"zip-bytes")

    monkeypatch.setattr(download.requests, "get", fake_get)

    target = download.download_from_url("https://example.com/sets/ml-100k.zip", tmp_path / "dl")

    assert target == tmp_path / "dl" / "ml-100k.zip"
    assert target.read_bytes() == b"zip-bytes"
    assert requested == {"url": "https://example.com/sets/ml-100k.zip", "stream": True, "timeout": 60}


def test_download_from_url_propagates_http_errors(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(
        download.requests, "get", lambda url, stream, timeout: _FakeResponse(b"", 404)
    )

    with pytest.raises(requests.HTTPError):
        download.download_from_url("https://example.com/missing.zip", tmp_path)


def test_unzip_extracts_files(tmp_path: Path) -> None:
    archive = tmp_path / "set.zip"
    with zipfile.ZipFile(archive, "w") as handle:
        handle.writestr("set/ratings.csv", "1,2,3\n")
        handle.writestr("set/README", "hello")

    extracted = download.unzip(archive, tmp_path / "out")

    assert sorted(path.name for path in extracted) == ["README", "ratings.csv"]
    assert (tmp_path / "out" / "set" / "ratings.csv").read_text() == "1,2,3\n"


def test_unzip_rejects_paths_outside_destination(tmp_path: Path) -> None:
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as handle:
        handle.writestr("../escaped.txt", "nope")

    with pytest.raises(ValueError):
        download.unzip(archive, tmp_path / "out")
    assert not (tmp_path / "escaped.txt").exists()

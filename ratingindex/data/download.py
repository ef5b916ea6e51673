"""Download and extraction helpers for dataset archives."""

from __future__ import annotations

import zipfile
from pathlib import Path

import requests
from loguru import logger

CHUNK_SIZE = 1 << 20


def download_from_url(url: str, dst_dir: Path, *, timeout: float = 60) -> Path:
    """
    Download ``url`` into ``dst_dir`` and return the local file path.

    The file name is the last segment of the URL. HTTP errors propagate as
    ``requests.HTTPError``.
    """
    file_name = url.rstrip("/").split("/")[-1]
    if not file_name:
        raise ValueError(f"Cannot derive a file name from URL {url!r}")
    dst_dir.mkdir(parents=True, exist_ok=True)
    target = dst_dir / file_name

    logger.info("Downloading dataset from {}", url)
    with requests.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        with target.open("wb") as handle:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    handle.write(chunk)
    return target


def unzip(src: Path, dst_dir: Path) -> list[Path]:
    """
    Extract ``src`` into ``dst_dir`` and return the extracted paths.

    Entries that would land outside ``dst_dir`` abort the extraction.
    """
    logger.info("Extracting dataset archive {}", src)
    root = dst_dir.resolve()
    extracted: list[Path] = []
    with zipfile.ZipFile(src) as archive:
        members = archive.infolist()
        for member in members:
            target = (root / member.filename).resolve()
            if target != root and root not in target.parents:
                raise ValueError(f"{member.filename}: illegal file path in archive {src}")
        root.mkdir(parents=True, exist_ok=True)
        for member in members:
            extracted.append(Path(archive.extract(member, root)))
    return extracted

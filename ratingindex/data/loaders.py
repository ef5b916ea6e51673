"""
Readers that turn rating files into RawTables and DatasetIndexes.

Two layouts are supported:

* delimiter-separated files whose first three columns are user ID, item ID and
  rating (MovieLens, FilmTrust, Epinions, ...);
* Netflix-prize files, where an ``<itemId>:`` line opens a block of
  ``<userId>,<rating>,<date>`` lines.

Malformed records are never zero-filled. Callers choose between raising
``MalformedRecordError`` (the default) and skipping the record.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Mapping, Optional

import numpy as np
import pandas as pd
from loguru import logger

from .dataset import DatasetIndex, build_dataset_index
from .download import download_from_url, unzip
from .registry import DEFAULT_REGISTRY, BuiltInDataset, resolve_dataset
from .table import RawTable

MalformedPolicy = Literal["raise", "skip"]

DEFAULT_DATA_DIR = Path("data")
DEFAULT_DOWNLOAD_DIR = Path("download")


class MalformedRecordError(ValueError):
    """A record in a ratings file could not be parsed."""

    def __init__(self, path: Path, location: str, reason: str) -> None:
        super().__init__(f"{path} ({location}): {reason}")
        self.path = path
        self.location = location
        self.reason = reason


def _check_policy(on_malformed: str) -> None:
    if on_malformed not in {"raise", "skip"}:
        raise ValueError("on_malformed must be either 'raise' or 'skip'")


def _ensure_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Expected ratings file at {path} but file was not found.")


def _is_integer(values: pd.Series) -> pd.Series:
    return values.str.fullmatch(r"[+-]?\d+").fillna(False).astype(bool)


def read_csv_table(
    path: Path,
    *,
    sep: str = ",",
    header: bool = False,
    on_malformed: MalformedPolicy = "raise",
) -> RawTable:
    """
    Read a delimiter-separated ratings file.

    Parameters
    ----------
    path:
        File whose first three columns are user ID, item ID and rating. Extra
        columns (timestamps, ...) are ignored and blank lines are skipped.
    sep:
        Field separator. Multi-character separators such as ``::`` are supported.
    header:
        Whether the first line is a header to be discarded.
    on_malformed:
        ``"raise"`` to fail on the first unparsable record, ``"skip"`` to drop it.
    """
    _check_policy(on_malformed)
    _ensure_exists(path)

    try:
        frame = pd.read_csv(
            path,
            sep=sep,
            header=0 if header else None,
            usecols=[0, 1, 2],
            dtype=str,
            # Blank lines stay as empty rows so row positions map back to file lines.
            skip_blank_lines=False,
            engine="python" if len(sep) > 1 else "c",
            on_bad_lines="error" if on_malformed == "raise" else "skip",
        )
    except pd.errors.EmptyDataError:
        logger.warning("Ratings file {} contains no records.", path)
        return RawTable.empty()
    except (pd.errors.ParserError, ValueError) as exc:
        raise MalformedRecordError(path, "file", str(exc)) from exc

    fields = ["user", "item", "rating"]
    frame.columns = fields
    frame["line"] = np.arange(len(frame)) + (2 if header else 1)
    frame = frame[~frame[fields].isna().all(axis=1)]

    users = frame["user"].str.strip()
    items = frame["item"].str.strip()
    ratings = pd.to_numeric(frame["rating"].str.strip(), errors="coerce")

    invalid = ~_is_integer(users) | ~_is_integer(items) | ratings.isna()
    if invalid.any():
        if on_malformed == "raise":
            record = frame[invalid].iloc[0]
            raise MalformedRecordError(
                path,
                f"line {int(record['line'])}",
                f"cannot parse fields {record[fields].tolist()}",
            )
        logger.warning("Skipped {} malformed records in {}.", int(invalid.sum()), path)
        valid = ~invalid
        users, items, ratings = users[valid], items[valid], ratings[valid]

    # IDs are cast from text; a float64 detour would round IDs above 2**53.
    return RawTable.from_arrays(
        users.map(int).to_numpy(dtype="int64"),
        items.map(int).to_numpy(dtype="int64"),
        ratings.to_numpy(dtype="float64"),
    )


def read_netflix_table(
    path: Path,
    *,
    on_malformed: MalformedPolicy = "raise",
) -> RawTable:
    """Read a Netflix-prize style file (``<itemId>:`` blocks of user ratings)."""
    _check_policy(on_malformed)
    _ensure_exists(path)

    users: list[int] = []
    items: list[int] = []
    ratings: list[float] = []
    skipped = 0
    item_id: Optional[int] = None

    with path.open("r", encoding="utf-8") as handle:
        for line_no, raw_line in enumerate(handle, start=1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                if line.endswith(":"):
                    # Ratings under an unparsable header must not inherit the previous item.
                    item_id = None
                    item_id = int(line[:-1])
                    continue
                if item_id is None:
                    raise ValueError("rating line appears before any '<itemId>:' line")
                fields = line.split(",")
                if len(fields) < 2:
                    raise ValueError(f"expected '<userId>,<rating>[,<date>]', got {line!r}")
                user_id = int(fields[0])
                rating = float(fields[1])
            except ValueError as exc:
                if on_malformed == "raise":
                    raise MalformedRecordError(path, f"line {line_no}", str(exc)) from exc
                skipped += 1
                continue
            users.append(user_id)
            items.append(item_id)
            ratings.append(rating)

    if skipped:
        logger.warning("Skipped {} malformed lines in {}.", skipped, path)
    return RawTable.from_arrays(users, items, ratings)


def load_csv(
    path: Path,
    *,
    sep: str = ",",
    header: bool = False,
    on_malformed: MalformedPolicy = "raise",
) -> DatasetIndex:
    """Read a delimiter-separated ratings file and index it."""
    logger.info("Loading ratings from {}", path)
    table = read_csv_table(path, sep=sep, header=header, on_malformed=on_malformed)
    return build_dataset_index(table)


def load_netflix(path: Path, *, on_malformed: MalformedPolicy = "raise") -> DatasetIndex:
    """Read a Netflix-prize style ratings file and index it."""
    logger.info("Loading Netflix-style ratings from {}", path)
    table = read_netflix_table(path, on_malformed=on_malformed)
    return build_dataset_index(table)


def read_dataset_table(
    dataset: BuiltInDataset,
    data_file: Path,
    *,
    on_malformed: MalformedPolicy = "raise",
) -> RawTable:
    if dataset.format == "netflix":
        return read_netflix_table(data_file, on_malformed=on_malformed)
    return read_csv_table(
        data_file, sep=dataset.sep, header=dataset.header, on_malformed=on_malformed
    )


def load_builtin(
    name: str,
    *,
    registry: Mapping[str, BuiltInDataset] = DEFAULT_REGISTRY,
    data_dir: Path = DEFAULT_DATA_DIR,
    download_dir: Path = DEFAULT_DOWNLOAD_DIR,
    on_malformed: MalformedPolicy = "raise",
) -> DatasetIndex:
    """
    Load a dataset described in ``registry``, downloading it on first use.

    The archive is fetched and extracted into ``data_dir`` only when the
    ratings file is not already present there.
    """
    dataset = resolve_dataset(name, registry)
    data_file = data_dir / dataset.path
    if not data_file.exists():
        archive = download_from_url(dataset.url, download_dir)
        unzip(archive, data_dir)
        _ensure_exists(data_file)

    logger.info("Loading built-in dataset '{}' from {}", name, data_file)
    table = read_dataset_table(dataset, data_file, on_malformed=on_malformed)
    return build_dataset_index(table)

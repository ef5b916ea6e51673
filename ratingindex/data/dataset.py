"""
Dual-indexed rating dataset built from a RawTable.

Every observation is stored twice, once in the by-user index and once in the
by-item index, so a single user's or item's ratings can be read without
scanning the raw table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import numpy as np
import pandas as pd
from loguru import logger

from ratingindex.base import IdentifierSet, SparseVector, new_sparse_matrix

from .table import RawTable


@dataclass(frozen=True, eq=False)
class DatasetIndex:
    """
    Raw table plus the dense structures derived from it.

    Attributes
    ----------
    dense_user_ids, dense_item_ids:
        Dense IDs of each raw record, aligned positionally with ``table``.
    dense_user_ratings:
        ``dense_user_ratings[u]`` holds ``(dense_item_id, rating)`` pairs of user ``u``.
    dense_item_ratings:
        ``dense_item_ratings[i]`` holds ``(dense_user_id, rating)`` pairs of item ``i``.
    """

    table: RawTable
    global_mean: float
    dense_user_ids: np.ndarray
    dense_item_ids: np.ndarray
    dense_user_ratings: list[SparseVector]
    dense_item_ratings: list[SparseVector]
    user_id_set: IdentifierSet
    item_id_set: IdentifierSet

    @classmethod
    def from_table(cls, table: RawTable) -> "DatasetIndex":
        return build_dataset_index(table)

    def __len__(self) -> int:
        return len(self.table)

    @property
    def user_count(self) -> int:
        return len(self.user_id_set)

    @property
    def item_count(self) -> int:
        return len(self.item_id_set)

    def get(self, i: int) -> tuple[int, int, float]:
        """Return the i-th record as ``(user_id, item_id, rating)``."""
        return self.table.get(i)

    def get_dense(self, i: int) -> tuple[int, int, float]:
        """Return the i-th record as ``(dense_user_id, dense_item_id, rating)``."""
        _, _, rating = self.table.get(i)
        return int(self.dense_user_ids[i]), int(self.dense_item_ids[i]), rating

    def get_user_ratings(self, user_id: int) -> dict[int, float]:
        """
        Ratings given by a user, keyed by sparse item ID.

        When the user rated the same item more than once, the latest record wins.
        Raises ``UnknownIdentifierError`` for users absent from the dataset.
        """
        dense_user_id = self.user_id_set.to_dense(user_id)
        return _to_sparse_mapping(self.dense_user_ratings[dense_user_id], self.item_id_set)

    def get_item_ratings(self, item_id: int) -> dict[int, float]:
        """Ratings received by an item, keyed by sparse user ID."""
        dense_item_id = self.item_id_set.to_dense(item_id)
        return _to_sparse_mapping(self.dense_item_ratings[dense_item_id], self.user_id_set)

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a DataFrame with raw and dense ID columns."""
        return pd.DataFrame(
            {
                "userId": self.table.users,
                "itemId": self.table.items,
                "rating": self.table.ratings,
                "user_idx": self.dense_user_ids,
                "item_idx": self.dense_item_ids,
            }
        )


def _to_sparse_mapping(vector: SparseVector, id_set: IdentifierSet) -> dict[int, float]:
    ratings: dict[int, float] = {}
    for dense_id, value in vector:
        ratings[id_set.to_sparse(dense_id)] = value
    return ratings


def _frozen_ids(ids: list[int]) -> np.ndarray:
    array = np.asarray(ids, dtype=np.int64)
    array.setflags(write=False)
    return array


def build_dataset_index(table: RawTable) -> DatasetIndex:
    """
    Build the dual index in two passes over ``table``.

    The first pass discovers identifiers and records the dense IDs of every
    record. Once user and item counts are known the per-entity vectors are
    allocated in one go, and the second pass fills them from the dense IDs
    collected in the first pass.
    """
    user_id_set = IdentifierSet()
    item_id_set = IdentifierSet()
    dense_user_ids: list[int] = []
    dense_item_ids: list[int] = []

    for user_id, item_id, _ in table:
        dense_user_ids.append(user_id_set.add(user_id))
        dense_item_ids.append(item_id_set.add(item_id))

    dense_user_ratings = new_sparse_matrix(len(user_id_set))
    dense_item_ratings = new_sparse_matrix(len(item_id_set))

    for dense_user_id, dense_item_id, rating in zip(
        dense_user_ids, dense_item_ids, table.ratings.tolist()
    ):
        dense_user_ratings[dense_user_id].add(dense_item_id, rating)
        dense_item_ratings[dense_item_id].add(dense_user_id, rating)

    if len(table) == 0:
        logger.warning("Building a dataset index from an empty table; global mean defaults to 0.")

    index = DatasetIndex(
        table=table,
        global_mean=table.mean(),
        dense_user_ids=_frozen_ids(dense_user_ids),
        dense_item_ids=_frozen_ids(dense_item_ids),
        dense_user_ratings=dense_user_ratings,
        dense_item_ratings=dense_item_ratings,
        user_id_set=user_id_set,
        item_id_set=item_id_set,
    )
    logger.debug(
        "Counts | records={} users={} items={} | global_mean={:.4f}",
        len(index),
        index.user_count,
        index.item_count,
        index.global_mean,
    )
    return index


def summarize_dataset(index: DatasetIndex) -> Mapping[str, float]:
    """Headline statistics used by the inspection script."""
    cells = index.user_count * index.item_count
    return {
        "records": len(index),
        "users": index.user_count,
        "items": index.item_count,
        "global_mean": index.global_mean,
        "density": len(index) / cells if cells else 0.0,
    }

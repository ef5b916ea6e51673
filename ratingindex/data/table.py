"""
Raw observation table produced by the loaders.

Records keep their insertion order: that order decides dense ID assignment and
the positional alignment of every array derived from the table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np
import pandas as pd


def _frozen_array(values: Sequence | np.ndarray, dtype: str) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    if array.ndim != 1:
        raise ValueError(f"Expected a one-dimensional sequence, got shape {array.shape}.")
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class RawTable:
    """Ordered ``(user_id, item_id, rating)`` triples stored column-wise."""

    users: np.ndarray
    items: np.ndarray
    ratings: np.ndarray

    @classmethod
    def from_arrays(
        cls,
        users: Sequence[int] | np.ndarray,
        items: Sequence[int] | np.ndarray,
        ratings: Sequence[float] | np.ndarray,
    ) -> "RawTable":
        if not len(users) == len(items) == len(ratings):
            raise ValueError(
                "users, items and ratings must have equal length "
                f"(got {len(users)}, {len(items)}, {len(ratings)})"
            )
        return cls(
            users=_frozen_array(users, "int64"),
            items=_frozen_array(items, "int64"),
            ratings=_frozen_array(ratings, "float64"),
        )

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        *,
        user_col: str = "userId",
        item_col: str = "itemId",
        rating_col: str = "rating",
    ) -> "RawTable":
        missing = [col for col in (user_col, item_col, rating_col) if col not in frame.columns]
        if missing:
            raise ValueError(f"Ratings frame is missing columns: {missing}")
        return cls.from_arrays(
            frame[user_col].to_numpy(),
            frame[item_col].to_numpy(),
            frame[rating_col].to_numpy(),
        )

    @classmethod
    def empty(cls) -> "RawTable":
        return cls.from_arrays([], [], [])

    def __len__(self) -> int:
        return int(self.ratings.shape[0])

    def __iter__(self) -> Iterator[tuple[int, int, float]]:
        for user_id, item_id, rating in zip(
            self.users.tolist(), self.items.tolist(), self.ratings.tolist()
        ):
            yield user_id, item_id, rating

    def get(self, i: int) -> tuple[int, int, float]:
        """Return the i-th record as ``(user_id, item_id, rating)``."""
        if not 0 <= i < len(self):
            raise IndexError(f"Record {i} out of bounds for table of length {len(self)}")
        return int(self.users[i]), int(self.items[i]), float(self.ratings[i])

    def mean(self) -> float:
        """Arithmetic mean of all ratings; ``0.0`` for an empty table."""
        if len(self) == 0:
            return 0.0
        return float(self.ratings.mean())

"""
Dataset wrapper exposing the dense view of a DatasetIndex as PyTorch tensors.
"""

from __future__ import annotations

import torch
from torch.utils.data import Dataset

from .dataset import DatasetIndex


class RatingDataset(Dataset):
    """
    Dense ``(user_idx, item_idx, rating)`` records, one per raw observation.

    Parameters
    ----------
    index:
        Built dataset index; records keep the order of its raw table.
    """

    def __init__(self, index: DatasetIndex) -> None:
        self._users = torch.as_tensor(index.dense_user_ids.copy(), dtype=torch.long)
        self._items = torch.as_tensor(index.dense_item_ids.copy(), dtype=torch.long)
        self._ratings = torch.as_tensor(index.table.ratings.copy(), dtype=torch.float32)

    def __len__(self) -> int:
        return self._users.shape[0]

    def __getitem__(self, idx: int) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        return self._users[idx], self._items[idx], self._ratings[idx]

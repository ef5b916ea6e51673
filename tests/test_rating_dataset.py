import torch
from torch.utils.data import DataLoader

from ratingindex.data import RatingDataset, RawTable, build_dataset_index


def test_rating_dataset_exposes_dense_records():
    index = build_dataset_index(
        RawTable.from_arrays(users=[5, 6, 5], items=[1, 1, 2], ratings=[4.0, 3.0, 2.0])
    )
    dataset = RatingDataset(index)

    assert len(dataset) == 3
    user, item, rating = dataset[2]
    assert user.item() == 0
    assert item.item() == 1
    assert rating.item() == 2.0

    users, items, ratings = next(iter(DataLoader(dataset, batch_size=3)))
    assert users.dtype == torch.long
    assert users.tolist() == [0, 1, 0]
    assert items.tolist() == [0, 0, 1]
    assert ratings.tolist() == [4.0, 3.0, 2.0]
